"""Tests for end-to-end document parsing and result assembly."""

import re

import pytest
from lexmaroc.headings import HeadingRules
from lexmaroc.parser import SKIP_NO_CONTENT, SKIP_NO_HEADINGS, parse_official_document
from lexmaroc.types import DocumentStatus, IngestionStatus, ParsedDefinition, SourceEncoding

TWO_ARTICLES = (
    "Article premier. Ceci est le contenu du premier article qui dépasse quarante caractères.\n"
    "Article 2: «Système» : tout ensemble organisé de composants informatiques.\n"
)

PROMULGATED_LAW = """Dahir n° 1-20-69 du 4 hija 1441 (25 juillet 2020) portant promulgation de la loi n° 05-20 relative à la cybersécurité.

Article unique. Est promulguée et sera publiée au Bulletin officiel, à la suite du présent dahir, la loi n° 05-20 relative à la cybersécurité.

LOI N° 05-20
RELATIVE A LA CYBERSECURITE

Chapitre premier
Dispositions générales

Article premier. La présente loi a pour objet de fixer les règles de sécurité des systèmes d'information.

[[PAGE 2]]

Article 2. Au sens de la présente loi, on entend par :
- « Entité » : les administrations de l'Etat et les collectivités territoriales;
- « Incident » : tout événement ayant un impact préjudiciable sur la sécurité.
BULLETIN OFFICIEL
N° 6904 – 30 juillet 2020
Chapitre II
Sanctions

Article 3. Est puni d'une amende de 200.000 à 400.000 dirhams tout manquement au présent chapitre.
14
Article 4. La présente loi entre en vigueur dès sa publication au Bulletin officiel.

ANNEXE
Article 1. Liste des infrastructures d'importance vitale publiée séparément par arrêté.
"""


class TestPlainTwoArticleDocument:
    def test_provisions(self, make_document):
        result = parse_official_document(make_document(), TWO_ARTICLES)
        provisions = result.parsed.provisions
        assert result.skip_reason is None
        assert result.parsed.ingestion_status is IngestionStatus.INGESTED
        assert [p.section for p in provisions] == ["1", "2"]
        assert [p.provision_ref for p in provisions] == ["art1", "art2"]
        assert provisions[0].content == (
            "Ceci est le contenu du premier article qui dépasse quarante caractères."
        )

    def test_definition_attached_to_article_two(self, make_document):
        result = parse_official_document(make_document(), TWO_ARTICLES)
        assert result.parsed.definitions == (
            ParsedDefinition(
                term="Système",
                definition="tout ensemble organisé de composants informatiques",
                source_provision="art2",
            ),
        )

    def test_metadata_passthrough(self, make_document):
        doc = make_document(
            title_en="Law No. 00-00 on Tests",
            issued_date="2020-07-25",
            description="Texte d'essai.",
            status=DocumentStatus.AMENDED,
        )
        parsed = parse_official_document(doc, TWO_ARTICLES).parsed
        assert parsed.id == doc.id
        assert parsed.type == "statute"
        assert parsed.title == doc.title
        assert parsed.title_en == "Law No. 00-00 on Tests"
        assert parsed.short_name == doc.short_name
        assert parsed.status is DocumentStatus.AMENDED
        assert parsed.issued_date == "2020-07-25"
        assert parsed.url == doc.url
        assert parsed.description == "Texte d'essai."

    def test_rules_recorded(self, make_document):
        result = parse_official_document(make_document(), TWO_ARTICLES)
        assert result.start_rule == "document_start"
        assert result.end_rule == "document_end"


class TestSkips:
    def test_no_headings(self, make_document):
        text = "Ce document ne contient que des images numérisées."
        result = parse_official_document(make_document(), text)
        assert result.skip_reason == SKIP_NO_HEADINGS
        assert result.skipped
        assert result.parsed.ingestion_status is IngestionStatus.SKIPPED
        assert result.parsed.provisions == ()
        assert result.parsed.definitions == ()
        assert result.normalized_source_text == text

    def test_headings_without_content(self, make_document):
        text = "Article 1. Abrogé.\nArticle 2. Abrogé."
        result = parse_official_document(make_document(), text)
        assert result.skip_reason == SKIP_NO_CONTENT
        assert result.parsed.ingestion_status is IngestionStatus.SKIPPED
        assert result.parsed.provisions == ()
        assert result.parsed.title == make_document().title

    @pytest.mark.parametrize(
        "raw",
        ["", "   \n\n ", "\x00\x01\x02\x03", "Article", "Article 1.", "«»:-–"],
    )
    @pytest.mark.parametrize("encoding", [SourceEncoding.PLAIN, SourceEncoding.OBFUSCATED])
    def test_never_raises(self, make_document, raw, encoding):
        result = parse_official_document(make_document(source_encoding=encoding), raw)
        assert result.skip_reason
        assert result.parsed.provisions == ()


class TestPromulgatedLaw:
    @pytest.fixture
    def result(self, make_document):
        doc = make_document(
            id="ma-loi-05-20",
            law_number="05-20",
            start_hint="Chapitre premier",
            end_hint="ANNEXE",
        )
        return parse_official_document(doc, PROMULGATED_LAW)

    def test_preamble_and_annex_are_excluded(self, result):
        assert result.start_rule == "law_number_last"
        assert result.end_rule == "end_hint"
        assert result.normalized_source_text.startswith("LOI N° 05-20")
        assert "ANNEXE" not in result.normalized_source_text
        assert [p.section for p in result.parsed.provisions] == ["1", "2", "3", "4"]

    def test_chapters(self, result):
        chapters = [p.chapter for p in result.parsed.provisions]
        assert chapters == ["Chapitre premier", "Chapitre premier", "Chapitre II", "Chapitre II"]

    def test_page_artifacts_removed(self, result):
        for provision in result.parsed.provisions:
            assert "[[PAGE" not in provision.content
            assert "BULLETIN OFFICIEL" not in provision.content
            assert "N° 6904" not in provision.content
            assert not re.search(r"^\d+$", provision.content, flags=re.MULTILINE)

    def test_contents_are_exact_substrings_of_source_text(self, result):
        for provision in result.parsed.provisions:
            assert provision.content in result.normalized_source_text

    def test_definitions_from_article_two(self, result):
        terms = [d.term for d in result.parsed.definitions]
        assert terms == ["Entité", "Incident"]
        assert all(d.source_provision == "art2" for d in result.parsed.definitions)
        assert result.parsed.definitions[0].definition == (
            "les administrations de l'Etat et les collectivités territoriales"
        )


def test_definitions_only_from_article_two(make_document):
    text = (
        "Article 1. Le présent texte fixe les règles applicables aux prestataires.\n"
        "Article 3. « Prestataire » : toute personne fournissant un service de confiance.\n"
    )
    assert parse_official_document(make_document(), text).parsed.definitions == ()


def test_definition_section_is_configurable(make_document):
    text = "Article 1. « Prestataire » : toute personne fournissant un service de confiance.\n"
    result = parse_official_document(make_document(), text, definition_section="1")
    assert [d.term for d in result.parsed.definitions] == ["Prestataire"]


def test_obfuscated_document_is_decoded(make_document, obfuscate):
    plain = (
        "Article premier. Le present texte fixe les regles applicables aux prestataires de services.\n"
        "Article 2. Les dispositions du present texte entrent en vigueur des leur publication."
    )
    doc = make_document(source_encoding=SourceEncoding.OBFUSCATED)
    result = parse_official_document(doc, obfuscate(plain))
    assert [p.section for p in result.parsed.provisions] == ["1", "2"]
    assert result.parsed.provisions[1].content == (
        "Les dispositions du present texte entrent en vigueur des leur publication."
    )
    assert result.normalized_source_text == plain


def test_heading_numeral_on_its_own_line(make_document):
    text = (
        "Article premier. La présente loi fixe les règles applicables aux prestataires de services.\n"
        "ARTICLE\n2\nLes prestataires tiennent un registre des opérations effectuées. Deuxième.\n"
        "15\n"
        "Article 3. Le présent texte entre en vigueur dès sa publication.\n"
    )
    result = parse_official_document(make_document(), text)
    provisions = result.parsed.provisions
    assert [p.section for p in provisions] == ["1", "2", "3"]
    assert "Deuxième" not in provisions[0].content
    assert provisions[1].content == (
        "Les prestataires tiennent un registre des opérations effectuées. Deuxième."
    )
    for provision in provisions:
        assert provision.content in result.normalized_source_text


def test_chapter_numeral_on_its_own_line(make_document):
    text = (
        "CHAPITRE\n2\nDes sanctions\n"
        "Article 5. Est puni d'une amende tout manquement aux obligations de la présente loi.\n"
    )
    (provision,) = parse_official_document(make_document(), text).parsed.provisions
    assert provision.section == "5"
    assert provision.chapter == "CHAPITRE\n2"


def test_duplicate_article_keeps_first(make_document):
    text = (
        "Article 5. La première version de cet article est celle qui doit être conservée.\n"
        "Article 5. Une seconde occurrence du même numéro est traitée comme du bruit.\n"
    )
    (provision,) = parse_official_document(make_document(), text).parsed.provisions
    assert provision.content.startswith("La première version")


def test_custom_heading_rules(make_document):
    rules = HeadingRules(
        name="paragraph_sign",
        article=re.compile(r"(?:^|\n)§\s*(\d+)\.?"),
        chapter=re.compile(r"(?:^|\n)(Partie\s+\d+[^\n]*)"),
    )
    text = (
        "Partie 1 - Généralités\n"
        "§ 1. Le présent règlement s'applique à tous les établissements publics.\n"
        "§ 2. Les établissements publics tiennent un registre des incidents."
    )
    result = parse_official_document(make_document(), text, rules=rules)
    assert [p.section for p in result.parsed.provisions] == ["1", "2"]
    assert result.parsed.provisions[0].chapter == "Partie 1 - Généralités"


def test_to_dict_is_json_ready(make_document):
    data = parse_official_document(make_document(), TWO_ARTICLES).to_dict()
    parsed = data["parsed"]
    assert parsed["status"] == "in_force"
    assert parsed["ingestion_status"] == "ingested"
    assert "ingestion_notes" not in parsed
    assert "title_en" not in parsed
    assert parsed["provisions"][1] == {
        "provision_ref": "art2",
        "section": "2",
        "title": "Article 2",
        "content": "«Système» : tout ensemble organisé de composants informatiques.",
    }
    assert "skip_reason" not in data
