"""Tests for quoted-term definition extraction."""

from lexmaroc.definitions import extract_definitions
from lexmaroc.types import ParsedDefinition


def test_guillemet_definition():
    content = "Au sens de la présente loi, on entend par :\n«Système» : tout ensemble organisé de composants."
    assert extract_definitions(content, "art2") == [
        ParsedDefinition(
            term="Système",
            definition="tout ensemble organisé de composants",
            source_provision="art2",
        )
    ]


def test_ascii_quotes_and_dash_separator():
    content = '"Opérateur" - toute personne morale exploitant un réseau;'
    (definition,) = extract_definitions(content)
    assert definition.term == "Opérateur"
    assert definition.definition == "toute personne morale exploitant un réseau"
    assert definition.source_provision is None


def test_dash_prefixed_entry_is_not_duplicated():
    content = "- « Donnée » : toute information relative à une personne."
    definitions = extract_definitions(content)
    assert len(definitions) == 1
    assert definitions[0].term == "Donnée"


def test_several_entries_keep_order():
    content = (
        "1. « Responsable » : la personne qui détermine les finalités;\n"
        "2. « Destinataire » : la personne qui reçoit communication des données;\n"
    )
    assert [d.term for d in extract_definitions(content)] == ["Responsable", "Destinataire"]


def test_case_insensitive_dedup_keeps_first():
    content = "«Système» : un Ensemble organisé.\n«système» : UN ENSEMBLE ORGANISÉ."
    definitions = extract_definitions(content)
    assert len(definitions) == 1
    assert definitions[0].term == "Système"


def test_too_short_term_or_definition_is_discarded():
    assert extract_definitions("« a » : une définition suffisante.") == []
    assert extract_definitions("« Terme » : abc.") == []


def test_definition_capped_at_400_chars():
    content = "« Terme » : " + ("x" * 600)
    (definition,) = extract_definitions(content)
    assert len(definition.definition) == 400


def test_no_quotes_no_definitions():
    assert extract_definitions("Le présent article ne définit aucun terme.") == []
