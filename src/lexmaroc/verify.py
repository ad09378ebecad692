"""Character-exact verification of seeded provisions against source text.

Every stored provision must appear verbatim in the normalized source text
written next to it during ingestion.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProvisionCheck:
    document_id: str
    section: str


@dataclass(frozen=True, slots=True)
class VerificationResult:
    document_id: str
    section: str
    passed: bool
    reason: str | None = None


def _iter_seeds(seed_dir: Path) -> Iterator[dict]:
    for path in sorted(seed_dir.glob("*.json")):
        if path.name.startswith("_"):
            continue
        with open(path, "r", encoding="utf-8") as f:
            yield json.load(f)


def find_seed(seed_dir: Path, document_id: str) -> dict:
    """
    Load the seed document carrying document_id.

    Raises:
        FileNotFoundError: If no seed file has that id
    """
    for seed in _iter_seeds(seed_dir):
        if seed.get("id") == document_id:
            return seed
    raise FileNotFoundError(f"No seed file found for document: {document_id}")


def _load_source_text(text_dir: Path, document_id: str) -> str | None:
    path = text_dir / f"{document_id}.txt"
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def verify_document(seed: dict, source_text: str) -> list[VerificationResult]:
    """Check every provision of one seed document against its source text."""
    document_id = seed.get("id", "")
    results = []
    for provision in seed.get("provisions") or []:
        section = provision.get("section", "")
        content = provision.get("content") or ""
        if content and content in source_text:
            results.append(VerificationResult(document_id, section, passed=True))
        else:
            results.append(
                VerificationResult(document_id, section, passed=False, reason="Exact text mismatch")
            )
    return results


def _verify_checks(seed_dir: Path, text_dir: Path, checks: Iterable[ProvisionCheck]) -> list[VerificationResult]:
    results = []
    for check in checks:
        try:
            seed = find_seed(seed_dir, check.document_id)
        except FileNotFoundError as e:
            results.append(VerificationResult(check.document_id, check.section, passed=False, reason=str(e)))
            continue

        provision = next(
            (p for p in seed.get("provisions") or [] if p.get("section") == check.section),
            None,
        )
        if provision is None:
            results.append(
                VerificationResult(check.document_id, check.section, passed=False, reason="Provision not found in seed")
            )
            continue

        source_text = _load_source_text(text_dir, check.document_id)
        if source_text is None:
            results.append(
                VerificationResult(check.document_id, check.section, passed=False, reason="Source text not found")
            )
            continue

        results.extend(verify_document({"id": check.document_id, "provisions": [provision]}, source_text))
    return results


def verify_provisions(
    seed_dir: Path,
    text_dir: Path,
    checks: Iterable[ProvisionCheck] | None = None,
) -> list[VerificationResult]:
    """
    Verify seeded provisions against the normalized source text.

    Args:
        seed_dir: Directory of seed JSON files written by ingestion
        text_dir: Directory of `{id}.txt` normalized source text files
        checks: Specific (document, section) pairs; all ingested provisions when None

    Returns:
        One VerificationResult per checked provision
    """
    if not seed_dir.is_dir():
        raise FileNotFoundError(f"Seed directory not found: {seed_dir}")

    if checks is not None:
        results = _verify_checks(seed_dir, text_dir, checks)
    else:
        results = []
        for seed in _iter_seeds(seed_dir):
            if seed.get("ingestion_status") != "ingested":
                continue
            source_text = _load_source_text(text_dir, seed.get("id", ""))
            if source_text is None:
                results.append(
                    VerificationResult(seed.get("id", ""), "*", passed=False, reason="Source text not found")
                )
                continue
            results.extend(verify_document(seed, source_text))

    failed = sum(1 for r in results if not r.passed)
    logger.info(f"Verified {len(results) - failed}/{len(results)} provisions")
    return results
