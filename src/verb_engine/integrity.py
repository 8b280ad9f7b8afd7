"""
Load-time integrity checks for catalog records.

Bad entries are excluded from the loaded catalog and reported to the caller
alongside the good ones; one broken verb never blocks the rest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import ValidationError

from .errors import DataIntegrityError
from .models import CatalogRecord, SlotKey, StubEntry, parse_record

logger = logging.getLogger("verb-engine")


@dataclass
class LoadResult:
    """Records that passed integrity checks plus every error found."""
    records: list[CatalogRecord] = field(default_factory=list)
    errors: list[DataIntegrityError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def rejected_lemmas(self) -> list[str]:
        return [error.lemma for error in self.errors]


def check_entry(record: CatalogRecord) -> list[DataIntegrityError]:
    """
    Check one record's structural invariants.

    A ``VerbEntry`` needs at least one paradigm, every paradigm needs at
    least one region tag, and no (mood, tense, person) may appear twice
    inside a paradigm. Stubs have nothing to check.

    Args:
        record: Parsed catalog record

    Returns:
        List of problems, empty if the record is sound
    """
    if isinstance(record, StubEntry):
        return []

    errors: list[DataIntegrityError] = []
    if not record.paradigms:
        errors.append(DataIntegrityError(record.lemma, "entry has no paradigms"))
        return errors

    for p_index, paradigm in enumerate(record.paradigms):
        if not paradigm.region_tags:
            errors.append(DataIntegrityError(
                record.lemma, f"paradigm {p_index} has no region tags",
            ))

        seen: dict[SlotKey, str] = {}
        for form in paradigm.forms:
            slot = form.slot
            if slot in seen:
                errors.append(DataIntegrityError(
                    record.lemma,
                    f"paradigm {p_index} defines slot twice: "
                    f"'{seen[slot]}' and '{form.value}'",
                    slot=slot,
                ))
            else:
                seen[slot] = form.value

    return errors


def _lemma_of(raw: Any) -> str:
    if isinstance(raw, dict):
        return str(raw.get("lemma") or raw.get("id") or "<unknown>")
    return str(getattr(raw, "lemma", "<unknown>"))


def load_catalog(raw_records: Iterable[dict[str, Any] | CatalogRecord], strict: bool = False) -> LoadResult:
    """
    Parse and check a catalog.

    Args:
        raw_records: Authored dicts (or already parsed records)
        strict: Raise the first DataIntegrityError instead of collecting it

    Returns:
        LoadResult with the accepted records in input order and all errors

    Raises:
        DataIntegrityError: Only when ``strict`` is set
    """
    result = LoadResult()

    for raw in raw_records:
        try:
            record = parse_record(raw)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            errors = [DataIntegrityError(_lemma_of(raw), f"malformed record ({problems})")]
        else:
            errors = check_entry(record)

        if errors:
            if strict:
                raise errors[0]
            for error in errors:
                logger.warning(f"Rejected catalog entry {error}")
            result.errors.extend(errors)
            continue

        result.records.append(record)

    logger.info(
        f"Loaded {len(result.records)} catalog entries "
        f"({len(result.errors)} integrity errors)"
    )
    return result
