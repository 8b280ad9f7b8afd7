"""
Merging a primary catalog with supplementary ("priority") catalogs.

Precedence is whole-entry: the first catalog to provide a lemma owns it,
and any later record with the same lemma is dropped without looking at its
fields. Records are never combined field by field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from .models import CatalogRecord

logger = logging.getLogger("verb-engine")

# A merge policy decides, given the lemmas already accepted, whether a record
# from a later source may join the merged catalog.
MergePolicy = Callable[[set[str], CatalogRecord], bool]


def primary_wins(seen: set[str], record: CatalogRecord) -> bool:
    """Accept a record only if no earlier source has claimed its lemma."""
    return record.lemma not in seen


@dataclass
class MergeReport:
    """What happened to each source during a merge."""
    catalog: list[CatalogRecord] = field(default_factory=list)
    kept: dict[str, list[str]] = field(default_factory=dict)
    dropped: dict[str, list[str]] = field(default_factory=dict)


def _source_name(position: int) -> str:
    return "primary" if position == 0 else f"supplementary[{position - 1}]"


def merge_catalogs_with_report(
    primary: Sequence[CatalogRecord],
    supplementary: Sequence[Sequence[CatalogRecord]] = (),
    policy: MergePolicy = primary_wins,
) -> MergeReport:
    """
    Merge catalogs and report which lemmas each source contributed.

    The primary catalog goes through the same policy as the others, so a
    lemma repeated inside the primary keeps its first occurrence.

    Args:
        primary: The main catalog (may be empty)
        supplementary: Additional catalogs, in precedence order
        policy: Acceptance rule; defaults to ``primary_wins``

    Returns:
        MergeReport whose ``catalog`` is the merged list
    """
    report = MergeReport()
    seen: set[str] = set()

    for position, source in enumerate([primary, *supplementary]):
        name = _source_name(position)
        kept = report.kept.setdefault(name, [])
        dropped = report.dropped.setdefault(name, [])

        for record in source:
            if policy(seen, record):
                report.catalog.append(record)
                seen.add(record.lemma)
                kept.append(record.lemma)
            else:
                dropped.append(record.lemma)

        if dropped:
            logger.debug(f"Merge: {name} lost {len(dropped)} lemmas to earlier sources: {dropped}")

    logger.info(
        f"Merged {1 + len(supplementary)} catalogs into {len(report.catalog)} entries"
    )
    return report


def merge_catalogs(
    primary: Sequence[CatalogRecord],
    supplementary: Sequence[Sequence[CatalogRecord]] = (),
    policy: MergePolicy = primary_wins,
) -> list[CatalogRecord]:
    """Merge catalogs into one list with a unique lemma per record.

    Inputs are not modified. See ``merge_catalogs_with_report``.
    """
    return merge_catalogs_with_report(primary, supplementary, policy).catalog
