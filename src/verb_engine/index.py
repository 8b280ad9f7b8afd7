"""
Lookup index over a merged catalog.

Provides O(1) access by lemma and by (lemma, region, slot). The index is
built once and is read-only afterwards, so any number of readers can share
it without locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .errors import DataIntegrityError
from .integrity import check_entry
from .models import (
    KNOWN_TENSES,
    CatalogRecord,
    Form,
    Region,
    SlotKey,
    StubEntry,
)

logger = logging.getLogger("verb-engine")


@dataclass(frozen=True)
class IndexedForm:
    """A form as registered for one region, with the paradigm it came from."""
    lemma: str
    region: Region
    form: Form
    paradigm: int

    @property
    def slot(self) -> SlotKey:
        return self.form.slot

    @property
    def value(self) -> str:
        return self.form.value


SlotTable = Mapping[SlotKey, IndexedForm]


@dataclass(frozen=True)
class CatalogIndex:
    """
    Read-only lookup structures for a catalog.

    Attributes:
        by_lemma: lemma -> record (stubs included)
        slot_index: lemma -> region -> slot -> IndexedForm
        errors: integrity conflicts found while building; the entries
                involved are absent from both mappings
    """
    by_lemma: Mapping[str, CatalogRecord]
    slot_index: Mapping[str, Mapping[Region, SlotTable]]
    errors: tuple[DataIntegrityError, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.by_lemma)

    def __contains__(self, lemma: object) -> bool:
        return lemma in self.by_lemma

    def get(self, lemma: str) -> CatalogRecord | None:
        """Get the record for a lemma, or None if unknown."""
        return self.by_lemma.get(lemma)

    def lemmas(self) -> list[str]:
        return list(self.by_lemma.keys())

    def regions(self, lemma: str) -> frozenset[Region]:
        """Regions in which a lemma has at least one paradigm."""
        return frozenset(self.slot_index.get(lemma, {}).keys())

    def lookup(self, lemma: str, region: Region, slot: SlotKey) -> IndexedForm | None:
        """Direct slot lookup with no fallback rules applied."""
        return self.slot_index.get(lemma, {}).get(region, {}).get(slot)

    def forms_for_region(self, lemma: str, region: Region) -> list[IndexedForm]:
        """Every form a verb has in a region, in authoring order."""
        table = self.slot_index.get(lemma, {}).get(region, {})
        return list(table.values())

    def irregularity_matrix(self, lemma: str) -> dict[str, bool] | None:
        """
        Per-tense irregularity flags for a verb, as authored.

        Tenses the record does not mention default to False (assumed
        regular). Nothing is derived from the forms themselves.

        Returns:
            Mapping tense -> bool, or None for an unknown lemma
        """
        record = self.by_lemma.get(lemma)
        if record is None:
            return None
        matrix = dict.fromkeys(KNOWN_TENSES, False)
        matrix.update(record.irregularity_matrix)
        return matrix

    def irregularity(self, lemma: str, tense: str) -> bool:
        matrix = self.irregularity_matrix(lemma)
        if matrix is None:
            return False
        return matrix.get(tense, False)


def _entry_slots(record: CatalogRecord) -> tuple[dict[Region, dict[SlotKey, IndexedForm]], list[DataIntegrityError]]:
    """Register every form of an entry under each of its paradigm's regions."""
    tables: dict[Region, dict[SlotKey, IndexedForm]] = {}
    conflicts: list[DataIntegrityError] = []

    for p_index, paradigm in enumerate(record.paradigms):
        for region in sorted(paradigm.region_tags, key=lambda r: r.value):
            table = tables.setdefault(region, {})
            for form in paradigm.forms:
                existing = table.get(form.slot)
                if existing is not None:
                    conflicts.append(DataIntegrityError(
                        record.lemma,
                        f"slot defined by paradigm {existing.paradigm} "
                        f"('{existing.value}') and paradigm {p_index} ('{form.value}')",
                        slot=form.slot,
                        region=region,
                    ))
                    continue
                table[form.slot] = IndexedForm(record.lemma, region, form, p_index)

    return tables, conflicts


def build_index(catalog: Iterable[CatalogRecord], strict: bool = False) -> CatalogIndex:
    """
    Build a CatalogIndex from a merged catalog.

    An entry whose paradigms disagree about a slot in a shared region is a
    data-integrity conflict. The whole entry is left out of the index and
    the conflict is recorded in ``CatalogIndex.errors``; other entries are
    indexed normally.

    Args:
        catalog: Records with unique lemmas (see ``merge_catalogs``)
        strict: Raise the first DataIntegrityError instead of collecting it

    Returns:
        The built CatalogIndex

    Raises:
        DataIntegrityError: Only when ``strict`` is set
    """
    by_lemma: dict[str, CatalogRecord] = {}
    slot_index: dict[str, Mapping[Region, SlotTable]] = {}
    errors: list[DataIntegrityError] = []
    stubs = 0

    for record in catalog:
        if record.lemma in by_lemma:
            problems = [DataIntegrityError(record.lemma, "lemma appears more than once in catalog")]
        elif isinstance(record, StubEntry):
            by_lemma[record.lemma] = record
            slot_index[record.lemma] = MappingProxyType({})
            stubs += 1
            continue
        else:
            problems = check_entry(record)
            if not problems:
                tables, problems = _entry_slots(record)

        if problems:
            if strict:
                raise problems[0]
            for problem in problems:
                logger.warning(f"Excluded from index: {problem}")
            errors.extend(problems)
            continue

        by_lemma[record.lemma] = record
        slot_index[record.lemma] = MappingProxyType({
            region: MappingProxyType(table) for region, table in tables.items()
        })

    logger.info(
        f"Built index: {len(by_lemma)} lemmas ({stubs} stubs), "
        f"{len(errors)} integrity errors"
    )
    return CatalogIndex(
        by_lemma=MappingProxyType(by_lemma),
        slot_index=MappingProxyType(slot_index),
        errors=tuple(errors),
    )
