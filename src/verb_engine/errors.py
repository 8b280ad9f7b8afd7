"""
Exception types for verb-engine.

Lookup misses (unknown lemma, unattested region, defective slot) are not
exceptions; they are ordinary result values in ``verb_engine.resolution``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Region, SlotKey


class VerbEngineError(Exception):
    """Base exception for verb-engine."""
    pass


class DataIntegrityError(VerbEngineError):
    """A catalog entry violates a structural invariant.

    Raised (strict mode) or collected (default) while loading a catalog or
    building an index. Always identifies the offending lemma, and the slot
    and region when the problem is slot-specific.
    """

    def __init__(
        self,
        lemma: str,
        message: str,
        slot: SlotKey | None = None,
        region: Region | None = None,
    ):
        self.lemma = lemma
        self.slot = slot
        self.region = region
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        location = f"'{self.lemma}'"
        if self.slot is not None:
            location += f" {self.slot}"
        if self.region is not None:
            location += f" [{self.region.value}]"
        return f"{location}: {self.message}"


class CatalogSourceError(VerbEngineError):
    """Error reading or parsing a catalog file."""
    pass
