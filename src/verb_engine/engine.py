"""
VerbEngine - a caller-owned handle over one loaded catalog.

Wires loading, merging and indexing together once, then serves lookups and
answer checks. The engine holds no mutable state after construction.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Sequence, Union

from .answers import AnswerCheck, check_answer
from .config import EngineConfig
from .errors import DataIntegrityError
from .index import CatalogIndex, build_index
from .integrity import load_catalog
from .merge import merge_catalogs
from .models import CatalogRecord, Mood, Person, Region
from .resolution import Resolution, SurfaceForm, resolve_form
from .sources import read_catalog_file

logger = logging.getLogger("verb-engine")

RawCatalog = Iterable[Union[dict[str, Any], CatalogRecord]]


class VerbEngine:
    """
    Resolves verb forms and checks answers against one merged catalog.

    Example:
        >>> engine = VerbEngine.from_records(main_verbs, [priority_verbs])
        >>> form = engine.resolve("sacar", "indicative", "pretIndef", "1s", "rioplatense")
        >>> form.value
        'saqué'
        >>> engine.check(form, "saqué").correct
        True
    """

    def __init__(
        self,
        index: CatalogIndex,
        config: EngineConfig | None = None,
        load_errors: Sequence[DataIntegrityError] = (),
    ):
        """
        Args:
            index: Built catalog index
            config: Engine policy; defaults to EngineConfig()
            load_errors: Integrity errors raised while loading the catalog
        """
        self.index = index
        self.config = config or EngineConfig()
        self._load_errors = tuple(load_errors)

    @property
    def errors(self) -> tuple[DataIntegrityError, ...]:
        """Every integrity error found while loading and indexing."""
        return self._load_errors + self.index.errors

    @classmethod
    def from_records(
        cls,
        primary: RawCatalog,
        supplementary: Sequence[RawCatalog] = (),
        config: EngineConfig | None = None,
    ) -> "VerbEngine":
        """
        Build an engine from raw catalogs.

        Each catalog is checked on its own, then merged with primary
        precedence and indexed. An entry rejected at load does not claim
        its lemma, so a later catalog may supply it.

        Raises:
            DataIntegrityError: If ``config.strict_integrity`` is set and
                any entry is broken
        """
        config = config or EngineConfig()
        strict = config.strict_integrity

        primary_result = load_catalog(primary, strict=strict)
        supplementary_results = [load_catalog(source, strict=strict) for source in supplementary]

        merged = merge_catalogs(
            primary_result.records,
            [result.records for result in supplementary_results],
        )
        index = build_index(merged, strict=strict)

        load_errors = list(primary_result.errors)
        for result in supplementary_results:
            load_errors.extend(result.errors)

        engine = cls(index, config, load_errors)
        if engine.errors:
            logger.warning(f"Verb catalog loaded with {len(engine.errors)} integrity errors")
        return engine

    @classmethod
    def from_files(
        cls,
        primary: Path | str,
        supplementary: Sequence[Path | str] = (),
        config: EngineConfig | None = None,
    ) -> "VerbEngine":
        """Build an engine from JSON/YAML catalog files."""
        return cls.from_records(
            read_catalog_file(primary),
            [read_catalog_file(path) for path in supplementary],
            config,
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    def resolve(
        self,
        lemma: str,
        mood: Mood | str,
        tense: str,
        person: Person | str,
        region: Region | str | None = None,
    ) -> Resolution:
        """Resolve a slot; ``region`` defaults to ``config.default_region``."""
        if region is None:
            region = self.config.default_region
        return resolve_form(self.index, lemma, mood, tense, person, region)

    def check(
        self,
        resolved: SurfaceForm,
        candidate: str,
        accent_insensitive: bool | None = None,
    ) -> AnswerCheck:
        """Check an answer using the configured accent and dialect policy."""
        if accent_insensitive is None:
            accent_insensitive = self.config.accent_insensitive
        return check_answer(
            resolved,
            candidate,
            accent_insensitive=accent_insensitive,
            dialects=self.config.dialects_for(resolved.region),
        )

    def resolve_and_check(
        self,
        lemma: str,
        mood: Mood | str,
        tense: str,
        person: Person | str,
        candidate: str,
        region: Region | str | None = None,
    ) -> tuple[Resolution, AnswerCheck | None]:
        """
        Resolve a slot and check an answer against it in one call.

        Returns:
            (resolution, check); check is None when nothing was resolved
        """
        resolved = self.resolve(lemma, mood, tense, person, region)
        if not isinstance(resolved, SurfaceForm):
            return resolved, None
        return resolved, self.check(resolved, candidate)
