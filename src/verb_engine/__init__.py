"""
Inflection catalog and answer-resolution engine for Spanish verb practice.

Merges verb catalogs, indexes them by lemma, region and grammatical slot,
resolves dialect-specific forms (tú / vos) and checks learner answers.
"""

from .answers import AnswerCheck, check_answer, normalize_answer
from .config import EngineConfig, load_config
from .engine import VerbEngine
from .errors import CatalogSourceError, DataIntegrityError, VerbEngineError
from .index import CatalogIndex, IndexedForm, build_index
from .integrity import LoadResult, check_entry, load_catalog
from .merge import MergeReport, merge_catalogs, merge_catalogs_with_report, primary_wins
from .models import (
    CatalogRecord,
    Dialect,
    Form,
    Mood,
    Paradigm,
    Person,
    Region,
    SlotKey,
    StubEntry,
    VerbEntry,
    VerbType,
)
from .resolution import (
    NotApplicable,
    NotApplicableReason,
    NotFound,
    NotFoundReason,
    Resolution,
    SurfaceForm,
    resolve_form,
)

__all__ = [
    # Engine
    "VerbEngine",
    "EngineConfig",
    "load_config",
    # Models
    "CatalogRecord",
    "VerbEntry",
    "StubEntry",
    "Paradigm",
    "Form",
    "SlotKey",
    "Mood",
    "Person",
    "Region",
    "Dialect",
    "VerbType",
    # Loading and merging
    "LoadResult",
    "check_entry",
    "load_catalog",
    "MergeReport",
    "merge_catalogs",
    "merge_catalogs_with_report",
    "primary_wins",
    # Index
    "CatalogIndex",
    "IndexedForm",
    "build_index",
    # Resolution
    "Resolution",
    "SurfaceForm",
    "NotApplicable",
    "NotApplicableReason",
    "NotFound",
    "NotFoundReason",
    "resolve_form",
    # Answers
    "AnswerCheck",
    "check_answer",
    "normalize_answer",
    # Errors
    "VerbEngineError",
    "DataIntegrityError",
    "CatalogSourceError",
]
