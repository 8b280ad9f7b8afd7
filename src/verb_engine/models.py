"""
Data models for the verb catalog.

A catalog is a list of records. Each record is either a full ``VerbEntry``
(one or more region-scoped paradigms) or a ``StubEntry`` (a metadata
placeholder that only carries an infinitive and an irregularity summary).
Field aliases follow the camelCase keys used by authored catalog files.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, Mapping, NamedTuple, Union

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator


class Mood(str, Enum):
    INDICATIVE = "indicative"
    SUBJUNCTIVE = "subjunctive"
    CONDITIONAL = "conditional"
    IMPERATIVE = "imperative"
    NONFINITE = "nonfinite"


class Person(str, Enum):
    """Grammatical person slots. ``NONE`` is used by nonfinite forms."""
    FIRST_SINGULAR = "1s"
    SECOND_SINGULAR_TU = "2s_tu"
    SECOND_SINGULAR_VOS = "2s_vos"
    THIRD_SINGULAR = "3s"
    FIRST_PLURAL = "1p"
    SECOND_PLURAL_VOSOTROS = "2p_vosotros"
    THIRD_PLURAL = "3p"
    NONE = ""


class Region(str, Enum):
    RIOPLATENSE = "rioplatense"
    LA_GENERAL = "la_general"
    PENINSULAR = "peninsular"


class Dialect(str, Enum):
    """Keys of a form's ``accepts`` map."""
    TU = "tu"
    VOS = "vos"
    VOSOTROS = "vosotros"


class VerbType(str, Enum):
    REGULAR = "regular"
    IRREGULAR = "irregular"


# Tenses tracked by irregularity matrices, in authoring order.
KNOWN_TENSES: tuple[str, ...] = (
    "pres", "pretIndef", "impf", "fut", "pretPerf", "plusc", "futPerf",
    "subjPres", "subjImpf", "subjPretPerf", "subjPlusc", "subjFutPerf",
    "cond", "condPerf", "impAff", "impNeg", "inf", "ger", "pp",
)

# Older nonfinite rows tag their person as "inv" instead of leaving it empty.
_LEGACY_EMPTY_PERSON = "inv"


def _freeze_mapping(value: Mapping) -> Mapping:
    return MappingProxyType(dict(value))


class SlotKey(NamedTuple):
    """A (mood, tense, person) grammatical slot."""
    mood: Mood
    tense: str
    person: Person

    def __str__(self) -> str:
        return f"{self.mood.value}|{self.tense}|{self.person.value}"


class Form(BaseModel):
    """Surface realization of one grammatical slot.

    ``value`` is the canonical spelling for the paradigm's regions (the tú
    form when ``person`` is 2s_tu). ``accepts`` holds alternate spellings
    keyed by dialect, e.g. ``{"vos": "sacás"}``. ``alt`` lists further
    correct spellings that hold in every dialect, e.g. ``["comiese"]`` next
    to ``"comiera"``.

    Nonfinite forms have the empty person; every other mood needs one.
    """
    model_config = {"frozen": True}

    mood: Mood
    tense: str = Field(..., min_length=1)
    person: Person = Person.NONE
    value: str = Field(..., min_length=1)
    accepts: Mapping[Dialect, str] = Field(default_factory=lambda: MappingProxyType({}))
    alt: tuple[str, ...] = ()

    @field_validator("person", mode="before")
    @classmethod
    def empty_legacy_person(cls, value: Any) -> Any:
        if value is None or value == _LEGACY_EMPTY_PERSON:
            return ""
        return value

    @field_validator("accepts", mode="after")
    @classmethod
    def freeze_accepts(cls, value: Mapping[Dialect, str]) -> Mapping[Dialect, str]:
        return _freeze_mapping(value)

    @field_validator("alt", mode="after")
    @classmethod
    def drop_blank_alt(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(spelling for spelling in value if spelling.strip())

    @field_serializer("accepts")
    def dump_accepts(self, value: Mapping[Dialect, str]) -> dict[Dialect, str]:
        return dict(value)

    @model_validator(mode="after")
    def person_matches_mood(self) -> "Form":
        if self.mood is Mood.NONFINITE and self.person is not Person.NONE:
            raise ValueError(f"nonfinite form '{self.value}' cannot have person '{self.person.value}'")
        if self.mood is not Mood.NONFINITE and self.person is Person.NONE:
            raise ValueError(f"{self.mood.value} form '{self.value}' needs a person")
        return self

    @property
    def slot(self) -> SlotKey:
        return SlotKey(self.mood, self.tense, self.person)


class Paradigm(BaseModel):
    """A conjugation table whose forms apply to every region in ``region_tags``."""
    model_config = {"frozen": True, "populate_by_name": True}

    region_tags: frozenset[Region] = Field(default_factory=frozenset, alias="regionTags")
    forms: tuple[Form, ...] = ()


class VerbEntry(BaseModel):
    """A fully conjugated verb."""
    model_config = {"frozen": True, "populate_by_name": True}

    kind: Literal["verb"] = "verb"
    id: str = Field(..., min_length=1)
    lemma: str = Field(..., min_length=1)
    type: VerbType = VerbType.REGULAR
    paradigms: tuple[Paradigm, ...] = ()
    irregularity_matrix: Mapping[str, bool] = Field(default_factory=lambda: MappingProxyType({}), alias="irregularityMatrix")
    irregular_tenses: tuple[str, ...] = Field(default=(), alias="irregularTenses")

    @field_validator("irregularity_matrix", mode="after")
    @classmethod
    def freeze_matrix(cls, value: Mapping[str, bool]) -> Mapping[str, bool]:
        return _freeze_mapping(value)

    @field_serializer("irregularity_matrix")
    def dump_matrix(self, value: Mapping[str, bool]) -> dict[str, bool]:
        return dict(value)

    @property
    def regions(self) -> frozenset[Region]:
        """All regions attested by at least one paradigm."""
        return frozenset(tag for paradigm in self.paradigms for tag in paradigm.region_tags)


class StubEntry(BaseModel):
    """Metadata placeholder for a verb with no authored paradigm.

    Stubs come from supplementary catalogs that only record the infinitive
    and an irregularity summary. They are never a conjugation source.
    """
    model_config = {"frozen": True, "populate_by_name": True}

    kind: Literal["stub"] = "stub"
    id: str = Field(..., min_length=1)
    lemma: str = Field(..., min_length=1)
    type: VerbType = VerbType.REGULAR
    infinitive: str = Field(..., min_length=1)
    irregularity_matrix: Mapping[str, bool] = Field(default_factory=lambda: MappingProxyType({}), alias="irregularityMatrix")

    @model_validator(mode="before")
    @classmethod
    def default_identity(cls, data: Any) -> Any:
        """Stubs may omit their id and infinitive; both default to the lemma."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        lemma = data.get("lemma")
        if not data.get("id"):
            data["id"] = lemma
        if not data.get("infinitive"):
            data["infinitive"] = lemma
        return data

    @field_validator("irregularity_matrix", mode="after")
    @classmethod
    def freeze_matrix(cls, value: Mapping[str, bool]) -> Mapping[str, bool]:
        return _freeze_mapping(value)

    @field_serializer("irregularity_matrix")
    def dump_matrix(self, value: Mapping[str, bool]) -> dict[str, bool]:
        return dict(value)

    @property
    def regions(self) -> frozenset[Region]:
        return frozenset()


CatalogRecord = Union[VerbEntry, StubEntry]


def parse_record(raw: dict[str, Any] | CatalogRecord) -> CatalogRecord:
    """Build the right record kind from an authored dict.

    A record whose ``paradigms`` list is missing or empty but which carries
    an irregularity matrix is a stub. Anything else is parsed as a full
    ``VerbEntry`` (and an empty one fails integrity checks later).

    Raises:
        pydantic.ValidationError: If the record does not match its shape
    """
    if isinstance(raw, (VerbEntry, StubEntry)):
        return raw
    if not isinstance(raw, dict):
        return VerbEntry.model_validate(raw)

    kind = raw.get("kind")
    if kind == "stub":
        return StubEntry.model_validate(raw)
    if kind == "verb":
        return VerbEntry.model_validate(raw)

    has_matrix = "irregularityMatrix" in raw or "irregularity_matrix" in raw
    if not raw.get("paradigms") and has_matrix:
        return StubEntry.model_validate(raw)
    return VerbEntry.model_validate(raw)
