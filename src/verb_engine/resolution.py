"""
Region-aware form resolution.

``resolve_form`` answers "what is the correct form of LEMMA for this slot in
this dialect region?" with one of three results:

- ``SurfaceForm``: the slot exists; here is its spelling.
- ``NotApplicable``: the verb is known and attested in the region, but the
  slot has no valid conjugation (defective verb, or no vos form).
- ``NotFound``: the verb is unknown, is only a stub, or is not attested for
  the region. This signals a data or caller bug rather than a fact about
  the language.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from .index import CatalogIndex
from .models import Dialect, Mood, Person, Region, SlotKey, StubEntry

logger = logging.getLogger("verb-engine")


class NotFoundReason(str, Enum):
    UNKNOWN_LEMMA = "unknown_lemma"
    NO_PARADIGMS = "no_paradigms"
    REGION_NOT_ATTESTED = "region_not_attested"
    INVALID_REQUEST = "invalid_request"


class NotApplicableReason(str, Enum):
    DEFECTIVE_SLOT = "defective_slot"
    NO_VOS_FORM = "no_vos_form"


@dataclass(frozen=True)
class SurfaceForm:
    """
    A resolved form for a requested slot.

    ``person`` is the person that was asked for. When a 2s_vos request is
    answered from the 2s_tu form's ``accepts.vos`` alternate,
    ``via_fallback`` is True, ``value`` is that alternate and
    ``source_person`` is 2s_tu.
    ``alt`` carries the form's dialect-independent alternate spellings.
    """
    lemma: str
    mood: Mood
    tense: str
    person: Person
    region: Region
    value: str
    accepts: Mapping[Dialect, str] = field(default_factory=lambda: MappingProxyType({}))
    alt: tuple[str, ...] = ()
    source_person: Person | None = None
    via_fallback: bool = False

    def __post_init__(self) -> None:
        if self.source_person is None:
            object.__setattr__(self, "source_person", self.person)

    @property
    def slot(self) -> SlotKey:
        return SlotKey(self.mood, self.tense, self.person)


@dataclass(frozen=True)
class NotApplicable:
    lemma: str
    slot: SlotKey
    region: Region
    reason: NotApplicableReason


@dataclass(frozen=True)
class NotFound:
    lemma: str
    reason: NotFoundReason
    region: Region | None = None
    detail: str = ""


Resolution = Union[SurfaceForm, NotApplicable, NotFound]


def resolve_form(
    index: CatalogIndex,
    lemma: str,
    mood: Mood | str,
    tense: str,
    person: Person | str,
    region: Region | str,
) -> Resolution:
    """
    Resolve the surface form for a slot in a dialect region.

    A direct slot always wins. A 2s_vos request with no direct slot falls
    back to the 2s_tu form's ``accepts.vos`` alternate; if there is none
    the result is NotApplicable.

    Args:
        index: Built catalog index
        lemma: Infinitive, e.g. "sacar"
        mood: Mood or its tag
        tense: Tense tag, e.g. "pretIndef"
        person: Person or its tag ("" for nonfinite)
        region: Region or its tag

    Returns:
        SurfaceForm, NotApplicable or NotFound
    """
    try:
        mood = Mood(mood)
        person = Person(person)
        region = Region(region)
    except ValueError as e:
        logger.debug(f"Invalid resolve request for '{lemma}': {e}")
        return NotFound(lemma, NotFoundReason.INVALID_REQUEST, detail=str(e))

    record = index.get(lemma)
    if record is None:
        return NotFound(lemma, NotFoundReason.UNKNOWN_LEMMA, region)
    if isinstance(record, StubEntry):
        return NotFound(lemma, NotFoundReason.NO_PARADIGMS, region)
    if region not in index.regions(lemma):
        return NotFound(lemma, NotFoundReason.REGION_NOT_ATTESTED, region)

    slot = SlotKey(mood, tense, person)
    direct = index.lookup(lemma, region, slot)
    if direct is not None:
        return SurfaceForm(
            lemma=lemma,
            mood=mood,
            tense=tense,
            person=person,
            region=region,
            value=direct.value,
            accepts=MappingProxyType(dict(direct.form.accepts)),
            alt=direct.form.alt,
        )

    if person is Person.SECOND_SINGULAR_VOS:
        tu_slot = SlotKey(mood, tense, Person.SECOND_SINGULAR_TU)
        tu_form = index.lookup(lemma, region, tu_slot)
        vos_value = tu_form.form.accepts.get(Dialect.VOS) if tu_form else None
        if vos_value:
            return SurfaceForm(
                lemma=lemma,
                mood=mood,
                tense=tense,
                person=person,
                region=region,
                value=vos_value,
                alt=tu_form.form.alt,
                source_person=Person.SECOND_SINGULAR_TU,
                via_fallback=True,
            )
        return NotApplicable(lemma, slot, region, NotApplicableReason.NO_VOS_FORM)

    return NotApplicable(lemma, slot, region, NotApplicableReason.DEFECTIVE_SLOT)
