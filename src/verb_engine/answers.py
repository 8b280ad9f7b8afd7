"""
Answer checking against a resolved form.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .models import Dialect, Region
from .resolution import SurfaceForm

CANONICAL = "canonical"
ALT = "alt"

# Alternate spellings accepted by default in each region.
DEFAULT_REGION_DIALECTS: Mapping[Region, frozenset[Dialect]] = {
    Region.RIOPLATENSE: frozenset({Dialect.VOS}),
    Region.LA_GENERAL: frozenset({Dialect.TU}),
    Region.PENINSULAR: frozenset({Dialect.TU, Dialect.VOSOTROS}),
}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class AnswerCheck:
    """
    Outcome of checking a candidate answer.

    Attributes:
        correct: Whether the candidate matched an accepted spelling
        matched_variant: "canonical", "alt" or the dialect key that matched;
                         None if no match
        targets: Accepted spellings in the order they were tried
        accent_error: True when the candidate was wrong but matches a target
                      once diacritics are ignored
    """
    correct: bool
    matched_variant: str | None = None
    targets: tuple[str, ...] = field(default=())
    accent_error: bool = False


def strip_diacritics(text: str) -> str:
    """Remove combining marks ("saqué" -> "saque", "pingüino" -> "pinguino")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_answer(text: str, accent_insensitive: bool = False) -> str:
    """
    Normalize text for answer comparison.

    Composes Unicode (NFC), trims and collapses whitespace and case-folds.
    Diacritics are kept unless ``accent_insensitive`` is set.

    Example:
        >>> normalize_answer("  Saqué ")
        'saqué'
        >>> normalize_answer("Saqué", accent_insensitive=True)
        'saque'
    """
    text = unicodedata.normalize("NFC", text)
    text = _WHITESPACE.sub(" ", text.strip()).casefold()
    if accent_insensitive:
        text = strip_diacritics(text)
    return text


def _variants(
    resolved: SurfaceForm,
    dialects: Iterable[Dialect] | None,
) -> list[tuple[str, str]]:
    if dialects is None:
        active = DEFAULT_REGION_DIALECTS.get(resolved.region, frozenset())
    else:
        active = frozenset(Dialect(d) for d in dialects)

    variants = [(CANONICAL, resolved.value)]
    variants.extend((ALT, spelling) for spelling in resolved.alt)
    for dialect, spelling in resolved.accepts.items():
        if dialect in active:
            variants.append((dialect.value, spelling))
    return variants


def check_answer(
    resolved: SurfaceForm,
    candidate: str,
    accent_insensitive: bool = False,
    dialects: Iterable[Dialect | str] | None = None,
) -> AnswerCheck:
    """
    Check a learner's answer against a resolved form.

    The canonical value is tried first, then every ``alt`` spelling, then
    each ``accepts`` alternate whose dialect is active. The first match wins.

    Args:
        resolved: Result of ``resolve_form`` that found a form
        candidate: The learner's answer
        accent_insensitive: Ignore diacritics when comparing (caller policy)
        dialects: Dialects whose alternates are accepted; defaults to the
                  region's entry in DEFAULT_REGION_DIALECTS

    Returns:
        AnswerCheck

    Raises:
        TypeError: If ``resolved`` is NotApplicable or NotFound
    """
    if not isinstance(resolved, SurfaceForm):
        raise TypeError(
            f"check_answer needs a SurfaceForm, got {type(resolved).__name__} "
            f"for '{getattr(resolved, 'lemma', '?')}'"
        )

    variants = _variants(resolved, dialects)
    targets = tuple(spelling for _, spelling in variants)
    normalized = normalize_answer(candidate, accent_insensitive)

    for name, spelling in variants:
        if normalize_answer(spelling, accent_insensitive) == normalized:
            return AnswerCheck(correct=True, matched_variant=name, targets=targets)

    accent_error = False
    if not accent_insensitive and normalized:
        bare = strip_diacritics(normalized)
        accent_error = any(
            normalize_answer(spelling, accent_insensitive=True) == bare
            for spelling in targets
        )

    return AnswerCheck(correct=False, targets=targets, accent_error=accent_error)
