"""Immutable configuration for the pointing engine.

WHY: The engine depends on a handful of fixed character and word sets.
Bundling them into one frozen value lets callers (and tests) swap in a
variant without touching module globals, and keeps every call a pure
function of its arguments so lines can be annotated in parallel.

HOW: PointingRules is a frozen dataclass of frozensets. DEFAULT_RULES is
built once from the constants in chant_pointer.config.

RULES:
- Never mutated after construction
- Tone codes are stored in normalized form (see core.tones.normalize_tone)
"""

from __future__ import annotations

from dataclasses import dataclass

from chant_pointer.config import (
    ARTICLES,
    CAESURA_OFFSET,
    FIRST_STANZA_ACCENT_TONES,
    LEADING_PUNCTUATION,
    STANZA_BREAK_PUNCTUATION,
    TRAILING_PUNCTUATION,
    VOWELS,
)


@dataclass(frozen=True)
class PointingRules:
    """Character classes, word lists and tone codes used by the engine."""

    vowels: frozenset[str] = VOWELS
    leading_punctuation: frozenset[str] = LEADING_PUNCTUATION
    trailing_punctuation: frozenset[str] = TRAILING_PUNCTUATION
    stanza_break_punctuation: frozenset[str] = STANZA_BREAK_PUNCTUATION
    articles: frozenset[str] = ARTICLES
    first_stanza_accent_tones: frozenset[str] = FIRST_STANZA_ACCENT_TONES
    caesura_offset: int = CAESURA_OFFSET


DEFAULT_RULES = PointingRules()
