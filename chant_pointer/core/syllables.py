"""Orthographic syllable estimation for English words.

WHY: Pointing works in syllables, not words. A dictionary-backed
syllabifier would be more accurate but is heavy and still misses the
archaic vocabulary of the psalter; an orthographic estimate is good
enough to place a pause and an accent.

HOW: Count maximal runs of vowel letters (a e i o u y plus common
accented Latin vowels). A trailing silent "e" is discounted.

RULES:
- Empty word → 0
- No vowel run found → 1 (initials, "Mmm", transliterations)
- Silent-e: ends with "e", count > 1, not "ee" / "le" → subtract 1
- Any non-empty word → at least 1
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Pattern

from chant_pointer.core.rules import DEFAULT_RULES, PointingRules


@lru_cache(maxsize=8)
def _vowel_run_pattern(vowels: frozenset[str]) -> Pattern[str]:
    return re.compile("[" + "".join(re.escape(v) for v in sorted(vowels)) + "]+")


def count_syllables(word: str, rules: PointingRules = DEFAULT_RULES) -> int:
    """Estimate the number of syllables in a bare word.

    Args:
        word: A token core (no surrounding punctuation).
        rules: Supplies the vowel set.

    Returns:
        The estimated syllable count; 0 only for an empty word.
    """
    if not word:
        return 0

    clean = word.lower()
    groups = _vowel_run_pattern(rules.vowels).findall(clean)
    count = len(groups) if groups else 1

    # Silent final e ("come", "praise"), but not "free" or "table"
    if (
        clean.endswith("e")
        and count > 1
        and not clean.endswith("ee")
        and not clean.endswith("le")
    ):
        count -= 1

    return max(1, count)
