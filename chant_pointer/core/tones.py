"""Tone identifier normalization and classification.

WHY: Tone identifiers arrive in many spellings ("6", " 6 ", "Tone-2").
The engine only needs to know whether a tone belongs to the family whose
melodic accent falls at the end of the first half-line; mapping legacy
identifiers onto consolidated tones happens upstream.

RULES:
- Normalize: strip, lowercase, drop everything outside [0-9a-z]
- No tone (None or empty) is never first-stanza-accented
"""

from __future__ import annotations

import re
from typing import Optional

from chant_pointer.core.rules import DEFAULT_RULES, PointingRules

_NON_ALNUM_RE = re.compile(r"[^0-9a-z]")


def normalize_tone(tone: str) -> str:
    """Reduce a tone identifier to lowercase ASCII letters and digits."""
    return _NON_ALNUM_RE.sub("", tone.strip().lower())


def uses_first_stanza_accent(
    tone: Optional[str],
    rules: PointingRules = DEFAULT_RULES,
) -> bool:
    """Return True if the tone places its accent in the first half-line."""
    if not tone:
        return False
    return normalize_tone(tone) in rules.first_stanza_accent_tones
