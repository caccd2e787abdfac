"""Caesura and accent placement, article avoidance, and line rendering.

WHY: A singer pointing a psalm verse to a chant tone needs two marks:
the mediation pause (caesura) a few syllables before the end of the
line, and the syllable that carries the tone's melodic accent. This
module is the bridge between per-word syllable counts and the marked-up
line that the rest of the system stores and displays.

HOW: Tokenize the line and count syllables per token. The caesura target
sits a fixed number of syllables before the end. The accent target uses
the same formula unless the tone is first-stanza-accented and the first
half-line has at least two syllables, in which case it is the next-to-last
syllable of that half-line. An accent landing on an article is pushed one
syllable forward. Targets are mapped back to word indices and markers are
inserted between each word's leading punctuation and its core.

RULES:
- Caesura target: max(1, total - 4), independent of tone
- Accent target: max(1, first_stanza - 1) for first-stanza-accented tones
  with first_stanza >= 2, else max(1, total - 4)
- Article guard: applied once, forward only, never to the caesura
- Target past the end of the line → last word; no words → no index
- Markers: "/^" (both), "/" (caesura), "^" (accent)
- Empty line → syllables 0, no indices, annotated_line ""
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from chant_pointer.core.ir import LineAnnotation, PointedText, Token
from chant_pointer.core.rules import DEFAULT_RULES, PointingRules
from chant_pointer.core.syllables import count_syllables
from chant_pointer.core.tokenizer import tokenize
from chant_pointer.core.tones import uses_first_stanza_accent

CAESURA_MARKER = "/"
ACCENT_MARKER = "^"

_LINE_BREAK_RE = re.compile(r"\r?\n")


def count_first_stanza_syllables(
    tokens: Sequence[Token],
    syllable_counts: Sequence[int],
    rules: PointingRules = DEFAULT_RULES,
) -> int:
    """Count syllables up to and including the first half-line break.

    WHY: Chant verses divide at their first internal comma or semicolon.
    Some tones put their accent at the end of that first half.

    RULES:
    - Break on a token whose core or trailing punctuation has "," or ";"
    - The breaking token's syllables are included
    - No break → the whole line's total
    """
    total = 0
    for token, count in zip(tokens, syllable_counts):
        total += count
        if _has_break(token.core, rules) or _has_break(token.trailing, rules):
            break
    return total


def _has_break(text: Optional[str], rules: PointingRules) -> bool:
    if not text:
        return False
    return any(ch in rules.stanza_break_punctuation for ch in text)


def find_word_index_for_syllable(
    target: int,
    syllable_counts: Sequence[int],
) -> Optional[int]:
    """Map a 1-based syllable number to the index of the word containing it.

    Returns the last word's index when the target exceeds the total,
    and None when there are no words at all.
    """
    running = 0
    for index, count in enumerate(syllable_counts):
        running += count
        if running >= target:
            return index
    return len(syllable_counts) - 1 if syllable_counts else None


def caesura_target(total_syllables: int, rules: PointingRules = DEFAULT_RULES) -> int:
    """Syllable of the mediation pause, counted back from the line's end."""
    return max(1, total_syllables - rules.caesura_offset)


def accent_target(
    total_syllables: int,
    first_stanza_syllables: int,
    tone: Optional[str],
    rules: PointingRules = DEFAULT_RULES,
) -> int:
    """Syllable carrying the melodic accent, before article avoidance."""
    if uses_first_stanza_accent(tone, rules) and first_stanza_syllables >= 2:
        return max(1, first_stanza_syllables - 1)
    return max(1, total_syllables - rules.caesura_offset)


def avoid_article(
    target: int,
    tokens: Sequence[Token],
    syllable_counts: Sequence[int],
    rules: PointingRules = DEFAULT_RULES,
) -> int:
    """Push an accent off an article by one syllable.

    WHY: Stressing "the" or "a" sounds wrong in chant; the noun that
    follows almost always deserves the accent instead.

    RULES:
    - Only when the target word's core is an article (case-insensitive)
    - Only when the target is not already the line's last syllable
    - One shift only; the new target is not re-checked
    """
    index = find_word_index_for_syllable(target, syllable_counts)
    if index is None:
        return target
    total = sum(syllable_counts)
    if tokens[index].core.lower() in rules.articles and target < total:
        return target + 1
    return target


def render_tokens(
    tokens: Sequence[Token],
    caesura_word: Optional[int],
    accent_word: Optional[int],
) -> str:
    """Re-join tokens with single spaces, inserting markers before word cores."""
    parts: List[str] = []
    for index, token in enumerate(tokens):
        marker = ""
        if index == caesura_word:
            marker += CAESURA_MARKER
        if index == accent_word:
            marker += ACCENT_MARKER
        parts.append("{}{}{}{}".format(
            token.leading or "", marker, token.core, token.trailing or "",
        ))
    return " ".join(parts)


def annotate_line(
    line: str,
    line_index: int = 0,
    tone: Optional[str] = None,
    rules: PointingRules = DEFAULT_RULES,
) -> LineAnnotation:
    """Point a single line for chanting.

    Args:
        line: The text of one verse or half-verse; may be empty.
        line_index: 0-based position of the line, carried through unchanged.
        tone: Optional chant tone identifier, e.g. "2" or "6C".
        rules: Character classes, word lists and tone codes to use.

    Returns:
        A LineAnnotation with the marked-up line and its syllable targets.
    """
    tokens = tokenize(line, rules)
    syllable_counts = [count_syllables(t.core, rules) for t in tokens]
    total = sum(syllable_counts)

    if not tokens:
        return LineAnnotation(
            line_index=line_index,
            original_line=line,
            annotated_line="",
            syllables=0,
        )

    caesura = caesura_target(total, rules)
    caesura_word = find_word_index_for_syllable(caesura, syllable_counts)

    first_stanza = count_first_stanza_syllables(tokens, syllable_counts, rules)
    accent = accent_target(total, first_stanza, tone, rules)
    accent = avoid_article(accent, tokens, syllable_counts, rules)
    accent_word = find_word_index_for_syllable(accent, syllable_counts)

    return LineAnnotation(
        line_index=line_index,
        original_line=line,
        annotated_line=render_tokens(tokens, caesura_word, accent_word),
        syllables=total,
        caesura_index=caesura,
        accent_syllable=accent,
    )


def annotate_text(
    text: str,
    tone: Optional[str] = None,
    rules: PointingRules = DEFAULT_RULES,
) -> PointedText:
    """Point every line of a multi-line block with a shared tone.

    RULES:
    - Lines split on "\\n" or "\\r\\n"; blank lines are kept as empty lines
    - Each line gets its 0-based index
    - annotated_text joins the annotated lines with "\\n"
    """
    annotations = [
        annotate_line(line, index, tone, rules)
        for index, line in enumerate(_LINE_BREAK_RE.split(text))
    ]
    return PointedText(
        annotated_text="\n".join(a.annotated_line for a in annotations),
        annotations=annotations,
    )
