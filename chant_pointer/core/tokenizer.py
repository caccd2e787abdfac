"""Whitespace tokenization with punctuation splitting.

WHY: Syllables are counted on bare words, but pointing markers must be
placed between a word's opening punctuation and its first letter, and
all punctuation must come back out of the renderer exactly as it went in.

HOW: The line is split on whitespace runs. For each word, a run of
leading punctuation is stripped first; a run of trailing punctuation is
then stripped from what remains. The middle is the token's core.

RULES:
- Whitespace is the fixed set in _WHITESPACE_RE: ASCII space and
  tab/line/form-feed controls, the Unicode space separators, and the
  byte order mark (U+FEFF). The C0 separators \\x1c-\\x1f and NEL (\\x85)
  are not whitespace here, unlike str.split()
- Empty fragments from repeated whitespace are discarded
- Leading class: quotes (straight and curly), "(", "["
- Trailing class: quotes, ")", "]", and . , ; : ! ? &
- Trailing punctuation is taken from the remainder after the leading run,
  so a punctuation-only word is never duplicated on re-rendering
- Never raises; punctuation-only words produce an empty core
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Pattern, Tuple

from chant_pointer.core.ir import Token
from chant_pointer.core.rules import DEFAULT_RULES, PointingRules

_WHITESPACE_RE = re.compile(
    r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a"
    r"\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)


def _char_class(chars: frozenset[str]) -> str:
    return "[" + "".join(re.escape(c) for c in sorted(chars)) + "]"


@lru_cache(maxsize=8)
def _compile_patterns(
    leading: frozenset[str],
    trailing: frozenset[str],
) -> Tuple[Pattern[str], Pattern[str]]:
    """Compile the leading/trailing run patterns for a pair of classes."""
    return (
        re.compile("^" + _char_class(leading) + "+"),
        re.compile(_char_class(trailing) + "+$"),
    )


def split_words(line: str) -> List[str]:
    """Split a line on whitespace runs, dropping empty fragments."""
    return [word for word in _WHITESPACE_RE.split(line) if word]


def split_word(word: str, rules: PointingRules = DEFAULT_RULES) -> Token:
    """Split one whitespace-free word into leading punctuation, core, trailing."""
    leading_re, trailing_re = _compile_patterns(
        rules.leading_punctuation, rules.trailing_punctuation,
    )

    leading = None
    match = leading_re.match(word)
    if match:
        leading = match.group(0)
        word = word[match.end():]

    trailing = None
    match = trailing_re.search(word)
    if match:
        trailing = match.group(0)
        word = word[:match.start()]

    return Token(core=word, leading=leading, trailing=trailing)


def tokenize(line: str, rules: PointingRules = DEFAULT_RULES) -> List[Token]:
    """Split a line into tokens.

    Args:
        line: One line of text; may be empty.
        rules: Punctuation classes to strip.

    Returns:
        One Token per whitespace-delimited word, in order.
    """
    return [split_word(word, rules) for word in split_words(line)]
