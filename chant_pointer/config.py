"""Configuration constants, character classes, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Vowel letters, punctuation classes, the article
list and the tone codes are plain data structures, not buried in
logic, so both humans and coding agents can modify them confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level frozensets and strings. Runtime defaults for the CLI
(output directory, tone, log level) can be overridden via environment
variables.

RULES:
- Character classes are frozensets of single characters
- FIRST_STANZA_ACCENT_TONES holds *normalized* tone codes
- All defaults can be overridden via environment variables
- Nothing here is mutated at runtime
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Orthography
# ---------------------------------------------------------------------------

VOWELS: frozenset[str] = frozenset("aeiouyáéíóúàèìòùâêîôûäëïöü")
"""Lowercase letters that form syllable nuclei, including accented Latin vowels."""

LEADING_PUNCTUATION: frozenset[str] = frozenset("\"'“”‘’([")
"""Characters stripped from the start of a word: quotes, parentheses, brackets."""

TRAILING_PUNCTUATION: frozenset[str] = frozenset(".,;:!?\"'“”‘’)&]")
"""Characters stripped from the end of a word."""

STANZA_BREAK_PUNCTUATION: frozenset[str] = frozenset(",;")
"""Punctuation that closes the first half-line of a verse."""

ARTICLES: frozenset[str] = frozenset({"a", "an", "the"})
"""Words the melodic accent should not land on."""

# ---------------------------------------------------------------------------
# Tones
# ---------------------------------------------------------------------------

FIRST_STANZA_ACCENT_TONES: frozenset[str] = frozenset({"1", "2", "5", "6", "8"})
"""Normalized tone codes whose accent falls just before the mid-line pause."""

CAESURA_OFFSET = 4
"""Syllables between the caesura and the end of the line."""

# ---------------------------------------------------------------------------
# CLI defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR = os.getenv("CHANT_POINTER_OUTPUT_DIR", "public/assets/psalms/annotated")
DEFAULT_TONE = os.getenv("CHANT_POINTER_DEFAULT_TONE", "").strip() or None
LOG_LEVEL = os.getenv("CHANT_POINTER_LOG_LEVEL", "WARNING").upper()
