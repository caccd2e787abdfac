"""Core pointing engine and intermediate representation modules.

WHY: The core package contains the stable heart of the pointer: the IR
dataclasses and the line annotation algorithm. These are consumed by the
psalm-record layer and every formatter, and must remain backward-compatible.

HOW: ir.py defines the data structures, rules.py the immutable
configuration value, tokenizer.py / syllables.py / tones.py the leaf
helpers, and pointer.py the caesura/accent placement and rendering.

RULES:
- IR dataclasses are the contract; change with care
- Nothing in core performs I/O or logs
- Every function takes its rules explicitly (default: DEFAULT_RULES)
"""

from chant_pointer.core.ir import LineAnnotation, PointedDocument, PointedText, Token
from chant_pointer.core.pointer import annotate_line, annotate_text
from chant_pointer.core.rules import DEFAULT_RULES, PointingRules

__all__ = [
    "DEFAULT_RULES",
    "LineAnnotation",
    "PointedDocument",
    "PointedText",
    "PointingRules",
    "Token",
    "annotate_line",
    "annotate_text",
]
