"""Intermediate representation dataclasses for pointed psalm text.

WHY: The pointing engine, the psalm-record layer and the formatters all
pass the same handful of shapes around: a split word, an annotated line,
an annotated block of lines, and an annotated psalm document. A single,
well-typed intermediate form decouples the algorithm from file formats.

HOW: Four dataclasses form a hierarchy:
  Token           — one whitespace-delimited word split into punctuation and core
  LineAnnotation  — the pointing result for one line of a psalm
  PointedText     — the pointing result for a multi-line block of text
  PointedDocument — an annotated psalm or psalm collection, ready to format

RULES:
- Syllable indices are 1-based; word indices never leave the core
- caesura_index / accent_syllable are None exactly when the line is empty
- LineAnnotation.to_dict() uses the persisted JSON key names
- PointedDocument.record is a plain JSON-compatible dict
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Token:
    """A single word with its surrounding punctuation split off.

    WHY: Syllables are counted on the bare word, but markers must be
    inserted between opening punctuation and the word, and the original
    punctuation must survive rendering untouched.

    RULES:
    - leading / trailing: the stripped punctuation run, or None
    - core: what remains; may be empty for punctuation-only words
    - text: leading + core + trailing reproduces the original word
    """

    core: str
    leading: Optional[str] = None
    trailing: Optional[str] = None

    @property
    def text(self) -> str:
        return "{}{}{}".format(self.leading or "", self.core, self.trailing or "")


@dataclass(frozen=True)
class LineAnnotation:
    """The pointing result for one line of text.

    WHY: Callers need both the rendered line (for display) and the
    numbers behind it (for notation rendering and for re-checking a
    pointing by hand).

    HOW: Built by annotate_line(). Serialized into psalm records with
    to_dict(), which reproduces the key names stored in annotated psalm
    JSON files.

    RULES:
    - line_index: 0-based position of the line in its block (pass-through)
    - original_line: the input line verbatim
    - annotated_line: tokens re-joined with single spaces, markers inserted
    - syllables: sum of the per-token syllable counts
    - caesura_index / accent_syllable: 1-based syllable targets, None for
      an empty line
    """

    line_index: int
    original_line: str
    annotated_line: str
    syllables: int
    caesura_index: Optional[int] = None
    accent_syllable: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON shape, omitting absent indices."""
        data: Dict[str, Any] = {
            "lineIndex": self.line_index,
            "original_line": self.original_line,
            "annotated_line": self.annotated_line,
            "syllables": self.syllables,
        }
        if self.caesura_index is not None:
            data["caesuraIndex"] = self.caesura_index
        if self.accent_syllable is not None:
            data["primaryAccentSyllable"] = self.accent_syllable
        return data


@dataclass
class PointedText:
    """The pointing result for a multi-line block (usually a whole psalm).

    RULES:
    - annotations: one LineAnnotation per input line, in order
    - annotated_text: the annotated_line values joined with "\\n"
    """

    annotated_text: str
    annotations: List[LineAnnotation] = field(default_factory=list)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [a.to_dict() for a in self.annotations]


@dataclass
class PointedDocument:
    """An annotated psalm or psalm collection, as handed to formatters.

    WHY: Formatters need the full persisted record plus a little context
    (what kind of document it is, where it came from, which tone was
    applied) to name and shape their output.

    RULES:
    - kind: "collection" or "psalm"
    - source_filename: input file name, used for output naming
    - tone: the tone applied to every line, or None
    - record: the annotated JSON-compatible dict
    """

    kind: str
    source_filename: str
    record: Dict[str, Any]
    tone: Optional[str] = None

    @property
    def psalms(self) -> List[Dict[str, Any]]:
        """The annotated psalm dicts in document order."""
        if self.kind == "collection":
            return list(self.record.get("psalms", []))
        return [self.record]
