"""Output formatter registry.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new formats: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["pointed_text"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chant_pointer.formatters.annotated_json import AnnotatedJSONFormatter
from chant_pointer.formatters.pointed_text import PointedTextFormatter

if TYPE_CHECKING:
    from chant_pointer.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "annotated_json": AnnotatedJSONFormatter,
    "pointed_text": PointedTextFormatter,
}

DEFAULT_FORMATS = ["annotated_json"]
