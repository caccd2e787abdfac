"""Annotated psalm JSON formatter.

WHY: The annotated record is what the rest of the system loads: the
psalm viewer reads ``annotated_text`` and the notation renderer reads
``chant_annotations``. It must round-trip through the same schema as the
input so a broken record never reaches them.

HOW: Serializes PointedDocument.record as indented UTF-8 JSON after
validating it against the annotatedPsalm / annotatedCollection
definition of psalm_schema.json.

RULES:
- Output suffix: ".annotated.json" (``psalms.json`` → ``psalms.annotated.json``)
- 2-space indentation, non-ASCII characters kept as-is
- Validate before returning; raise on failure
"""

from __future__ import annotations

import json

from chant_pointer.core.ir import PointedDocument
from chant_pointer.formatters.base import BaseFormatter, FormatterOutput
from chant_pointer.psalms import KIND_COLLECTION, validate_record


class AnnotatedJSONFormatter(BaseFormatter):
    """Formatter that writes the annotated psalm record as JSON."""

    @property
    def name(self) -> str:
        return "Annotated JSON"

    def format(self, document: PointedDocument) -> list[FormatterOutput]:
        """Serialize the annotated record.

        Raises:
            jsonschema.ValidationError: If the record does not conform to
                the annotated psalm schema.
        """
        definition = (
            "annotatedCollection" if document.kind == KIND_COLLECTION else "annotatedPsalm"
        )
        validate_record(document.record, definition)

        content = json.dumps(document.record, indent=2, ensure_ascii=False)

        return [
            FormatterOutput(
                suffix=".annotated.json",
                content=content,
                media_type="application/json",
            )
        ]
