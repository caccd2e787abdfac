"""Pointed plain text formatter with one block per psalm.

WHY: Cantors and choir directors want something they can print or paste
into a service leaflet: no JSON, just the pointed verses under a psalm
heading.

HOW: Iterates the document's psalms in order. Each psalm becomes a
header line followed by its annotated lines. A blank line separates
psalms.

RULES:
- Header: "Psalm N", plus " (part P)" and " — Latin name" when present
- Body: the psalm's annotated_text, unchanged
- Double newline between psalm blocks
- Trailing newline when there is any content
- Output suffix: ".pointed.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import Any, Dict, List

from chant_pointer.core.ir import PointedDocument
from chant_pointer.formatters.base import BaseFormatter, FormatterOutput


def _psalm_header(psalm: Dict[str, Any]) -> str:
    header = "Psalm {}".format(psalm.get("psalm_number", "?"))
    if psalm.get("part") is not None:
        header += " (part {})".format(psalm["part"])
    if psalm.get("latin_name"):
        header += " — {}".format(psalm["latin_name"])
    return header


class PointedTextFormatter(BaseFormatter):
    """Formatter that produces pointed psalm text under psalm headings."""

    @property
    def name(self) -> str:
        return "Pointed Text"

    def format(self, document: PointedDocument) -> List[FormatterOutput]:
        blocks: List[str] = []
        for psalm in document.psalms:
            blocks.append("{}\n{}".format(
                _psalm_header(psalm), psalm.get("annotated_text", ""),
            ))

        content = "\n\n".join(blocks)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix=".pointed.txt",
                content=content,
                media_type="text/plain",
            )
        ]
