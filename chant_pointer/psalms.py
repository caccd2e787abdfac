"""Loading, validating and annotating psalm record files.

WHY: Psalm text is stored as JSON: either one file per psalm or a whole
collection (a psalter) with a ``psalms`` array. The pointing engine works
line by line; this module wraps it so each psalm record comes back with
its annotated text and per-line annotations attached, ready to persist.

HOW: load_document() reads the JSON. detect_kind() decides whether it is
a collection or a single psalm. validate_record() checks it against the
bundled psalm_schema.json with jsonschema. annotate_psalm() and
annotate_collection() build new records; annotate_document() chains all
of the above and returns a PointedDocument for the formatters.

RULES:
- Collection: ``psalms`` is a list. Single psalm: integer ``psalm_number``
  and string ``text``. Anything else raises ValueError
- Records are never mutated; annotated copies are returned
- Annotated psalm = original keys + annotated_text + chant_annotations
  (+ chant_tone when a tone is given)
- Collections without a description get "Annotated psalm collection"
- Errors propagate; callers (CLI) decide how to report them
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from chant_pointer.core.ir import PointedDocument
from chant_pointer.core.pointer import annotate_text
from chant_pointer.core.rules import DEFAULT_RULES, PointingRules

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "psalm_schema.json"

DEFAULT_COLLECTION_DESCRIPTION = "Annotated psalm collection"

KIND_COLLECTION = "collection"
KIND_PSALM = "psalm"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def validate_record(data: Any, definition: str) -> None:
    """Validate data against one definition of the bundled psalm schema.

    Args:
        data: Parsed JSON value.
        definition: Name under ``$defs``, e.g. "psalm" or "annotatedCollection".

    Raises:
        jsonschema.ValidationError: If the data does not conform.
        KeyError: If the definition does not exist.
    """
    schema = _get_schema()
    if definition not in schema["$defs"]:
        raise KeyError("Unknown schema definition: {}".format(definition))
    root = dict(schema)
    root["$ref"] = "#/$defs/{}".format(definition)
    jsonschema.validate(instance=data, schema=root)


def load_document(path: str | Path) -> Any:
    """Read a UTF-8 JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    return json.loads(Path(path).read_text(encoding="utf-8"))


def detect_kind(data: Any) -> str:
    """Classify parsed JSON as a psalm collection or a single psalm.

    RULES:
    - A dict whose ``psalms`` value is a list → "collection"
    - A dict with an int (not bool) ``psalm_number`` and str ``text`` → "psalm"
    - Anything else → ValueError
    """
    if isinstance(data, dict):
        if isinstance(data.get("psalms"), list):
            return KIND_COLLECTION
        number = data.get("psalm_number")
        if (
            isinstance(number, int)
            and not isinstance(number, bool)
            and isinstance(data.get("text"), str)
        ):
            return KIND_PSALM
    raise ValueError(
        "Unrecognized input format. Expected a collection with psalms[] "
        "or a single psalm object."
    )


def annotate_psalm(
    psalm: Dict[str, Any],
    tone: Optional[str] = None,
    rules: PointingRules = DEFAULT_RULES,
) -> Dict[str, Any]:
    """Return a copy of a psalm record with its text pointed.

    WHY: The stored record keeps the plain text for reading and adds the
    pointed text and the per-line numbers for chanting and notation.

    HOW: Runs annotate_text() over ``text`` with the shared tone and
    merges the results into a shallow copy of the record.

    RULES:
    - annotated_text: annotated lines joined with "\\n"
    - chant_annotations: one persisted LineAnnotation dict per line
    - chant_tone: set only when tone is truthy; an existing value is
      otherwise left alone
    """
    pointed = annotate_text(psalm["text"], tone, rules)

    annotated = dict(psalm)
    annotated["annotated_text"] = pointed.annotated_text
    annotated["chant_annotations"] = pointed.to_dicts()
    if tone:
        annotated["chant_tone"] = tone

    logger.debug(
        "Pointed psalm %s (%d lines)",
        psalm.get("psalm_number"),
        len(pointed.annotations),
    )
    return annotated


def annotate_collection(
    collection: Dict[str, Any],
    tone: Optional[str] = None,
    rules: PointingRules = DEFAULT_RULES,
) -> Dict[str, Any]:
    """Return a copy of a psalm collection with every psalm pointed."""
    annotated = dict(collection)
    annotated["description"] = collection.get("description") or DEFAULT_COLLECTION_DESCRIPTION
    annotated["psalms"] = [
        annotate_psalm(psalm, tone, rules) for psalm in collection["psalms"]
    ]
    return annotated


def annotate_document(
    data: Any,
    source_filename: str,
    tone: Optional[str] = None,
    rules: PointingRules = DEFAULT_RULES,
) -> PointedDocument:
    """Detect, validate and point a parsed psalm JSON document.

    Args:
        data: Parsed JSON (collection or single psalm).
        source_filename: Name of the file it came from, for output naming.
        tone: Optional chant tone applied to every line.
        rules: Pointing configuration.

    Returns:
        A PointedDocument wrapping the annotated record.

    Raises:
        ValueError: If the document is neither a collection nor a psalm.
        jsonschema.ValidationError: If the document fails schema validation.
    """
    kind = detect_kind(data)
    validate_record(data, kind)

    if kind == KIND_COLLECTION:
        record = annotate_collection(data, tone, rules)
        logger.info(
            "Pointed collection %r: %d psalms (tone: %s)",
            record.get("name", source_filename),
            len(record["psalms"]),
            tone or "none",
        )
    else:
        record = annotate_psalm(data, tone, rules)
        logger.info(
            "Pointed psalm %s from %s (tone: %s)",
            record["psalm_number"],
            source_filename,
            tone or "none",
        )

    return PointedDocument(
        kind=kind,
        source_filename=source_filename,
        record=record,
        tone=tone,
    )


def annotate_file(
    path: str | Path,
    tone: Optional[str] = None,
    rules: PointingRules = DEFAULT_RULES,
) -> PointedDocument:
    """Load a psalm JSON file and point it. See annotate_document()."""
    path = Path(path)
    logger.info("Loading %s", path)
    return annotate_document(load_document(path), path.name, tone, rules)
