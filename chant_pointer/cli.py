"""Command-line interface for the Chant Pointer.

WHY: Psalters are maintained as JSON files and re-pointed whenever the
text or a tone assignment changes. The CLI wires together the whole
pipeline (input validation, JSON loading, schema checks, line pointing,
pluggable formatter output, and file saving) behind a single command.

HOW: Uses argparse to accept an input JSON file, a tone, the output
directory and the output formats. Status messages go to stderr; output
files are written to --output-dir (created if needed).

RULES:
- Positional argument: a psalm collection or single psalm JSON file
- Validates the .json extension and the document shape before pointing
- --tone: applied to every line of every psalm (default from .env)
- --formats: comma-separated formatter keys (default: annotated_json)
- Output naming: {stem}{suffix}, numeric suffix for conflicts
  (psalms.annotated-2.json) unless --overwrite is given
- Status output goes to stderr (not stdout)
- Errors print "Error: ..." and exit with status 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from chant_pointer.config import DEFAULT_OUTPUT_DIR, DEFAULT_TONE, LOG_LEVEL
from chant_pointer.formatters import DEFAULT_FORMATS, FORMATTERS
from chant_pointer.formatters.base import FormatterOutput
from chant_pointer.psalms import annotate_file

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
    overwrite: bool = False,
) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    WHY: Re-running the pointer after hand-corrections would silently
    destroy them. Numeric suffixes (psalms.annotated-2.json) keep both
    unless the caller explicitly asks to overwrite.

    RULES:
    - First attempt: {stem}{suffix} (e.g. psalms.annotated.json)
    - overwrite=True: always the first attempt
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. psalms.annotated-2.json)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if overwrite or not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
    overwrite: bool = False,
) -> Path:
    """Write one formatter output as UTF-8 text and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir, overwrite)
    path.write_text(output.content, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(output.content), path)
    return path


def _parse_formats(value: Optional[str]) -> List[str]:
    if not value:
        return list(DEFAULT_FORMATS)
    keys = [f.strip() for f in value.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def run(args: argparse.Namespace) -> List[Path]:
    """Execute the pointing pipeline for parsed arguments.

    RULES:
    - Validate input file and formats before reading anything
    - Create the output directory if it does not exist
    - Save each formatter's output files; return their paths
    """
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))
    if input_path.suffix.lower() != ".json":
        _fail("Unsupported file type '{}'. Expected a .json psalm file.".format(
            input_path.suffix,
        ))

    format_keys = _parse_formats(args.formats)

    output_dir = Path(args.output_dir).resolve()
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _fail("Cannot create output directory {}: {}".format(output_dir, e))

    _status("Pointing {} (tone: {})...".format(input_path.name, args.tone or "none"))
    try:
        document = annotate_file(input_path, tone=args.tone)
    except json.JSONDecodeError as e:
        _fail("Invalid JSON in {}: {}".format(input_path.name, e))
    except jsonschema.ValidationError as e:
        _fail("Invalid psalm record in {}: {}".format(input_path.name, e.message))
    except ValueError as e:
        _fail(str(e))
    except OSError as e:
        _fail("Cannot read {}: {}".format(input_path, e))

    psalm_count = len(document.psalms)
    line_count = sum(len(p["chant_annotations"]) for p in document.psalms)
    _status("  {} psalm(s), {} line(s)".format(psalm_count, line_count))

    stem = input_path.stem
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        try:
            outputs = formatter.format(document)
        except jsonschema.ValidationError as e:
            _fail("{} output failed validation: {}".format(formatter.name, e.message))
        for output in outputs:
            saved_path = _save_output(output, stem, output_dir, args.overwrite)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect the parser without
    running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="chant-pointer",
        description="Point psalm text for chanting: mark the caesura (/) and "
                    "the accent syllable (^) of every line.",
    )

    parser.add_argument(
        "input_file",
        help="Path to a psalm collection JSON (with psalms: []) or a single psalm JSON.",
    )

    parser.add_argument(
        "-t", "--tone",
        default=DEFAULT_TONE,
        help="Chant tone applied to every line, e.g. '2' or '6C' (default: %(default)s).",
    )

    parser.add_argument(
        "-o", "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Directory to save output files (default: %(default)s).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: {}.".format(
                 ", ".join(sorted(FORMATTERS.keys())), ", ".join(DEFAULT_FORMATS),
             ),
    )

    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace existing output files instead of adding a numeric suffix.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress for every psalm.",
    )

    return parser


def _resolve_log_level(name: str) -> int:
    """Map a level name such as "INFO" to its number; unknown names give WARNING."""
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    _status("Warning: unknown log level '{}', using WARNING".format(name))
    return logging.WARNING


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m chant_pointer`` and ``chant-pointer``.

    argv=None means use sys.argv; an explicit list is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else _resolve_log_level(LOG_LEVEL),
        format="%(levelname)s %(name)s: %(message)s",
    )
    run(args)


if __name__ == "__main__":
    main()
