"""Validate message drafts from the command line.

Usage:
    # Validate one or more JSON drafts
    kite-validate draft.json other.json

    # Read a draft from stdin
    cat draft.json | kite-validate -

    # Machine-readable violations
    kite-validate --json draft.json

Exit status is 0 when every draft is valid, 1 when any draft has
violations and 2 when a draft cannot be read or parsed.

Example output:
    📊 Validating: draft.json

    ✓ Valid: False
    📊 Total chars: 42

    ❌ Errors:
      - username: Username can't contain 'clyde' or 'discord'
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from typing import Any, TextIO

import structlog

from kite_message.config.settings import get_settings
from kite_message.core.observability import configure_logging
from kite_message.core.validation import MessageValidator, ValidationResult

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def _load_draft(source: str, stdin: TextIO) -> Any:
    if source == "-":
        return json.load(stdin)
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def _report(source: str, result: ValidationResult, as_json: bool) -> str:
    if as_json:
        return json.dumps(
            {
                "source": source,
                "is_valid": result.is_valid,
                "errors": [err.to_dict() for err in result.errors],
                "warnings": result.warnings,
                "message": result.message.to_payload() if result.message else None,
            },
            ensure_ascii=False,
        )
    return f"📊 Validating: {source}\n\n{result}\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kite-validate",
        description="Validate message-builder drafts against chat platform limits",
    )
    parser.add_argument(
        "files",
        nargs="*",
        default=["-"],
        help="JSON draft files ('-' or nothing reads stdin)",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON lines")
    return parser


def main(argv: Sequence[str] | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    configure_logging(get_settings().app_log_level)
    validator = MessageValidator()

    status = EXIT_OK
    for source in args.files:
        try:
            draft = _load_draft(source, stdin)
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        except (OSError, ValueError, RecursionError) as e:
            logger.error("Failed to load draft", source=source, error=str(e))
            print(f"❌ Failed to load {source}: {e}", file=stdout)
            status = EXIT_UNREADABLE
            continue

        result = validator.validate(draft)
        print(_report(source, result, args.json), file=stdout)
        if not result.is_valid and status == EXIT_OK:
            status = EXIT_INVALID

    return status


if __name__ == "__main__":
    sys.exit(main())
