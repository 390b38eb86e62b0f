"""
Command-line entry point — parse a registration envelope from a JSON file.

Composition root for the CLI: loads settings, configures structlog,
reads the metadata JSON, runs the pipeline and prints the result.

Examples:
    catalyst-parser metadata.json
    catalyst-parser --json < metadata.json
    python -m catalyst_parser.main metadata.json --log-level DEBUG
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

import structlog

from catalyst_parser import __version__
from catalyst_parser.config import AppSettings
from catalyst_parser.pipeline import parse_registration
from catalyst_parser.presentation import registration_to_dict, render_text
from catalyst_parser.railway import ErrorCode, Result


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for human-readable console logging on stderr.

    stdout is reserved for the parse result.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalyst-parser",
        description="Parse Cardano Project Catalyst voting registration metadata.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default="-",
        type=argparse.FileType("r", encoding="utf-8"),
        help="Metadata JSON file (default: stdin)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a text summary",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level (DEBUG, INFO, WARNING, ...)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _require_object(document: Any) -> Result[dict[str, Any]]:
    if isinstance(document, dict):
        return Result.success(document)
    return Result.failure(
        ErrorCode.INVALID_FORMAT,
        f"Metadata JSON must be an object, got {type(document).__name__}",
    )


def read_source(source: TextIO) -> Result[str]:
    """Read the metadata text; bytes that are not UTF-8 are INVALID_FORMAT."""
    return Result.from_computation(
        source.read,
        ErrorCode.INVALID_FORMAT,
        "Metadata is not valid UTF-8 text",
    )


def load_envelope(text: str) -> Result[dict[str, Any]]:
    """Parse metadata JSON text into the envelope mapping."""
    return Result.from_computation(
        lambda: json.loads(text),
        ErrorCode.INVALID_FORMAT,
        "Metadata is not valid JSON",
    ).flat_map(_require_object)


def load_settings() -> Result[AppSettings]:
    return Result.from_computation(
        AppSettings,
        ErrorCode.CONFIGURATION_ERROR,
        "Configuration error",
    )


def run(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_arg_parser().parse_args(argv)

    settings_result = load_settings()
    if settings_result.is_failure():
        failure = settings_result.error()
        print(f"FATAL: {failure.message}: {failure.exception}", file=sys.stderr)  # noqa: T201
        return 1
    settings = settings_result.value()

    configure_structlog(args.log_level or settings.log_level)
    log = structlog.get_logger()

    with args.source as source:
        text_result = read_source(source).peek(
            lambda text: log.debug("cli.input_read", source=source.name, length=len(text))
        )

    result = text_result.flat_map(load_envelope).flat_map(parse_registration)

    if result.is_failure():
        print(f"Error: {result.error().message}", file=sys.stderr)  # noqa: T201
        return 1

    registration = result.value()
    if args.json:
        output = json.dumps(registration_to_dict(registration), indent=2)
    else:
        output = render_text(registration, settings.signature_preview_chars)
    print(output)  # noqa: T201
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
