#!/usr/bin/env python3
"""
Normalize CLI
Command-line tool for normalizing JSON documents into canonical dicts
"""

import argparse
import json
import logging
import sys
from typing import Any, Optional

import structlog

from .errors import ConfigurationError, NormalizerError
from .normalizer import Normalizer
from .settings import load_options_from_env

logger = structlog.get_logger()


def configure_logging(verbose: bool = False) -> None:
    """Send log events to stderr so stdout stays valid JSON"""
    structlog.configure(
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.INFO),
    )


def normalize_document(
    data: Any,
    normalizer: Normalizer,
    ignored_keys: tuple[str, ...] = (),
) -> tuple[Any, int]:
    """
    Normalize a loaded JSON document.

    A top-level array is normalized element-wise; failed elements are
    logged and left out.

    Returns:
        Tuple of (normalized document, error count)
    """
    if not isinstance(data, list):
        return normalizer.normalize(data, ignored_keys), 0

    normalized = []
    errors = 0
    for index, item in enumerate(data):
        try:
            normalized.append(normalizer.normalize(item, ignored_keys))
        except NormalizerError as e:
            errors += 1
            logger.warning("Failed to normalize document", index=index, error=str(e))
    return normalized, errors


def normalize_from_file(
    input_file: str,
    normalizer: Normalizer,
    output_file: Optional[str] = None,
    ignored_keys: tuple[str, ...] = (),
) -> tuple[Any, int]:
    """Normalize a JSON file, writing the result to output_file or stdout"""
    print(f"Normalizing {input_file}...", file=sys.stderr)

    with open(input_file, "r") as f:
        data = json.load(f)

    normalized, errors = normalize_document(data, normalizer, ignored_keys)
    rendered = json.dumps(normalized, indent=2, default=str)

    if output_file:
        with open(output_file, "w") as f:
            f.write(rendered + "\n")
        print(f"✅ Saved to {output_file} ({errors} errors)", file=sys.stderr)
    else:
        print(rendered)

    return normalized, errors


def build_options(args: argparse.Namespace) -> dict[str, Any]:
    """Environment defaults overlaid with explicit command-line flags"""
    options = load_options_from_env()
    if args.include_null:
        options["includeNullValues"] = True
    if args.include_protected:
        options["includeProtectedProperties"] = True
    if args.no_snake_case:
        options["convertPropertiesToSnakeCase"] = False
    if args.case_converter:
        options["caseConverterFunction"] = args.case_converter
    if args.callback:
        options["propertyCallback"] = args.callback
    if args.ignore_property:
        options["ignoredProperties"] = [*options.get("ignoredProperties", []), *args.ignore_property]
    if args.ignore_sql_behavioural:
        options["ignoreSqlBehaviouralProperties"] = True
    return options


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Normalize JSON documents into canonical dicts")
    parser.add_argument("input", help="Input JSON file")
    parser.add_argument("--output", "-o", help="Output JSON file (default: stdout)")
    parser.add_argument("--include-null", action="store_true", help="Keep null values")
    parser.add_argument("--include-protected", action="store_true", help="Keep protected fields")
    parser.add_argument("--no-snake-case", action="store_true", help="Disable key case conversion")
    parser.add_argument("--case-converter", help="Case converter spec, e.g. 'snake_case_safe|-'")
    parser.add_argument("--callback", help="Key callback spec, e.g. 'prefix|x_'")
    parser.add_argument(
        "--ignore-property", action="append", default=[], metavar="KEY",
        help="Key removed at every level (repeatable)",
    )
    parser.add_argument(
        "--ignore", action="append", default=[], metavar="KEY",
        help="Key removed from the top level only (repeatable)",
    )
    parser.add_argument(
        "--ignore-sql-behavioural", action="store_true",
        help="Drop created_at/updated_at/deleted_at and *_by keys",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug events")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        normalizer = Normalizer(build_options(args))
    except ConfigurationError as e:
        parser.error(str(e))

    try:
        _, errors = normalize_from_file(args.input, normalizer, args.output, tuple(args.ignore))
    except NormalizerError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
