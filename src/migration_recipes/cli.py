"""CLI entrypoint for converting migration maps into OpenRewrite recipes."""

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from migration_recipes.core.converter import ConverterConfig, convert_sync
from migration_recipes.core.recipe import (
    DEFAULT_DESCRIPTION,
    DEFAULT_NAMESPACE,
    DEFAULT_TAGS,
)

log = logging.getLogger("migration_recipes.cli")

NO_MATCH_MESSAGE = "No matching version found"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the converter.

    Input and output directories fall back to the GitHub Actions input
    variables so the command can run unchanged as a workflow step.

    Args:
        argv (Sequence[str] | None): Arguments to parse instead of `sys.argv`.

    Returns:
        argparse.Namespace: Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        description="Convert IntelliJ migration maps into OpenRewrite recipes."
    )
    parser.add_argument(
        "--input-directory",
        default=os.environ.get("INPUT_INPUT_DIRECTORY") or None,
        help="Directory searched recursively for migration map XML files "
        "(default: $INPUT_INPUT_DIRECTORY)",
    )
    parser.add_argument(
        "--output-directory",
        default=os.environ.get("INPUT_OUTPUT_DIRECTORY") or None,
        help="Directory receiving the generated recipe files "
        "(default: $INPUT_OUTPUT_DIRECTORY)",
    )
    parser.add_argument(
        "--namespace",
        default=DEFAULT_NAMESPACE,
        help=f"Prefix for recipe names (default: {DEFAULT_NAMESPACE})",
    )
    parser.add_argument(
        "--description",
        default=DEFAULT_DESCRIPTION,
        help="Description written into every recipe.",
    )
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        help=f"Recipe tag, repeatable (default: {', '.join(DEFAULT_TAGS)})",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=1,
        help="Number of files converted concurrently (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). (default: INFO)",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    """Configure basic logging output using the desired severity level.

    Args:
        level (str): Logging level name.
    """
    value = getattr(logging, level.upper(), None)
    if not isinstance(value, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(
        level=value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def set_output(name: str, value: object) -> None:
    """Publish a step output through `$GITHUB_OUTPUT` when available."""
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        return
    with Path(output_file).open("a", encoding="utf-8") as handle:
        handle.write(f"{name}={value}\n")


def set_failed(message: str) -> None:
    """Report a failure as a workflow error annotation."""
    print(f"::error::{message}", file=sys.stderr)


def run(input_directory: str, output_directory: str, config: ConverterConfig) -> int:
    """Run one conversion and report its outcome.

    Args:
        input_directory (str): Directory scanned for migration maps.
        output_directory (str): Directory receiving the recipes.
        config (ConverterConfig): Converter settings.

    Returns:
        int: Process exit code.
    """
    try:
        count = convert_sync(input_directory, output_directory, config=config)
    except Exception as exc:
        set_failed(str(exc))
        return 1

    if not count:
        set_failed(NO_MATCH_MESSAGE)
        return 1

    set_output("count", count)
    log.info("Converted %d migration maps into %s", count, output_directory)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the CLI application."""
    args = parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)

    if not args.input_directory or not args.output_directory:
        print(
            "error: --input-directory and --output-directory are required",
            file=sys.stderr,
        )
        sys.exit(2)

    config = ConverterConfig(
        namespace=args.namespace,
        description=args.description,
        tags=args.tags or list(DEFAULT_TAGS),
        concurrency=args.concurrency,
    )
    try:
        code = run(args.input_directory, args.output_directory, config)
    except KeyboardInterrupt:
        log.warning("Conversion interrupted")
        sys.exit(130)
    sys.exit(code)


if __name__ == "__main__":
    main()
