"""Orchestration for converting migration maps into OpenRewrite recipes."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import Protocol, runtime_checkable

from migration_recipes.core.descriptor import filter_class_entries, parse_descriptor
from migration_recipes.core.emitter import DEFAULT_EXTENSION, write_recipe
from migration_recipes.core.errors import ConversionError
from migration_recipes.core.locator import find_descriptor_files
from migration_recipes.core.recipe import (
    DEFAULT_DESCRIPTION,
    DEFAULT_NAMESPACE,
    DEFAULT_TAGS,
    RECIPE_TYPE,
    build_recipe,
    recipe_name_for,
)

log = getLogger(__name__)


@dataclass(slots=True)
class ConverterConfig:
    """Settings shared by every conversion in a batch."""

    namespace: str = DEFAULT_NAMESPACE
    description: str = DEFAULT_DESCRIPTION
    tags: Sequence[str] = field(default_factory=lambda: list(DEFAULT_TAGS))
    recipe_type: str = RECIPE_TYPE
    extension: str = DEFAULT_EXTENSION
    concurrency: int = 1

    def __post_init__(self) -> None:
        """Clamp the worker count to at least one."""
        self.concurrency = max(1, self.concurrency)


@runtime_checkable
class ConversionReporter(Protocol):
    """Receiver of per-file conversion outcomes."""

    def converted(self, source: Path, destination: Path) -> None:
        """Record a recipe written for `source`."""
        ...

    def skipped(self, source: Path, reason: str) -> None:
        """Record a descriptor candidate that produced no recipe."""
        ...

    def failed(self, source: Path, error: BaseException) -> None:
        """Record a descriptor whose conversion raised `error`."""
        ...


class LoggingReporter(ConversionReporter):
    """Report conversion outcomes through the module logger."""

    def converted(self, source: Path, destination: Path) -> None:
        """Log a successful conversion."""
        log.info("Converted: %s -> %s", source, destination)

    def skipped(self, source: Path, reason: str) -> None:
        """Log a skipped descriptor candidate."""
        log.debug("Skipped %s: %s", source, reason)

    def failed(self, source: Path, error: BaseException) -> None:
        """Log a failed conversion."""
        log.error("Error converting %s: %s", source, error, exc_info=error)


async def convert(
    input_dir: Path | str,
    output_dir: Path | str,
    *,
    config: ConverterConfig | None = None,
    reporter: ConversionReporter | None = None,
) -> int:
    """Convert every migration map below `input_dir` into `output_dir`.

    Failures for individual files are reported and skipped. Only failing to
    create `output_dir` or to walk `input_dir` aborts the batch.

    Args:
        input_dir (Path | str): Directory tree scanned for `.xml` descriptors.
        output_dir (Path | str): Flat directory receiving the recipes.
        config (ConverterConfig | None): Recipe and concurrency settings.
        reporter (ConversionReporter | None): Receiver of per-file outcomes.
            Defaults to a `LoggingReporter`.

    Returns:
        int: Number of recipes written.

    Raises:
        ConversionError: If the output directory cannot be created or the
            input directory cannot be read.
    """
    config = config or ConverterConfig()
    reporter = reporter or LoggingReporter()
    output_path = Path(output_dir)

    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConversionError(
            f"Failed to create output directory '{output_path}': {exc}"
        ) from exc

    descriptor_files = await asyncio.to_thread(find_descriptor_files, input_dir)
    log.debug(
        "Converting %d descriptor candidates with concurrency %d",
        len(descriptor_files),
        config.concurrency,
    )

    semaphore = asyncio.Semaphore(config.concurrency)
    results = await asyncio.gather(
        *(
            _convert_with_semaphore(semaphore, path, output_path, config, reporter)
            for path in descriptor_files
        )
    )
    return sum(results)


def convert_sync(
    input_dir: Path | str,
    output_dir: Path | str,
    *,
    config: ConverterConfig | None = None,
    reporter: ConversionReporter | None = None,
) -> int:
    """Run `convert` to completion on a fresh event loop."""
    return asyncio.run(
        convert(input_dir, output_dir, config=config, reporter=reporter)
    )


async def _convert_with_semaphore(
    semaphore: asyncio.Semaphore,
    source: Path,
    output_dir: Path,
    config: ConverterConfig,
    reporter: ConversionReporter,
) -> int:
    """Convert one file while respecting the concurrency semaphore."""
    async with semaphore:
        try:
            return await _convert_file(source, output_dir, config, reporter)
        except Exception as exc:
            reporter.failed(source, exc)
            return 0


async def _convert_file(
    source: Path,
    output_dir: Path,
    config: ConverterConfig,
    reporter: ConversionReporter,
) -> int:
    """Convert a single descriptor, returning 1 when a recipe was written."""
    content = await asyncio.to_thread(source.read_bytes)
    descriptor = parse_descriptor(content)
    if descriptor is None:
        reporter.skipped(source, "not a migration map")
        return 0

    class_entries = filter_class_entries(descriptor.entries)
    if not class_entries:
        reporter.skipped(source, "no class entries")
        return 0

    recipe = build_recipe(
        recipe_name_for(source, descriptor.declared_name),
        class_entries,
        namespace=config.namespace,
        description=config.description,
        tags=config.tags,
        recipe_type=config.recipe_type,
    )
    destination = await asyncio.to_thread(
        write_recipe, recipe, output_dir, extension=config.extension
    )
    reporter.converted(source, destination)
    return 1
