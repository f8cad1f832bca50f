"""Discovery of migration map descriptor files."""

import os
from logging import getLogger
from pathlib import Path

from migration_recipes.core.errors import ConversionError

log = getLogger(__name__)

DESCRIPTOR_SUFFIX = ".xml"


def find_descriptor_files(root: Path | str) -> list[Path]:
    """Recursively collect `.xml` files below `root`.

    Subdirectories are fully walked before their next sibling is visited.
    Symlinked directories are not followed.

    Args:
        root (Path | str): Directory to search.

    Returns:
        list[Path]: Paths of every descriptor candidate found.

    Raises:
        ConversionError: If `root` or one of its subdirectories cannot be read.
    """
    directory = Path(root).absolute()
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise ConversionError(
            f"Failed to read directory '{directory}': {exc}"
        ) from exc

    found: list[Path] = []
    for entry in entries:
        path = directory / entry.name
        if entry.is_dir(follow_symlinks=False):
            found.extend(find_descriptor_files(path))
        elif entry.is_file() and path.suffix.lower() == DESCRIPTOR_SUFFIX:
            found.append(path)

    log.debug("Found %d descriptor candidates in %s", len(found), directory)
    return found
