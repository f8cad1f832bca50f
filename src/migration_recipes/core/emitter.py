"""YAML rendering and persistence of recipes."""

import io
import os
import tempfile
from logging import getLogger
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from migration_recipes.core.errors import RecipeWriteError
from migration_recipes.core.recipe import Recipe

log = getLogger(__name__)

DEFAULT_EXTENSION = "yml"


def _yaml() -> YAML:
    """Return a dumper configured for recipe output."""
    yaml = YAML(typ="rt")
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 4096
    return yaml


def _to_node(value: Any) -> Any:
    """Recursively convert plain containers into round-trip YAML nodes."""
    if isinstance(value, dict):
        node = CommentedMap()
        for key, item in value.items():
            node[key] = _to_node(item)
        return node
    if isinstance(value, list):
        return CommentedSeq(_to_node(item) for item in value)
    return value


def render_recipe(recipe: Recipe) -> str:
    """Render `recipe` as a YAML document.

    Args:
        recipe (Recipe): Recipe to render.

    Returns:
        str: The complete YAML text.
    """
    stream = io.StringIO()
    _yaml().dump(_to_node(recipe.to_dict()), stream)
    return stream.getvalue()


def recipe_path(output_dir: Path, recipe: Recipe, extension: str) -> Path:
    """Return the destination file for `recipe` inside `output_dir`."""
    return output_dir / f"{recipe.display_name}.{extension}"


def write_recipe(
    recipe: Recipe,
    output_dir: Path | str,
    *,
    extension: str = DEFAULT_EXTENSION,
) -> Path:
    """Write `recipe` into `output_dir`, replacing any file of the same name.

    The document is rendered in full and written to a uniquely named temporary
    file in `output_dir` which then replaces the destination, so a failed write
    never leaves a truncated recipe behind and concurrent writes to the same
    name never share a temporary file.

    Args:
        recipe (Recipe): Recipe to persist.
        output_dir (Path | str): Directory receiving the recipe file.
        extension (str): File extension, without the leading dot.

    Returns:
        Path: The written recipe file.

    Raises:
        RecipeWriteError: If the directory or file cannot be written.
    """
    directory = Path(output_dir)
    path = recipe_path(directory, recipe, extension)
    rendered = render_recipe(recipe)
    tmp_path: Path | None = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            dir=directory,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as handle:
            tmp_path = Path(handle.name)
            handle.write(rendered)
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise RecipeWriteError(f"Failed to write recipe '{path}': {exc}") from exc

    log.debug("Wrote %d rules to %s", len(recipe.recipe_list), path)
    return path
