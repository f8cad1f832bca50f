"""OpenRewrite recipe structures and builders."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from migration_recipes.core.descriptor import RenameEntry

RECIPE_TYPE = "specs.openrewrite.org/v1beta/recipe"
CHANGE_TYPE_RULE = "org.openrewrite.java.ChangeType"
DEFAULT_NAMESPACE = "com.twelveiterations"
DEFAULT_DESCRIPTION = "Apply package and class name migrations"
DEFAULT_TAGS: tuple[str, ...] = ("fabric", "migration")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_name(candidate: str) -> str:
    """Replace every character outside `[A-Za-z0-9_-]` with a dash.

    Each offending character is replaced on its own, so runs are not collapsed
    and the result has the same length as the input.

    Args:
        candidate (str): Declared map name or file stem.

    Returns:
        str: Name usable both as a file name and a recipe identifier.
    """
    return _UNSAFE_CHARS.sub("-", candidate)


def recipe_name_for(source: Path, declared_name: str | None = None) -> str:
    """Pick and sanitize the recipe name for a descriptor file."""
    return sanitize_name(declared_name or source.stem)


@dataclass(slots=True)
class RenameRule:
    """A `ChangeType` rule renaming references to a type."""

    old_name: str
    new_name: str
    ignore_definition: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize the rule into its recipe-list representation.

        Returns:
            dict[str, Any]: YAML-friendly rule mapping.
        """
        return {
            "type": CHANGE_TYPE_RULE,
            "oldFullyQualifiedTypeName": self.old_name,
            "newFullyQualifiedTypeName": self.new_name,
            "ignoreDefinition": self.ignore_definition,
        }


@dataclass(slots=True)
class Recipe:
    """Declarative OpenRewrite recipe generated from one migration map."""

    name: str
    display_name: str
    description: str
    tags: list[str] = field(default_factory=list)
    recipe_list: list[RenameRule] = field(default_factory=list)
    type: str = RECIPE_TYPE

    def to_dict(self) -> dict[str, Any]:
        """Serialize the recipe in OpenRewrite key order.

        Returns:
            dict[str, Any]: YAML-friendly recipe document.
        """
        return {
            "type": self.type,
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "tags": list(self.tags),
            "recipeList": [rule.to_dict() for rule in self.recipe_list],
        }


def build_recipe(
    name: str,
    entries: Sequence[RenameEntry],
    *,
    namespace: str = DEFAULT_NAMESPACE,
    description: str = DEFAULT_DESCRIPTION,
    tags: Sequence[str] = DEFAULT_TAGS,
    recipe_type: str = RECIPE_TYPE,
) -> Recipe:
    """Assemble a recipe from a sanitized name and class rename entries.

    Args:
        name (str): Sanitized recipe name.
        entries (Sequence[RenameEntry]): Class entries, in descriptor order.
        namespace (str): Prefix joined to `name` to form the recipe identifier.
        description (str): Human-readable recipe description.
        tags (Sequence[str]): Tags attached to the recipe.
        recipe_type (str): Declarative recipe schema identifier.

    Returns:
        Recipe: The assembled recipe.
    """
    return Recipe(
        name=f"{namespace}.{name}",
        display_name=name,
        description=description,
        tags=list(tags),
        recipe_list=[RenameRule(entry.old_name, entry.new_name) for entry in entries],
        type=recipe_type,
    )
