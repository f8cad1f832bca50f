"""Parsing of IntelliJ migration map descriptors."""

from collections.abc import Iterable
from logging import getLogger

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from migration_recipes.core.errors import DescriptorError

log = getLogger(__name__)

MIGRATION_MAP_TAG = "migrationMap"
CLASS_KIND = "class"


class RenameEntry(BaseModel):
    """Data model for an `<entry>` element of a migration map."""

    old_name: str = Field(alias="oldName")
    new_name: str = Field(alias="newName")
    kind: str = Field(alias="type")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class MigrationDescriptor(BaseModel):
    """Data model for a parsed `<migrationMap>` document."""

    entries: list[RenameEntry]
    declared_name: str | None = None


def parse_descriptor(content: bytes) -> MigrationDescriptor | None:
    """Parse the raw contents of a descriptor file.

    Documents that are well-formed XML but not migration maps are expected in
    scanned trees, so they are reported as `None` rather than raised.

    Args:
        content (bytes): Raw file contents.

    Returns:
        MigrationDescriptor | None: The parsed descriptor, or `None` when the
            document is not a migration map with at least one entry.

    Raises:
        DescriptorError: If the content is not well-formed XML.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise DescriptorError(f"Malformed XML: {exc}") from exc

    if root.tag != MIGRATION_MAP_TAG:
        return None

    # findall always yields a list, so a lone <entry> stays a one-item sequence
    entry_elements = root.findall("entry")
    if not entry_elements:
        return None

    try:
        entries = [RenameEntry.model_validate(dict(el.attrib)) for el in entry_elements]
    except ValidationError as exc:
        log.warning(
            "Migration map has entries missing required attributes: %s",
            exc.errors(include_url=False),
        )
        return None

    name_el = root.find("name")
    declared_name = name_el.get("value") if name_el is not None else None
    return MigrationDescriptor(entries=entries, declared_name=declared_name or None)


def filter_class_entries(entries: Iterable[RenameEntry]) -> list[RenameEntry]:
    """Return only the class rename entries, keeping their order."""
    return [entry for entry in entries if entry.kind == CLASS_KIND]
