import pytest

from conftest import migration_map
from migration_recipes.core.descriptor import (
    RenameEntry,
    filter_class_entries,
    parse_descriptor,
)
from migration_recipes.core.errors import DescriptorError


def _parse(text: str):
    return parse_descriptor(text.encode("utf-8"))


def test_parses_entries_in_order_with_declared_name():
    descriptor = _parse(
        migration_map(
            ("com.example.OldClass", "com.example.NewClass", "class"),
            ("com.example.old", "com.example.new", "package"),
            ("com.example.OldUtil", "com.example.NewUtil", "class"),
            name="Test Migration",
        )
    )

    assert descriptor is not None
    assert descriptor.declared_name == "Test Migration"
    assert [(e.old_name, e.new_name, e.kind) for e in descriptor.entries] == [
        ("com.example.OldClass", "com.example.NewClass", "class"),
        ("com.example.old", "com.example.new", "package"),
        ("com.example.OldUtil", "com.example.NewUtil", "class"),
    ]


def test_single_entry_is_a_one_item_list():
    descriptor = _parse(
        migration_map(("com.example.Single", "com.example.SingleNew", "class"))
    )

    assert descriptor is not None
    assert len(descriptor.entries) == 1
    assert descriptor.entries[0].old_name == "com.example.Single"
    assert descriptor.declared_name is None


def test_other_root_element_is_not_a_descriptor():
    text = "<someOtherRoot><data>not a migration map</data></someOtherRoot>"

    assert _parse(text) is None


def test_map_without_entries_is_not_a_descriptor():
    assert _parse(migration_map(name="Empty Migration")) is None
    assert _parse("<migrationMap/>") is None


def test_entry_missing_attribute_rejects_document():
    text = (
        "<migrationMap>"
        '<entry oldName="com.example.Old" type="class"/>'
        "</migrationMap>"
    )

    assert _parse(text) is None


def test_empty_declared_name_is_ignored():
    descriptor = _parse(
        migration_map(("com.example.Old", "com.example.New", "class"), name="")
    )

    assert descriptor is not None
    assert descriptor.declared_name is None


def test_attribute_values_are_kept_verbatim():
    descriptor = _parse(
        migration_map(
            ("com.example.Outer$Inner", "com.example.Outer$Renamed", "class")
        )
    )

    assert descriptor is not None
    assert descriptor.entries[0].old_name == "com.example.Outer$Inner"
    assert descriptor.entries[0].new_name == "com.example.Outer$Renamed"


@pytest.mark.parametrize(
    "content",
    [b"<migrationMap>", b"<migrationMap><entry></migrationMap>", b"not xml"],
)
def test_malformed_xml_raises(content: bytes):
    with pytest.raises(DescriptorError, match="Malformed XML"):
        parse_descriptor(content)


def test_filter_keeps_only_class_entries_in_order():
    entries = [
        RenameEntry(old_name="a.A", new_name="b.A", kind="class"),
        RenameEntry(old_name="a", new_name="b", kind="package"),
        RenameEntry(old_name="a.A.m", new_name="b.A.m", kind="method"),
        RenameEntry(old_name="a.B", new_name="b.B", kind="class"),
        RenameEntry(old_name="a.C", new_name="b.C", kind="Class"),
    ]

    assert [e.old_name for e in filter_class_entries(entries)] == ["a.A", "a.B"]


def test_filter_of_non_class_entries_is_empty():
    entries = [RenameEntry(old_name="a", new_name="b", kind="package")]

    assert filter_class_entries(entries) == []
