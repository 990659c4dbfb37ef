"""Unit tests for domain entities."""

import pytest

from gridbase.domain.entities import (
    Column,
    ColumnPatch,
    ColumnType,
    SelectOption,
    SortDirection,
    SortSpec,
    Table,
)


def test_table_requires_id():
    with pytest.raises(ValueError):
        Table(id="", title="x", created_by="u1")


def test_column_options_skip_malformed_entries():
    column = Column(
        id="c1",
        table_id="t1",
        name="Status",
        type=ColumnType.SELECT,
        config={"options": [{"id": "a", "label": "A", "color": "#fff"}, "junk", {"label": "no id"}]},
    )
    assert column.option_ids() == ["a"]


def test_column_with_options_returns_copy():
    column = Column(id="c1", table_id="t1", name="Status", type=ColumnType.SELECT)
    updated = column.with_options([SelectOption(id="a", label="A", color="#fff")])

    assert column.config == {}
    assert updated.config == {"options": [{"id": "a", "label": "A", "color": "#fff"}]}


def test_column_patch_applies_only_given_fields():
    column = Column(id="c1", table_id="t1", name="Old", type=ColumnType.TEXT, position=2)
    patched = ColumnPatch(id="c1", name="New").apply(column)

    assert patched.name == "New"
    assert patched.type == ColumnType.TEXT
    assert patched.position == 2
    assert column.name == "Old"


def test_column_patch_is_empty():
    assert ColumnPatch(id="c1").is_empty()
    assert not ColumnPatch(id="c1", position=0).is_empty()


def test_sort_spec_toggle():
    spec = SortSpec(column_id="c1")
    assert spec.toggled().direction == SortDirection.DESC
    assert spec.toggled().toggled() == spec
