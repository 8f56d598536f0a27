from unittest.mock import Mock

import pytest

from commitgrid.models.commit import LoadingDetails
from commitgrid.models.refs import Ref, RefType
from commitgrid.table.columns import (
    AuthorColumn,
    ColumnManager,
    CommitCell,
    CommitColumn,
    DateColumn,
    HashColumn,
    RefsColumn,
    RootColumn,
)

from conftest import metadata


def _model(properties=None, record=None, refs=(), root="/work/repo"):
    model = Mock()
    values = {"table.show_root_names": True, "table.compact_refs": False}
    values.update(properties or {})
    model.properties.return_value.get.side_effect = lambda key, default=None: values.get(key, default)
    model.commit_metadata.return_value = record if record is not None else metadata(0)
    model.refs_at_row.return_value = list(refs)
    model.branches_at_row.return_value = [ref for ref in refs if ref.type.is_branch]
    model.root_at_row.return_value = root
    return model


def test_root_column_shows_the_directory_name() -> None:
    assert RootColumn().value(_model(), 0) == "repo"
    assert RootColumn().value(_model({"table.show_root_names": False}), 0) == "/work/repo"
    assert RootColumn().value(_model(root=None), 0) is None


def test_commit_column_prefixes_refs() -> None:
    refs = [Ref("main", RefType.LOCAL_BRANCH, 0), Ref("v1.0", RefType.TAG, 0)]
    model = _model(refs=refs)
    cell = CommitColumn().value(model, 0)
    assert cell == CommitCell("Commit 0", ("main", "v1.0"), False)
    assert str(cell) == "[main, v1.0] Commit 0"
    model.commit_metadata.assert_called_with(0, load=True)

    compact = CommitColumn().value(_model({"table.compact_refs": True}, refs=refs), 0)
    assert compact.refs == ("main",)


def test_commit_column_marks_placeholders() -> None:
    cell = CommitColumn().value(_model(record=LoadingDetails(4)), 4)
    assert cell.is_loading
    assert str(cell) == "Loading…"


def test_metadata_columns() -> None:
    model = _model()
    assert AuthorColumn().value(model, 0) == "Grace Hopper"
    assert DateColumn().value(model, 0) == "2023-11-14 22:13"
    assert HashColumn().value(model, 0) == "00000000"
    assert DateColumn().value(_model(record=LoadingDetails(1)), 1) == ""


def test_refs_column_display() -> None:
    refs = [Ref("HEAD", RefType.HEAD, 0), Ref("main", RefType.LOCAL_BRANCH, 0)]
    column = RefsColumn()
    value = column.value(_model(refs=refs), 0)
    assert value == ("HEAD", "main")
    assert column.display(value) == "HEAD, main"
    assert column.display(column.stub_value(Mock())) == ""


def test_column_manager_lookup() -> None:
    manager = ColumnManager.default()
    assert manager.columns_count() == 6
    assert manager.ids() == ["root", "commit", "author", "date", "hash", "refs"]
    author = manager.column_by_id("author")
    assert manager.model_index(author) == 2
    assert manager.column(2) is author
    with pytest.raises(KeyError):
        manager.column_by_id("nope")


def test_column_manager_select_keeps_order() -> None:
    selected = ColumnManager.default().select(["hash", "root"])
    assert selected.ids() == ["hash", "root"]


def test_duplicate_ids_are_rejected() -> None:
    with pytest.raises(ValueError):
        ColumnManager([RootColumn(), RootColumn()])
