import pytest

from commitgrid.errors import RowOutOfRangeError
from commitgrid.models.refs import Ref, RefType
from commitgrid.table.resolver import EntityIdentityResolver

from conftest import make_pack


def test_id_at_is_deterministic_for_a_pack() -> None:
    pack = make_pack(10, offset=100)
    resolver = EntityIdentityResolver(lambda: pack)
    assert [resolver.id_at(row) for row in range(10)] == list(range(100, 110))
    assert resolver.id_at(4) == resolver.id_at(4)


@pytest.mark.parametrize("row", [-1, 10])
def test_id_at_out_of_range(row: int) -> None:
    pack = make_pack(10)
    resolver = EntityIdentityResolver(lambda: pack)
    with pytest.raises(RowOutOfRangeError):
        resolver.id_at(row)


def test_resolver_observes_pack_replacement() -> None:
    holder = {"pack": make_pack(3)}
    resolver = EntityIdentityResolver(lambda: holder["pack"])
    assert resolver.row_count() == 3
    holder["pack"] = make_pack(5, offset=50)
    assert resolver.row_count() == 5
    assert resolver.id_at(0) == 50


def test_refs_and_branches_at_row() -> None:
    refs = [
        Ref("HEAD", RefType.HEAD, 1),
        Ref("main", RefType.LOCAL_BRANCH, 1),
        Ref("v2.0", RefType.TAG, 1),
    ]
    pack = make_pack(3, refs=refs, roots=("/a", "/b", "/c"))
    resolver = EntityIdentityResolver(lambda: pack)
    assert [ref.name for ref in resolver.refs_at(1)] == ["HEAD", "main", "v2.0"]
    assert [ref.name for ref in resolver.branches_at(1)] == ["main"]
    assert resolver.refs_at(0) == []
    assert resolver.root_at(2) == "/c"
    assert resolver.row_of(2) == 2
    assert resolver.row_of(99) is None
