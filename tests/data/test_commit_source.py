import pytest

from commitgrid.data.commit_source import SyntheticCommitSource
from commitgrid.models.refs import RefType


def test_pages_until_exhausted() -> None:
    source = SyntheticCommitSource(25)
    assert len(source.fetch_next(10)) == 10
    assert source.has_more()
    assert len(source.fetch_next(10)) == 10
    last = source.fetch_next(10)
    assert len(last) == 5
    assert not source.has_more()
    assert source.fetch_next(10) == []


def test_history_is_deterministic_and_newest_first() -> None:
    first = SyntheticCommitSource(10).fetch_next(10)
    second = SyntheticCommitSource(10).fetch_next(10)
    assert first == second
    timestamps = [commit.timestamp for commit in first]
    assert timestamps == sorted(timestamps, reverse=True)
    assert first[0].parents == (first[1].hash,)
    assert first[-1].parents == ()


def test_reset_rewinds() -> None:
    source = SyntheticCommitSource(5)
    head = source.fetch_next(2)
    source.reset()
    assert source.fetch_next(2) == head


def test_refs_are_attached() -> None:
    commits = SyntheticCommitSource(120, roots=("/a", "/b"), tag_every=50).fetch_next(120)
    assert {name for name, _ in commits[0].refs} == {"HEAD", "main", "origin/main"}
    assert commits[1].root == "/b"
    assert ("HEAD", RefType.HEAD) in commits[1].refs
    assert ("v1.0", RefType.TAG) in commits[50].refs


def test_invalid_arguments() -> None:
    with pytest.raises(ValueError):
        SyntheticCommitSource(-1)
    with pytest.raises(ValueError):
        SyntheticCommitSource(1, roots=())
