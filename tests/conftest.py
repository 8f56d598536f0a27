import os
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

pytest.importorskip("PySide6", reason="PySide6 is required", exc_type=ImportError)

from commitgrid.data.providers import LogDataProvider, MiniDetailsGetter  # noqa: E402
from commitgrid.data.details_cache import CommitDetailsCache  # noqa: E402
from commitgrid.models.commit import CommitMetadata, LoadingDetails  # noqa: E402
from commitgrid.models.refs import Ref, RefsModel  # noqa: E402
from commitgrid.models.visible_pack import ListVisibleGraph, VisiblePack  # noqa: E402


class ImmediatePool:
    """Thread pool double running every runnable synchronously."""

    def __init__(self) -> None:
        self.started: List[object] = []
        self.deferred = False
        self.queue: List[object] = []

    def start(self, runnable) -> None:
        self.started.append(runnable)
        if self.deferred:
            self.queue.append(runnable)
        else:
            runnable.run()

    def run_pending(self) -> None:
        queue, self.queue = self.queue, []
        for runnable in queue:
            runnable.run()


class RecordingMiniDetails(MiniDetailsGetter):
    """Metadata getter answering from a dict and recording requested windows."""

    def __init__(self, records: Dict[int, CommitMetadata] | None = None) -> None:
        self.records: Dict[int, CommitMetadata] = dict(records or {})
        self.windows: List[List[int]] = []
        self.error: Exception | None = None

    def commit_data(self, commit: int, commits_to_load: Iterable[int]):
        if self.error is not None:
            raise self.error
        self.windows.append(list(commits_to_load))
        record = self.records.get(commit)
        return record if record is not None else LoadingDetails(commit)


class FakeLogData(LogDataProvider):
    def __init__(self, mini: MiniDetailsGetter | None = None) -> None:
        self.details = CommitDetailsCache(16)
        self.mini = mini or RecordingMiniDetails()

    def details_getter(self):
        return self.details

    def mini_details_getter(self):
        return self.mini


def metadata(commit: int, root: str = "/repo") -> CommitMetadata:
    return CommitMetadata(
        id=commit,
        hash=f"{commit:040x}",
        root=root,
        subject=f"Commit {commit}",
        author="Grace Hopper",
        timestamp=1_700_000_000 - commit * 60,
    )


def make_pack(
    count: int,
    *,
    can_request_more: bool = False,
    roots: Sequence[str] | None = None,
    refs: Iterable[Ref] = (),
    generation: int = 1,
    offset: int = 0,
) -> VisiblePack:
    commits = [offset + row for row in range(count)]
    return VisiblePack(
        ListVisibleGraph(commits),
        can_request_more=can_request_more,
        roots=tuple(roots) if roots is not None else ("/repo",) * count,
        refs=RefsModel(refs),
        generation=generation,
    )


@pytest.fixture()
def immediate_pool() -> ImmediatePool:
    return ImmediatePool()


@pytest.fixture()
def fake_log_data() -> FakeLogData:
    return FakeLogData()
