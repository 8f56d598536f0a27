"""References (branches, tags, HEAD) attached to commits."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Iterable, List, Optional, Tuple


class RefType(Enum):
    HEAD = "head"
    LOCAL_BRANCH = "local_branch"
    REMOTE_BRANCH = "remote_branch"
    TAG = "tag"

    @property
    def is_branch(self) -> bool:
        return self in (RefType.LOCAL_BRANCH, RefType.REMOTE_BRANCH)


# Display order used when several refs point at the same commit.
_TYPE_ORDER = {
    RefType.HEAD: 0,
    RefType.LOCAL_BRANCH: 1,
    RefType.REMOTE_BRANCH: 2,
    RefType.TAG: 3,
}


@dataclass(frozen=True, slots=True)
class Ref:
    name: str
    type: RefType
    commit: int
    root: str = ""


class RefsModel:
    """Immutable index of refs grouped by the commit they point at."""

    EMPTY: ClassVar["RefsModel"]

    def __init__(self, refs: Iterable[Ref] = ()) -> None:
        grouped: Dict[int, List[Ref]] = defaultdict(list)
        for ref in refs:
            grouped[ref.commit].append(ref)
        self._by_commit: Dict[int, Tuple[Ref, ...]] = {
            commit: tuple(sorted(items, key=lambda r: (_TYPE_ORDER[r.type], r.name)))
            for commit, items in grouped.items()
        }
        self._count = sum(len(items) for items in self._by_commit.values())

    def refs_to_commit(self, commit: int) -> List[Ref]:
        """Return the refs pointing at *commit*, HEAD and branches first."""

        return list(self._by_commit.get(commit, ()))

    def branches(self) -> List[Ref]:
        return [ref for items in self._by_commit.values() for ref in items if ref.type.is_branch]

    def find(self, name: str, root: Optional[str] = None) -> Optional[Ref]:
        for items in self._by_commit.values():
            for ref in items:
                if ref.name == name and (root is None or ref.root == root):
                    return ref
        return None

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"RefsModel({self._count} refs on {len(self._by_commit)} commits)"


RefsModel.EMPTY = RefsModel()
