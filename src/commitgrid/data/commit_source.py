"""Paginated sources of commits, newest first."""

from __future__ import annotations

import hashlib
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..models.refs import RefType


@dataclass(frozen=True, slots=True)
class SourceCommit:
    """A commit as produced by a source, before it is assigned a storage id."""

    hash: str
    root: str
    subject: str
    author: str
    timestamp: int
    parents: Tuple[str, ...] = ()
    full_message: str = ""
    changes: Tuple[str, ...] = ()
    refs: Tuple[Tuple[str, RefType], ...] = ()


class CommitSource(ABC):
    @abstractmethod
    def fetch_next(self, limit: int) -> List[SourceCommit]:
        ...

    @abstractmethod
    def has_more(self) -> bool:
        ...

    @abstractmethod
    def reset(self) -> None:
        ...


_AUTHORS: Tuple[str, ...] = (
    "Ada Lovelace",
    "Grace Hopper",
    "Alan Turing",
    "Barbara Liskov",
    "Edsger Dijkstra",
    "Margaret Hamilton",
)
_VERBS: Tuple[str, ...] = ("Fix", "Add", "Refactor", "Document", "Speed up", "Remove")
_AREAS: Tuple[str, ...] = (
    "table model",
    "graph layout",
    "details cache",
    "refs index",
    "settings",
    "history loader",
)


class SyntheticCommitSource(CommitSource):
    """Deterministic linear history, handy for demos and tests.

    Commit ``n`` (``0`` is the newest) belongs to ``roots[n % len(roots)]``.
    The newest commit of every root carries ``HEAD``, a local ``main`` and
    ``origin/main``; every ``tag_every``-th commit is tagged and every
    ``branch_every``-th commit carries a feature branch.
    """

    BASE_TIMESTAMP = 1_700_000_000

    def __init__(
        self,
        total: int,
        *,
        roots: Sequence[str] = ("/repo",),
        tag_every: int = 50,
        branch_every: int = 120,
    ) -> None:
        if total < 0:
            raise ValueError("total must not be negative")
        if not roots:
            raise ValueError("at least one root is required")
        self._total = total
        self._roots = tuple(roots)
        self._tag_every = tag_every
        self._branch_every = branch_every
        self._cursor = 0
        # Pages are pulled from worker threads.
        self._lock = threading.Lock()

    @property
    def total(self) -> int:
        return self._total

    def fetch_next(self, limit: int) -> List[SourceCommit]:
        if limit <= 0:
            return []
        with self._lock:
            start = self._cursor
            stop = min(start + limit, self._total)
            self._cursor = stop
        return [self._make_commit(n) for n in range(start, stop)]

    def has_more(self) -> bool:
        with self._lock:
            return self._cursor < self._total

    def reset(self) -> None:
        with self._lock:
            self._cursor = 0

    # ------------------------------------------------------------------
    # Generation helpers
    # ------------------------------------------------------------------
    def _hash(self, n: int) -> str:
        root = self._roots[n % len(self._roots)]
        return hashlib.sha1(f"{root}:{n}".encode("utf-8")).hexdigest()

    def _make_commit(self, n: int) -> SourceCommit:
        root = self._roots[n % len(self._roots)]
        parents: Tuple[str, ...] = ()
        parent = n + len(self._roots)
        if parent < self._total:
            parents = (self._hash(parent),)
        number = self._total - n
        verb = _VERBS[n % len(_VERBS)]
        area = _AREAS[(n // len(_VERBS)) % len(_AREAS)]
        subject = f"{verb} {area} (#{number})"
        return SourceCommit(
            hash=self._hash(n),
            root=root,
            subject=subject,
            author=_AUTHORS[n % len(_AUTHORS)],
            timestamp=self.BASE_TIMESTAMP - n * 3600,
            parents=parents,
            full_message=f"{subject}\n\nChange number {number} in {root}.",
            changes=(f"src/{area.replace(' ', '_')}.py",),
            refs=self._refs_for(n, number),
        )

    def _refs_for(self, n: int, number: int) -> Tuple[Tuple[str, RefType], ...]:
        refs: List[Tuple[str, RefType]] = []
        if n < len(self._roots):
            refs.append(("HEAD", RefType.HEAD))
            refs.append(("main", RefType.LOCAL_BRANCH))
            refs.append(("origin/main", RefType.REMOTE_BRANCH))
        if self._tag_every and n % self._tag_every == 0 and n:
            refs.append((f"v{number // self._tag_every}.0", RefType.TAG))
        if self._branch_every and n % self._branch_every == 0 and n:
            refs.append((f"feature/{number}", RefType.LOCAL_BRANCH))
        return tuple(refs)


__all__ = ["CommitSource", "SourceCommit", "SyntheticCommitSource"]
