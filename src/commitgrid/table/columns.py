"""Columns of the commit table and the registry that orders them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath
from typing import TYPE_CHECKING, ClassVar, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from ..config import SHORT_HASH_LENGTH
from ..models.commit import is_placeholder

if TYPE_CHECKING:  # pragma: no cover - import only for type checking
    from .model import GraphTableModel

T = TypeVar("T")


class LogColumn(ABC, Generic[T]):
    """A typed accessor that knows how to pull its value for a row."""

    id: ClassVar[str]
    name: ClassVar[str]

    @abstractmethod
    def value(self, model: "GraphTableModel", row: int) -> Optional[T]:
        ...

    @abstractmethod
    def stub_value(self, model: "GraphTableModel") -> T:
        """Value painted while the real one is unavailable."""

    def display(self, value: T) -> str:
        return "" if value is None else str(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(frozen=True, slots=True)
class CommitCell:
    subject: str
    refs: Tuple[str, ...] = ()
    is_loading: bool = False

    def __str__(self) -> str:
        if not self.refs:
            return self.subject
        return f"[{', '.join(self.refs)}] {self.subject}"


class RootColumn(LogColumn[str]):
    id = "root"
    name = "Root"

    def value(self, model: "GraphTableModel", row: int) -> Optional[str]:
        root = model.root_at_row(row)
        if root is None:
            return None
        if model.properties().get("table.show_root_names", True):
            return PurePath(root).name or root
        return root

    def stub_value(self, model: "GraphTableModel") -> str:
        return ""


class CommitColumn(LogColumn[CommitCell]):
    id = "commit"
    name = "Subject"

    def value(self, model: "GraphTableModel", row: int) -> Optional[CommitCell]:
        metadata = model.commit_metadata(row, load=True)
        if model.properties().get("table.compact_refs", False):
            refs = model.branches_at_row(row)
        else:
            refs = model.refs_at_row(row)
        return CommitCell(
            metadata.subject,
            tuple(ref.name for ref in refs),
            is_placeholder(metadata),
        )

    def stub_value(self, model: "GraphTableModel") -> CommitCell:
        return CommitCell("")


class AuthorColumn(LogColumn[str]):
    id = "author"
    name = "Author"

    def value(self, model: "GraphTableModel", row: int) -> Optional[str]:
        return model.commit_metadata(row, load=True).author

    def stub_value(self, model: "GraphTableModel") -> str:
        return ""


class DateColumn(LogColumn[str]):
    id = "date"
    name = "Date"
    FORMAT = "%Y-%m-%d %H:%M"

    def value(self, model: "GraphTableModel", row: int) -> Optional[str]:
        metadata = model.commit_metadata(row, load=True)
        if is_placeholder(metadata):
            return ""
        stamp = datetime.fromtimestamp(metadata.timestamp, tz=timezone.utc)
        return stamp.strftime(self.FORMAT)

    def stub_value(self, model: "GraphTableModel") -> str:
        return ""


class HashColumn(LogColumn[str]):
    id = "hash"
    name = "Hash"

    def value(self, model: "GraphTableModel", row: int) -> Optional[str]:
        return model.commit_metadata(row, load=True).hash[:SHORT_HASH_LENGTH]

    def stub_value(self, model: "GraphTableModel") -> str:
        return ""


class RefsColumn(LogColumn[Tuple[str, ...]]):
    id = "refs"
    name = "References"

    def value(self, model: "GraphTableModel", row: int) -> Optional[Tuple[str, ...]]:
        return tuple(ref.name for ref in model.refs_at_row(row))

    def stub_value(self, model: "GraphTableModel") -> Tuple[str, ...]:
        return ()

    def display(self, value: Tuple[str, ...]) -> str:
        return ", ".join(value or ())


class ColumnManager:
    """Ordered registry of the columns a model can show."""

    def __init__(self, columns: Sequence[LogColumn]) -> None:
        self._columns: List[LogColumn] = list(columns)
        self._by_id: Dict[str, LogColumn] = {}
        for column in self._columns:
            if column.id in self._by_id:
                raise ValueError(f"duplicate column id {column.id!r}")
            self._by_id[column.id] = column

    @classmethod
    def default(cls) -> "ColumnManager":
        return cls(
            [
                RootColumn(),
                CommitColumn(),
                AuthorColumn(),
                DateColumn(),
                HashColumn(),
                RefsColumn(),
            ]
        )

    def columns_count(self) -> int:
        return len(self._columns)

    def column(self, index: int) -> LogColumn:
        return self._columns[index]

    def column_by_id(self, column_id: str) -> LogColumn:
        try:
            return self._by_id[column_id]
        except KeyError:
            raise KeyError(f"unknown column {column_id!r}") from None

    def model_index(self, column: LogColumn) -> int:
        return self._columns.index(column)

    def ids(self) -> List[str]:
        return [column.id for column in self._columns]

    def select(self, column_ids: Sequence[str]) -> "ColumnManager":
        """Return a manager showing only *column_ids*, in that order."""

        return ColumnManager([self.column_by_id(column_id) for column_id in column_ids])
