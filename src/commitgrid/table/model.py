"""Qt table model exposing the visible commit window."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QObject, Qt

from ..config import DOWN_PRELOAD_COUNT, LOAD_MORE_THRESHOLD, UP_PRELOAD_COUNT
from ..data.providers import LogDataProvider, MoreRequester
from ..errors import ProcessCanceledError, RowOutOfRangeError
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.bus import EventBus
from ..models.commit import (
    CommitId,
    DetailsOrPlaceholder,
    EntityId,
    MetadataOrPlaceholder,
    is_placeholder,
)
from ..models.refs import Ref
from ..models.visible_pack import VisiblePack
from ..settings import ViewProperties
from .cell_result import CellResult, FallbackReason
from .columns import ColumnManager, LogColumn
from .more_data import MoreDataCoordinator
from .prefetch import PrefetchWindow, window_around
from .resolver import EntityIdentityResolver
from .roles import Roles, role_names
from .selection import CommitSelection
from .view_state import WindowedViewState

logger = logging.getLogger(__name__)


def _noop() -> None:
    pass


class GraphTableModel(QAbstractTableModel):
    """Expose the commits of the current visible pack to Qt views.

    Cell access never fails because of missing or broken data: a column that
    raises is replaced by its stub value.  Accessing rows near the end of the
    loaded window silently asks for more commits.
    """

    def __init__(
        self,
        log_data: LogDataProvider,
        request_more: MoreRequester,
        properties: Optional[ViewProperties] = None,
        *,
        column_manager: Optional[ColumnManager] = None,
        error_handler: Optional[ErrorHandler] = None,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._log_data = log_data
        self._properties = properties if properties is not None else ViewProperties(parent=self)
        self._events = event_bus or EventBus()
        self._error_handler = error_handler or ErrorHandler(logger, self._events)
        self._all_columns = column_manager or ColumnManager.default()
        self._columns = self._visible_columns()

        self._view_state = WindowedViewState(self._events, self)
        self._resolver = EntityIdentityResolver(self._view_state.current)
        self._more_data = MoreDataCoordinator(self._view_state.current, request_more, self._events)
        self._view_state.bind_coordinator(self._more_data)
        self._view_state.aboutToReplace.connect(self._on_about_to_replace)
        self._view_state.packReplaced.connect(self._on_pack_replaced)

        mini_details = log_data.mini_details_getter()
        data_loaded = getattr(mini_details, "dataLoaded", None)
        if data_loaded is not None:
            data_loaded.connect(self._on_metadata_loaded)
        self._properties.propertyChanged.connect(self._on_property_changed)

    # ------------------------------------------------------------------
    # Qt model implementation
    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return self._resolver.row_count()

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return self._columns.columns_count()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):  # type: ignore[override]
        if orientation != Qt.Horizontal or role != Qt.DisplayRole:
            return None
        if not 0 <= section < self._columns.columns_count():
            return None
        return self._columns.column(section).name

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid():
            return None
        row = index.row()
        if not 0 <= row < self.rowCount() or not 0 <= index.column() < self.columnCount():
            return None
        column = self._columns.column(index.column())

        if role == Qt.DisplayRole:
            return column.display(self.value_at(row, column))
        if role == Roles.RAW_VALUE:
            return self.value_at(row, column)
        if role == Roles.FALLBACK_REASON:
            reason = self.cell(row, column).reason
            return None if reason is None else reason.value
        if role == Roles.COMMIT_ID:
            return self.id_at(row)
        if role == Roles.ROOT:
            return self.root_at_row(row)
        if role == Roles.REFS:
            return [ref.name for ref in self.refs_at_row(row)]
        if role == Roles.BRANCHES:
            return [ref.name for ref in self.branches_at_row(row)]
        if role == Roles.COMMIT_HASH:
            metadata = self.commit_metadata(row)
            return None if is_placeholder(metadata) else metadata.hash
        if role == Roles.IS_LOADING:
            return is_placeholder(self.commit_metadata(row))
        return None

    def roleNames(self) -> Dict[int, bytes]:  # type: ignore[override]
        return role_names(super().roleNames())

    def canFetchMore(self, parent: QModelIndex = QModelIndex()) -> bool:  # type: ignore[override]
        if parent.isValid():
            return False
        return self.can_request_more()

    def fetchMore(self, parent: QModelIndex = QModelIndex()) -> None:  # type: ignore[override]
        if parent.isValid():
            return
        self.request_to_load_more(_noop)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def value_at(self, row: int, column: LogColumn) -> Any:
        """Return the value of *column* at *row*, or its stub on failure."""

        row_count = self._check_row(row)
        if row >= row_count - self._load_more_threshold() and self.can_request_more():
            self.request_to_load_more(_noop)
        return self.cell(row, column).value

    def cell(self, row: int, column: LogColumn) -> CellResult:
        """Compute *column* at *row* and report whether the stub was used."""

        self._check_row(row)
        try:
            value = column.value(self, row)
        except ProcessCanceledError:
            return CellResult.fallback(column.stub_value(self), FallbackReason.CANCELLED)
        except Exception as exc:
            self._error_handler.handle(
                exc,
                ErrorSeverity.ERROR,
                context={"row": row, "column": column.id},
                message="Failed to get information for the log table",
            )
            return CellResult.fallback(column.stub_value(self), FallbackReason.FAILED)
        if value is None:
            return CellResult.fallback(column.stub_value(self), FallbackReason.MISSING)
        return CellResult.ok(value)

    def column(self, index: int) -> LogColumn:
        return self._columns.column(index)

    def column_manager(self) -> ColumnManager:
        return self._columns

    # ------------------------------------------------------------------
    # Loading more
    # ------------------------------------------------------------------
    def request_to_load_more(self, on_loaded) -> bool:
        """Ask the provider for more commits; *on_loaded* runs on the UI thread."""

        return self._more_data.request_more(on_loaded)

    def can_request_more(self) -> bool:
        """Return ``True`` if not everything is loaded and nothing is pending."""

        return self._more_data.can_request_more()

    def more_data_coordinator(self) -> MoreDataCoordinator:
        return self._more_data

    # ------------------------------------------------------------------
    # Visible pack
    # ------------------------------------------------------------------
    def set_visible_pack(self, pack: VisiblePack) -> None:
        self._view_state.replace(pack)

    def visible_pack(self) -> VisiblePack:
        return self._view_state.current()

    def view_state(self) -> WindowedViewState:
        return self._view_state

    def log_data(self) -> LogDataProvider:
        return self._log_data

    def properties(self) -> ViewProperties:
        return self._properties

    def event_bus(self) -> EventBus:
        return self._events

    # ------------------------------------------------------------------
    # Row identity and details
    # ------------------------------------------------------------------
    def id_at(self, row: int) -> EntityId:
        return self._resolver.id_at(row)

    def row_of(self, commit: EntityId) -> Optional[int]:
        return self._resolver.row_of(commit)

    def root_at_row(self, row: int) -> Optional[str]:
        return self._resolver.root_at(row)

    def refs_at_row(self, row: int) -> List[Ref]:
        return self._resolver.refs_at(row)

    def branches_at_row(self, row: int) -> List[Ref]:
        return self._resolver.branches_at(row)

    def full_details(self, row: int) -> DetailsOrPlaceholder:
        return self._log_data.details_getter().cached_data_or_placeholder(self.id_at(row))

    def commit_metadata(self, row: int, load: bool = False) -> MetadataOrPlaceholder:
        commits_to_load: Iterable[EntityId] = self.commits_to_load(row) if load else ()
        return self._log_data.mini_details_getter().commit_data(self.id_at(row), commits_to_load)

    def commit_id(self, row: int) -> Optional[CommitId]:
        metadata = self.commit_metadata(row)
        if is_placeholder(metadata):
            return None
        return CommitId(metadata.hash, metadata.root)

    def commits_to_load(self, row: int) -> PrefetchWindow:
        up = self._properties.get("prefetch.up", UP_PRELOAD_COUNT)
        down = self._properties.get("prefetch.down", DOWN_PRELOAD_COUNT)
        return window_around(self._resolver, row, up, down)

    def create_selection(self, rows: Iterable[int]) -> CommitSelection:
        return CommitSelection(self._log_data, self._view_state.current(), rows)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _check_row(self, row: int) -> int:
        row_count = self._resolver.row_count()
        if not 0 <= row < row_count:
            raise RowOutOfRangeError(row, row_count)
        return row_count

    def _load_more_threshold(self) -> int:
        return self._properties.get("table.load_more_threshold", LOAD_MORE_THRESHOLD)

    def _visible_columns(self) -> ColumnManager:
        known = set(self._all_columns.ids())
        column_ids = [
            column_id for column_id in self._properties.get("table.columns") or () if column_id in known
        ]
        if not column_ids:
            return self._all_columns
        return self._all_columns.select(column_ids)

    def _on_about_to_replace(self, pack: VisiblePack) -> None:
        self.beginResetModel()

    def _on_pack_replaced(self, pack: VisiblePack) -> None:
        self.endResetModel()

    def _on_property_changed(self, key: str, value: object) -> None:
        if key == "table" or key.startswith("table.columns"):
            self.beginResetModel()
            self._columns = self._visible_columns()
            self.endResetModel()
        elif key.startswith("table."):
            self._emit_all_changed()

    def _emit_all_changed(self) -> None:
        rows = self.rowCount()
        columns = self.columnCount()
        if rows and columns:
            self.dataChanged.emit(self.index(0, 0), self.index(rows - 1, columns - 1))

    def _on_metadata_loaded(self, commits: List[EntityId]) -> None:
        rows = [row for row in (self._resolver.row_of(commit) for commit in commits) if row is not None]
        if not rows or not self.columnCount():
            return
        first, last = min(rows), max(rows)
        self.dataChanged.emit(self.index(first, 0), self.index(last, self.columnCount() - 1))
