"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
import time
from typing import Callable, List

import typer
from PySide6.QtCore import QCoreApplication
from rich import print
from rich.console import Console
from rich.table import Table

from .config import DEFAULT_PAGE_SIZE, DOWN_PRELOAD_COUNT, UP_PRELOAD_COUNT
from .data import PagedLogRefresher, SyntheticCommitSource, VcsLogData
from .errors import CommitGridError, ContractViolationError, ProviderError
from .settings import ViewProperties
from .table import GraphTableModel, window_bounds
from .utils.console_logger import ensure_console_logger

app = typer.Typer(help="Windowed commit history table")

logger = logging.getLogger(__name__)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ContractViolationError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(2) from exc
        except CommitGridError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _wait_until(predicate: Callable[[], bool], timeout: float, what: str) -> None:
    """Pump the Qt event loop until *predicate* holds."""

    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise ProviderError(f"timed out waiting for {what}")
        QCoreApplication.processEvents()
        time.sleep(0.002)


@app.command()
@_handle_errors
def window(
    commits: int = typer.Option(5000, "--commits", min=0, help="Size of the synthetic history"),
    page_size: int = typer.Option(DEFAULT_PAGE_SIZE, "--page-size", min=1),
    row: int = typer.Option(0, "--row", min=0, help="First row to print"),
    rows: int = typer.Option(10, "--rows", min=1, help="Number of rows to print"),
    timeout: float = typer.Option(10.0, "--timeout", help="Seconds to wait for background loads"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Scroll a synthetic history to ROW and print the rows shown there."""

    if verbose:
        ensure_console_logger(logging.getLogger("commitgrid"), "commitgrid-cli", level=logging.DEBUG)

    qt_app = QCoreApplication.instance() or QCoreApplication([])
    log_data = VcsLogData(SyntheticCommitSource(commits))
    refresher = PagedLogRefresher(log_data, page_size=page_size, parent=qt_app)
    model = GraphTableModel(log_data, refresher.fetch_more, ViewProperties(), parent=qt_app)
    refresher.packReady.connect(model.set_visible_pack)
    failures: List[str] = []
    refresher.loadFailed.connect(failures.append)

    refresher.refresh()
    _wait_until(lambda: not refresher.is_loading(), timeout, "the first page")

    # Scrolling down keeps asking for pages until the requested rows exist.
    while model.rowCount() < row + rows and model.can_request_more():
        model.request_to_load_more(lambda: None)
        _wait_until(lambda: not refresher.is_loading(), timeout, "the next page")
        if failures:
            raise ProviderError(failures[-1])

    last = min(row + rows, model.rowCount())
    if row >= last:
        print(f"[yellow]Row {row} is past the end of the history ({model.rowCount()} commits)")
        return

    # The first pass schedules metadata batches, the second reads them.
    for current in range(row, last):
        for column_index in range(model.columnCount()):
            model.value_at(current, model.column(column_index))
    mini_details = log_data.mini_details_getter()
    _wait_until(lambda: mini_details.pending_count() == 0, timeout, "commit metadata")

    table = Table(title=f"Rows {row}..{last - 1} of {model.rowCount()}")
    table.add_column("#", justify="right")
    for column_index in range(model.columnCount()):
        table.add_column(model.column(column_index).name)
    for current in range(row, last):
        cells = [
            model.data(model.index(current, column_index))
            for column_index in range(model.columnCount())
        ]
        table.add_row(str(current), *cells)
    Console().print(table)
    logger.debug("Printed %d rows after %d pack replacements", last - row, model.view_state().replacements())


@app.command()
def plan(
    row: int = typer.Option(..., "--row", min=0),
    rows: int = typer.Option(..., "--rows", min=0, help="Rows currently visible"),
    up: int = typer.Option(UP_PRELOAD_COUNT, "--up", min=0),
    down: int = typer.Option(DOWN_PRELOAD_COUNT, "--down", min=1),
) -> None:
    """Print the rows whose metadata is prefetched when ROW is painted."""

    start, stop = window_bounds(row, rows, up, down)
    print(f"Window [{start}, {stop}) covers {stop - start} rows")


if __name__ == "__main__":  # pragma: no cover
    app()
