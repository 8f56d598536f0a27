"""Custom exception hierarchy for commitgrid."""

from __future__ import annotations


class CommitGridError(Exception):
    """Base class for all custom errors raised by commitgrid."""


# --- Contract violations (caller bugs, allowed to fail loudly) ---

class ContractViolationError(CommitGridError):
    """Base class for misuse of the row-access API by its caller."""


class RowOutOfRangeError(ContractViolationError, IndexError):
    """Raised when a row index falls outside ``[0, row_count)``."""

    def __init__(self, row: int, row_count: int) -> None:
        super().__init__(f"row {row} is outside [0, {row_count})")
        self.row = row
        self.row_count = row_count


class WindowConsumedError(ContractViolationError):
    """Raised when a single-pass prefetch window is iterated a second time."""


# --- Run-time data conditions ---

class ProcessCanceledError(CommitGridError):
    """Cooperative cancellation of an in-flight computation.

    This is not a failure: the enclosing operation was superseded (the user
    scrolled away, or a newer visible pack replaced the one being read).
    """


class DataUnavailableError(CommitGridError):
    """Raised when a commit is not materialized in the backing store yet."""


class ProviderError(CommitGridError):
    """Raised when the upstream commit source fails to produce a page."""


# --- Settings ---

class SettingsError(CommitGridError):
    """Base class for view properties related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the properties file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when view properties fail schema validation."""
