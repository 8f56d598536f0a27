import logging
from unittest.mock import Mock

import pytest

from commitgrid.errors import (
    CommitGridError,
    ContractViolationError,
    ProcessCanceledError,
    RowOutOfRangeError,
    SettingsError,
    SettingsValidationError,
    WindowConsumedError,
)
from commitgrid.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from commitgrid.events.bus import EventBus


def test_handle_error_logs_and_publishes():
    logger = Mock(spec=logging.Logger)
    event_bus = Mock(spec=EventBus)
    handler = ErrorHandler(logger, event_bus)

    error = ValueError("test error")
    handler.handle(error, ErrorSeverity.ERROR, context={"row": 3}, message="Cell failed")

    logger.error.assert_called_once()
    args, kwargs = logger.error.call_args
    assert args[1:] == ("Cell failed", "ValueError", error)
    assert kwargs["exc_info"] is error
    assert kwargs["extra"] == {"context": {"row": 3}}

    event = event_bus.publish.call_args[0][0]
    assert isinstance(event, ErrorOccurredEvent)
    assert event.error is error
    assert event.severity == ErrorSeverity.ERROR
    assert event.context == {"row": 3}


def test_warning_has_no_traceback():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger, Mock(spec=EventBus))
    handler.handle(RuntimeError("slow"), ErrorSeverity.WARNING)
    assert logger.warning.call_args[1]["exc_info"] is None


def test_ui_callback():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger, Mock(spec=EventBus))
    callback = Mock()
    handler.register_ui_callback(callback)

    handler.handle(RuntimeError("ui error"), ErrorSeverity.CRITICAL)
    handler.handle(Exception("info"), ErrorSeverity.INFO)

    callback.assert_called_once_with("ui error", ErrorSeverity.CRITICAL)


@pytest.mark.parametrize(
    "error_type,base",
    [
        (RowOutOfRangeError, ContractViolationError),
        (RowOutOfRangeError, IndexError),
        (WindowConsumedError, ContractViolationError),
        (ProcessCanceledError, CommitGridError),
        (SettingsValidationError, SettingsError),
    ],
)
def test_hierarchy(error_type, base):
    assert issubclass(error_type, base)
    assert issubclass(error_type, CommitGridError)


def test_row_out_of_range_message():
    error = RowOutOfRangeError(12, 10)
    assert str(error) == "row 12 is outside [0, 10)"
    assert (error.row, error.row_count) == (12, 10)
