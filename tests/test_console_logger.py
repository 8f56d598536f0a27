import io
import logging

from commitgrid.utils.console_logger import ensure_console_logger


def test_handler_is_installed_once() -> None:
    logger = logging.getLogger("commitgrid.tests.console")
    stream = io.StringIO()
    try:
        first = ensure_console_logger(logger, "tests-console", stream=stream)
        second = ensure_console_logger(logger, "tests-console", level=logging.DEBUG)
        assert first is second
        assert [h.get_name() for h in logger.handlers].count("tests-console") == 1
        assert logger.level == logging.DEBUG

        logger.debug("pack replaced at %d rows", 12)
        assert "pack replaced at 12 rows" in stream.getvalue()
        assert "commitgrid.tests.console" in stream.getvalue()
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
