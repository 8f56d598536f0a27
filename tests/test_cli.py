import pytest

pytest.importorskip("typer", reason="typer is required for CLI tests", exc_type=ImportError)

from typer.testing import CliRunner

from commitgrid.cli import app

runner = CliRunner()


def test_plan_prints_the_prefetch_window() -> None:
    result = runner.invoke(app, ["plan", "--row", "5", "--rows", "100"])
    assert result.exit_code == 0
    assert "Window [0, 45) covers 45 rows" in result.output


def test_window_prints_rows_past_the_first_page(qapp) -> None:
    result = runner.invoke(
        app,
        ["window", "--commits", "300", "--page-size", "100", "--row", "150", "--rows", "3"],
    )
    assert result.exit_code == 0, result.output
    assert "Rows 150..152" in result.output
    assert "Loading" not in result.output


def test_window_past_the_end(qapp) -> None:
    result = runner.invoke(app, ["window", "--commits", "10", "--row", "50"])
    assert result.exit_code == 0
    assert "past the end" in result.output
