"""Tests for the CLI."""

from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from vibesearch import __version__
from vibesearch.domains.orchestration import SearchOutcome, SearchState
from vibesearch.domains.ranking import LocationResult

from .main import app

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_enhance_shows_breakdown() -> None:
    result = runner.invoke(app, ["enhance", "cozy spot", "--notes", "trip: sf jun 1-3"])
    assert result.exit_code == 0
    assert "San Francisco, CA" in result.output
    assert "coffee" in result.output


def test_search_prints_best_match() -> None:
    place = LocationResult(place_id="p1", name="Blue Bottle", similarity_score=0.91)
    orchestrator = AsyncMock()
    orchestrator.run.return_value = SearchOutcome(
        sequence_id=1,
        query="cozy coffee",
        contextual_query="cozy warm coffee",
        results=[place],
        state=SearchState.DONE,
    )

    with patch("vibesearch.interfaces.api.deps.build_orchestrator", return_value=orchestrator):
        result = runner.invoke(app, ["search", "cozy coffee"])

    assert result.exit_code == 0
    assert "Blue Bottle" in result.output
    orchestrator.initialize_model.assert_awaited_once()
    orchestrator.place_search.close.assert_awaited_once()


def test_search_reports_errors() -> None:
    from vibesearch.config import ModelLoadError

    orchestrator = AsyncMock()
    orchestrator.initialize_model.side_effect = ModelLoadError("no weights")

    with patch("vibesearch.interfaces.api.deps.build_orchestrator", return_value=orchestrator):
        result = runner.invoke(app, ["search", "cozy coffee"])

    assert result.exit_code == 1
    assert "no weights" in result.output
