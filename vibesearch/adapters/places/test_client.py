"""
Tests for the place search client.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from vibesearch.config.errors import CandidateFetchError, SearchTimeoutError
from vibesearch.domains.orchestration import SearchOrchestrator

from .client import PlaceSearchClient, map_business

BUSINESS = {
    "id": "blue-bottle-sf",
    "name": "Blue Bottle Coffee",
    "rating": 4.5,
    "coordinates": {"latitude": 37.78, "longitude": -122.41},
    "location": {"address1": "66 Mint St", "display_address": ["66 Mint St", "San Francisco, CA"]},
    "categories": [
        {"title": "Coffee & Tea", "alias": "coffee"},
        {"title": "Cafes", "alias": "cafes"},
    ],
}


def _client(handler: Any, **kwargs: Any) -> PlaceSearchClient:
    return PlaceSearchClient(
        "http://places.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


# --- Mapping Tests ---


def test_map_business_full_record() -> None:
    place = map_business(BUSINESS)
    assert place.place_id == "blue-bottle-sf"
    assert place.description == "Coffee & Tea, Cafes"
    assert place.formatted_address == "66 Mint St"
    assert place.geometry.location.lat == 37.78
    assert place.types == ["coffee", "cafes"]
    assert place.rating == 4.5
    assert place.similarity_score is None


def test_map_business_missing_fields() -> None:
    """Missing sub-fields fall back to empty values."""
    place = map_business({"id": "x", "name": "Nameless"})
    assert place.description == ""
    assert place.formatted_address == ""
    assert place.geometry.location.lat == 0.0
    assert place.geometry.location.lng == 0.0
    assert place.types == []
    assert place.rating == 0.0


def test_map_business_display_address_fallback() -> None:
    place = map_business({"id": "x", "name": "n", "location": {"display_address": ["1 Main", "Town"]}})
    assert place.formatted_address == "1 Main, Town"


def test_map_business_already_shaped() -> None:
    """Records shaped by the proxy pass through, minus any score."""
    place = map_business({
        "place_id": "p1",
        "name": "Shaped",
        "types": ["bars"],
        "similarity_score": 0.9,
    })
    assert place.place_id == "p1"
    assert place.types == ["bars"]
    assert place.similarity_score is None


# --- Client Tests ---


async def test_search_sends_parameters() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        assert request.url.path == "/api/locations"
        return httpx.Response(200, json={"results": [BUSINESS]})

    client = _client(handler)
    places = await client.search("cozy cafe", location="SF", notes="trip: sf")
    await client.close()

    assert seen == {"query": "cozy cafe", "location": "SF", "notesContent": "trip: sf"}
    assert [p.name for p in places] == ["Blue Bottle Coffee"]


async def test_search_non_success_status() -> None:
    client = _client(lambda request: httpx.Response(500, json={"error": "boom"}))
    with pytest.raises(CandidateFetchError) as exc_info:
        await client.search("cozy")
    assert exc_info.value.details == {"status": 500}


async def test_search_invalid_json() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"<html>"))
    with pytest.raises(CandidateFetchError):
        await client.search("cozy")


async def test_search_missing_results_array() -> None:
    client = _client(lambda request: httpx.Response(200, json={"businesses": []}))
    with pytest.raises(CandidateFetchError):
        await client.search("cozy")


@pytest.mark.parametrize(
    "overrides",
    [
        {"rating": 12},
        {"location": "San Francisco"},
        {"coordinates": [37.7, -122.4]},
        {"categories": [{"title": 5}]},
        {"categories": [{"title": "Cafes", "alias": ["cafes"]}]},
        {"categories": ["cafes"]},
        {"categories": "cafes"},
        {"name": {"first": "Blue"}},
    ],
)
async def test_search_malformed_record(overrides: dict[str, Any]) -> None:
    bad = dict(BUSINESS, **overrides)
    client = _client(lambda request: httpx.Response(200, json={"results": [bad]}))
    with pytest.raises(CandidateFetchError):
        await client.search("cozy")


async def test_malformed_record_leaves_orchestrator_empty() -> None:
    """A bad payload ends the search with no results instead of an exception."""
    bad = dict(BUSINESS, location="San Francisco")
    client = _client(lambda request: httpx.Response(200, json={"results": [bad]}))
    oracle = AsyncMock()
    oracle.embed.return_value = [0.6, 0.8, 0.0]

    outcome = await SearchOrchestrator(oracle, client).run("cozy")

    assert outcome.results == []
    assert outcome.best_match is None


async def test_search_retries_connection_errors() -> None:
    attempts = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={"results": []})

    client = _client(handler, max_retries=3)
    assert await client.search("cozy") == []
    assert attempts == 3


async def test_search_gives_up_after_retries() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler, max_retries=2)
    with pytest.raises(CandidateFetchError):
        await client.search("cozy")


async def test_search_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = _client(handler, timeout=1.5)
    with pytest.raises(SearchTimeoutError) as exc_info:
        await client.search("cozy")
    assert exc_info.value.details["operation"] == "place search"
