"""
Place Search Client - Async HTTP client for the business-search proxy.

Features:
- Async HTTP client with connection reuse
- Retries on transient connection failures
- Tolerant mapping of business records into LocationResult
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from vibesearch.config.errors import CandidateFetchError, SearchTimeoutError
from vibesearch.domains.ranking.models import Geometry, LatLng, LocationResult

logger = logging.getLogger(__name__)

__all__ = ["PlaceSearchClient", "map_business"]

_TRANSIENT_ERRORS = (httpx.ConnectError, httpx.RemoteProtocolError)


def map_business(record: dict[str, Any]) -> LocationResult:
    """
    Map one business-like record into a LocationResult.

    Missing sub-fields become "", 0, or [] instead of failing. Records the
    proxy has already shaped (they carry ``place_id``) are validated as-is.

    Raises:
        CandidateFetchError: A sub-field has the wrong shape
    """
    if "place_id" in record:
        shaped = {k: v for k, v in record.items() if k != "similarity_score"}
        return LocationResult.model_validate(shaped)

    location = _sub_record(record, "location")
    coordinates = _sub_record(record, "coordinates")

    categories = record.get("categories") or []
    if not isinstance(categories, list) or not all(
        isinstance(c, dict)
        and all(c.get(label) is None or isinstance(c[label], str) for label in ("title", "alias"))
        for c in categories
    ):
        raise CandidateFetchError("Place record has malformed categories", {"id": record.get("id")})

    display_address = location.get("display_address") or []
    if not isinstance(display_address, list):
        display_address = [display_address]
    address = location.get("address1") or ", ".join(
        line for line in display_address if isinstance(line, str)
    )

    rating = record.get("rating")

    return LocationResult(
        place_id=str(record.get("id") or ""),
        name=record.get("name") or "",
        description=", ".join(c["title"] for c in categories if c.get("title")),
        formatted_address=address,
        geometry=Geometry(
            location=LatLng(
                lat=coordinates.get("latitude") or 0.0,
                lng=coordinates.get("longitude") or 0.0,
            )
        ),
        rating=0.0 if rating is None else rating,
        types=[c["alias"] for c in categories if c.get("alias")],
    )


def _sub_record(record: dict[str, Any], field: str) -> dict[str, Any]:
    value = record.get(field) or {}
    if not isinstance(value, dict):
        raise CandidateFetchError(
            f"Place record field '{field}' is not an object",
            {"id": record.get("id"), "field": field},
        )
    return value


class PlaceSearchClient:
    """
    Client for the place-search collaborator.

    Example:
        >>> client = PlaceSearchClient("http://localhost:3000")
        >>> places = await client.search("cozy cafe", notes="trip: sf")
        >>> places[0].name
        'Blue Bottle Coffee'
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        path: str = "/api/locations",
        timeout: float = 10.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize place search client.

        Args:
            base_url: Server hosting the place-search route
            path: Route path
            timeout: Request timeout in seconds
            max_retries: Attempts for transient connection failures
            transport: Optional httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.timeout = timeout
        self.max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _get(self, params: dict[str, str]) -> httpx.Response:
        client = await self._get_client()

        retrying = retry(
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
            reraise=True,
        )
        return await retrying(client.get)(self.path, params=params)

    async def search(
        self,
        query: str,
        location: str = "",
        notes: str = "",
    ) -> list[LocationResult]:
        """
        Fetch candidate places.

        Args:
            query: Search text
            location: User location hint
            notes: Surrounding note text

        Returns:
            Places in provider order

        Raises:
            CandidateFetchError: Non-success status, transport failure, or bad payload
            SearchTimeoutError: Request exceeded the timeout
        """
        params = {"query": query, "location": location, "notesContent": notes}

        try:
            response = await self._get(params)
        except httpx.TimeoutException as e:
            raise SearchTimeoutError("place search", self.timeout) from e
        except httpx.HTTPError as e:
            raise CandidateFetchError(f"Place search request failed: {e}") from e

        if not response.is_success:
            raise CandidateFetchError(
                f"Place search returned status {response.status_code}",
                {"status": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise CandidateFetchError("Place search returned invalid JSON") from e

        records = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise CandidateFetchError("Place search payload has no results array")

        try:
            places = [map_business(r) for r in records if isinstance(r, dict)]
        except ValidationError as e:
            raise CandidateFetchError(f"Place search record is malformed: {e}") from e

        logger.info("Place search: query='%s' -> %d candidates", query[:50], len(places))
        return places

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
