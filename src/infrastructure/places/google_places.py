"""Google Places Nearby Search client.

Only the Nearby Search endpoint is used. Payload fields that the upstream
service may omit (rating, price, photos, opening hours) are optional.
"""

import asyncio
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from core.exceptions import UpstreamUnavailableError
from domain.entities.candidate import Candidate, GeoPoint

logger = structlog.get_logger()

SUCCESS_STATUSES = frozenset({"OK", "ZERO_RESULTS"})


class PlacePhoto(BaseModel):
    photo_reference: str
    height: int | None = None
    width: int | None = None


class OpeningHours(BaseModel):
    open_now: bool | None = None


class PlaceLocation(BaseModel):
    lat: float
    lng: float


class PlaceGeometry(BaseModel):
    location: PlaceLocation


class Place(BaseModel):
    """One Nearby Search result."""

    place_id: str
    name: str
    vicinity: str = ""
    rating: float | None = None
    user_ratings_total: int | None = None
    price_level: int | None = None
    types: list[str] = []
    photos: list[PlacePhoto] | None = None
    opening_hours: OpeningHours | None = None
    geometry: PlaceGeometry

    def to_candidate(self) -> Candidate:
        """Convert to a domain candidate keyed by the place id."""
        return Candidate(
            id=self.place_id,
            name=self.name,
            address=self.vicinity,
            location=GeoPoint(
                latitude=self.geometry.location.lat,
                longitude=self.geometry.location.lng,
            ),
            rating=self.rating,
            user_ratings_total=self.user_ratings_total,
            price_level=self.price_level,
            types=tuple(self.types),
            photos=tuple(p.photo_reference for p in self.photos) if self.photos else None,
            is_open_now=self.opening_hours.open_now if self.opening_hours else None,
        )


class PlacesResponse(BaseModel):
    status: str
    results: list[Place] = []
    next_page_token: str | None = None
    error_message: str | None = None


class GooglePlacesClient:
    """Async client for the Nearby Search endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        nearby_path: str = "/nearbysearch/json",
        timeout: float = 10.0,
        max_pages: int = 3,
        page_token_delay: float = 2.0,
        api_key_configured: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._nearby_path = nearby_path
        self._timeout = timeout
        self._max_pages = max_pages
        self._page_token_delay = page_token_delay
        self._api_key_configured = api_key_configured
        self._transport = transport

    async def nearby_search(
        self,
        origin: GeoPoint,
        radius: float,
        place_type: str,
        price_level: int = 0,
        keyword: str = "",
        limit: int | None = None,
    ) -> list[Candidate]:
        """Search around ``origin``, following result pages.

        Stops early once ``limit`` distinct places have been collected.

        Raises:
            UpstreamUnavailableError: on any transport, HTTP or payload failure
        """
        if not self._api_key_configured:
            raise UpstreamUnavailableError("api key not configured")

        params: dict[str, Any] = {
            "key": self._api_key,
            "location": f"{origin.latitude},{origin.longitude}",
            "radius": str(int(radius)),
            "type": place_type,
        }
        if price_level > 0:
            params["maxprice"] = str(price_level)
        if keyword:
            params["keyword"] = keyword

        places: list[Place] = []
        seen: set[str] = set()
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            page_params = params
            for page in range(self._max_pages):
                if page > 0 and self._page_token_delay > 0:
                    await asyncio.sleep(self._page_token_delay)

                response = await self._fetch_page(client, page_params)
                for place in response.results:
                    # Pages may overlap
                    if place.place_id in seen:
                        continue
                    seen.add(place.place_id)
                    places.append(place)

                if not response.next_page_token:
                    break
                if limit is not None and len(places) >= limit:
                    break
                page_params = {"key": self._api_key, "pagetoken": response.next_page_token}

        logger.debug("places_search_completed", results=len(places))
        return [place.to_candidate() for place in places]

    async def _fetch_page(
        self, client: httpx.AsyncClient, params: dict[str, Any]
    ) -> PlacesResponse:
        try:
            response = await client.get(self._nearby_path, params=params)
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(f"transport error: {type(e).__name__}") from e

        if response.status_code != 200:
            raise UpstreamUnavailableError(f"http status {response.status_code}")

        try:
            payload = PlacesResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise UpstreamUnavailableError("malformed payload") from e

        if payload.status not in SUCCESS_STATUSES:
            raise UpstreamUnavailableError(f"api status {payload.status}")

        return payload
