"""Restaurant candidate domain entities."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Candidate:
    """A restaurant eligible for voting.

    ``id`` is the stable external place identifier; it is what votes refer to.
    """

    id: str
    name: str
    address: str
    location: GeoPoint
    phone_number: str | None = None
    website: str | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    price_level: int | None = None
    types: tuple[str, ...] = field(default_factory=tuple)
    photos: tuple[str, ...] | None = None
    opening_hours: tuple[str, ...] | None = None
    is_open_now: bool | None = None

    @property
    def photo_reference(self) -> str | None:
        """First photo reference, used for card display."""
        return self.photos[0] if self.photos else None
