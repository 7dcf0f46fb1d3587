"""Pydantic schemas for session and vote API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.candidate import Candidate, GeoPoint
from domain.entities.session import DEFAULT_RADIUS, MAX_PRICE_LEVEL, Session, SessionFilters
from domain.entities.vote import Vote, VoteValue


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class FiltersSchema(BaseModel):
    """Search filters for a new session."""

    radius: float = Field(DEFAULT_RADIUS, gt=0, le=50000)
    price_level: int = Field(0, ge=0, le=MAX_PRICE_LEVEL)
    types: list[str] = Field(default_factory=lambda: ["restaurant"], min_length=1)
    keyword: str = Field("", max_length=100)

    def to_entity(self) -> SessionFilters:
        return SessionFilters(
            radius=self.radius,
            price_level=self.price_level,
            types=tuple(self.types),
            keyword=self.keyword,
        )

    @classmethod
    def from_entity(cls, filters: SessionFilters) -> "FiltersSchema":
        return cls(
            radius=filters.radius,
            price_level=filters.price_level,
            types=list(filters.types),
            keyword=filters.keyword,
        )


class OriginSchema(BaseModel):
    """Search origin."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_entity(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class SessionCreate(BaseModel):
    """Schema for starting a session."""

    filters: FiltersSchema = Field(default_factory=FiltersSchema)
    origin: OriginSchema | None = None


class VoteCreate(BaseModel):
    """Schema for a swipe inside a session."""

    candidate_id: str = Field(..., min_length=1, max_length=255)
    vote: VoteValue


class GroupVoteCreate(VoteCreate):
    """Schema for a standalone group vote."""

    session_id: UUID | None = None


class CandidateResponse(BaseModel):
    """Schema for a restaurant candidate."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    phone_number: str | None = None
    website: str | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    price_level: int | None = None
    types: list[str] = Field(default_factory=list)
    photos: list[str] | None = None
    photo_reference: str | None = None
    opening_hours: list[str] | None = None
    is_open_now: bool | None = None

    @classmethod
    def from_entity(cls, candidate: Candidate) -> "CandidateResponse":
        return cls(
            id=candidate.id,
            name=candidate.name,
            address=candidate.address,
            latitude=candidate.location.latitude,
            longitude=candidate.location.longitude,
            phone_number=candidate.phone_number,
            website=candidate.website,
            rating=candidate.rating,
            user_ratings_total=candidate.user_ratings_total,
            price_level=candidate.price_level,
            types=list(candidate.types),
            photos=list(candidate.photos) if candidate.photos is not None else None,
            photo_reference=candidate.photo_reference,
            opening_hours=(
                list(candidate.opening_hours)
                if candidate.opening_hours is not None
                else None
            ),
            is_open_now=candidate.is_open_now,
        )


class SessionResponse(BaseModel):
    """Schema for Session response."""

    id: UUID
    group_id: UUID
    created_by: str
    created_at: datetime
    is_active: bool
    version: int
    filters: FiltersSchema
    candidates: list[CandidateResponse]
    vote_table: dict[str, dict[str, VoteValue]]

    @classmethod
    def from_entity(cls, session: Session) -> "SessionResponse":
        return cls(
            id=session.id,
            group_id=session.group_id,
            created_by=session.created_by,
            created_at=session.created_at,
            is_active=session.is_active,
            version=session.version,
            filters=FiltersSchema.from_entity(session.filters),
            candidates=[CandidateResponse.from_entity(c) for c in session.candidates],
            vote_table=session.vote_table,
        )


class SessionDetailResponse(BaseModel):
    """Schema for single Session response."""

    data: SessionResponse


class CandidateListResponse(BaseModel):
    """Schema for list of candidates (matches) response."""

    data: list[CandidateResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class VoteResponse(BaseModel):
    """Schema for a standalone vote."""

    id: UUID
    group_id: UUID
    session_id: UUID | None
    member_id: str
    candidate_id: str
    vote: VoteValue
    created_at: datetime

    @classmethod
    def from_entity(cls, vote: Vote) -> "VoteResponse":
        return cls(
            id=vote.id,
            group_id=vote.group_id,
            session_id=vote.session_id,
            member_id=vote.member_id,
            candidate_id=vote.candidate_id,
            vote=vote.value,
            created_at=vote.created_at,
        )


class VoteDetailResponse(BaseModel):
    """Schema for single Vote response."""

    data: VoteResponse
