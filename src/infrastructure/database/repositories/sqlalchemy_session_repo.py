"""SQLAlchemy implementation of Session repository."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentUpdateError, SessionInactiveError
from domain.entities.candidate import Candidate, GeoPoint
from domain.entities.session import Session, SessionFilters
from domain.entities.vote import VoteTable, VoteValue
from infrastructure.database.models import SessionModel, SessionVoteModel


class SQLAlchemySessionRepository:
    """SQLAlchemy implementation of ISessionRepository.

    The session row holds the frozen document (candidates, filters, flags);
    vote cells live in ``session_votes`` so each one can be upserted on its
    own.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Session | None:
        """Get a session by ID."""
        stmt = (
            select(SessionModel)
            .where(SessionModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._to_entity(model, await self._load_votes(model.id))

    async def get_active(self, group_id: UUID) -> Session | None:
        """Get the most recently created active session of a group."""
        stmt = (
            select(SessionModel)
            .where(
                SessionModel.group_id == group_id,
                SessionModel.is_active.is_(True),
            )
            .order_by(SessionModel.created_at.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._to_entity(model, await self._load_votes(model.id))

    async def create(self, session: Session) -> Session:
        """Persist a new session together with any initial votes.

        Raises ConcurrentUpdateError when another active session of the group
        was committed after this transaction deactivated the old ones.
        """
        model = self._to_model(session)
        self._session.add(model)
        for member_id, cells in session.vote_table.items():
            for candidate_id, value in cells.items():
                self._session.add(
                    SessionVoteModel(
                        session_id=session.id,
                        member_id=member_id,
                        candidate_id=candidate_id,
                        value=value.value,
                    )
                )
        try:
            await self._session.flush()
        except IntegrityError as e:
            # uq_group_sessions_one_active
            raise ConcurrentUpdateError(str(session.id), session.version) from e
        await self._session.refresh(model)
        return self._to_entity(model, await self._load_votes(model.id))

    async def update(self, session: Session) -> Session:
        """Overwrite the session document if nobody wrote it since it was read."""
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session.id,
                SessionModel.version == session.version,
            )
            .values(
                is_active=session.is_active,
                version=SessionModel.version + 1,
            )
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentUpdateError(str(session.id), session.version)

        session.version += 1
        return session

    async def upsert_vote(
        self,
        session_id: UUID,
        member_id: str,
        candidate_id: str,
        value: VoteValue,
    ) -> None:
        """Atomically set one vote cell and bump the session version.

        The bump is conditional on the session still being active, so a
        conclude or supersede committed after the caller read the session
        rejects the vote instead of writing a cell.
        """
        bumped = await self._session.execute(
            update(SessionModel)
            .where(SessionModel.id == session_id, SessionModel.is_active.is_(True))
            .values(version=SessionModel.version + 1)
        )
        if bumped.rowcount == 0:
            raise SessionInactiveError(str(session_id))

        insert = pg_insert if self._dialect_name() == "postgresql" else sqlite_insert
        stmt = insert(SessionVoteModel).values(
            session_id=session_id,
            member_id=member_id,
            candidate_id=candidate_id,
            value=value.value,
            updated_at=datetime.utcnow(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["session_id", "member_id", "candidate_id"],
            set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
        )
        await self._session.execute(stmt)

    async def conclude(self, session_id: UUID) -> bool:
        """Clear the active flag regardless of version.

        Returns False when the session was already inactive.
        """
        result = await self._session.execute(
            update(SessionModel)
            .where(SessionModel.id == session_id, SessionModel.is_active.is_(True))
            .values(is_active=False, version=SessionModel.version + 1)
        )
        return result.rowcount > 0

    async def deactivate_for_group(self, group_id: UUID) -> int:
        """Clear the active flag on every active session of a group."""
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.group_id == group_id,
                SessionModel.is_active.is_(True),
            )
            .values(is_active=False, version=SessionModel.version + 1)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    def _dialect_name(self) -> str:
        return self._session.get_bind().dialect.name

    async def _load_votes(self, session_id: UUID) -> list[SessionVoteModel]:
        stmt = (
            select(SessionVoteModel)
            .where(SessionVoteModel.session_id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    def _to_entity(
        self, model: SessionModel, votes: Iterable[SessionVoteModel]
    ) -> Session:
        """Convert ORM model to domain entity."""
        vote_table: VoteTable = {}
        for vote in votes:
            vote_table.setdefault(vote.member_id, {})[vote.candidate_id] = VoteValue(
                vote.value
            )

        return Session(
            id=model.id,
            group_id=model.group_id,
            created_by=model.created_by,
            created_at=model.created_at,
            is_active=model.is_active,
            candidates=[candidate_from_json(c) for c in model.candidates],
            filters=filters_from_json(model.filters),
            vote_table=vote_table,
            version=model.version,
        )

    def _to_model(self, entity: Session) -> SessionModel:
        """Convert domain entity to ORM model."""
        return SessionModel(
            id=entity.id,
            group_id=entity.group_id,
            created_by=entity.created_by,
            created_at=entity.created_at,
            is_active=entity.is_active,
            candidates=[candidate_to_json(c) for c in entity.candidates],
            filters=filters_to_json(entity.filters),
            version=entity.version,
        )


def candidate_to_json(candidate: Candidate) -> dict[str, Any]:
    """Serialize a candidate for the JSON document column."""
    return {
        "id": candidate.id,
        "name": candidate.name,
        "address": candidate.address,
        "phone_number": candidate.phone_number,
        "website": candidate.website,
        "rating": candidate.rating,
        "user_ratings_total": candidate.user_ratings_total,
        "price_level": candidate.price_level,
        "types": list(candidate.types),
        "photos": list(candidate.photos) if candidate.photos is not None else None,
        "opening_hours": (
            list(candidate.opening_hours) if candidate.opening_hours is not None else None
        ),
        "is_open_now": candidate.is_open_now,
        "latitude": candidate.location.latitude,
        "longitude": candidate.location.longitude,
    }


def candidate_from_json(data: dict[str, Any]) -> Candidate:
    """Rebuild a candidate from its JSON document form."""
    photos = data.get("photos")
    opening_hours = data.get("opening_hours")
    return Candidate(
        id=data["id"],
        name=data["name"],
        address=data["address"],
        location=GeoPoint(latitude=data["latitude"], longitude=data["longitude"]),
        phone_number=data.get("phone_number"),
        website=data.get("website"),
        rating=data.get("rating"),
        user_ratings_total=data.get("user_ratings_total"),
        price_level=data.get("price_level"),
        types=tuple(data.get("types") or ()),
        photos=tuple(photos) if photos is not None else None,
        opening_hours=tuple(opening_hours) if opening_hours is not None else None,
        is_open_now=data.get("is_open_now"),
    )


def filters_to_json(filters: SessionFilters) -> dict[str, Any]:
    return {
        "radius": filters.radius,
        "price_level": filters.price_level,
        "types": list(filters.types),
        "keyword": filters.keyword,
    }


def filters_from_json(data: dict[str, Any]) -> SessionFilters:
    return SessionFilters(
        radius=data["radius"],
        price_level=data["price_level"],
        types=tuple(data["types"]),
        keyword=data.get("keyword", ""),
    )
