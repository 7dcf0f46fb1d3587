"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.session_service import SessionService
from domain.services.vote_service import VoteService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.places.adapter import CandidateSourcingAdapter


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_candidate_source() -> CandidateSourcingAdapter:
    """Get the places-backed candidate source."""
    return CandidateSourcingAdapter.from_settings(settings)


@lru_cache
def get_session_service() -> SessionService:
    """Get Session service instance."""
    return SessionService(
        get_uow_factory(),
        candidate_source=get_candidate_source(),
        poll_interval=settings.session_poll_interval_seconds,
    )


@lru_cache
def get_vote_service() -> VoteService:
    """Get Vote service instance."""
    return VoteService(get_uow_factory())
