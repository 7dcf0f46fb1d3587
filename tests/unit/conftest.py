"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.candidate import Candidate, GeoPoint
from domain.entities.group import Group
from domain.entities.session import Session


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.groups = AsyncMock()
        self.sessions = AsyncMock()
        self.votes = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def make_candidate(id: str, name: str | None = None, **kwargs: Any) -> Candidate:
    """Build a candidate with sensible defaults."""
    return Candidate(
        id=id,
        name=name or id.title(),
        address="1 Test St",
        location=GeoPoint(latitude=37.77, longitude=-122.41),
        **kwargs,
    )


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def group_id() -> UUID:
    """A random group ID."""
    return uuid4()


@pytest.fixture
def group(group_id: UUID) -> Group:
    """A group owned by alice with bob as a member."""
    return Group(id=group_id, name="Lunch", created_by="alice", members=["alice", "bob"])


@pytest.fixture
def candidates() -> list[Candidate]:
    """Three candidates in a fixed order."""
    return [make_candidate("a"), make_candidate("b"), make_candidate("c")]


@pytest.fixture
def session(group_id: UUID, candidates: list[Candidate]) -> Session:
    """An active session over the three candidates."""
    return Session(group_id=group_id, created_by="alice", candidates=list(candidates))
