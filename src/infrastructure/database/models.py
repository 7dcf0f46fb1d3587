"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class GroupModel(Base):
    """Group of members (owned by the membership service, read here)."""

    __tablename__ = "groups"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    members: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    invite_code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    current_session_id: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))

    # Relationships
    sessions: Mapped[list["SessionModel"]] = relationship(
        "SessionModel",
        back_populates="group",
        cascade="all, delete-orphan",
    )


class SessionModel(Base):
    """Voting session document. Candidates and filters are frozen JSON."""

    __tablename__ = "group_sessions"
    __table_args__ = (
        Index("ix_group_sessions_group_active", "group_id", "is_active", "created_at"),
        # At most one active session per group
        Index(
            "uq_group_sessions_one_active",
            "group_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    group_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    candidates: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False)
    filters: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Relationships
    group: Mapped["GroupModel"] = relationship("GroupModel", back_populates="sessions")
    votes: Mapped[list["SessionVoteModel"]] = relationship(
        "SessionVoteModel",
        back_populates="session",
        cascade="all, delete-orphan",
    )


class SessionVoteModel(Base):
    """One vote cell (composite PK on session_id + member_id + candidate_id)."""

    __tablename__ = "session_votes"

    session_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("group_sessions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    member_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    candidate_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(
        String(10),
        CheckConstraint(
            "value IN ('approve', 'reject')",
            name="ck_session_votes_value",
        ),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    session: Mapped["SessionModel"] = relationship("SessionModel", back_populates="votes")


class VoteModel(Base):
    """Standalone append-only vote."""

    __tablename__ = "votes"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    group_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    session_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("group_sessions.id", ondelete="SET NULL"),
        index=True,
    )
    member_id: Mapped[str] = mapped_column(String(128), nullable=False)
    candidate_id: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str] = mapped_column(
        String(10),
        CheckConstraint(
            "value IN ('approve', 'reject')",
            name="ck_votes_value",
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
