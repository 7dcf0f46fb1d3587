"""Voting session API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentMember
from api.v1.dependencies import get_session_service, get_vote_service
from api.v1.schemas.session import (
    CandidateListResponse,
    CandidateResponse,
    ErrorResponse,
    SessionCreate,
    SessionDetailResponse,
    SessionResponse,
    VoteCreate,
)
from core.exceptions import NoActiveSessionError
from core.rate_limit import limiter
from domain.services.session_service import SessionService
from domain.services.vote_service import VoteService

group_sessions_router = APIRouter(
    prefix="/groups/{group_id}/sessions",
    tags=["sessions"],
)

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
)


@group_sessions_router.post(
    "",
    response_model=SessionDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a voting session",
    responses={
        201: {"description": "Session created; any previous session is superseded"},
        403: {"model": ErrorResponse, "description": "Not a group member"},
        404: {"model": ErrorResponse, "description": "Group not found"},
        422: {"model": ErrorResponse, "description": "No restaurants match the filters"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_session(
    request: Request,
    group_id: UUID,
    body: SessionCreate,
    member: CurrentMember,
    service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """Fetch candidates for the filters and open a new session for the group."""
    session = await service.create_session(
        group_id=group_id,
        member_id=member.id,
        filters=body.filters.to_entity(),
        origin=body.origin.to_entity() if body.origin else None,
    )
    return SessionDetailResponse(data=SessionResponse.from_entity(session))


@group_sessions_router.get(
    "/active",
    response_model=SessionDetailResponse,
    summary="Get the active session",
    responses={
        404: {"model": ErrorResponse, "description": "Group not found or no active session"},
    },
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_active_session(
    request: Request,
    group_id: UUID,
    member: CurrentMember,
    service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """Get the group's current voting session."""
    session = await service.load_active_session(group_id)
    if not session:
        raise NoActiveSessionError(str(group_id))
    return SessionDetailResponse(data=SessionResponse.from_entity(session))


@router.get(
    "/{session_id}",
    response_model=SessionDetailResponse,
    summary="Get a session",
    responses={404: {"model": ErrorResponse, "description": "Session not found"}},
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_session(
    request: Request,
    session_id: UUID,
    member: CurrentMember,
    service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """Get a session by ID, including concluded ones."""
    session = await service.get_session(session_id)
    return SessionDetailResponse(data=SessionResponse.from_entity(session))


@router.post(
    "/{session_id}/votes",
    response_model=SessionDetailResponse,
    summary="Record a vote",
    responses={
        400: {"model": ErrorResponse, "description": "Candidate not in session"},
        403: {"model": ErrorResponse, "description": "Not a group member"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Session no longer active"},
    },
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def record_vote(
    request: Request,
    session_id: UUID,
    body: VoteCreate,
    member: CurrentMember,
    service: VoteService = Depends(get_vote_service),
) -> SessionDetailResponse:
    """Approve or reject one candidate. Repeating a vote is harmless."""
    session = await service.record_vote(
        session_id=session_id,
        member_id=member.id,
        candidate_id=body.candidate_id,
        value=body.vote,
    )
    return SessionDetailResponse(data=SessionResponse.from_entity(session))


@router.get(
    "/{session_id}/matches",
    response_model=CandidateListResponse,
    summary="Get matches",
    responses={404: {"model": ErrorResponse, "description": "Session not found"}},
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_matches(
    request: Request,
    session_id: UUID,
    member: CurrentMember,
    service: SessionService = Depends(get_session_service),
) -> CandidateListResponse:
    """Candidates every voter in the session approved, in session order."""
    matches = await service.get_matches(session_id)
    data = [CandidateResponse.from_entity(c) for c in matches]
    return CandidateListResponse(data=data, meta={"total": len(data)})


@router.post(
    "/{session_id}/conclude",
    response_model=SessionDetailResponse,
    summary="Conclude a session",
    responses={
        403: {"model": ErrorResponse, "description": "Not a group member"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def conclude_session(
    request: Request,
    session_id: UUID,
    member: CurrentMember,
    service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """Stop accepting votes. The votes remain readable."""
    session = await service.conclude_session(session_id, member.id)
    return SessionDetailResponse(data=SessionResponse.from_entity(session))
