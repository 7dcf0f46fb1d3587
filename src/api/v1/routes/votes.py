"""Session-less group vote API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentMember
from api.v1.dependencies import get_vote_service
from api.v1.schemas.session import (
    CandidateListResponse,
    CandidateResponse,
    ErrorResponse,
    GroupVoteCreate,
    VoteDetailResponse,
    VoteResponse,
)
from core.rate_limit import limiter
from domain.services.vote_service import VoteService

router = APIRouter(
    prefix="/groups/{group_id}",
    tags=["votes"],
)


@router.post(
    "/votes",
    response_model=VoteDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cast a standalone vote",
    responses={
        403: {"model": ErrorResponse, "description": "Not a group member"},
        404: {"model": ErrorResponse, "description": "Group or session not found"},
    },
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def cast_vote(
    request: Request,
    group_id: UUID,
    body: GroupVoteCreate,
    member: CurrentMember,
    service: VoteService = Depends(get_vote_service),
) -> VoteDetailResponse:
    """Append a vote record without reading or writing the session document."""
    vote = await service.cast_vote(
        group_id=group_id,
        member_id=member.id,
        candidate_id=body.candidate_id,
        value=body.vote,
        session_id=body.session_id,
    )
    return VoteDetailResponse(data=VoteResponse.from_entity(vote))


@router.get(
    "/matches",
    response_model=CandidateListResponse,
    summary="Get matches from standalone votes",
    responses={
        403: {"model": ErrorResponse, "description": "Not a group member"},
        404: {"model": ErrorResponse, "description": "Group or session not found"},
    },
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_group_matches(
    request: Request,
    group_id: UUID,
    member: CurrentMember,
    session_id: UUID | None = None,
    service: VoteService = Depends(get_vote_service),
) -> CandidateListResponse:
    """Resolve the group's standalone votes against a session's candidates."""
    matches = await service.get_group_matches(group_id, member.id, session_id)
    data = [CandidateResponse.from_entity(c) for c in matches]
    return CandidateListResponse(data=data, meta={"total": len(data)})
