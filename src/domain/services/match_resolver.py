"""Match resolution over a session's votes.

A candidate is a match when every member who voted at least once in the
session approved it. Two kinds of input are accepted:

- a ``Session`` snapshot, whose vote table is embedded in the session, and
- a ``RawVoteStream``, a sequence of standalone ``Vote`` records that is
  folded into a vote table first (latest vote per cell wins).

Both go through the same aggregation, so the two voting modes cannot drift
apart.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from domain.entities.candidate import Candidate
from domain.entities.session import Session
from domain.entities.vote import Vote, VoteTable, VoteValue

MIN_VOTERS = 2


@dataclass(frozen=True)
class RawVoteStream:
    """Standalone votes plus the candidate list they are resolved against."""

    candidates: Sequence[Candidate]
    votes: Sequence[Vote]


MatchSource = Session | RawVoteStream


def fold_votes(votes: Iterable[Vote]) -> VoteTable:
    """Collapse a vote stream into a vote table.

    The most recent vote for a (member, candidate) pair wins; votes with
    equal timestamps are resolved by stream order.
    """
    table: VoteTable = {}
    latest = {}
    for vote in votes:
        key = (vote.member_id, vote.candidate_id)
        seen = latest.get(key)
        if seen is not None and vote.created_at < seen:
            continue
        latest[key] = vote.created_at
        table.setdefault(vote.member_id, {})[vote.candidate_id] = vote.value
    return table


def voters(vote_table: VoteTable) -> set[str]:
    """Members with at least one vote cell."""
    return {member for member, cells in vote_table.items() if cells}


def compute_matches(source: MatchSource) -> list[Candidate]:
    """Return the candidates approved by every voter, in candidate order."""
    if isinstance(source, RawVoteStream):
        candidates = source.candidates
        vote_table = fold_votes(source.votes)
    else:
        candidates = source.candidates
        vote_table = source.vote_table

    members = voters(vote_table)
    # A lone voter cannot produce a group match
    if len(members) < MIN_VOTERS:
        return []

    return [
        candidate
        for candidate in candidates
        if all(
            vote_table[member].get(candidate.id) == VoteValue.APPROVE
            for member in members
        )
    ]
