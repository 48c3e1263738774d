"""Key-value persistence of match records.

Every write replaces the whole record (last writer wins); callers load, apply
one mutation and save within the same session.
"""

from __future__ import annotations

import logging
from typing import List, Literal, Optional

from sqlalchemy import delete as sa_delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import GolfMatch
from ..scoring.ledger import Match
from ..time_utils import coerce_utc

logger = logging.getLogger(__name__)

MatchStatusFilter = Literal["active", "completed"]


def to_record(match: Match) -> dict:
    return match.model_dump(by_alias=True, mode="json")


def from_record(row: GolfMatch) -> Match:
    match = Match.model_validate(row.record)
    if match.createdAt is None:
        match.createdAt = coerce_utc(row.created_at)
    return match


async def load(session: AsyncSession, match_id: str) -> Optional[Match]:
    row = await session.get(GolfMatch, match_id)
    if row is None:
        return None
    return from_record(row)


async def save(session: AsyncSession, match: Match) -> Match:
    row = await session.get(GolfMatch, match.id)
    if row is None:
        row = GolfMatch(id=match.id)
        if match.createdAt is not None:
            # Naive UTC, matching the column; keeps sub-second listing order.
            row.created_at = coerce_utc(match.createdAt).replace(tzinfo=None)
        session.add(row)
    row.title = match.title
    row.record = to_record(match)
    row.is_complete = match.isComplete
    await session.commit()
    return match


async def delete(session: AsyncSession, match_id: str) -> bool:
    row = await session.get(GolfMatch, match_id)
    if row is None:
        return False
    await session.delete(row)
    await session.commit()
    logger.info("Deleted match %s", match_id)
    return True


async def clear(session: AsyncSession) -> int:
    result = await session.execute(sa_delete(GolfMatch))
    await session.commit()
    removed = result.rowcount or 0
    logger.info("Cleared %d match record(s)", removed)
    return removed


def _matches_query(match: Match, query: str) -> bool:
    needle = query.lower()
    if needle in (match.title or "").lower():
        return True
    return any(needle in (team.name or "").lower() for team in match.teams)


async def list_matches(
    session: AsyncSession,
    *,
    status: Optional[MatchStatusFilter] = None,
    query: Optional[str] = None,
) -> List[Match]:
    """Return stored matches, newest first."""

    stmt = select(GolfMatch).order_by(GolfMatch.created_at.desc(), GolfMatch.id)
    if status == "active":
        stmt = stmt.where(GolfMatch.is_complete.is_(False))
    elif status == "completed":
        stmt = stmt.where(GolfMatch.is_complete.is_(True))

    rows = (await session.execute(stmt)).scalars().all()
    matches = [from_record(row) for row in rows]
    query = (query or "").strip()
    if query:
        matches = [m for m in matches if _matches_query(m, query)]
    return matches
