# backend/golf_press/routers/matches.py
import logging
import uuid
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..exceptions import MatchAlreadyComplete, MatchNotFound, http_problem
from ..rate_limits import limiter, write_rate_limit
from ..schemas import (
    MatchCreate,
    MatchIdOut,
    MatchOut,
    MatchStatusOut,
    MatchSummaryOut,
    PressesIn,
    PressOut,
    PressSettlementOut,
    ScoreIn,
    ScoreOut,
    TeamRename,
)
from .. import scoring
from ..scoring.controller import apply_score
from ..scoring.ledger import GameFormat, Match, Team, new_match, rename_team
from ..scoring.presses import create_presses, press_balances, settle_press, settle_presses
from ..services import store
from ..services.validation import (
    ValidationError,
    validate_game_formats,
    validate_strokes,
    validate_team_names,
)
from ..time_utils import utcnow

logger = logging.getLogger(__name__)

# Resource-only prefix; versioning is added in main.py
router = APIRouter(prefix="/matches", tags=["matches"])


async def _load_match(session: AsyncSession, mid: str) -> Match:
    match = await store.load(session, mid)
    if match is None:
        raise MatchNotFound(mid)
    return match


def _summary_out(match: Match) -> MatchStatusOut:
    return MatchStatusOut(**scoring.summary(match))


def _match_out(match: Match) -> MatchOut:
    settlements = settle_presses(match)
    return MatchOut(
        match=store.to_record(match),
        summary=_summary_out(match),
        presses=[PressOut(**s) for s in settlements],
        balances=press_balances(match, settlements),
    )


# POST /api/v0/matches
@router.post("", response_model=MatchIdOut)
@limiter.limit(write_rate_limit)
async def create_match(
    request: Request,
    body: MatchCreate,
    session: AsyncSession = Depends(get_session),
) -> MatchIdOut:
    try:
        validate_team_names([t.name for t in body.teams])
        validate_game_formats(body.gameFormats)
    except ValidationError as exc:
        raise http_problem(
            status_code=400,
            detail=exc.detail,
            code="match_invalid",
        )

    teams = [Team(id=t.id or uuid.uuid4().hex, name=t.name) for t in body.teams]
    formats = [
        GameFormat(type=f.type, betAmount=f.betAmount, enabled=f.enabled)
        for f in body.gameFormats
    ]
    try:
        match = new_match(
            teams,
            formats,
            body.playFormat,
            enable_presses=body.enablePresses,
            title=body.title,
            match_id=uuid.uuid4().hex,
            created_at=utcnow(),
        )
    except ValueError as exc:
        raise http_problem(
            status_code=400,
            detail=str(exc),
            code="match_invalid",
        )

    await store.save(session, match)
    logger.info(
        "Created %s play match %s with %d teams",
        match.playFormat,
        match.id,
        len(match.teams),
    )
    return MatchIdOut(id=match.id)


# GET /api/v0/matches
@router.get("", response_model=list[MatchSummaryOut])
async def list_matches(
    status: Optional[Literal["active", "completed"]] = Query(None),
    q: Optional[str] = Query(None, max_length=200),
    session: AsyncSession = Depends(get_session),
) -> list[MatchSummaryOut]:
    matches = await store.list_matches(session, status=status, query=q)
    return [
        MatchSummaryOut(
            id=m.id,
            title=m.title,
            teams=[t.name for t in m.teams],
            playFormat=m.playFormat,
            isComplete=m.isComplete,
            createdAt=m.createdAt,
            status=scoring.summary(m)["status"],
        )
        for m in matches
    ]


# DELETE /api/v0/matches
@router.delete("")
@limiter.limit(write_rate_limit)
async def clear_matches(
    request: Request,
    session: AsyncSession = Depends(get_session),
):
    removed = await store.clear(session)
    return {"removed": removed}


# GET /api/v0/matches/{mid}
@router.get("/{mid}", response_model=MatchOut)
async def get_match(mid: str, session: AsyncSession = Depends(get_session)):
    match = await _load_match(session, mid)
    return _match_out(match)


# DELETE /api/v0/matches/{mid}
@router.delete("/{mid}", status_code=204)
@limiter.limit(write_rate_limit)
async def delete_match(
    request: Request,
    mid: str,
    session: AsyncSession = Depends(get_session),
):
    if not await store.delete(session, mid):
        raise MatchNotFound(mid)
    return Response(status_code=204)


# POST /api/v0/matches/{mid}/scores
@router.post("/{mid}/scores", response_model=ScoreOut)
@limiter.limit(write_rate_limit)
async def record_score(
    request: Request,
    mid: str,
    body: ScoreIn,
    session: AsyncSession = Depends(get_session),
) -> ScoreOut:
    match = await _load_match(session, mid)
    if match.isComplete:
        raise MatchAlreadyComplete(mid)

    try:
        strokes = validate_strokes(body.strokes)
    except ValidationError as exc:
        logger.info("Rejected score for match %s: %s", mid, exc.detail)
        raise http_problem(
            status_code=400,
            detail=exc.detail,
            code="score_invalid",
        )

    try:
        update = apply_score(match, body.hole, body.teamId, strokes)
    except ValueError as exc:
        raise http_problem(
            status_code=400,
            detail=str(exc),
            code="score_rejected",
        )

    await store.save(session, match)
    return ScoreOut(
        hole=update.hole.number,
        isComplete=update.hole.isComplete,
        # Press offers are a display policy gated by the match setting.
        offerPresses=update.offer_presses and match.enablePresses,
        summary=_summary_out(match),
    )


# POST /api/v0/matches/{mid}/holes/{hole}/presses
@router.post("/{mid}/holes/{hole}/presses", response_model=list[PressOut])
@limiter.limit(write_rate_limit)
async def add_presses(
    request: Request,
    mid: str,
    hole: int,
    body: PressesIn,
    session: AsyncSession = Depends(get_session),
) -> list[PressOut]:
    match = await _load_match(session, mid)
    if match.isComplete:
        raise MatchAlreadyComplete(mid)
    if not match.enablePresses:
        raise http_problem(
            status_code=409,
            detail="presses are disabled for this match",
            code="presses_disabled",
        )

    declarations = [p.model_dump(by_alias=True) for p in body.presses]
    try:
        created = create_presses(match, hole, declarations)
    except ValueError as exc:
        raise http_problem(
            status_code=400,
            detail=str(exc),
            code="press_invalid",
        )

    await store.save(session, match)
    return [
        PressOut(**settle_press(p, match.teams, match.holes, match.playFormat))
        for p in created
    ]


# GET /api/v0/matches/{mid}/presses
@router.get("/{mid}/presses", response_model=PressSettlementOut)
async def get_presses(mid: str, session: AsyncSession = Depends(get_session)):
    match = await _load_match(session, mid)
    settlements = settle_presses(match)
    return PressSettlementOut(
        presses=[PressOut(**s) for s in settlements],
        balances=press_balances(match, settlements),
    )


# PATCH /api/v0/matches/{mid}/teams/{team_id}
@router.patch("/{mid}/teams/{team_id}", response_model=MatchOut)
@limiter.limit(write_rate_limit)
async def update_team(
    request: Request,
    mid: str,
    team_id: str,
    body: TeamRename,
    session: AsyncSession = Depends(get_session),
):
    match = await _load_match(session, mid)
    try:
        rename_team(match, team_id, body.name)
    except ValueError as exc:
        raise http_problem(
            status_code=409,
            detail=str(exc),
            code="team_rename_rejected",
        )
    await store.save(session, match)
    return _match_out(match)


# POST /api/v0/matches/{mid}/complete
@router.post("/{mid}/complete", response_model=MatchOut)
@limiter.limit(write_rate_limit)
async def complete_match(
    request: Request,
    mid: str,
    session: AsyncSession = Depends(get_session),
):
    match = await _load_match(session, mid)
    if not match.isComplete:
        match.isComplete = True
        await store.save(session, match)
        logger.info("Match %s marked complete", mid)
    return _match_out(match)
