"""Score ledger: the typed golf match record and its invariants.

The record is the unit that storage persists and every evaluator reads. All
mutation happens through the helpers in this module or the controller, which
keep ``Hole.isComplete`` consistent with the entered scores.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, List, Literal, Optional, Sequence
import uuid

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..time_utils import coerce_utc, default_match_title, utcnow

GameType = Literal["front", "back", "total"]
PlayFormat = Literal["stroke", "match"]

HOLE_COUNT = 18
GAME_TYPES: tuple[GameType, ...] = ("front", "back", "total")
GAME_SPANS: Dict[str, tuple[int, int]] = {
    "front": (1, 9),
    "back": (10, 18),
    "total": (1, 18),
}
MIN_TEAMS = 2
MAX_TEAMS = 3


class Team(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""


class GameFormat(BaseModel):
    type: GameType
    betAmount: float = Field(default=0.0, ge=0)
    enabled: bool = True


class Press(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_: str = Field(..., alias="from")
    to: str
    type: GameType
    amount: float = Field(default=0.0, ge=0)
    # Reserved for cancellation; presses are always created active.
    active: bool = True
    holeStarted: int = Field(..., ge=1, le=HOLE_COUNT)


class Hole(BaseModel):
    number: int = Field(..., ge=1, le=HOLE_COUNT)
    scores: Dict[str, Optional[int]] = Field(default_factory=dict)
    isComplete: bool = False
    # 1-based position of this hole in the order holes were completed.
    completedOrder: Optional[int] = Field(default=None, ge=1)
    presses: List[Press] = Field(default_factory=list)

    @model_validator(mode="after")
    def _sync_completion(self) -> "Hole":
        self.isComplete = hole_is_complete(self)
        if not self.isComplete:
            self.completedOrder = None
        return self


class Match(BaseModel):
    id: str
    title: str = ""
    teams: List[Team]
    gameFormats: List[GameFormat]
    playFormat: PlayFormat = "stroke"
    enablePresses: bool = True
    holes: List[Hole]
    isComplete: bool = False
    createdAt: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "Match":
        if not MIN_TEAMS <= len(self.teams) <= MAX_TEAMS:
            raise ValueError(
                f"a match requires between {MIN_TEAMS} and {MAX_TEAMS} teams"
            )
        team_ids = [t.id for t in self.teams]
        if len(set(team_ids)) != len(team_ids):
            raise ValueError("team ids must be unique")

        if not self.gameFormats:
            raise ValueError("at least one game format must be enabled")
        if len({f.type for f in self.gameFormats}) != len(self.gameFormats):
            raise ValueError("game formats must not repeat")
        enabled = {f.type for f in self.gameFormats if f.enabled}

        numbers = [h.number for h in self.holes]
        if numbers != list(range(1, HOLE_COUNT + 1)):
            raise ValueError(f"a match must hold holes 1-{HOLE_COUNT} in order")

        known = set(team_ids)
        for hole in self.holes:
            if set(hole.scores) != known:
                raise ValueError(
                    f"hole {hole.number} must hold exactly one score per team"
                )
            for press in hole.presses:
                if press.from_ not in known or press.to not in known:
                    raise ValueError(
                        f"press {press.id} references an unknown team"
                    )
                if press.type not in enabled:
                    raise ValueError(
                        f"press {press.id} uses game format '{press.type}' "
                        "which is not enabled"
                    )
        return self


def hole_is_complete(hole: Hole) -> bool:
    """Return ``True`` when every team on ``hole`` has a stroke count."""

    return bool(hole.scores) and all(s is not None for s in hole.scores.values())


def next_completion_order(match: Match) -> int:
    """Sequence number to stamp on the next hole that becomes complete."""

    orders = [h.completedOrder for h in match.holes if h.completedOrder is not None]
    return max(orders, default=0) + 1


def display_name(team: Team, position: int) -> str:
    """Name shown for ``team``; ``position`` is 1-based."""

    name = (team.name or "").strip()
    return name or f"Team {position}"


def new_match(
    teams: Sequence[Team],
    game_formats: Sequence[GameFormat],
    play_format: PlayFormat = "stroke",
    *,
    enable_presses: bool = True,
    title: str | None = None,
    match_id: str | None = None,
    created_at: datetime | None = None,
    id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
) -> Match:
    """Create a fully formed match with 18 unscored holes."""

    if not MIN_TEAMS <= len(teams) <= MAX_TEAMS:
        raise ValueError(
            f"a match requires between {MIN_TEAMS} and {MAX_TEAMS} teams"
        )

    named = [
        Team(id=team.id, name=display_name(team, position))
        for position, team in enumerate(teams, start=1)
    ]
    if len({t.name for t in named}) != len(named):
        raise ValueError("each team must have a unique name")

    enabled = [
        GameFormat(type=f.type, betAmount=f.betAmount, enabled=True)
        for f in game_formats
        if f.enabled
    ]
    if not enabled:
        raise ValueError("at least one game format must be enabled")

    created_at = coerce_utc(created_at) or utcnow()
    holes = [
        Hole(number=number, scores={t.id: None for t in named})
        for number in range(1, HOLE_COUNT + 1)
    ]
    return Match(
        id=match_id or id_factory(),
        title=(title or "").strip() or default_match_title(created_at),
        teams=named,
        gameFormats=enabled,
        playFormat=play_format,
        enablePresses=enable_presses,
        holes=holes,
        createdAt=created_at,
    )


def get_hole(match: Match, number: int) -> Hole:
    for hole in match.holes:
        if hole.number == number:
            return hole
    raise ValueError(f"hole {number} out of range")


def get_team(match: Match, team_id: str) -> Team:
    for team in match.teams:
        if team.id == team_id:
            return team
    raise ValueError(f"unknown team '{team_id}'")


def team_name(teams: Sequence[Team], team_id: str) -> str:
    for position, team in enumerate(teams, start=1):
        if team.id == team_id:
            return display_name(team, position)
    return team_id


def get_game_format(match: Match, game_type: str) -> GameFormat | None:
    for fmt in match.gameFormats:
        if fmt.type == game_type and fmt.enabled:
            return fmt
    return None


def has_scores(match: Match) -> bool:
    """``True`` once any stroke has been entered anywhere in the match."""

    return any(
        score is not None for hole in match.holes for score in hole.scores.values()
    )


def rename_team(match: Match, team_id: str, name: str) -> Team:
    """Rename a team; only allowed before the first score is entered."""

    if has_scores(match):
        raise ValueError("teams cannot be renamed once scoring has started")
    team = get_team(match, team_id)
    position = match.teams.index(team) + 1
    new_name = display_name(Team(id=team.id, name=name), position)
    others = {t.name for t in match.teams if t.id != team_id}
    if new_name in others:
        raise ValueError("each team must have a unique name")
    team.name = new_name
    return team
