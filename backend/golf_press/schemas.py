from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_BET_AMOUNT
from .scoring.ledger import GameType, HOLE_COUNT, MAX_TEAMS, MIN_TEAMS, PlayFormat


def _trim_name(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError("name must be a string")
    return value.strip()


class TeamIn(BaseModel):
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name: str = Field(default="", max_length=100)

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> str:
        return _trim_name(value)


class GameFormatIn(BaseModel):
    type: GameType
    betAmount: float = Field(default=DEFAULT_BET_AMOUNT, ge=0)
    enabled: bool = True

    model_config = ConfigDict(extra="forbid")


def _default_formats() -> List[GameFormatIn]:
    return [GameFormatIn(type="total")]


class MatchCreate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    teams: List[TeamIn] = Field(..., min_length=MIN_TEAMS, max_length=MAX_TEAMS)
    gameFormats: List[GameFormatIn] = Field(default_factory=_default_formats)
    playFormat: PlayFormat = "stroke"
    enablePresses: bool = True

    model_config = ConfigDict(extra="forbid")


class MatchIdOut(BaseModel):
    """Schema returned after creating a match."""

    id: str


class ScoreIn(BaseModel):
    hole: int = Field(..., ge=1, le=HOLE_COUNT)
    teamId: str = Field(..., min_length=1)
    # Validated by ``validate_strokes``; ``None`` clears the entry.
    strokes: Any = Field(...)

    model_config = ConfigDict(extra="forbid")


class PressDeclaration(BaseModel):
    from_: str = Field(..., alias="from", min_length=1)
    to: str = Field(..., min_length=1)
    type: GameType

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PressesIn(BaseModel):
    presses: List[PressDeclaration] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class TeamRename(BaseModel):
    name: str = Field(default="", max_length=100)

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> str:
        return _trim_name(value)


class MatchStatusOut(BaseModel):
    """Evaluator result: display status plus structured detail."""

    status: str
    winner: Optional[str] = None
    details: Any = None


class PressOut(BaseModel):
    """Running settlement of a single press."""

    id: str
    from_: str = Field(..., alias="from")
    to: str
    type: GameType
    amount: float
    holeStarted: int
    status: str
    winner: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class PressSettlementOut(BaseModel):
    presses: List[PressOut] = Field(default_factory=list)
    balances: Dict[str, float] = Field(default_factory=dict)


class ScoreOut(BaseModel):
    hole: int
    isComplete: bool
    offerPresses: bool
    summary: MatchStatusOut


class MatchOut(BaseModel):
    """Detailed match information returned by the API."""

    match: Dict[str, Any]
    summary: MatchStatusOut
    presses: List[PressOut] = Field(default_factory=list)
    balances: Dict[str, float] = Field(default_factory=dict)


class MatchSummaryOut(BaseModel):
    """Lightweight representation of a match used in listings."""

    id: str
    title: str
    teams: List[str]
    playFormat: PlayFormat
    isComplete: bool
    createdAt: Optional[datetime] = None
    status: str
