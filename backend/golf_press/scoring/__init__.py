"""Golf match scoring and press settlement engine."""

from typing import Any, Dict

from . import controller, holes, ledger, match_play, presses, stroke_play
from .ledger import Match


def summary(match: Match) -> Dict[str, Any]:
    """Status of ``match`` under its play format."""

    if match.playFormat == "match":
        return match_play.summary(match.teams, match.holes)
    if match.playFormat == "stroke":
        return stroke_play.summary(match.teams, match.holes)
    raise ValueError(f"unknown play format '{match.playFormat}'")


__all__ = [
    "controller",
    "holes",
    "ledger",
    "match_play",
    "presses",
    "stroke_play",
    "summary",
]
