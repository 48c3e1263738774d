import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Settings read when golf_press.main is imported.
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("DISABLE_RATE_LIMITS", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from golf_press.scoring import ledger  # noqa: E402


def build_match(
    play_format="match",
    team_count=2,
    formats=(("total", 10.0),),
    enable_presses=True,
):
    """Two or three teams with ids ``A``/``B``/``C`` named ``TeamA`` etc."""

    teams = [
        ledger.Team(id=team_id, name=f"Team{team_id}")
        for team_id in "ABC"[:team_count]
    ]
    game_formats = [
        ledger.GameFormat(type=game_type, betAmount=amount)
        for game_type, amount in formats
    ]
    return ledger.new_match(
        teams,
        game_formats,
        play_format,
        enable_presses=enable_presses,
        title="Saturday Skins",
        match_id="m1",
    )


def enter_scores(match, strokes_by_team, start=1):
    """Fill consecutive holes from ``start`` with per-team stroke lists."""

    counts = {len(v) for v in strokes_by_team.values()}
    assert len(counts) == 1
    for offset in range(counts.pop()):
        hole = ledger.get_hole(match, start + offset)
        for team_id, strokes in strokes_by_team.items():
            hole.scores[team_id] = strokes[offset]
        if ledger.hole_is_complete(hole) and not hole.isComplete:
            hole.completedOrder = ledger.next_completion_order(match)
        hole.isComplete = ledger.hole_is_complete(hole)
    return match


@pytest.fixture()
def match_factory():
    return build_match


@pytest.fixture()
def enter():
    return enter_scores
