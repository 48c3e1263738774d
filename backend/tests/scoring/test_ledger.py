from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from golf_press.scoring import ledger


def test_new_match_allocates_eighteen_empty_holes(match_factory):
    match = match_factory(team_count=3)
    assert [h.number for h in match.holes] == list(range(1, 19))
    for hole in match.holes:
        assert hole.scores == {"A": None, "B": None, "C": None}
        assert hole.isComplete is False
        assert hole.presses == []
    assert match.isComplete is False


def test_new_match_fills_placeholder_names_and_keeps_enabled_formats():
    match = ledger.new_match(
        [ledger.Team(id="x", name=""), ledger.Team(id="y", name="  Birdies ")],
        [
            ledger.GameFormat(type="front", betAmount=5, enabled=False),
            ledger.GameFormat(type="back", betAmount=2.5),
            ledger.GameFormat(type="total", betAmount=10),
        ],
        "stroke",
    )
    assert [t.name for t in match.teams] == ["Team 1", "Birdies"]
    assert [(f.type, f.betAmount) for f in match.gameFormats] == [
        ("back", 2.5),
        ("total", 10.0),
    ]
    assert match.title.startswith("Match ")
    assert match.id


def test_untitled_match_is_named_after_utc_creation_date():
    local = datetime(2024, 6, 1, 22, 30, tzinfo=timezone(timedelta(hours=-5)))
    match = ledger.new_match(
        [ledger.Team(id="x", name="Aces"), ledger.Team(id="y", name="Bogeys")],
        [ledger.GameFormat(type="total")],
        created_at=local,
    )
    assert match.title == "Match 2024-06-02"
    assert match.createdAt == local
    assert match.createdAt.tzinfo == timezone.utc


@pytest.mark.parametrize(
    "team_count",
    [1, 4],
    ids=["too-few", "too-many"],
)
def test_new_match_rejects_team_counts(team_count):
    teams = [ledger.Team(id=str(i)) for i in range(team_count)]
    with pytest.raises(ValueError, match="between 2 and 3"):
        ledger.new_match(teams, [ledger.GameFormat(type="total")])


def test_new_match_rejects_duplicate_names():
    teams = [ledger.Team(id="a", name="Eagles"), ledger.Team(id="b", name="Eagles")]
    with pytest.raises(ValueError, match="unique name"):
        ledger.new_match(teams, [ledger.GameFormat(type="total")])


def test_new_match_requires_an_enabled_format():
    teams = [ledger.Team(id="a"), ledger.Team(id="b")]
    with pytest.raises(ValueError, match="game format"):
        ledger.new_match(teams, [ledger.GameFormat(type="total", enabled=False)])


def test_record_round_trips_through_json(match_factory, enter):
    match = match_factory(formats=(("front", 5.0), ("back", 7.5)))
    enter(match, {"A": [4, 5], "B": [4, None]})
    ledger.get_hole(match, 1).presses.append(
        ledger.Press(id="p1", from_="A", to="B", type="front", amount=5.0, holeStarted=1)
    )

    payload = match.model_dump(by_alias=True, mode="json")
    assert payload["holes"][0]["presses"][0]["from"] == "A"
    assert payload["holes"][1]["scores"] == {"A": 5, "B": None}

    restored = ledger.Match.model_validate(payload)
    assert restored == match


def test_completion_is_derived_when_loading(match_factory):
    payload = match_factory().model_dump(by_alias=True, mode="json")
    payload["holes"][0]["scores"] = {"A": 4, "B": 5}
    payload["holes"][0]["isComplete"] = False
    payload["holes"][1]["isComplete"] = True

    restored = ledger.Match.model_validate(payload)
    assert restored.holes[0].isComplete is True
    assert restored.holes[1].isComplete is False


def test_record_rejects_scores_for_unknown_teams(match_factory):
    payload = match_factory().model_dump(by_alias=True, mode="json")
    payload["holes"][3]["scores"] = {"A": 4, "Z": 5}
    with pytest.raises(ValidationError, match="one score per team"):
        ledger.Match.model_validate(payload)


def test_record_rejects_presses_on_disabled_formats(match_factory):
    payload = match_factory().model_dump(by_alias=True, mode="json")
    payload["holes"][0]["presses"] = [
        {"id": "p", "from": "A", "to": "B", "type": "front", "amount": 1, "holeStarted": 1}
    ]
    with pytest.raises(ValidationError, match="not enabled"):
        ledger.Match.model_validate(payload)


def test_record_rejects_presses_on_formats_switched_off(match_factory, enter):
    match = match_factory(formats=(("front", 5.0), ("total", 10.0)))
    enter(match, {"A": [4], "B": [5]})
    payload = match.model_dump(by_alias=True, mode="json")
    payload["gameFormats"][0]["enabled"] = False
    payload["holes"][0]["presses"] = [
        {"id": "p", "from": "A", "to": "B", "type": "front", "amount": 5, "holeStarted": 1}
    ]
    with pytest.raises(ValidationError, match="not enabled"):
        ledger.Match.model_validate(payload)


def test_open_holes_carry_no_completion_order(match_factory):
    payload = match_factory().model_dump(by_alias=True, mode="json")
    payload["holes"][4]["completedOrder"] = 3
    restored = ledger.Match.model_validate(payload)
    assert restored.holes[4].completedOrder is None


def test_record_requires_all_eighteen_holes(match_factory):
    payload = match_factory().model_dump(by_alias=True, mode="json")
    payload["holes"] = payload["holes"][:9]
    with pytest.raises(ValidationError, match="holes 1-18"):
        ledger.Match.model_validate(payload)


def test_rename_team_before_scoring(match_factory):
    match = match_factory()
    ledger.rename_team(match, "B", "Bogey Boys")
    assert match.teams[1].name == "Bogey Boys"

    ledger.rename_team(match, "B", "")
    assert match.teams[1].name == "Team 2"


def test_rename_team_rejected_after_scoring(match_factory, enter):
    match = match_factory()
    enter(match, {"A": [4], "B": [None]})
    with pytest.raises(ValueError, match="scoring has started"):
        ledger.rename_team(match, "A", "Late Change")


def test_rename_team_rejects_clashing_name(match_factory):
    match = match_factory()
    with pytest.raises(ValueError, match="unique name"):
        ledger.rename_team(match, "A", "TeamB")


def test_lookups_raise_for_unknown_references(match_factory):
    match = match_factory()
    with pytest.raises(ValueError, match="hole 19"):
        ledger.get_hole(match, 19)
    with pytest.raises(ValueError, match="unknown team"):
        ledger.get_team(match, "Z")
