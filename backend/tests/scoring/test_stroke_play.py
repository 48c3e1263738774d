from golf_press.scoring import stroke_play


def _fill_totals(match, enter, totals):
    """Spread each team's total over 18 holes: 17 fours and a remainder."""

    strokes = {team_id: [4] * 17 + [total - 68] for team_id, total in totals.items()}
    enter(match, strokes)


def test_three_teams_with_shared_second_place(match_factory, enter):
    match = match_factory(play_format="stroke", team_count=3)
    _fill_totals(match, enter, {"A": 70, "B": 70, "C": 68})
    result = stroke_play.summary(match.teams, match.holes)

    assert result["status"] == "TeamC leads by 2"
    assert result["winner"] == "C"
    positions = {row["teamId"]: row["position"] for row in result["details"]}
    assert positions == {"C": 1, "A": 2, "B": 2}
    assert [row["teamId"] for row in result["details"]] == ["C", "A", "B"]


def test_positions_skip_after_a_tie(match_factory, enter):
    match = match_factory(play_format="stroke", team_count=3)
    _fill_totals(match, enter, {"A": 72, "B": 70, "C": 70})
    result = stroke_play.summary(match.teams, match.holes)

    assert result["status"] == "Tied at 70"
    assert result["winner"] is None
    assert [(r["teamId"], r["position"]) for r in result["details"]] == [
        ("B", 1),
        ("C", 1),
        ("A", 3),
    ]


def test_unplayed_holes_count_as_zero(match_factory, enter):
    match = match_factory(play_format="stroke")
    enter(match, {"A": [5, 4, None], "B": [4, 4, 6]})
    result = stroke_play.summary(match.teams, match.holes)
    rows = {r["teamId"]: r for r in result["details"]}

    assert rows["A"]["totalScore"] == 9
    assert rows["A"]["completedHoles"] == 2
    assert rows["A"]["average"] == 4.5
    assert rows["B"]["totalScore"] == 14
    assert rows["B"]["completedHoles"] == 3
    assert result["status"] == "TeamA leads by 5"
    assert result["winner"] == "A"


def test_totals_sum_to_entered_strokes(match_factory, enter):
    match = match_factory(play_format="stroke", team_count=3)
    entered = {"A": [3, 4, 5, None], "B": [6, None, 4, 4], "C": [None, None, 7, 2]}
    enter(match, entered)
    result = stroke_play.summary(match.teams, match.holes)

    expected = sum(s for strokes in entered.values() for s in strokes if s is not None)
    assert sum(r["totalScore"] for r in result["details"]) == expected


def test_empty_card_is_tied_at_zero(match_factory):
    match = match_factory(play_format="stroke")
    result = stroke_play.summary(match.teams, match.holes)
    assert result["status"] == "Tied at 0"
    assert all(r["average"] == 0 for r in result["details"])
    assert all(r["position"] == 1 for r in result["details"])


def test_single_team_is_invalid(match_factory):
    match = match_factory(play_format="stroke")
    result = stroke_play.summary(match.teams[:1], match.holes)
    assert result["status"] == "Invalid"
    assert result["winner"] is None
