from livescore import fixtures as fx


def _raw(fid, league_id, short="NS", date="2099-05-01T12:00:00+00:00", league_name=None):
    return {
        "fixture": {"id": fid, "date": date, "status": {"short": short, "elapsed": None}, "venue": {"name": "Stadium"}},
        "league": {"id": league_id, "name": league_name or f"League {league_id}", "logo": "l.png", "country": "X"},
        "teams": {"home": {"id": 1, "name": "Home", "logo": "h.png"}, "away": {"id": 2, "name": "Away", "logo": "a.png"}},
        "goals": {"home": None, "away": None},
    }


def test_map_status_buckets():
    assert fx.map_status("1H") == "LIVE"
    assert fx.map_status("FT") == "FINISHED"
    assert fx.map_status("NS") == "UPCOMING"
    assert fx.map_status("???") == "UPCOMING"


def test_format_fixture_shape():
    match = fx.format_fixture(_raw(7, 39, short="2H"))
    assert match["id"] == 7
    assert match["status"] == "LIVE"
    assert match["shortStatus"] == "2H"
    assert match["homeTeam"] == {"id": 1, "name": "Home", "logo": "h.png", "goals": None}
    assert match["league"]["country"] == "X"
    assert match["venue"] == "Stadium"


def test_format_fixtures_tolerates_bad_payload():
    assert fx.format_fixtures(None) == []
    assert fx.format_fixtures({"response": "nope"}) == []


def test_league_options_put_thai_league_first():
    matches = [fx.format_fixture(_raw(i, 39)) for i in range(3)]
    matches += [fx.format_fixture(_raw(10 + i, 140)) for i in range(2)]
    matches.append(fx.format_fixture(_raw(20, 290, league_name="Thai League 1")))

    options = fx.league_options(matches)
    assert [o["id"] for o in options] == [290, 39, 140]
    assert options[1]["count"] == 3


def test_filters_and_dedupe():
    matches = [fx.format_fixture(_raw(1, 39)), fx.format_fixture(_raw(1, 39)), fx.format_fixture(_raw(2, 999, short="FT"))]
    assert [m["id"] for m in fx.dedupe_by_id(matches)] == [1, 2]
    assert [m["id"] for m in fx.filter_popular(matches)] == [1, 1]
    assert [m["id"] for m in fx.filter_by_league(matches, "999")] == [2]
    assert len(fx.filter_by_league(matches, "all")) == 3
    assert [m["id"] for m in fx.filter_by_status(matches, "finished")] == [2]


def test_filter_upcoming_sorts_by_kickoff():
    matches = [
        fx.format_fixture(_raw(1, 39, date="2024-05-02T12:00:00Z")),
        fx.format_fixture(_raw(2, 39, date="2024-05-01T12:00:00Z")),
        fx.format_fixture(_raw(3, 39, date="2024-04-01T12:00:00Z")),
        fx.format_fixture(_raw(4, 39, short="FT", date="2024-05-03T12:00:00Z")),
    ]
    upcoming = fx.filter_upcoming(matches, now="2024-04-15T00:00:00Z")
    assert [m["id"] for m in upcoming] == [2, 1]


def test_flatten_standings():
    payload = {"response": [{"league": {"standings": [[
        {"rank": 1, "team": {"id": 5, "name": "Buriram"}, "points": 70, "goalsDiff": 40,
         "all": {"played": 30, "win": 22, "draw": 4, "lose": 4, "goals": {"for": 60, "against": 20}}},
    ]]}}]}
    rows = fx.flatten_standings(payload)
    assert rows[0]["team"]["name"] == "Buriram"
    assert rows[0]["goalsFor"] == 60
    assert fx.flatten_standings({"response": []}) == []


def test_summarize_prediction():
    payload = {"response": [{"predictions": {
        "winner": {"id": 1, "name": "Home", "comment": "Win or draw"},
        "advice": "Double chance : Home or draw",
        "percent": {"home": "45%", "draw": "45%", "away": "10%"},
    }}]}
    summary = fx.summarize_prediction(payload)
    assert summary["percent"] == {"home": 45, "draw": 45, "away": 10}
    assert summary["winner"]["name"] == "Home"
    assert fx.summarize_prediction({"response": []}) is None
