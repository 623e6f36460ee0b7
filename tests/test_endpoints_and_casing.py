from livescore import endpoints
from livescore.casing import camel_to_snake, snake_to_camel


def test_builders_drop_unset_params():
    opts = endpoints.fixture_events_endpoint(10, team=None, type="Goal")
    assert opts.endpoint == "fixtures/events"
    assert opts.params == {"fixture": 10, "type": "Goal"}
    assert opts.cache_duration is None


def test_head_to_head_joins_team_ids():
    opts = endpoints.head_to_head_endpoint(1, 2, season=2024)
    assert opts.params == {"h2h": "1-2", "season": 2024}


def test_leagues_current_flag_is_numeric():
    assert endpoints.leagues_endpoint(country="Thailand", current=True).params == {
        "country": "Thailand",
        "current": 1,
    }
    assert endpoints.leagues_endpoint(current=False).params == {"current": 0}


def test_catalogue_builders_target_their_endpoints():
    assert endpoints.fixture_players_endpoint(7, team=33).endpoint == "fixtures/players"
    assert endpoints.fixture_players_endpoint(7).params == {"fixture": 7}
    assert endpoints.teams_endpoint(league=39, season=2024, search=None).params == {"league": 39, "season": 2024}
    assert endpoints.players_endpoint(team=33, season=2024, page=2).endpoint == "players"
    odds = endpoints.odds_endpoint(fixture=99, bookmaker=None)
    assert (odds.endpoint, odds.params) == ("odds", {"fixture": 99})


def test_snake_to_camel_is_recursive():
    data = {"image_url": "x", "nested_list": [{"start_date": "d"}], "ctr": 1.5}
    assert snake_to_camel(data) == {"imageUrl": "x", "nestedList": [{"startDate": "d"}], "ctr": 1.5}
    assert snake_to_camel("plain_string") == "plain_string"


def test_advertisement_record_round_trip():
    record = {
        "id": "a1",
        "name": "Banner",
        "position": "in-feed",
        "size": "large",
        "image_url": "http://i/1.png",
        "url": "http://example.com",
        "status": "active",
        "start_date": "2024-01-01T00:00:00Z",
        "end_date": "2024-02-01T00:00:00Z",
        "impressions": 10,
        "clicks": 2,
        "ctr": 20.0,
        "revenue": 0,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    assert camel_to_snake(snake_to_camel(record)) == record
