"""Catalogue of API-Football endpoints and request-option builders."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

ENDPOINTS = {
    "FIXTURES": "fixtures",
    "STANDINGS": "standings",
    "LEAGUES": "leagues",
    "TEAMS": "teams",
    "PLAYERS": "players",
    "PREDICTIONS": "predictions",
    "ODDS": "odds",
    "STATUS": "status",
    "COUNTRIES": "countries",
    "SEASONS": "leagues/seasons",
}

FIXTURE_ENDPOINTS = {
    "STATISTICS": "fixtures/statistics",
    "EVENTS": "fixtures/events",
    "LINEUPS": "fixtures/lineups",
    "PLAYERS": "fixtures/players",
    "HEAD_TO_HEAD": "fixtures/headtohead",
    "ROUNDS": "fixtures/rounds",
}


@dataclass
class ApiOptions:
    endpoint: str
    params: Dict[str, Any] = field(default_factory=dict)
    cache_duration: Optional[int] = None


def _compact(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset optional params (None, empty string, 0, False)."""
    return {k: v for k, v in params.items() if v}


def fixtures_endpoint(**params: Any) -> ApiOptions:
    return ApiOptions(ENDPOINTS["FIXTURES"], _compact(params))


def standings_endpoint(league: int, season: int) -> ApiOptions:
    return ApiOptions(ENDPOINTS["STANDINGS"], {"league": league, "season": season})


def fixture_statistics_endpoint(fixture_id: int, team: Optional[int] = None) -> ApiOptions:
    return ApiOptions(FIXTURE_ENDPOINTS["STATISTICS"], _compact({"fixture": fixture_id, "team": team}))


def fixture_events_endpoint(
    fixture_id: int,
    team: Optional[int] = None,
    player: Optional[int] = None,
    type: Optional[str] = None,
) -> ApiOptions:
    return ApiOptions(
        FIXTURE_ENDPOINTS["EVENTS"],
        _compact({"fixture": fixture_id, "team": team, "player": player, "type": type}),
    )


def fixture_lineups_endpoint(fixture_id: int, team: Optional[int] = None) -> ApiOptions:
    return ApiOptions(FIXTURE_ENDPOINTS["LINEUPS"], _compact({"fixture": fixture_id, "team": team}))


def fixture_players_endpoint(fixture_id: int, team: Optional[int] = None) -> ApiOptions:
    return ApiOptions(FIXTURE_ENDPOINTS["PLAYERS"], _compact({"fixture": fixture_id, "team": team}))


def head_to_head_endpoint(
    team1: int,
    team2: int,
    date: Optional[str] = None,
    status: Optional[str] = None,
    league: Optional[int] = None,
    season: Optional[int] = None,
) -> ApiOptions:
    params = {"h2h": f"{team1}-{team2}", "date": date, "status": status, "league": league, "season": season}
    return ApiOptions(FIXTURE_ENDPOINTS["HEAD_TO_HEAD"], _compact(params))


def leagues_endpoint(**params: Any) -> ApiOptions:
    current = params.pop("current", None)
    out = _compact(params)
    if current is not None:
        out["current"] = 1 if current else 0
    return ApiOptions(ENDPOINTS["LEAGUES"], out)


def teams_endpoint(**params: Any) -> ApiOptions:
    return ApiOptions(ENDPOINTS["TEAMS"], _compact(params))


def players_endpoint(**params: Any) -> ApiOptions:
    return ApiOptions(ENDPOINTS["PLAYERS"], _compact(params))


def predictions_endpoint(fixture_id: int) -> ApiOptions:
    return ApiOptions(ENDPOINTS["PREDICTIONS"], {"fixture": fixture_id})


def odds_endpoint(**params: Any) -> ApiOptions:
    return ApiOptions(ENDPOINTS["ODDS"], _compact(params))
