"""Shape API-Football fixture payloads into the match cards the site renders."""
from __future__ import annotations

from collections import OrderedDict
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .constants import POPULAR_LEAGUE_IDS, STATUS_BUCKETS, THAI_LEAGUE_ID
from .utils import parse_iso, utcnow


def map_status(short: Optional[str]) -> str:
    return STATUS_BUCKETS.get((short or "").upper(), "UPCOMING")


def _team(raw: Dict[str, Any], goals: Any) -> Dict[str, Any]:
    raw = raw or {}
    return {"id": raw.get("id"), "name": raw.get("name"), "logo": raw.get("logo"), "goals": goals}


def format_fixture(raw: Dict[str, Any]) -> Dict[str, Any]:
    fixture = raw.get("fixture") or {}
    status = fixture.get("status") or {}
    teams = raw.get("teams") or {}
    goals = raw.get("goals") or {}
    league = raw.get("league") or {}
    short = status.get("short") or ""
    return {
        "id": fixture.get("id"),
        "status": map_status(short),
        "shortStatus": short,
        "homeTeam": _team(teams.get("home"), goals.get("home")),
        "awayTeam": _team(teams.get("away"), goals.get("away")),
        "startTime": fixture.get("date"),
        "league": {
            "id": league.get("id"),
            "name": league.get("name"),
            "logo": league.get("logo"),
            "country": league.get("country"),
        },
        "elapsed": status.get("elapsed"),
        "venue": (fixture.get("venue") or {}).get("name"),
    }


def format_fixtures(payload: Any) -> List[Dict[str, Any]]:
    """Format the ``response`` list of an API payload (missing/invalid -> [])."""
    items = payload.get("response") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return []
    return [format_fixture(item) for item in items if isinstance(item, dict)]


def filter_popular(matches: Iterable[Dict[str, Any]], league_ids: Iterable[int] = POPULAR_LEAGUE_IDS) -> List[Dict[str, Any]]:
    wanted = set(league_ids)
    return [m for m in matches if m["league"]["id"] in wanted]


def filter_by_league(matches: Iterable[Dict[str, Any]], league_id: Any) -> List[Dict[str, Any]]:
    if league_id in (None, "", "all"):
        return list(matches)
    return [m for m in matches if str(m["league"]["id"]) == str(league_id)]


def filter_by_status(matches: Iterable[Dict[str, Any]], status: Optional[str]) -> List[Dict[str, Any]]:
    if not status or status == "all":
        return list(matches)
    return [m for m in matches if m["status"] == status.upper()]


def filter_upcoming(matches: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Matches not yet started whose kick-off is still ahead of ``now``."""
    now = parse_iso(now) if now is not None else utcnow()
    out = []
    for m in matches:
        if m["status"] != "UPCOMING":
            continue
        try:
            kickoff = parse_iso(m.get("startTime"))
        except ValueError:
            continue
        if kickoff is not None and kickoff > now:
            out.append(m)
    return sorted(out, key=lambda m: parse_iso(m["startTime"]))


def dedupe_by_id(matches: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    seen = set()
    out = []
    for m in matches:
        if m["id"] in seen:
            continue
        seen.add(m["id"])
        out.append(m)
    return out


def group_by_league(matches: Iterable[Dict[str, Any]]) -> "OrderedDict[int, List[Dict[str, Any]]]":
    groups: "OrderedDict[int, List[Dict[str, Any]]]" = OrderedDict()
    for m in matches:
        groups.setdefault(m["league"]["id"], []).append(m)
    return groups


def league_options(matches: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """League filter entries: Thai League first, then by match count descending."""
    options = [
        {
            "id": league_id,
            "name": group[0]["league"]["name"],
            "logo": group[0]["league"]["logo"],
            "count": len(group),
        }
        for league_id, group in group_by_league(matches).items()
    ]
    return sorted(options, key=lambda o: (o["id"] != THAI_LEAGUE_ID, -o["count"]))


def flatten_standings(payload: Any) -> List[Dict[str, Any]]:
    """Flatten ``response[0].league.standings`` (a list of groups) into table rows."""
    items = payload.get("response") if isinstance(payload, dict) else None
    if not items:
        return []
    league = (items[0] or {}).get("league") or {}
    rows = []
    for group in league.get("standings") or []:
        for entry in group or []:
            team = entry.get("team") or {}
            all_stats = entry.get("all") or {}
            goals = all_stats.get("goals") or {}
            rows.append({
                "rank": entry.get("rank"),
                "group": entry.get("group"),
                "team": {"id": team.get("id"), "name": team.get("name"), "logo": team.get("logo")},
                "played": all_stats.get("played"),
                "win": all_stats.get("win"),
                "draw": all_stats.get("draw"),
                "lose": all_stats.get("lose"),
                "goalsFor": goals.get("for"),
                "goalsAgainst": goals.get("against"),
                "goalsDiff": entry.get("goalsDiff"),
                "points": entry.get("points"),
                "form": entry.get("form"),
            })
    return rows


def _percent(value: Any) -> int:
    try:
        return int(str(value).rstrip("%"))
    except (TypeError, ValueError):
        return 0


def summarize_prediction(payload: Any) -> Optional[Dict[str, Any]]:
    items = payload.get("response") if isinstance(payload, dict) else None
    if not items:
        return None
    pred = (items[0] or {}).get("predictions") or {}
    winner = pred.get("winner") or {}
    percent = pred.get("percent") or {}
    return {
        "winner": {"id": winner.get("id"), "name": winner.get("name"), "comment": winner.get("comment")},
        "advice": pred.get("advice"),
        "percent": {k: _percent(percent.get(k)) for k in ("home", "draw", "away")},
        "underOver": pred.get("under_over"),
    }
