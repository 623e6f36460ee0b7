"""JSON endpoints behind the public pages (fixtures, live, standings, predictions, match)."""
from __future__ import annotations

import logging
from datetime import date as date_cls

from flask import Blueprint, request

from .. import fixtures as fx
from ..api_client import get_client
from ..app_utils import make_error, make_ok, parse_bool, safe_int
from ..constants import CURRENT_SEASON, ERROR_LOAD_FAILED, ERROR_NO_FIXTURES, THAI_LEAGUE_ID
from ..errors import APIError

bp = Blueprint("pages", __name__, url_prefix="/api")
log = logging.getLogger(__name__)


def _selected_date() -> str:
    raw = (request.args.get("date") or "").strip()
    if not raw:
        return date_cls.today().isoformat()
    return date_cls.fromisoformat(raw).isoformat()


def _upstream_error(exc: APIError):
    log.error("Upstream failure for %s: %s", request.path, exc.message)
    return make_error(exc, ERROR_LOAD_FAILED, 502)


@bp.get("/fixtures")
def fixtures():
    try:
        day = _selected_date()
    except ValueError:
        return make_error("invalid_date", "date must be YYYY-MM-DD", 400)
    league = safe_int(request.args.get("league"))
    season = safe_int(request.args.get("season"), CURRENT_SEASON)

    try:
        if league:
            payload = get_client().get_fixtures_by_date(day, league=league, season=season)
            matches = fx.format_fixtures(payload)
        else:
            matches = fx.format_fixtures(get_client().get_fixtures_by_date(day))
            if not parse_bool(request.args.get("all")):
                matches = fx.filter_popular(matches)
    except APIError as exc:
        return _upstream_error(exc)

    matches = fx.filter_by_status(fx.dedupe_by_id(matches), request.args.get("status"))
    data = {
        "date": day,
        "matches": matches,
        "leagues": fx.league_options(matches),
        "groups": [{"leagueId": k, "matches": v} for k, v in fx.group_by_league(matches).items()],
    }
    return make_ok(data, "success" if matches else ERROR_NO_FIXTURES)


@bp.get("/live")
def live():
    league = request.args.get("league")
    try:
        matches = fx.format_fixtures(get_client().get_live_fixtures())
    except APIError as exc:
        return _upstream_error(exc)
    matches = fx.filter_by_league(matches, league)
    return make_ok({"matches": matches, "leagues": fx.league_options(matches)})


@bp.get("/standings")
def standings():
    league = safe_int(request.args.get("league"), THAI_LEAGUE_ID)
    season = safe_int(request.args.get("season"), CURRENT_SEASON)
    try:
        payload = get_client().get_league_standings(league, season)
    except APIError as exc:
        return _upstream_error(exc)
    return make_ok({"league": league, "season": season, "table": fx.flatten_standings(payload)})


@bp.get("/predictions")
def predictions():
    try:
        day = _selected_date()
    except ValueError:
        return make_error("invalid_date", "date must be YYYY-MM-DD", 400)
    league = request.args.get("league")
    try:
        matches = fx.format_fixtures(get_client().get_fixtures_by_date(day))
    except APIError as exc:
        return _upstream_error(exc)
    matches = fx.filter_by_league(fx.filter_by_status(matches, "UPCOMING"), league)
    if not matches:
        return make_ok({"date": day, "matches": []}, ERROR_NO_FIXTURES)
    return make_ok({"date": day, "matches": matches})


@bp.get("/predictions/<int:fixture_id>")
def prediction_detail(fixture_id: int):
    try:
        summary = fx.summarize_prediction(get_client().get_fixture_predictions(fixture_id))
    except APIError as exc:
        return _upstream_error(exc)
    if summary is None:
        return make_error("not_found", "No prediction for this fixture", 404)
    return make_ok(summary)


@bp.get("/match/<int:fixture_id>")
def match_detail(fixture_id: int):
    client = get_client()
    try:
        matches = fx.format_fixtures(client.get_fixture(fixture_id))
        if not matches:
            return make_error("not_found", ERROR_NO_FIXTURES, 404)
        events = client.get_fixture_events(fixture_id)
        lineups = client.get_fixture_lineups(fixture_id)
        statistics = client.get_fixture_statistics(fixture_id)
    except APIError as exc:
        return _upstream_error(exc)
    return make_ok({
        "match": matches[0],
        "events": (events or {}).get("response", []),
        "lineups": (lineups or {}).get("response", []),
        "statistics": (statistics or {}).get("response", []),
    })
