"""Advertisement CRUD plus impression/click tracking."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import case, delete, select, update

from ..blob_storage import get_storage
from ..casing import snake_to_camel
from ..constants import AD_POSITIONS, AD_SIZES, AD_STATUSES
from ..db import session_scope
from ..errors import DatabaseError, ValidationError
from ..logging_utils import RateLimitedLogger
from ..models import Advertisement, utcnow_naive
from ..utils import to_db_datetime, to_iso
from ..validators import require_fields, validate_choice, validate_datetime, validate_number

log = logging.getLogger(__name__)
_tracking_log = RateLimitedLogger(log, window_seconds=60)

_COLUMNS = (
    "id", "name", "position", "size", "image_url", "url", "status",
    "start_date", "end_date", "impressions", "clicks", "ctr", "revenue",
    "created_at", "updated_at",
)
_DATE_COLUMNS = {"start_date", "end_date", "created_at", "updated_at"}

# camelCase payload key -> column
_WRITABLE = {
    "name": "name",
    "position": "position",
    "size": "size",
    "imageUrl": "image_url",
    "url": "url",
    "status": "status",
    "startDate": "start_date",
    "endDate": "end_date",
    "impressions": "impressions",
    "clicks": "clicks",
    "revenue": "revenue",
}


def compute_ctr(clicks: int, impressions: int) -> float:
    """Click-through rate in percent; 0 when there are no impressions."""
    if not impressions:
        return 0.0
    return (clicks / impressions) * 100


def _to_dict(ad: Advertisement) -> Dict[str, Any]:
    row = {}
    for col in _COLUMNS:
        value = getattr(ad, col)
        row[col] = to_iso(value) if col in _DATE_COLUMNS else value
    return snake_to_camel(row)


def _text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)
    return value


def _clean_payload(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate the writable camelCase fields present in ``data`` and map them to columns."""
    values: Dict[str, Any] = {}
    for key, column in _WRITABLE.items():
        if key not in data:
            continue
        value = data[key]
        if column == "position":
            value = validate_choice(value, AD_POSITIONS, key)
        elif column == "size":
            value = validate_choice(value, AD_SIZES, key)
        elif column == "status":
            value = validate_choice(value, AD_STATUSES, key)
        elif column in ("start_date", "end_date"):
            value = validate_datetime(value, key)
            if value is None:
                continue
        elif column in ("impressions", "clicks"):
            value = int(validate_number(value, key))
        elif column == "revenue":
            value = validate_number(value, key)
        elif column == "name":
            require_fields(data, (key,))
            value = _text(value, key).strip()
        else:
            # null clears the link or image
            value = "" if value is None else _text(value, key)
        values[column] = value
    return values


def get_all_advertisements() -> List[Dict[str, Any]]:
    with session_scope(action="fetch advertisements") as s:
        ads = s.scalars(select(Advertisement).order_by(Advertisement.created_at.desc())).all()
        return [_to_dict(a) for a in ads]


def get_advertisement_by_id(ad_id: str) -> Optional[Dict[str, Any]]:
    with session_scope(action=f"fetch advertisement {ad_id}") as s:
        ad = s.get(Advertisement, ad_id)
        return _to_dict(ad) if ad is not None else None


def get_active_advertisements_by_position(position: str, now=None) -> List[Dict[str, Any]]:
    current = to_db_datetime(now) if now is not None else utcnow_naive()
    stmt = (
        select(Advertisement)
        .where(
            Advertisement.position == position,
            Advertisement.status == "active",
            Advertisement.start_date <= current,
            Advertisement.end_date >= current,
        )
        .order_by(Advertisement.created_at.desc())
    )
    with session_scope(action="fetch active advertisements") as s:
        return [_to_dict(a) for a in s.scalars(stmt).all()]


def get_advertisements_by_status(status: str) -> List[Dict[str, Any]]:
    stmt = (
        select(Advertisement)
        .where(Advertisement.status == status)
        .order_by(Advertisement.created_at.desc())
    )
    with session_scope(action="fetch advertisements by status") as s:
        return [_to_dict(a) for a in s.scalars(stmt).all()]


def create_ad(data: Mapping[str, Any]) -> Dict[str, Any]:
    require_fields(data, ("name", "position", "size"))
    values = _clean_payload(data)
    now = utcnow_naive()
    values.setdefault("image_url", "")
    values.setdefault("url", "")
    values.setdefault("status", "active")
    values.setdefault("start_date", now)
    values.setdefault("end_date", now)
    values.setdefault("impressions", 0)
    values.setdefault("clicks", 0)
    values.setdefault("revenue", 0.0)
    values["ctr"] = compute_ctr(values["clicks"], values["impressions"])

    with session_scope(admin=True, action="create advertisement") as s:
        ad = Advertisement(created_at=now, updated_at=now, **values)
        s.add(ad)
        s.flush()
        log.info("Created advertisement %s (%s)", ad.id, ad.position)
        return _to_dict(ad)


def update_ad(ad_id: str, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Apply the supplied fields only; returns None when the ad does not exist."""
    values = _clean_payload(data)
    with session_scope(admin=True, action=f"update advertisement {ad_id}") as s:
        ad = s.get(Advertisement, ad_id)
        if ad is None:
            return None
        for column, value in values.items():
            setattr(ad, column, value)
        if "impressions" in values or "clicks" in values:
            ad.ctr = compute_ctr(ad.clicks, ad.impressions)
        ad.updated_at = utcnow_naive()
        s.flush()
        return _to_dict(ad)


def delete_advertisement(ad_id: str, delete_image: bool = False) -> bool:
    image_url = None
    with session_scope(admin=True, action=f"delete advertisement {ad_id}") as s:
        if delete_image:
            image_url = s.scalar(select(Advertisement.image_url).where(Advertisement.id == ad_id))
        result = s.execute(
            delete(Advertisement).where(Advertisement.id == ad_id).execution_options(synchronize_session=False)
        )
        deleted = result.rowcount > 0

    if deleted and image_url:
        if not get_storage().delete_file(image_url):
            log.warning("Advertisement %s deleted but its image could not be removed", ad_id)
    return deleted


def _track(ad_id: str, values: Dict[str, Any], kind: str) -> Optional[Dict[str, Any]]:
    stmt = (
        update(Advertisement)
        .where(Advertisement.id == ad_id)
        .values(updated_at=utcnow_naive(), **values)
        .returning(Advertisement.impressions, Advertisement.clicks, Advertisement.ctr)
        .execution_options(synchronize_session=False)
    )
    try:
        with session_scope(admin=True, action=f"track {kind}") as s:
            row = s.execute(stmt).first()
    except DatabaseError as exc:
        _tracking_log.error((kind, "error"), "Error tracking %s for %s: %s", kind, ad_id, exc)
        return None
    if row is None:
        _tracking_log.warning((kind, "missing"), "Cannot track %s: advertisement %s not found", kind, ad_id)
        return None
    return {"impressions": row.impressions, "clicks": row.clicks, "ctr": float(row.ctr)}


def track_impression(ad_id: str) -> Optional[Dict[str, Any]]:
    """Atomically count one impression and refresh the CTR. Never raises."""
    new_impressions = Advertisement.impressions + 1
    return _track(
        ad_id,
        {
            "impressions": new_impressions,
            "ctr": case(
                (new_impressions > 0, Advertisement.clicks * 100.0 / new_impressions),
                else_=0.0,
            ),
        },
        "impression",
    )


def track_click(ad_id: str) -> Optional[Dict[str, Any]]:
    """Atomically count one click and refresh the CTR. Never raises."""
    return _track(
        ad_id,
        {
            "clicks": Advertisement.clicks + 1,
            "ctr": case(
                (Advertisement.impressions > 0, (Advertisement.clicks + 1) * 100.0 / Advertisement.impressions),
                else_=0.0,
            ),
        },
        "click",
    )


def summarize_performance(ads: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Totals across ``ads`` with an aggregate CTR, as shown on the analytics banner."""
    ads = list(ads)
    impressions = sum(int(a.get("impressions") or 0) for a in ads)
    clicks = sum(int(a.get("clicks") or 0) for a in ads)
    revenue = sum(float(a.get("revenue") or 0) for a in ads)
    return {
        "count": len(ads),
        "active": sum(1 for a in ads if a.get("status") == "active"),
        "impressions": impressions,
        "clicks": clicks,
        "revenue": round(revenue, 2),
        "ctr": round(compute_ctr(clicks, impressions), 2),
    }
