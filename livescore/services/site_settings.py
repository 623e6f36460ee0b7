"""Site-wide settings rows keyed by setting_type (the logo is a singleton)."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select

from ..constants import DEFAULT_LOGO, LOGO_SETTING_TYPE
from ..db import session_scope
from ..models import SiteSetting, utcnow_naive
from ..validators import validate_number

log = logging.getLogger(__name__)


def get_site_setting(setting_type: str) -> Optional[Dict[str, Any]]:
    with session_scope(action=f"fetch {setting_type} settings") as s:
        row = s.scalar(select(SiteSetting).where(SiteSetting.setting_type == setting_type))
        return dict(row.setting_value or {}) if row is not None else None


def update_site_setting(setting_type: str, value: Dict[str, Any]) -> Dict[str, Any]:
    """Update the existing row for ``setting_type`` or insert one."""
    with session_scope(admin=True, action=f"save {setting_type} settings") as s:
        row = s.scalar(select(SiteSetting).where(SiteSetting.setting_type == setting_type))
        if row is None:
            row = SiteSetting(setting_type=setting_type, setting_value=dict(value))
            s.add(row)
        else:
            row.setting_value = dict(value)
            row.updated_at = utcnow_naive()
        log.info("Saved site setting %s", setting_type)
        return dict(value)


def get_logo_settings() -> Dict[str, Any]:
    stored = get_site_setting(LOGO_SETTING_TYPE) or {}
    return {**DEFAULT_LOGO, **{k: v for k, v in stored.items() if v not in (None, "")}}


def save_logo_settings(
    image_url: Optional[str] = None,
    alt_text: Optional[str] = None,
    width: Optional[Any] = None,
    height: Optional[Any] = None,
) -> Dict[str, Any]:
    current = get_logo_settings()
    if image_url is not None:
        current["imageUrl"] = image_url
    if alt_text is not None:
        current["altText"] = alt_text
    if width is not None:
        current["width"] = int(validate_number(width, "width", minimum=1))
    if height is not None:
        current["height"] = int(validate_number(height, "height", minimum=1))
    return update_site_setting(LOGO_SETTING_TYPE, current)
