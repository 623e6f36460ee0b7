"""Admin-managed user accounts."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from werkzeug.security import check_password_hash, generate_password_hash

from ..constants import USER_ROLES
from ..db import session_scope
from ..errors import ValidationError
from ..models import User, utcnow_naive
from ..utils import to_iso
from ..validators import require_fields, validate_choice

log = logging.getLogger(__name__)


def _to_dict(user: User) -> Dict[str, Any]:
    # password_hash deliberately omitted
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "isActive": bool(user.is_active),
        "lastLogin": to_iso(user.last_login),
        "createdAt": to_iso(user.created_at),
        "updatedAt": to_iso(user.updated_at),
    }


def list_users() -> List[Dict[str, Any]]:
    with session_scope(action="fetch users") as s:
        return [_to_dict(u) for u in s.scalars(select(User).order_by(User.created_at.desc())).all()]


def get_user(user_id: str) -> Optional[Dict[str, Any]]:
    with session_scope(action=f"fetch user {user_id}") as s:
        user = s.get(User, user_id)
        return _to_dict(user) if user is not None else None


def create_user(
    username: str,
    password: str,
    email: Optional[str] = None,
    role: str = "user",
    is_active: bool = True,
) -> Dict[str, Any]:
    require_fields({"username": username, "password": password}, ("username", "password"))
    validate_choice(role, USER_ROLES, "role")
    with session_scope(admin=True, action="create user") as s:
        if s.scalar(select(User.id).where(User.username == username)) is not None:
            raise ValidationError(f"username '{username}' is already taken", field="username")
        user = User(
            username=username,
            email=email,
            role=role,
            is_active=is_active,
            password_hash=generate_password_hash(password),
        )
        s.add(user)
        s.flush()
        log.info("Created user %s (%s)", username, role)
        return _to_dict(user)


def update_user(user_id: str, **fields: Any) -> Optional[Dict[str, Any]]:
    """Update profile fields; the password is only re-hashed when a new one is given."""
    password = fields.pop("password", None)
    if "role" in fields:
        validate_choice(fields["role"], USER_ROLES, "role")
    with session_scope(admin=True, action=f"update user {user_id}") as s:
        user = s.get(User, user_id)
        if user is None:
            return None
        for name in ("username", "email", "role", "is_active"):
            if name in fields and fields[name] is not None:
                setattr(user, name, fields[name])
        if password:
            user.password_hash = generate_password_hash(password)
        user.updated_at = utcnow_naive()
        s.flush()
        return _to_dict(user)


def delete_user(user_id: str) -> bool:
    with session_scope(admin=True, action=f"delete user {user_id}") as s:
        stmt = delete(User).where(User.id == user_id).execution_options(synchronize_session=False)
        return s.execute(stmt).rowcount > 0


def record_login(user_id: str) -> Optional[Dict[str, Any]]:
    with session_scope(admin=True, action="record login") as s:
        user = s.get(User, user_id)
        if user is None:
            return None
        user.last_login = utcnow_naive()
        s.flush()
        return _to_dict(user)


def verify_password(username: str, password: str) -> Optional[Dict[str, Any]]:
    """Return the user when the credentials match an active account."""
    with session_scope(action="verify credentials") as s:
        user = s.scalar(select(User).where(User.username == username))
        if user is None or not user.is_active:
            return None
        if not check_password_hash(user.password_hash, password or ""):
            return None
        return _to_dict(user)
