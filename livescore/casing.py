"""snake_case <-> camelCase key conversion between storage rows and API payloads."""
from __future__ import annotations

import re
from typing import Any

_SNAKE_RE = re.compile(r"_([a-z0-9])")
_CAMEL_RE = re.compile(r"([A-Z])")


def _to_camel(key: str) -> str:
    return _SNAKE_RE.sub(lambda m: m.group(1).upper(), key)


def _to_snake(key: str) -> str:
    return _CAMEL_RE.sub(lambda m: "_" + m.group(1).lower(), key)


def snake_to_camel(obj: Any) -> Any:
    """Recursively rename dict keys from snake_case to camelCase."""
    if isinstance(obj, list):
        return [snake_to_camel(v) for v in obj]
    if isinstance(obj, dict):
        return {(_to_camel(k) if isinstance(k, str) else k): snake_to_camel(v) for k, v in obj.items()}
    return obj


def camel_to_snake(obj: Any) -> Any:
    """Recursively rename dict keys from camelCase to snake_case."""
    if isinstance(obj, list):
        return [camel_to_snake(v) for v in obj]
    if isinstance(obj, dict):
        return {(_to_snake(k) if isinstance(k, str) else k): camel_to_snake(v) for k, v in obj.items()}
    return obj
