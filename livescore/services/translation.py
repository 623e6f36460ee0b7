"""Mock en->th translator based on a football-term dictionary."""
from __future__ import annotations

import logging
import re

log = logging.getLogger(__name__)

MOCK_PREFIX = "[แปลโดยระบบอัตโนมัติ] "

FOOTBALL_TERMS = {
    "football": "ฟุตบอล",
    "soccer": "ฟุตบอล",
    "match": "การแข่งขัน",
    "goal": "ประตู",
    "league": "ลีก",
    "player": "นักเตะ",
    "team": "ทีม",
    "coach": "โค้ช",
    "championship": "แชมเปี้ยนชิพ",
    "win": "ชนะ",
    "lose": "แพ้",
    "draw": "เสมอ",
    "score": "สกอร์",
    "premier league": "พรีเมียร์ลีก",
    "champions league": "แชมเปี้ยนส์ลีก",
    "world cup": "ฟุตบอลโลก",
}

# Longer phrases first so "premier league" wins over "league"
_PATTERNS = [
    (re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE), thai)
    for term, thai in sorted(FOOTBALL_TERMS.items(), key=lambda kv: len(kv[0]), reverse=True)
]


def translate_text(text: str, source: str = "en", target: str = "th") -> str:
    if not text:
        return ""
    if (source, target) != ("en", "th"):
        return text

    log.debug("Mock translating %s->%s: %r", source, target, text[:50])
    translated = text
    for pattern, thai in _PATTERNS:
        translated = pattern.sub(thai, translated)
    return f"{MOCK_PREFIX}{translated}"
