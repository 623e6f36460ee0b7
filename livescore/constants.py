"""Centralized constants for the Playjoy Livescore backend."""

# ---- API-Football league ids ----
LEAGUE_IDS = {
    "THAI_LEAGUE": 290,
    "PREMIER_LEAGUE": 39,
    "LA_LIGA": 140,
    "BUNDESLIGA": 78,
    "SERIE_A": 135,
    "LIGUE_1": 61,
    "CHAMPIONS_LEAGUE": 2,
}

THAI_LEAGUE_ID = LEAGUE_IDS["THAI_LEAGUE"]

# Leagues loaded on the fixtures page before the user picks a filter
POPULAR_LEAGUE_IDS = (
    LEAGUE_IDS["THAI_LEAGUE"],
    LEAGUE_IDS["PREMIER_LEAGUE"],
    LEAGUE_IDS["LA_LIGA"],
    LEAGUE_IDS["BUNDESLIGA"],
    LEAGUE_IDS["SERIE_A"],
    LEAGUE_IDS["CHAMPIONS_LEAGUE"],
)

CURRENT_SEASON = 2024

# ---- Cache durations (seconds) ----
CACHE_DURATION_DEFAULT = 5 * 60
CACHE_DURATION_LIVE = 30
CACHE_DURATION_EVENTS = 60
CACHE_DURATION_STANDINGS = 60 * 60

# Short status -> display bucket; anything unknown is UPCOMING
STATUS_BUCKETS = {
    "TBD": "UPCOMING",
    "NS": "UPCOMING",
    "1H": "LIVE",
    "HT": "LIVE",
    "2H": "LIVE",
    "ET": "LIVE",
    "BT": "LIVE",
    "P": "LIVE",
    "SUSP": "LIVE",
    "INT": "LIVE",
    "FT": "FINISHED",
    "AET": "FINISHED",
    "PEN": "FINISHED",
    "PST": "UPCOMING",
    "CANC": "FINISHED",
    "ABD": "FINISHED",
    "AWD": "FINISHED",
    "WO": "FINISHED",
    "LIVE": "LIVE",
}

RATE_LIMIT_HEADERS = (
    "x-ratelimit-requests-limit",
    "x-ratelimit-requests-remaining",
    "X-RateLimit-Limit",
    "X-RateLimit-Remaining",
)

# ---- Advertisement enums ----
AD_POSITIONS = ("hero", "sidebar", "in-feed", "footer", "pre-content")
AD_SIZES = ("small", "medium", "large")
AD_STATUSES = ("active", "paused", "scheduled", "ended")

# ---- Users ----
USER_ROLES = ("user", "editor", "admin")

# ---- News ----
NEWS_CATEGORIES = ("thai", "international")
NEWS_FETCH_LIMIT = 20
NEWS_SUMMARY_LENGTH = 150
SLUG_MAX_LENGTH = 100

# ---- Site settings ----
LOGO_SETTING_TYPE = "logo"
DEFAULT_LOGO = {
    "imageUrl": "/logo.png",
    "altText": "PlayJoy Live",
    "width": 150,
    "height": 40,
}

DEFAULT_API_ENDPOINT_FLAGS = {
    "fixtures": True,
    "standings": True,
    "teams": True,
    "players": True,
    "odds": False,
    "predictions": True,
}

# Localised messages surfaced by the page endpoints
ERROR_LOAD_FAILED = "เกิดข้อผิดพลาดในการโหลดข้อมูล โปรดลองอีกครั้ง"
ERROR_NO_FIXTURES = "ไม่พบข้อมูลการแข่งขันในวันที่เลือก"
