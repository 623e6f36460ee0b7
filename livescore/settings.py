import os
from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _read_secret_file(path: str | None) -> str | None:
    if not path:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return None


APP_ENV = os.getenv("APP_ENV", "development").strip().lower()
IS_PRODUCTION = APP_ENV == "production"

# --- Football API (API-SPORTS / RapidAPI) ---
API_KEY = os.getenv("API_KEY") or _read_secret_file(os.getenv("API_KEY_FILE")) or ""
API_HOST = os.getenv("API_HOST", "v3.football.api-sports.io")
API_VERSION = os.getenv("API_VERSION", "v3")
API_TIMEOUT = _get_int("API_TIMEOUT", 10)

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///livescore.db")
# Elevated credential; writes through it skip row-level security on the hosted DB
DATABASE_ADMIN_URL = (
    os.getenv("DATABASE_ADMIN_URL")
    or _read_secret_file(os.getenv("DATABASE_ADMIN_URL_FILE"))
    or DATABASE_URL
)

# --- Blob storage ---
BLOB_READ_WRITE_TOKEN = os.getenv("BLOB_READ_WRITE_TOKEN") or _read_secret_file(
    os.getenv("BLOB_READ_WRITE_TOKEN_FILE")
)
BLOB_API_URL = os.getenv("BLOB_API_URL", "https://blob.vercel-storage.com")
BLOB_PUBLIC_BASE_URL = os.getenv("BLOB_PUBLIC_BASE_URL", "")
USE_LOCAL_FILES = _get_bool("USE_LOCAL_FILES", not IS_PRODUCTION)

# --- News / translation ---
NEWS_API_KEY = os.getenv("NEWS_API_KEY", "")
NEWS_API_URL = os.getenv("NEWS_API_URL", "https://newsapi.org/v2/everything")
NEWS_TIMEOUT = _get_int("NEWS_TIMEOUT", 10)
NEWS_MAX_RETRIES = _get_int("NEWS_MAX_RETRIES", 2)

# --- Route secrets ---
CRON_SECRET_KEY = os.getenv("CRON_SECRET_KEY", "")
DB_INIT_SECRET = os.getenv("DB_INIT_SECRET", "")
