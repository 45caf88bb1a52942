"""Project-level configuration and path helpers."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_API_URL = "http://localhost:3000"

# Most-recent-first cap for the asset gallery
ASSET_LIMIT = 50

# Seconds between a settled send and the follow-up asset refresh.
# Generation triggered by a tool call lands slightly after the chat reply.
ASSET_REFRESH_DELAY = 2.0

REQUEST_TIMEOUT = 60.0


def resolve_api_url(env_value: str | None = None) -> str:
    """Resolve LUCY_BACKEND_URL to a base URL without trailing slash."""
    if not env_value:
        return DEFAULT_API_URL
    return env_value.rstrip("/")
