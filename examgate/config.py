"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float_env(name: str, default: float) -> float:
    """Parse float from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _optional_env(name: str) -> str | None:
    """Read environment variable, treating blank values as unset."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw


# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'examgate.db'}"
)

# Content store
CURRENT_DOCUMENT_ID = "current-test"
MAX_DOCUMENT_BYTES = _parse_int_env("MAX_DOCUMENT_BYTES", 10 * 1024 * 1024)

# Retry harness
CONTENT_MAX_ATTEMPTS = _parse_int_env("CONTENT_MAX_ATTEMPTS", 5)
CONTENT_RETRY_DELAY_SECONDS = _parse_float_env("CONTENT_RETRY_DELAY_SECONDS", 3.0)
VERIFY_MAX_ATTEMPTS = _parse_int_env("VERIFY_MAX_ATTEMPTS", 3)
VERIFY_RETRY_DELAY_SECONDS = _parse_float_env("VERIFY_RETRY_DELAY_SECONDS", 1.0)
GATEWAY_TIMEOUT_SECONDS = _parse_float_env("GATEWAY_TIMEOUT_SECONDS", 30.0)

# Mail transport
MAIL_API_URL = os.environ.get(
    "MAIL_API_URL", "https://postal.example.com/api/v1/send/message"
)
MAIL_TIMEOUT_SECONDS = _parse_int_env("MAIL_TIMEOUT_SECONDS", 30)


def get_access_codes() -> tuple[str | None, str | None]:
    """Return the configured (student, editor) access codes."""
    return _optional_env("ACCESS_CODE"), _optional_env("EDITOR_CODE")


def get_mail_settings() -> dict[str, str | None]:
    """Return mail transport settings read from the environment."""
    return {
        "url": os.environ.get("MAIL_API_URL", MAIL_API_URL),
        "api_key": _optional_env("MAIL_API_KEY"),
        "recipient": _optional_env("MAIL_RECIPIENT"),
        "sender": _optional_env("MAIL_SENDER"),
    }
