from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env if present
load_dotenv()

logger = logging.getLogger(__name__)


def _choice(name: str, default: str, allowed: tuple[str, ...]) -> str:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw not in allowed:
        logger.warning("invalid %s=%s, using default=%s", name, raw, default)
        return default
    return raw


def _float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = -1.0
    if value <= 0:
        logger.warning("invalid %s=%s, using default=%s", name, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    api_base_url: str = os.getenv("STOREFRONT_API_BASE_URL", "http://localhost:3000").rstrip("/")
    http_timeout: float = _float("HTTP_TIMEOUT", 12.0)
    http_backend: str = _choice("HTTP_BACKEND", "httpx", ("httpx", "requests"))
    admin_password: str | None = os.getenv("ADMIN_PASSWORD") or None
    session_backend: str = _choice("SESSION_BACKEND", "json", ("json", "sqlite", "memory"))
    session_path: str = os.getenv("SESSION_PATH", ".rental_storefront_session.json")
    grant_fallback: str = _choice("GRANT_FALLBACK", "permissive", ("permissive", "drop"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
