# electrobill/config.py
from __future__ import annotations
import os


def _env(name: str, default: str) -> str:
    return os.environ.get(f"ELECTROBILL_{name}", default)


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = _env("SECRET_KEY", "dev-secret-key-change-me")

    # Billing API the console fronts
    API_BASE_URL = _env("API_BASE_URL", "http://localhost:3000/api")
    API_TIMEOUT_SECONDS = float(_env("API_TIMEOUT_SECONDS", "30"))
    # httpx transport override (tests inject a MockTransport here)
    API_TRANSPORT = None

    DEFAULT_PAGE_SIZE = int(_env("DEFAULT_PAGE_SIZE", "10"))
    TAX_RATE_PERCENT = float(_env("TAX_RATE_PERCENT", "16"))
    CURRENCY = _env("CURRENCY", "KES")
    SEARCH_DEBOUNCE_MS = int(_env("SEARCH_DEBOUNCE_MS", "300"))
    EXPIRING_BATCH_DAYS = int(_env("EXPIRING_BATCH_DAYS", "30"))

    LOG_LEVEL = _env("LOG_LEVEL", "INFO")

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
