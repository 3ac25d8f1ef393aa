"""
core/config.py
──────────────
Centralised application settings via ``pydantic-settings``.

All configuration is driven by environment variables (or a ``.env`` file
in the ``backend/`` directory).  ``pydantic-settings`` validates types at
startup, so a malformed value fails fast with a clear error message.

Usage
-----
    from core.config import get_settings

    settings = get_settings()
    print(settings.PORT)
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the backend/ directory so relative .env paths work from any cwd.
_BACKEND_DIR = Path(__file__).resolve().parent.parent

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables / ``.env`` file.

    Attributes:
        APP_TITLE:                Human-readable API name shown in OpenAPI docs.
        APP_VERSION:              Semantic version string.
        APP_DESCRIPTION:          Short description shown in the OpenAPI UI.
        DEBUG:                    Verbose logging and hot-reload.
        HOST:                     Bind address for the HTTP server.
        PORT:                     Bind port for the HTTP server.
        LOG_LEVEL:                Root logger level.
        UPSTREAM_LOG_LEVEL:       Level cap for the ``yfinance`` logger.
        UPSTREAM_TIMEOUT_SECONDS: Per-call timeout for Yahoo Finance (0 = none).
        UPSTREAM_MAX_WORKERS:     Threads available for blocking yfinance calls.
        FRONTEND_URL:             Optional deployed frontend origin for CORS.
    """

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        # Extra env vars are ignored.
        extra="ignore",
    )

    # ── API metadata ──────────────────────────────────────────────────────
    APP_TITLE: str = "Cotações API"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = (
        "Quotes, price history, search and market overview for B3 and "
        "global tickers, served from Yahoo Finance."
    )

    # ── Feature flags ─────────────────────────────────────────────────────
    DEBUG: bool = False

    # ── Server ────────────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=3000, ge=1, le=65535)

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    UPSTREAM_LOG_LEVEL: str = "CRITICAL"

    # ── Upstream (Yahoo Finance) ──────────────────────────────────────────
    UPSTREAM_TIMEOUT_SECONDS: float = Field(default=30.0, ge=0.0)
    UPSTREAM_MAX_WORKERS: int = Field(default=8, ge=1, le=64)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Optional extra origin injected by the hosting environment.
    FRONTEND_URL: str = ""

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Build the full CORS allow-list.

        Hard-coded dev origins plus the optional ``FRONTEND_URL`` env var.
        """
        origins: List[str] = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",   # Vite / React dev server
            "http://127.0.0.1:5173",
        ]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        return origins

    @property
    def upstream_timeout(self) -> float | None:
        """Timeout in seconds for one upstream call, or ``None`` when disabled."""
        return self.UPSTREAM_TIMEOUT_SECONDS or None

    @field_validator("LOG_LEVEL", "UPSTREAM_LOG_LEVEL")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        """Normalise to upper case and reject unknown level names."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached ``Settings`` singleton.

    The instance is created (and the ``.env`` file parsed) only once per
    process lifetime, courtesy of ``functools.lru_cache``.

    Returns:
        Settings: Validated application configuration.
    """
    return Settings()
