"""Load .env and settings.yaml, expose cache configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SETTINGS_PATH = PROJECT_ROOT / "settings.yaml"

EXPIRY_ENV_VAR = "CACHECACHE_EXPIRY_MS"


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml(settings_path: Path) -> dict:
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse %s, using defaults", settings_path)
            return {}
        section = raw.get("cache") if isinstance(raw, dict) else None
        return dict(section) if isinstance(section, dict) else {}
    return {}


class CacheSettings(BaseModel):
    # None keeps the last inserted value forever
    expiry_ms: float | None = Field(default=None, ge=0)

    @property
    def expiry(self) -> float | None:
        """Expiry duration in seconds."""
        if self.expiry_ms is None:
            return None
        return self.expiry_ms / 1000


def load_settings(settings_path: Path | None = None) -> CacheSettings:
    _load_env()
    raw = _load_yaml(settings_path or SETTINGS_PATH)
    env_expiry = os.getenv(EXPIRY_ENV_VAR)
    if env_expiry is not None:
        env_expiry = env_expiry.strip()
        raw["expiry_ms"] = None if env_expiry.lower() in ("", "none") else env_expiry
    return CacheSettings(**raw)
