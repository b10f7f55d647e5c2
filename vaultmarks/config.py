from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .order_cache import CACHE_EXPIRATION_MS


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None else v


@dataclass
class Settings:
    # Ordering
    cache_ttl_ms: int = CACHE_EXPIRATION_MS
    group_scope: str = ""  # empty => whole collection

    # Host storage, relative to the vault root
    bookmarks_file: str = ".obsidian/bookmarks.json"

    # Logging / UX
    log_level: str = "INFO"
    no_color: bool = False

    @staticmethod
    def from_env() -> "Settings":
        s = Settings()
        s.cache_ttl_ms = _env_int("VAULTMARKS_CACHE_TTL_MS", s.cache_ttl_ms)
        s.group_scope = _env_str("VAULTMARKS_GROUP", s.group_scope)
        s.bookmarks_file = _env_str("VAULTMARKS_BOOKMARKS_FILE", s.bookmarks_file)
        s.log_level = _env_str("VAULTMARKS_LOG_LEVEL", s.log_level)
        s.no_color = _env_bool("VAULTMARKS_NO_COLOR", s.no_color)
        return s

    @staticmethod
    def from_file(path: Path) -> "Settings":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        s = Settings.from_env()
        known = {f.name for f in fields(Settings)}
        for k, v in data.items():
            if k in known:
                setattr(s, k, v)
        return s


def load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings.from_file(Path(config_path))
    return Settings.from_env()
