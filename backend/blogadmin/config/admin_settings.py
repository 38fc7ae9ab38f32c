"""
Admin settings loader.

Loads config/admin_settings.yml, the single source of truth for
authorization roles and query limits.

Consumers:
  - CrudService: roles allowed to remove records
  - CrudRepository: list page-size cap, autocomplete limits

Usage:
    from blogadmin.config.admin_settings import get_admin_settings

    settings = get_admin_settings()
    settings.admin_roles          # ("admin",)
    settings.autocomplete_limit(None)  # None: every match
"""

import logging
import os
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# Fallbacks when the file or a key is missing
_FALLBACK_ADMIN_ROLES = ("admin",)
_FALLBACK_AUTOCOMPLETE_MAX_LIMIT = 100


class AdminSettingsLoader:
    """
    Thread-safe singleton loader for config/admin_settings.yml.

    The path can be forced with ADMIN_SETTINGS_PATH or the config_path
    argument of the first instantiation.
    """

    _instance: Optional["AdminSettingsLoader"] = None
    _lock = Lock()

    def __new__(cls, config_path: Optional[str] = None):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if self._initialized:
            return

        self._config_path = config_path or os.getenv("ADMIN_SETTINGS_PATH")
        self._raw: Dict[str, Any] = {}
        self._load_lock = Lock()

        self._load()
        self._initialized = True

    # ------------------------------------------------------------------
    # Config resolution
    # ------------------------------------------------------------------

    def _resolve_path(self) -> Optional[Path]:
        if self._config_path:
            return Path(self._config_path)

        candidates = [
            # Repository root (backend/blogadmin/config -> root/config)
            Path(__file__).parent.parent.parent.parent / "config" / "admin_settings.yml",
            Path(os.getcwd()) / "config" / "admin_settings.yml",
            Path(os.getcwd()) / ".." / "config" / "admin_settings.yml",
        ]

        for p in candidates:
            resolved = p.resolve()
            if resolved.exists():
                return resolved
        return None

    def _load(self) -> None:
        with self._load_lock:
            path = self._resolve_path()
            if path is None:
                logger.warning("admin_settings.yml not found, using built-in defaults")
                self._raw = {}
                return

            logger.info("Loading admin settings from %s", path)
            with open(path, "r") as f:
                self._raw = yaml.safe_load(f) or {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reload(self) -> None:
        """Re-read the YAML from disk (e.g. after a config change)."""
        self._load()

    @property
    def admin_roles(self) -> Tuple[str, ...]:
        roles = self._raw.get("admin_roles")
        if not roles:
            return _FALLBACK_ADMIN_ROLES
        return tuple(str(r) for r in roles)

    @property
    def list_max_limit(self) -> Optional[int]:
        value = (self._raw.get("list") or {}).get("max_limit")
        return int(value) if value else None

    @property
    def autocomplete_default_limit(self) -> Optional[int]:
        """Page size when the caller sends no limit (None = every match)."""
        value = (self._raw.get("autocomplete") or {}).get("default_limit")
        return int(value) if value else None

    @property
    def autocomplete_max_limit(self) -> int:
        value = (self._raw.get("autocomplete") or {}).get("max_limit")
        return int(value) if value else _FALLBACK_AUTOCOMPLETE_MAX_LIMIT

    def autocomplete_limit(self, requested: Optional[int]) -> Optional[int]:
        """Resolve the effective autocomplete limit; None means unbounded."""
        if not requested or requested < 1:
            return self.autocomplete_default_limit
        return min(int(requested), self.autocomplete_max_limit)


def get_admin_settings(config_path: Optional[str] = None) -> AdminSettingsLoader:
    """Return the singleton settings loader."""
    return AdminSettingsLoader(config_path)


def reset_admin_settings() -> None:
    """Drop the singleton so the next call reloads (tests, config reload)."""
    with AdminSettingsLoader._lock:
        AdminSettingsLoader._instance = None
