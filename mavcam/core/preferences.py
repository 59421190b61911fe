"""Preference views over key/value config files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from .config_manager import ConfigManager, get_config_manager
from .logging_utils import get_module_logger

logger = get_module_logger(__name__)


class ModulePreferences:
    """Cached view of a single config file."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        *,
        config_manager: Optional[ConfigManager] = None,
        initial_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._config_path = Path(config_path) if config_path is not None else None
        self._manager = config_manager or get_config_manager()
        self._cache: Dict[str, Any] = {}
        if initial_data is not None:
            self._cache = dict(initial_data)
        else:
            self.reload()

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ModulePreferences":
        """Build in-memory preferences, e.g. for embedding apps or tests."""
        return cls(initial_data=data)

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._cache)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._cache.get(key, default)

    def reload(self) -> Dict[str, Any]:
        if self._config_path is None:
            return self.snapshot()
        self._cache = self._manager.read_config(self._config_path)
        logger.debug("Loaded %d preference keys from %s", len(self._cache), self._config_path)
        return self.snapshot()

    async def write_async(self, updates: Dict[str, Any]) -> bool:
        if not updates:
            return True
        if self._config_path is None:
            success = True
        else:
            success = await self._manager.write_config_async(self._config_path, updates)
        if success:
            for key, value in updates.items():
                self._cache[key] = ConfigManager._stringify_value(value)
        return success

    def scope(self, prefix: str, *, separator: str = ".") -> "ScopedPreferences":
        """Return a scoped view that automatically prefixes keys."""
        return ScopedPreferences(self, prefix, separator=separator)


class ScopedPreferences:
    """Wrapper around ModulePreferences that automatically prefixes keys."""

    def __init__(self, base: ModulePreferences, prefix: str, *, separator: str = ".") -> None:
        self._base = base
        self._prefix = prefix.strip().rstrip(separator)
        self._separator = separator

    def _qualify(self, key: str) -> str:
        if not self._prefix:
            return key
        if not key:
            return self._prefix
        return f"{self._prefix}{self._separator}{key}"

    def snapshot(self) -> Dict[str, Any]:
        base_snapshot = self._base.snapshot()
        if not self._prefix:
            return base_snapshot
        prefix = f"{self._prefix}{self._separator}"
        return {
            key[len(prefix):]: value
            for key, value in base_snapshot.items()
            if key.startswith(prefix)
        }

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._base.get(self._qualify(key), default)

    async def write_async(self, updates: Dict[str, Any]) -> bool:
        return await self._base.write_async({self._qualify(k): v for k, v in updates.items()})

    def scope(self, prefix: str, *, separator: str = ".") -> "ScopedPreferences":
        return self._base.scope(self._qualify(prefix), separator=separator)


__all__ = [
    "ModulePreferences",
    "ScopedPreferences",
]
