"""Typed settings built from scoped preferences.

Config files only hold strings. The helpers below turn one preference key into
a typed value and fall back to the dataclass default whenever the key is
missing or cannot be converted, so a bad edit to a config file never stops
the video manager from starting.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from .logging_utils import get_module_logger
from .preferences import ScopedPreferences

logger = get_module_logger("TypedConfig")

V = TypeVar("V")


@runtime_checkable
class TypedConfig(Protocol):
    """Protocol for settings dataclasses loaded from a preference scope.

    ``VideoConfig`` is the reference implementation:

        config = VideoConfig.from_preferences(prefs.scope("video"), args)
        config.to_dict()  # plain dict, e.g. for a status dump
    """

    @classmethod
    def from_preferences(
        cls, prefs: ScopedPreferences, args: Any = None
    ) -> "TypedConfig":
        """Build settings from ``prefs``; ``args`` carries CLI overrides."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a plain dictionary."""
        ...


T = TypeVar("T", bound=TypedConfig)


def load_typed_config(
    config_cls: type[T],
    prefs: ScopedPreferences,
    args: Any = None,
) -> T:
    """Instantiate ``config_cls`` from a preference scope.

    Args:
        config_cls: Settings dataclass implementing ``TypedConfig``.
        prefs: Preference scope holding that class's keys.
        args: Optional argparse namespace applied on top of the file values.
    """
    return config_cls.from_preferences(prefs, args)


def _coerce(
    prefs: ScopedPreferences,
    key: str,
    default: V,
    convert: Callable[[Any], V],
) -> V:
    raw = prefs.get(key)
    if raw is None:
        return default
    try:
        return convert(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid value %r for %s, using %r", raw, key, default)
        return default


def _to_int(raw: Any) -> int:
    # Base 0 so component ids can be written as 0x64
    return int(raw, 0) if isinstance(raw, str) else int(raw)


def get_pref_str(prefs: ScopedPreferences, key: str, default: str) -> str:
    """String preference, or ``default`` when the key is absent."""
    return _coerce(prefs, key, default, str)


def get_pref_int(prefs: ScopedPreferences, key: str, default: int) -> int:
    """Integer preference; accepts decimal, ``0x`` hex and ``0o`` octal text."""
    return _coerce(prefs, key, default, _to_int)


def get_pref_float(prefs: ScopedPreferences, key: str, default: float) -> float:
    """Float preference, used for backoff delays in seconds."""
    return _coerce(prefs, key, default, float)


__all__ = [
    "TypedConfig",
    "load_typed_config",
    "get_pref_str",
    "get_pref_int",
    "get_pref_float",
]
