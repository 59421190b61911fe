"""Typed configuration for the video manager."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from mavcam.core.logging_config import configure_logging
from mavcam.core.preferences import ScopedPreferences
from mavcam.core.typed_config import (
    get_pref_float,
    get_pref_int,
    get_pref_str,
)

from .protocols import (
    DEFAULT_STREAM_ID,
    GCS_SYSTEM_ID,
    MAV_COMP_ID_ALL,
    MAV_COMP_ID_CAMERA,
    REQUEST_ALL_CAMERAS,
)


@dataclass(slots=True)
class VideoConfig:
    """Typed configuration for MAVLink camera discovery and stream control."""

    # Sender identity for outbound commands
    gcs_system_id: int = GCS_SYSTEM_ID
    gcs_component_id: int = MAV_COMP_ID_ALL

    # Addressing of the camera peer
    camera_component_id: int = MAV_COMP_ID_CAMERA
    stream_id: int = DEFAULT_STREAM_ID
    request_all_cameras: int = REQUEST_ALL_CAMERAS

    log_level: str = "info"

    # Link reader error handling
    read_error_backoff: float = 0.1
    max_error_backoff: float = 2.0
    max_consecutive_errors: int = 10

    @classmethod
    def from_preferences(
        cls, prefs: ScopedPreferences, args: Any = None
    ) -> "VideoConfig":
        """Build config from preferences with optional CLI overrides."""
        defaults = cls()

        config = cls(
            gcs_system_id=get_pref_int(prefs, "gcs_system_id", defaults.gcs_system_id),
            gcs_component_id=get_pref_int(prefs, "gcs_component_id", defaults.gcs_component_id),
            camera_component_id=get_pref_int(prefs, "camera_component_id", defaults.camera_component_id),
            stream_id=get_pref_int(prefs, "stream_id", defaults.stream_id),
            request_all_cameras=get_pref_int(prefs, "request_all_cameras", defaults.request_all_cameras),
            log_level=get_pref_str(prefs, "log_level", defaults.log_level),
            read_error_backoff=get_pref_float(prefs, "read_error_backoff", defaults.read_error_backoff),
            max_error_backoff=get_pref_float(prefs, "max_error_backoff", defaults.max_error_backoff),
            max_consecutive_errors=get_pref_int(
                prefs, "max_consecutive_errors", defaults.max_consecutive_errors
            ),
        )

        if args is not None:
            config = config._apply_args_override(args)

        return config

    def _apply_args_override(self, args: Any) -> "VideoConfig":
        """Apply CLI argument overrides to config values."""
        values = asdict(self)

        arg_mappings = {
            "system_id": "gcs_system_id",
            "component_id": "gcs_component_id",
            "camera_component": "camera_component_id",
            "stream_id": "stream_id",
            "log_level": "log_level",
        }

        for arg_name, config_key in arg_mappings.items():
            if hasattr(args, arg_name):
                val = getattr(args, arg_name)
                if val is not None:
                    values[config_key] = val

        return VideoConfig(**values)

    def to_dict(self) -> dict[str, Any]:
        """Export config values as dictionary."""
        return asdict(self)

    def apply_logging(self, **kwargs: Any) -> None:
        """Configure root logging at ``log_level``.

        For the embedding application to call once at startup; the manager
        never touches logging setup itself. Keyword arguments are passed to
        ``configure_logging`` (``log_file``, ``console``, ``force`` ...).

        Raises:
            ValueError: ``log_level`` is not a known level name
        """
        configure_logging(self.log_level, **kwargs)


__all__ = ["VideoConfig"]
