from .config_manager import ConfigManager, get_config_manager
from .logging_config import configure_logging
from .logging_utils import StructuredLogger, get_module_logger
from .preferences import ModulePreferences, ScopedPreferences

__all__ = [
    'ConfigManager',
    'get_config_manager',
    'configure_logging',
    'StructuredLogger',
    'get_module_logger',
    'ModulePreferences',
    'ScopedPreferences',
]
