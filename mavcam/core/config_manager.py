import asyncio
from pathlib import Path
from typing import Any, Dict, Iterable

import aiofiles

from .logging_utils import get_module_logger


logger = get_module_logger("ConfigManager")


class ConfigManager:
    """Reads and updates flat ``key = value`` config files.

    Lines starting with ``#`` are comments, trailing ``# ...`` is stripped from
    values and surrounding quotes are removed. Missing or unreadable files
    yield an empty mapping.
    """

    def __init__(self):
        self.lock = asyncio.Lock()

    @staticmethod
    def _stringify_value(value: Any) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    @staticmethod
    def parse_config_lines(lines: Iterable[str]) -> Dict[str, str]:
        config: Dict[str, str] = {}

        for raw_line in lines:
            line = raw_line.strip()
            if not line or line.startswith('#'):
                continue
            if '=' not in line:
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()

            if '#' in value:
                value = value.split('#')[0].strip()

            if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                value = value[1:-1]

            config[key] = value

        return config

    def read_config(self, config_path: Path) -> Dict[str, str]:
        config_path = Path(config_path)
        if not config_path.exists():
            logger.debug("Config file %s not found, using defaults", config_path)
            return {}
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return self.parse_config_lines(f)
        except OSError as e:
            logger.error("Failed to read config %s: %s", config_path, e)
            return {}

    async def read_config_async(self, config_path: Path) -> Dict[str, str]:
        config_path = Path(config_path)
        if not await asyncio.to_thread(config_path.exists):
            logger.debug("Config file %s not found, using defaults", config_path)
            return {}
        try:
            lines: list[str] = []
            async with aiofiles.open(config_path, 'r', encoding='utf-8') as f:
                async for line in f:
                    lines.append(line)
            return self.parse_config_lines(lines)
        except OSError as e:
            logger.error("Failed to read config %s: %s", config_path, e)
            return {}

    def _merge_lines(self, lines: list[str], updates: Dict[str, Any]) -> list[str]:
        updated_keys = set()

        for i, line in enumerate(lines):
            stripped = line.strip()
            if not stripped or stripped.startswith('#') or '=' not in stripped:
                continue
            key = stripped.split('=')[0].strip()
            if key in updates:
                indent = len(line) - len(line.lstrip())
                lines[i] = ' ' * indent + f"{key} = {self._stringify_value(updates[key])}\n"
                updated_keys.add(key)

        for key, value in updates.items():
            if key not in updated_keys:
                lines.append(f"{key} = {self._stringify_value(value)}\n")
                logger.debug("Added new config key: %s", key)

        return lines

    async def write_config_async(self, config_path: Path, updates: Dict[str, Any]) -> bool:
        """Rewrite ``updates`` into ``config_path``, creating the file if needed."""
        config_path = Path(config_path)
        async with self.lock:
            try:
                lines: list[str] = []
                if await asyncio.to_thread(config_path.exists):
                    async with aiofiles.open(config_path, 'r', encoding='utf-8') as f:
                        lines = await f.readlines()
                else:
                    await asyncio.to_thread(config_path.parent.mkdir, parents=True, exist_ok=True)

                lines = self._merge_lines(lines, updates)

                async with aiofiles.open(config_path, 'w', encoding='utf-8') as f:
                    await f.writelines(lines)
                return True
            except OSError as e:
                logger.error("Failed to write config %s: %s", config_path, e)
                return False


_config_manager = ConfigManager()


def get_config_manager() -> ConfigManager:
    return _config_manager
