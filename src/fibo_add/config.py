"""
Configuration for the demo program.

Settings come from a YAML file merged over built-in defaults. The file is
taken from the ``path`` argument, then from the ``FIBO_ADD_CONFIG``
environment variable; with neither, the defaults are used as-is.
"""

import copy
import logging
import os
import re
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FIBO_ADD_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    'demo': {
        'a': 1,
        'b': 2,
        'count': 10,
    },
    'logging': {
        'level': 'INFO',
        'json': False,
    },
}

# ${VAR} or ${VAR:-default}
_ENV_PATTERN = re.compile(r'\$\{([^:}]+)(?::-?([^}]*))?\}')

_TRUE_WORDS = ('true', 'yes', 'on', '1')
_FALSE_WORDS = ('false', 'no', 'off', '0')


def _substitute_env(text: str) -> str:
    return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ''), text)


def expand_env_vars(node: Any) -> Any:
    """Return a copy of *node* with placeholders in every string leaf replaced."""
    if isinstance(node, str):
        return _substitute_env(node)
    if isinstance(node, dict):
        return {key: expand_env_vars(value) for key, value in node.items()}
    if isinstance(node, list):
        return list(map(expand_env_vars, node))
    return node


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Holds the merged configuration and answers dotted-key lookups."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or os.environ.get(CONFIG_ENV_VAR)
        self._config: Dict[str, Any] = {}
        self.reload()

    def reload(self):
        """Re-read the config file, falling back to defaults if it is missing.

        Raises:
            ConfigError: If the file exists but is not valid YAML, or its
                top level or one of its sections is not a mapping.
        """
        if not self.path:
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            logger.debug({"event": "config_load", "source": "defaults"})
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            logger.warning({"event": "config_load", "status": "not_found", "path": self.path})
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            return
        except yaml.YAMLError as e:
            raise ConfigError(self.path, str(e)) from e
        except OSError as e:
            raise ConfigError(self.path, str(e)) from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(self.path, "top level must be a mapping")

        merged = _deep_merge(DEFAULT_CONFIG, expand_env_vars(loaded))
        for section in DEFAULT_CONFIG:
            if not isinstance(merged[section], dict):
                raise ConfigError(self.path, f"{section} must be a mapping")

        self._config = merged
        logger.info({"event": "config_load", "status": "success", "path": self.path})

    def _invalid(self, key_path: str, expected: str, value: Any) -> ConfigError:
        return ConfigError(self.path or "<defaults>", f"{key_path} must be {expected}, got {value!r}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Look up a nested value by dotted path, e.g. ``"demo.count"``.

        Args:
            key_path: Dot-separated keys.
            default: Returned when any key along the path is missing.
        """
        value = self._config
        try:
            for key in key_path.split('.'):
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_int(self, key_path: str, default: int) -> int:
        """Like :meth:`get`, but coerce the value to ``int``.

        Values expanded from environment variables arrive as strings.
        Floats are accepted only when integral, so ``2.0`` reads as ``2``
        but ``1.9`` is rejected rather than truncated.

        Raises:
            ConfigError: If the value cannot be read as an integer.
        """
        value = self.get(key_path, default)
        if isinstance(value, bool):
            raise self._invalid(key_path, "an integer", value)
        if isinstance(value, float):
            if not value.is_integer():
                raise self._invalid(key_path, "an integer", value)
            return int(value)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise self._invalid(key_path, "an integer", value) from e

    def get_bool(self, key_path: str, default: bool) -> bool:
        """Like :meth:`get`, but read the value as a boolean.

        YAML booleans pass through. Strings (typically from a placeholder)
        may be true/false, yes/no, on/off or 1/0 in any case.

        Raises:
            ConfigError: If the value is anything else.
        """
        value = self.get(key_path, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
        raise self._invalid(key_path, "a boolean", value)

    @property
    def config(self) -> Dict[str, Any]:
        """A copy of the whole merged configuration."""
        return copy.deepcopy(self._config)


_config_manager: Optional[ConfigManager] = None


def get_config(path: Optional[str] = None) -> ConfigManager:
    """Return the shared ConfigManager, creating it on first use.

    Passing a ``path`` different from the current one reloads from it.
    """
    global _config_manager
    if _config_manager is None or (path is not None and path != _config_manager.path):
        _config_manager = ConfigManager(path)
    return _config_manager


def reset_config():
    """Drop the shared instance so the next get_config() starts fresh."""
    global _config_manager
    _config_manager = None
