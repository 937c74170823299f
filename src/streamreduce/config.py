"""
Loads the YAML settings an application can use to set up logging for the
library. The reducer itself takes no options.

Example ``config.yml``::

    logging:
      level: DEBUG
      renderer: console
"""

from typing import Any, Dict, Optional, Tuple
import os

import yaml

from .core.log import configure_logging


class Config:
    """Loaded settings, read with dot-separated keys such as 'logging.level'."""

    def __init__(self, config_data: Optional[Dict[str, Any]]):
        self._config = config_data or {}

    def get(self, key: str, default: Any = None) -> Any:
        value = self._config
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def logging_options(self) -> Tuple[str, str]:
        """Returns the ``(level, renderer)`` pair, falling back to ``('INFO', 'json')``."""
        return (
            str(self.get("logging.level", "INFO")),
            str(self.get("logging.renderer", "json")),
        )


def load_config(path: Optional[str]) -> Config:
    """
    Loads a YAML file. A missing path gives an empty Config; malformed YAML
    raises ``yaml.YAMLError``.
    """
    if not path or not os.path.exists(path):
        return Config({})

    with open(path, "r") as f:
        config_data = yaml.safe_load(f)

    if config_data is not None and not isinstance(config_data, dict):
        raise ValueError(f"Config file {path!r} must contain a mapping at the top level")
    return Config(config_data)


def configure_logging_from(config: Config) -> None:
    """Applies the ``logging`` section of a config. See `configure_logging`."""
    level, renderer = config.logging_options()
    configure_logging(level=level, renderer=renderer)
