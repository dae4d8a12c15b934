from __future__ import annotations

from .load import CONFIG_FILENAME, config_path, load_config
from .model import ConfigLoadError, EngineConfig

__all__ = ["CONFIG_FILENAME", "ConfigLoadError", "EngineConfig", "config_path", "load_config"]
