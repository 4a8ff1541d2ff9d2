"""Configuration package."""

from exabrowser.config.loader import get_config_path, load_config, save_config
from exabrowser.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config", "save_config"]
