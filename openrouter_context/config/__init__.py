"""Configuration module for openrouter-context."""

from openrouter_context.config.loader import get_config_path, load_config, save_config
from openrouter_context.config.schema import Config, ContextConfig, ProviderConfig

__all__ = [
    "Config",
    "ContextConfig",
    "ProviderConfig",
    "load_config",
    "save_config",
    "get_config_path",
]
