from .loader import ConfigError, load_config, load_yaml_config
from .models import (
    BufferSection,
    GeneratorSection,
    LoggingSection,
    RevealSection,
    StreamConfig,
    StreamSection,
    default_config,
)

__all__ = [
    "BufferSection",
    "ConfigError",
    "GeneratorSection",
    "LoggingSection",
    "RevealSection",
    "StreamConfig",
    "StreamSection",
    "default_config",
    "load_config",
    "load_yaml_config",
]
