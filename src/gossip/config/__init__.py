from gossip.config.errors import (
    ConfigError,
    EnvironmentParseError,
    FileAccessError,
    ParseError,
    TemplateRenderError,
    UnknownBackendError,
)
from gossip.config.loader import EnvConfigLoader, YamlConfigLoader, load_config
from gossip.config.models import ConfigLoadRequest, GossipConfig
from gossip.config.template import render_initial_template

__all__ = [
    "ConfigError",
    "ConfigLoadRequest",
    "EnvConfigLoader",
    "EnvironmentParseError",
    "FileAccessError",
    "GossipConfig",
    "ParseError",
    "TemplateRenderError",
    "UnknownBackendError",
    "YamlConfigLoader",
    "load_config",
    "render_initial_template",
]
