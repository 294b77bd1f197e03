from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """Base class for configuration loading and rendering failures."""


class FileAccessError(ConfigError):
    """The config file could not be opened or read."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ParseError(ConfigError):
    """The config file content is malformed or does not match the schema."""

    def __init__(self, message: str, *, path: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path
        self.key = key


class EnvironmentParseError(ConfigError):
    """An environment variable is set but cannot be coerced to its field type."""

    def __init__(self, message: str, *, variable: str) -> None:
        super().__init__(message)
        self.variable = variable


class UnknownBackendError(ConfigError):
    """A `type` discriminator names no known backend."""

    def __init__(self, message: str, *, field: str, value: str) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class TemplateRenderError(ConfigError):
    """The initial config template failed to render."""
