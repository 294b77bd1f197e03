from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from gossip.config.env import collect_env_values, find_binding
from gossip.config.errors import EnvironmentParseError, FileAccessError, ParseError
from gossip.config.interfaces import ConfigLoader
from gossip.config.models import ConfigLoadRequest, GossipConfig

logger = logging.getLogger(__name__)


def _error_key_path(error: Mapping[str, Any]) -> str:
    return ".".join(str(p) for p in error.get("loc", ()))


def normalize(config: GossipConfig) -> GossipConfig:
    """Return `config` with canonical field values (base_url without trailing slashes)."""
    base_url = config.base_url.rstrip("/")
    if base_url == config.base_url:
        return config
    return config.model_copy(update={"base_url": base_url})


def _drop_nulls(data: Mapping[str, Any]) -> Dict[str, Any]:
    # An empty YAML value (`password:` or `oauth:`) is null; treat it as absent.
    return {
        k: _drop_nulls(v) if isinstance(v, Mapping) else v
        for k, v in data.items()
        if v is not None
    }


def _read_yaml_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileAccessError(f"Failed to read config file {path}: {e}", path=str(path)) from e

    try:
        data = yaml.safe_load(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ParseError(f"Config file {path} is not valid UTF-8: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse config file {path}: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(
            f"Top-level YAML in {path} must be a mapping, got: {type(data).__name__}",
            path=str(path),
        )
    return _drop_nulls(data)


class YamlConfigLoader:
    def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> GossipConfig:
        path = Path(request.yaml_path)
        data = _read_yaml_config(path)

        try:
            config = GossipConfig.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            key = _error_key_path(first)
            raise ParseError(
                f"Invalid config file {path}: key '{key}': {first['msg']}",
                path=str(path),
                key=key,
            ) from e

        logger.info("config.loaded source=file path=%s", path)
        return normalize(config)


class EnvConfigLoader:
    def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> GossipConfig:
        if request.dotenv_path is not None:
            dotenv_path = Path(request.dotenv_path)
            if dotenv_path.exists():
                load_dotenv(dotenv_path=dotenv_path, override=False)
                logger.debug("config.dotenv_loaded path=%s", dotenv_path)

        data = collect_env_values(os.environ, request.env_prefix)

        try:
            config = GossipConfig.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            key = _error_key_path(first)
            binding = find_binding(key)
            variable = binding.variable_name(request.env_prefix) if binding else key
            raise EnvironmentParseError(
                f"Invalid value in environment variable {variable}: {first['msg']}",
                variable=variable,
            ) from e

        logger.info("config.loaded source=env prefix=%s variables=%d", request.env_prefix, _count_leaves(data))
        return normalize(config)


def _count_leaves(data: Mapping[str, Any]) -> int:
    return sum(_count_leaves(v) if isinstance(v, Mapping) else 1 for v in data.values())


def load_config(request: ConfigLoadRequest, *, use_env: bool) -> GossipConfig:
    """Load from the environment when `use_env` is set, from the YAML file otherwise."""
    loader: ConfigLoader = EnvConfigLoader() if use_env else YamlConfigLoader()
    return loader.load(request)
