from __future__ import annotations

import logging

from gossip.config import YamlConfigLoader
from gossip.config.models import ConfigLoadRequest
from gossip.logging import init_logging


def main() -> None:
    init_logging("DEBUG")
    config = YamlConfigLoader().load(ConfigLoadRequest(yaml_path="examples/gossip.yaml"))

    logger = logging.getLogger("smoke")
    logger.info("Config loaded base_url=%s store=%s", config.base_url, config.store.type)
    logger.info("OAuth providers enabled=%s", config.oauth.enabled_providers())


if __name__ == "__main__":
    main()
