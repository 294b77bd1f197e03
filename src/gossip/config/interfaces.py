from __future__ import annotations

from typing import Protocol

from gossip.config.models import ConfigLoadRequest, GossipConfig


class ConfigLoader(Protocol):
    """
    Produces a fully populated, normalized GossipConfig from a single source.

    Loaders never combine sources; the caller picks exactly one per process run.
    """

    def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> GossipConfig:
        ...
