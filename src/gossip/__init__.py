"""Configuration subsystem of the gossip discussion board server."""

__version__ = "0.1.0"
