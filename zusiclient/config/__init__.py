"""Configuration and logging setup for zusiclient."""

from .logging import StructuredLogFormatter, configure_logging
from .settings import ClientConfig, load_client_config, load_client_config_file

__all__ = [
    "ClientConfig",
    "StructuredLogFormatter",
    "configure_logging",
    "load_client_config",
    "load_client_config_file",
]
