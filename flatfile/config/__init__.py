"""Configuration for the flatfile package."""

from flatfile.config.logging_config import configure_logging
from flatfile.config.settings import Settings, settings

__all__ = ["Settings", "configure_logging", "settings"]
