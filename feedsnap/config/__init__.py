"""Configuration management for feedsnap."""

from .loader import Config, load_config, load_sources, parse_sources
from .models import BuildConfig, SourceConfig, normalize_source_record

__all__ = [
    "Config",
    "BuildConfig",
    "SourceConfig",
    "load_config",
    "load_sources",
    "parse_sources",
    "normalize_source_record",
]
