"""
Configuration management for the kubecharter package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file, cached after the first load.
"""

from .loader import load_main_config, load_toml_file
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
)
from .validators import validate_chart_config, validate_cluster_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_chart_config",
    "validate_cluster_config",
]
