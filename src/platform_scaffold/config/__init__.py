"""Scaffold options and preflight checks."""

from platform_scaffold.config.loader import (
    get_local_config_path,
    get_manifest_path,
    load_manifest,
    load_options,
    local_config_exists,
)
from platform_scaffold.config.schema import (
    EXTRA_KEY,
    OptionSources,
    ScaffoldOptions,
    get_uri,
)

__all__ = [
    "EXTRA_KEY",
    "OptionSources",
    "ScaffoldOptions",
    "get_local_config_path",
    "get_manifest_path",
    "get_uri",
    "load_manifest",
    "load_options",
    "local_config_exists",
]
