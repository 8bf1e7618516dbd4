from connkit.config.loader import (
    get_config_search_paths,
    get_platform_config_path,
    load_settings,
    merge_cli_overrides,
    resolve_config_path,
)
from connkit.config.settings import ExecMode, LogLevel, Settings, get_platform_data_dir

__all__ = [
    "ExecMode",
    "LogLevel",
    "Settings",
    "get_config_search_paths",
    "get_platform_config_path",
    "get_platform_data_dir",
    "load_settings",
    "merge_cli_overrides",
    "resolve_config_path",
]
