"""
Configuration module for giseki.

設定管理の一元化モジュール。settings.pyが唯一のエントリーポイント。
"""

from src.infrastructure.config.election_reference_loader import (
    load_election_reference,
    parse_election_reference,
)
from src.infrastructure.config.settings import (
    ENV_FILE_PATH,
    Settings,
    find_env_file,
    get_settings,
    reload_settings,
)


__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    "find_env_file",
    "ENV_FILE_PATH",
    # Election reference
    "load_election_reference",
    "parse_election_reference",
]
