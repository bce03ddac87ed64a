"""
Utility modules for the jobmatch engine.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Scoring tables and enumerations
"""

from jobmatch.utils.config import (
    AppSettings,
    MatchingSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
)
from jobmatch.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    JobType,
    MatchReasonType,
    MatchScoreLevel,
    MatchingEfficiency,
    SortMode,
    WorkMode,
)
from jobmatch.utils.logger import (
    setup_logging,
    get_logger,
    log,
)

__all__ = [
    # Config
    "AppSettings",
    "MatchingSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "JobType",
    "MatchReasonType",
    "MatchScoreLevel",
    "MatchingEfficiency",
    "SortMode",
    "WorkMode",
    # Logger
    "setup_logging",
    "get_logger",
    "log",
]
