"""
Utility modules for the commit tracker.
"""

from commit_tracker.utils.logging import (
    get_logger,
    setup_logging,
    log_api_call,
    log_refresh_cycle,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_refresh_cycle",
]
