"""Data models for the commit tracker widget."""

from .commit import FAILED_COMMIT, UNKNOWN_IDENTITY, Commit, RepositoryIdentity
from .configuration import WidgetConfiguration
from .display import DisplayRecord, FailureKind, Timeline

__all__ = [
    # Commit models
    "Commit",
    "RepositoryIdentity",
    "FAILED_COMMIT",
    "UNKNOWN_IDENTITY",
    # Configuration models
    "WidgetConfiguration",
    # Display models
    "DisplayRecord",
    "FailureKind",
    "Timeline",
]
