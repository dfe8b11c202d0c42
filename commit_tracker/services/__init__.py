"""Business logic services package."""

from commit_tracker.services.commit_loader import (
    CommitLoader,
    CommitLoaderError,
    TransportError,
    ParseError,
    parse_commit,
    get_commit_loader
)
from commit_tracker.services.commit_timeline import (
    CommitTimeline,
    FixedCommitTimeline
)
from commit_tracker.services.renderer import (
    RenderCallback,
    render_entry,
    print_entry
)

__all__ = [
    'CommitLoader',
    'CommitLoaderError',
    'TransportError',
    'ParseError',
    'parse_commit',
    'get_commit_loader',
    'CommitTimeline',
    'FixedCommitTimeline',
    'RenderCallback',
    'render_entry',
    'print_entry'
]
