"""
Plain-text rendering of display records.

Layout:

    apple/swift's master Latest Commit
    Fixed stuff
    by John Appleseed at 2020-06-23
    Updated at 06-23-2020 10:15
"""

from typing import Callable

from commit_tracker.models.display import DisplayRecord

# Rendering callbacks are supplied by the host
RenderCallback = Callable[[DisplayRecord], None]

UPDATED_AT_FORMAT = "%m-%d-%Y %H:%M"


def format_updated_at(record: DisplayRecord) -> str:
    """Format the observation time in local time."""
    return record.observed_at.astimezone().strftime(UPDATED_AT_FORMAT)


def render_entry(record: DisplayRecord) -> str:
    """
    Render a display record as the widget's four text lines.

    Args:
        record: Record to render

    Returns:
        Newline-separated widget text
    """
    identity = record.identity
    commit = record.commit
    return "\n".join([
        f"{identity.full_name}'s {identity.branch} Latest Commit",
        commit.message,
        f"by {commit.author} at {commit.date}",
        f"Updated at {format_updated_at(record)}",
    ])


def print_entry(record: DisplayRecord) -> None:
    """Rendering callback that writes the widget text to stdout."""
    print(render_entry(record), flush=True)
