"""
Widget REST API endpoints.

Lets an HTTP-speaking host pull timelines and preview records instead of
running the refresh worker.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse

from commit_tracker.models.configuration import WidgetConfiguration
from commit_tracker.models.display import DisplayRecord, Timeline
from commit_tracker.services.commit_timeline import CommitTimeline, FixedCommitTimeline
from commit_tracker.services.renderer import render_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/widget", tags=["widget"])

# Initialize timelines for both widget variants
commit_timeline = CommitTimeline()
fixed_timeline = FixedCommitTimeline()


def _configuration(
    account: Optional[str],
    repo: Optional[str],
    branch: Optional[str],
) -> WidgetConfiguration:
    return WidgetConfiguration(account=account, repository=repo, branch=branch)


@router.get("/timeline", response_model=Timeline)
async def get_timeline(
    account: Optional[str] = Query(None),
    repo: Optional[str] = Query(None),
    branch: Optional[str] = Query(None),
) -> Timeline:
    """
    Run one refresh cycle for the configurable widget.

    Missing parameters produce the failure record without contacting GitHub.
    """
    try:
        return await commit_timeline.get_timeline(_configuration(account, repo, branch))
    except Exception as e:
        logger.error(f"Error building timeline: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/timeline/fixed", response_model=Timeline)
async def get_fixed_timeline() -> Timeline:
    """Run one refresh cycle for the fixed-repository widget."""
    try:
        return await fixed_timeline.get_timeline()
    except Exception as e:
        logger.error(f"Error building fixed timeline: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/placeholder", response_model=DisplayRecord)
async def get_placeholder() -> DisplayRecord:
    """Record shown before any data is available."""
    return commit_timeline.placeholder()


@router.get("/snapshot", response_model=DisplayRecord)
async def get_snapshot() -> DisplayRecord:
    """Example record for widget previews."""
    return commit_timeline.snapshot()


@router.get("/render", response_class=PlainTextResponse)
async def render_widget(
    account: Optional[str] = Query(None),
    repo: Optional[str] = Query(None),
    branch: Optional[str] = Query(None),
) -> str:
    """Run one refresh cycle and return the widget text."""
    try:
        record = await commit_timeline.produce_display_record(
            _configuration(account, repo, branch)
        )
    except Exception as e:
        logger.error(f"Error rendering widget: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    return render_entry(record)
