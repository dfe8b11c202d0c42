"""
Refresh worker process.

Plays the host's part for headless deployments: runs one refresh cycle,
hands the record to a rendering callback, then waits until the timeline's
refresh hint before the next cycle. Cycles never overlap. Implements
graceful shutdown on SIGTERM.
"""

import asyncio
import signal
import sys
import uuid
from datetime import datetime, timezone
from typing import Optional

from commit_tracker.config import settings
from commit_tracker.models.configuration import WidgetConfiguration
from commit_tracker.models.display import Timeline
from commit_tracker.services.commit_timeline import CommitTimeline, FixedCommitTimeline
from commit_tracker.services.renderer import RenderCallback, print_entry
from commit_tracker.utils.logging import setup_logging, get_logger

logger = get_logger(__name__)


def build_timeline() -> CommitTimeline:
    """Create the timeline for the configured widget variant."""
    if settings.widget_variant == "fixed":
        return FixedCommitTimeline()
    return CommitTimeline()


def build_configuration() -> WidgetConfiguration:
    """Widget configuration taken from settings."""
    return WidgetConfiguration(
        account=settings.widget_account,
        repository=settings.widget_repository,
        branch=settings.widget_branch,
    )


class Worker:
    """Worker process that refreshes the widget on the timeline's schedule."""

    def __init__(
        self,
        timeline: Optional[CommitTimeline] = None,
        configuration: Optional[WidgetConfiguration] = None,
        render: RenderCallback = print_entry,
    ):
        """
        Initialize the worker.

        Args:
            timeline: Timeline producing display records
            configuration: Widget configuration passed on every refresh
            render: Callback receiving each display record
        """
        self.timeline = timeline or build_timeline()
        self.configuration = configuration if configuration is not None else build_configuration()
        self.render = render
        self.running = False
        self._shutdown_event = asyncio.Event()
        self._stop_task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        """
        Start the worker process.

        Registers signal handlers and begins the refresh loop.
        """
        logger.info("Starting refresh worker...")

        self.running = True
        self._register_signal_handlers()

        await self._refresh_loop()

    async def stop(self) -> None:
        """Stop the worker; a cycle in progress is allowed to finish."""
        if not self.running:
            return

        logger.info("Stopping refresh worker...")
        self.running = False
        self._shutdown_event.set()

    async def run_once(self) -> Timeline:
        """
        Run a single refresh cycle and render its record.

        Returns:
            Timeline produced by the cycle
        """
        cycle_logger = logger.with_context(cycle_id=uuid.uuid4().hex[:12])

        timeline = await self.timeline.get_timeline(self.configuration)

        for entry in timeline.entries:
            self.render(entry)

        cycle_logger.info(
            f"Rendered {len(timeline.entries)} entry(ies), next refresh after "
            f"{timeline.refresh_after.isoformat()}"
        )
        return timeline

    async def _refresh_loop(self) -> None:
        """
        Main refresh loop.

        Waits on the shutdown event between cycles so a stop request does not
        have to sit out the whole refresh interval.
        """
        while self.running:
            try:
                timeline = await self.run_once()
                delay = seconds_until(timeline.refresh_after)

            except asyncio.CancelledError:
                logger.info("Refresh loop cancelled")
                break

            except Exception as e:
                logger.error(f"Error during refresh cycle: {e}", exc_info=True)
                delay = self.timeline.refresh_interval.total_seconds()

            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                continue

        logger.info("Refresh loop stopped")

    def _register_signal_handlers(self) -> None:
        """Register signal handlers for graceful shutdown."""

        def signal_handler(signum, frame):
            """Handle shutdown signals."""
            signal_name = signal.Signals(signum).name
            logger.info(f"Received signal {signal_name}, initiating graceful shutdown...")
            # The loop only keeps a weak reference to tasks
            self._stop_task = asyncio.create_task(self.stop())

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)


def seconds_until(moment: datetime) -> float:
    """Seconds from now until ``moment``, never negative."""
    remaining = (moment - datetime.now(timezone.utc)).total_seconds()
    return max(remaining, 0.0)


async def main():
    """Main entry point for the worker process."""
    setup_logging(settings.log_level.upper())
    logger.info(f"Worker process starting ({settings.widget_variant} variant)...")

    worker = Worker()

    try:
        await worker.start()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    except Exception as e:
        logger.error(f"Worker process failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await worker.stop()


if __name__ == "__main__":
    asyncio.run(main())
