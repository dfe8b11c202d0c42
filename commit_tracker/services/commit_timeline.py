"""
Commit Timeline component.

Turns one host-triggered refresh into a display record: reads the widget
configuration, asks the Commit Loader for the latest commit and falls back
to the failure commit when anything goes wrong. Also provides the static
placeholder and snapshot records shown in widget previews.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from commit_tracker.models.commit import (
    FAILED_COMMIT,
    UNKNOWN_IDENTITY,
    Commit,
    RepositoryIdentity,
)
from commit_tracker.models.configuration import WidgetConfiguration
from commit_tracker.models.display import DisplayRecord, FailureKind, Timeline
from commit_tracker.services.commit_loader import (
    CommitLoader,
    ParseError,
    TransportError,
    get_commit_loader,
)
from commit_tracker.utils.logging import get_logger, log_refresh_cycle


logger = get_logger(__name__)

PLACEHOLDER_COMMIT = Commit(message="message", author="author", date="date")
PLACEHOLDER_IDENTITY = RepositoryIdentity(account="account", repository="repo", branch="branch")

SNAPSHOT_COMMIT = Commit(message="Fixed stuff", author="John Appleseed", date="2020-06-23")
SNAPSHOT_IDENTITY = RepositoryIdentity(account="apple", repository="swift", branch="master")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CommitTimeline:
    """
    Builds display records for the configurable widget variant.

    Every call is an independent request/response cycle: nothing from a
    previous refresh is kept or compared against.
    """

    def __init__(
        self,
        loader: Optional[CommitLoader] = None,
        refresh_interval: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the Commit Timeline.

        Args:
            loader: Commit Loader to fetch with. If None, uses the global one.
            refresh_interval: Delay before the next refresh. If None, will load
                from settings.
            clock: Returns the current time
        """
        if refresh_interval is None:
            from commit_tracker.config import settings
            refresh_interval = timedelta(minutes=settings.refresh_interval_minutes)

        self.loader = loader or get_commit_loader()
        self.refresh_interval = refresh_interval
        self.clock = clock

    def placeholder(self) -> DisplayRecord:
        """Record shown before any data is available."""
        return DisplayRecord(
            observed_at=self.clock(),
            commit=PLACEHOLDER_COMMIT,
            identity=PLACEHOLDER_IDENTITY,
        )

    def snapshot(self) -> DisplayRecord:
        """Fixed example record for widget galleries."""
        return DisplayRecord(
            observed_at=self.clock(),
            commit=SNAPSHOT_COMMIT,
            identity=SNAPSHOT_IDENTITY,
        )

    def resolve_identity(
        self,
        configuration: Optional[WidgetConfiguration],
    ) -> Optional[RepositoryIdentity]:
        """
        Pick the identity to fetch for a refresh.

        Args:
            configuration: Host-supplied widget configuration

        Returns:
            RepositoryIdentity, or None when the configuration is incomplete
        """
        if configuration is None:
            return None
        return configuration.to_identity()

    async def produce_display_record(
        self,
        configuration: Optional[WidgetConfiguration] = None,
    ) -> DisplayRecord:
        """
        Run one refresh cycle and build the record to render.

        Args:
            configuration: Host-supplied widget configuration

        Returns:
            DisplayRecord that always carries a complete commit
        """
        observed_at = self.clock()
        identity = self.resolve_identity(configuration)

        if identity is None:
            log_refresh_cycle(
                logger,
                account=UNKNOWN_IDENTITY.account,
                repository=UNKNOWN_IDENTITY.repository,
                branch=UNKNOWN_IDENTITY.branch,
                outcome="fallback",
                failure=FailureKind.MISSING_CONFIGURATION.value,
            )
            return DisplayRecord(
                observed_at=observed_at,
                commit=FAILED_COMMIT,
                identity=UNKNOWN_IDENTITY,
                failure=FailureKind.MISSING_CONFIGURATION,
            )

        failure: Optional[FailureKind] = None
        error: Optional[str] = None
        try:
            commit = await self.loader.fetch(identity)
        except TransportError as e:
            commit, failure, error = FAILED_COMMIT, FailureKind.TRANSPORT, str(e)
        except ParseError as e:
            commit, failure, error = FAILED_COMMIT, FailureKind.PARSE, str(e)

        log_refresh_cycle(
            logger,
            account=identity.account,
            repository=identity.repository,
            branch=identity.branch,
            outcome="fallback" if failure else "loaded",
            failure=failure.value if failure else None,
            error=error,
        )

        return DisplayRecord(
            observed_at=observed_at,
            commit=commit,
            identity=identity,
            failure=failure,
        )

    async def get_timeline(
        self,
        configuration: Optional[WidgetConfiguration] = None,
    ) -> Timeline:
        """
        Build the timeline for one refresh: a single record plus the instant
        after which the host should refresh again.

        Args:
            configuration: Host-supplied widget configuration

        Returns:
            Timeline with one entry
        """
        record = await self.produce_display_record(configuration)
        return Timeline(
            entries=[record],
            refresh_after=record.observed_at + self.refresh_interval,
        )


class FixedCommitTimeline(CommitTimeline):
    """Widget variant hardcoded to a single repository branch."""

    def __init__(
        self,
        identity: Optional[RepositoryIdentity] = None,
        loader: Optional[CommitLoader] = None,
        refresh_interval: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the fixed-repository timeline.

        Args:
            identity: Repository to track. If None, will load from settings.
            loader: Commit Loader to fetch with
            refresh_interval: Delay before the next refresh
            clock: Returns the current time
        """
        super().__init__(loader=loader, refresh_interval=refresh_interval, clock=clock)

        if identity is None:
            from commit_tracker.config import settings
            identity = RepositoryIdentity(
                account=settings.fixed_account,
                repository=settings.fixed_repository,
                branch=settings.fixed_branch,
            )
        self.identity = identity

    def resolve_identity(
        self,
        configuration: Optional[WidgetConfiguration],
    ) -> Optional[RepositoryIdentity]:
        # Configuration input is ignored
        return self.identity
