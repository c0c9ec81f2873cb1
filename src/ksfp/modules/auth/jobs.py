"""
Session Background Jobs

Two watchers keep a session honest while the portal runs:

1. Expiry check - every ``session_expiry_check_seconds`` (default 60) the
   session is logged out if its token has expired.
2. Inactivity logout - the session is logged out once no user activity has
   been recorded for ``session_inactivity_minutes`` (default 15). Each
   recorded activity pushes the deadline back.

Both are scheduler jobs; they stop when stop() is called or the scheduler
shuts down.
"""

import logging
from datetime import UTC, datetime, timedelta

from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from ksfp.core.config import settings
from ksfp.core.scheduler import register_job, unregister_job
from ksfp.modules.auth.session import SessionManager

logger = logging.getLogger(__name__)

# Job ID prefixes; the watcher name is appended
JOB_ID_EXPIRY_CHECK = "session_expiry_check"
JOB_ID_INACTIVITY_LOGOUT = "session_inactivity_logout"


class SessionWatcher:
    """Registers the expiry and inactivity jobs for one session."""

    def __init__(
        self,
        session: SessionManager,
        name: str = "default",
        check_interval_seconds: int | None = None,
        inactivity_minutes: int | None = None,
    ):
        self.session = session
        self.check_interval_seconds = (
            check_interval_seconds or settings.session_expiry_check_seconds
        )
        self.inactivity_window = timedelta(
            minutes=inactivity_minutes or settings.session_inactivity_minutes
        )
        self.expiry_job_id = f"{JOB_ID_EXPIRY_CHECK}:{name}"
        self.inactivity_job_id = f"{JOB_ID_INACTIVITY_LOGOUT}:{name}"
        self.last_activity_at: datetime | None = None

    async def check_expiry(self) -> None:
        """Expiry check job body."""
        if await self.session.check_expiry():
            logger.info(f"Expired session logged out by {self.expiry_job_id}")

    async def logout_inactive(self) -> None:
        """
        Inactivity job body; runs once the inactivity deadline passes.

        The one-shot job removes itself from the registry; record_activity()
        registers it again.
        """
        if await self.session.get_token():
            logger.info(
                f"No activity since {self.last_activity_at}, logging out ({self.inactivity_job_id})"
            )
            await self.session.logout()
        unregister_job(self.inactivity_job_id)

    def start(self) -> None:
        """Register both watchers and start the inactivity countdown."""
        register_job(
            self.expiry_job_id,
            self.check_expiry,
            IntervalTrigger(seconds=self.check_interval_seconds),
        )
        self.record_activity()
        logger.debug(f"Session watchers started: {self.expiry_job_id}, {self.inactivity_job_id}")

    def record_activity(self) -> datetime:
        """
        Note user activity and reset the inactivity deadline.

        Returns:
            The new logout deadline
        """
        self.last_activity_at = datetime.now(UTC)
        deadline = self.last_activity_at + self.inactivity_window
        register_job(
            self.inactivity_job_id,
            self.logout_inactive,
            DateTrigger(run_date=deadline),
        )
        return deadline

    def stop(self) -> None:
        """Remove both watcher jobs."""
        unregister_job(self.expiry_job_id)
        unregister_job(self.inactivity_job_id)
