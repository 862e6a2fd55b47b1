"""Fixed-interval polling of asynchronous provider jobs."""

import logging
import time
from typing import Any, Callable

from ..config import POLL_INTERVAL, POLL_TIMEOUT
from ..errors import GenerationTimeoutError, ProviderError

logger = logging.getLogger(__name__)

TERMINAL_STATES = frozenset({"succeeded", "failed", "canceled"})


class JobPoller:
    """Poll a job until it reaches a terminal state or the wall-clock ceiling passes."""

    def __init__(
        self,
        interval: float = POLL_INTERVAL,
        timeout: float = POLL_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        sleeper: Callable[[float], None] = time.sleep,
    ):
        self.interval = interval
        self.timeout = timeout
        self.clock = clock
        self.sleeper = sleeper

    def wait(
        self,
        job: dict[str, Any],
        fetch: Callable[[str], dict[str, Any]],
        label: str,
    ) -> dict[str, Any]:
        """
        Poll until terminal.

        Args:
            job: Job as returned by the submit call (needs "id" and "status")
            fetch: Returns the current job for an id
            label: Model display name used in the timeout message

        Returns:
            The job in its terminal state

        Raises:
            GenerationTimeoutError: ceiling elapsed before a terminal state
            ProviderError: a non-terminal job has no id to poll
        """
        job_id = job.get("id")
        if not job_id and job.get("status") not in TERMINAL_STATES:
            raise ProviderError(f"{label}: job response missing id")

        start = self.clock()
        while job.get("status") not in TERMINAL_STATES:
            if self.clock() - start > self.timeout:
                minutes = round(self.timeout / 60)
                raise GenerationTimeoutError(
                    f"{label}: Generation timed out after {minutes} minutes. "
                    "Video models may take longer - try again."
                )
            self.sleeper(self.interval)
            job = fetch(job_id)
            logger.info(f"Job {job_id} status: {job.get('status')}")
        return job
