"""Bounded retry of commands that lose an optimistic-concurrency race."""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from marketplace.errors import ConcurrentModification
from marketplace.utils.settings import setting

logger = structlog.get_logger(__name__)


def process_with_retry(command):
    """Process ``command``, re-running it when a stale aggregate version is detected.

    Each attempt re-reads every aggregate it touches, so a retried order
    placement sees the stock left by whichever request won the race.
    """
    attempts = setting("order_retry_attempts")
    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError:
            logger.warning(
                "Concurrent modification detected, retrying",
                command=command.__class__.__name__,
                attempt=attempt,
                max_attempts=attempts,
            )
    raise ConcurrentModification("The data changed while your request was processed. Please try again.")
