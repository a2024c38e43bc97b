"""Retry decorators for storage writes.

Neo4j raises TransientError on deadlocks between concurrent MERGE
statements; those are safe to retry.
"""

from __future__ import annotations

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from app.core.logging import get_logger

logger = get_logger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log retry attempts with context."""
    logger.warning(
        "retry_attempt",
        attempt=retry_state.attempt_number,
        wait=getattr(retry_state.next_action, "sleep", None),
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
    )


def retry_neo4j_write(max_attempts: int = 4):
    """Retry decorator for Neo4j write operations on transient errors.

    Catches DeadlockDetected and other TransientErrors raised when two
    generation runs MERGE the same graph node at once.
    Uses jittered backoff to prevent thundering herd.
    """
    from neo4j.exceptions import TransientError

    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential_jitter(initial=0.2, max=10, jitter=2),
        retry=retry_if_exception_type(TransientError),
        before_sleep=_log_retry,
        reraise=True,
    )
