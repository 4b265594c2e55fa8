"""
Bounded retry around a single-attempt call, independent of any API client.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from tenacity import RetryCallState, Retrying, retry_if_exception, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_WAIT = wait_exponential(multiplier=0.5, max=8)


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning("Attempt %d failed, retrying: %s", state.attempt_number, exc)


def call_with_retry(
    fn: Callable[[], T],
    *,
    max_attempts: int,
    is_retryable: Callable[[BaseException], bool],
    wait: Optional[wait_base] = None,
) -> T:
    """
    Call fn until it returns, up to max_attempts times.
    Errors rejected by is_retryable propagate at once; after the last attempt
    the final error is re-raised as is.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        retry=retry_if_exception(is_retryable),
        wait=wait if wait is not None else DEFAULT_WAIT,
        before_sleep=_log_retry,
        reraise=True,
    )
    return retrying(fn)
