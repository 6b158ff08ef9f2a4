"""Caller-side lock polling.

Resource never retries on its own. These helpers are the explicit loop a
caller writes around try_lock, with the waits handled by tenacity.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from .exceptions import ErrorKind, ResourceError
from .outcomes import Failure
from .resource import Resource

logger = logging.getLogger("small-resource-client")


def _not_granted(result: bool) -> bool:
    return result is False


def acquire_lock(
    resource: Resource,
    selector: str,
    attempts: int = 10,
    wait: float = 0.5,
) -> bool:
    """Probe for the lock until it is granted or attempts run out.

    Args:
        resource: Handle to probe; its ticket is replayed on every attempt
        selector: Selector to lock
        attempts: Maximum number of try_lock calls
        wait: Seconds to sleep between attempts

    Returns:
        True once the lock is granted, False if every attempt was pending.

    Raises:
        ResourceError: Immediately, on the first failed probe.
    """
    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(wait),
        retry=retry_if_result(_not_granted),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        retry_error_callback=lambda state: False,
        reraise=True,
    )
    return retrying(resource.try_lock, selector)


@contextmanager
def locked(
    resource: Resource,
    selector: str,
    attempts: int = 10,
    wait: float = 0.5,
) -> Iterator[Resource]:
    """Hold the lock on a selector for the duration of a block.

    Usage:
        with locked(resource, "queue") as res:
            res.write("queue", {"status": "done"})

    Raises:
        ResourceError: LOCK_NOT_ACQUIRED if the lock was never granted, or
            the unlock failure when the block itself succeeded.
    """
    if not acquire_lock(resource, selector, attempts=attempts, wait=wait):
        raise ResourceError(
            ErrorKind.LOCK_NOT_ACQUIRED,
            f"Lock on {resource.name}/{selector} not granted after {attempts} attempts",
        )

    try:
        yield resource
    except BaseException:
        outcome = resource.unlock(selector)
        if isinstance(outcome, Failure):
            logger.warning(f"Unlock of {resource.name}/{selector} failed: {outcome.to_error()}")
        raise

    outcome = resource.unlock(selector)
    if isinstance(outcome, Failure):
        outcome.raise_error()
