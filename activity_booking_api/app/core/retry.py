"""
Retry helper for store calls.

``call_with_retry`` runs a blocking store operation in a worker thread
and retries it with exponential backoff when the store reports a
transient failure (a locked or busy database, I/O errors).  Any other
store error (a constraint violation, a bad parameter) is not retried
but is reported as ``StoreUnavailable`` just the same.  Only store
callables should be passed in: validation errors raised by services
are deterministic and must never be retried.
"""

import asyncio
import logging
import sqlite3
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from .config import settings
from .errors import StoreUnavailable


logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (sqlite3.OperationalError,)
STORE_ERRORS: Tuple[Type[BaseException], ...] = (sqlite3.Error,)


async def call_with_retry(
    operation: Callable[..., T],
    *args: Any,
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    retry_on: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
) -> T:
    """Run ``operation(*args)`` in a thread, retrying transient failures.

    Parameters
    ----------
    operation : Callable
        Blocking store callable.
    attempts : Optional[int]
        Total number of tries.  Defaults to ``settings.retry_attempts``.
    delay : Optional[float]
        Seconds to wait before the first retry; doubled after every
        failed attempt.  Defaults to ``settings.retry_delay``.
    retry_on : tuple
        Exception types considered transient.  Other ``STORE_ERRORS``
        fail on the first attempt.

    Raises
    ------
    StoreUnavailable
        When every attempt failed, or on a non-transient store error;
        chained from the last failure.
    """
    attempts = max(1, settings.retry_attempts if attempts is None else attempts)
    delay = settings.retry_delay if delay is None else delay
    name = getattr(operation, "__qualname__", repr(operation))

    for attempt in range(1, attempts + 1):
        try:
            return await asyncio.to_thread(operation, *args)
        except retry_on as exc:
            if attempt == attempts:
                logger.error("%s failed after %d attempts: %s", name, attempts, exc)
                raise StoreUnavailable() from exc
            logger.warning(
                "%s failed (attempt %d/%d), retrying in %.2fs: %s",
                name,
                attempt,
                attempts,
                delay,
                exc,
            )
            await asyncio.sleep(delay)
            delay *= 2
        except STORE_ERRORS as exc:
            logger.error("%s failed: %s", name, exc)
            raise StoreUnavailable() from exc
    # Unreachable: the loop either returns or raises.
    raise StoreUnavailable()
