"""Retry wrapper for store calls.

Re-attempts a coroutine factory when the failure looks like the store could
not be reached. Anything else propagates on the first occurrence.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from site_ratings.lib.exceptions import StoreConnectionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 1.0

# Message fragment of a failed connection handshake. Store backends raise
# StoreConnectionError with this phrase; bare exceptions carrying it from
# other clients are treated the same way.
TRANSIENT_ERROR_PHRASE = "Could not establish connection"


def is_transient_error(error: BaseException) -> bool:
    """True when ``error`` means the store could not be reached."""
    if isinstance(error, StoreConnectionError):
        return True
    return TRANSIENT_ERROR_PHRASE in str(error)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = MAX_ATTEMPTS,
    delay_seconds: float = RETRY_DELAY_SECONDS,
    operation_name: Optional[str] = None,
) -> T:
    """Run ``operation`` with bounded retries on transient failures.

    The delay is constant between attempts. Once the attempt budget is spent,
    the error from the last attempt is raised, not the first.

    Args:
        operation: Zero-argument callable returning an awaitable.
        max_attempts: Total attempts including the first.
        delay_seconds: Pause after each transient failure.
        operation_name: Label for log messages.

    Returns:
        The value of the first successful attempt.

    Raises:
        ValueError: If ``max_attempts`` is less than 1.
        Exception: The first non-transient error, or the last transient one.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    name = operation_name or getattr(operation, "__name__", "operation")
    last_error: Optional[BaseException] = None

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if not is_transient_error(e):
                raise

            last_error = e
            if attempt < max_attempts:
                logger.warning(
                    'Transient error in %s (attempt %d/%d): %s. Retrying in %.2fs...',
                    name, attempt, max_attempts, e, delay_seconds,
                )
                await asyncio.sleep(delay_seconds)

    logger.error('%s failed after %d attempts. Last error: %s', name, max_attempts, last_error)
    raise last_error
