"""
Bounded retry for transient database contention.

Serialization failures, deadlocks and locked SQLite files are worth another
attempt; business-rule errors are stable outcomes and propagate at once.
"""
from functools import wraps
from typing import Callable
from sqlalchemy.exc import DBAPIError, OperationalError
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_random_exponential
from app.core.config import settings
from app.core.logging import logger

# SQLSTATE codes PostgreSQL uses for serialization_failure and deadlock_detected
TRANSIENT_SQLSTATES = {"40001", "40P01"}


def is_transient_db_error(exc: BaseException) -> bool:
    if isinstance(exc, OperationalError):
        return True
    if isinstance(exc, DBAPIError):
        orig = exc.orig
        sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        return sqlstate in TRANSIENT_SQLSTATES
    return False


def retry_on_contention(func: Callable) -> Callable:
    """
    Retry a service method when the store reports transient contention.

    The decorated method must belong to an object exposing ``session``; the
    session is rolled back before each new attempt so the whole unit of work
    re-runs from a clean transaction.
    """
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        retrying = AsyncRetrying(
            stop=stop_after_attempt(settings.DB_RETRY_ATTEMPTS),
            wait=wait_random_exponential(multiplier=0.05, max=settings.DB_RETRY_MAX_WAIT),
            retry=retry_if_exception(is_transient_db_error),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                try:
                    return await func(self, *args, **kwargs)
                except DBAPIError as e:
                    await self.session.rollback()
                    if is_transient_db_error(e):
                        logger.warning(
                            f"Transient store error in {func.__name__} "
                            f"(attempt {attempt.retry_state.attempt_number}): {e.orig}"
                        )
                    raise
    return wrapper
