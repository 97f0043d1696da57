# app/utils/retry.py
from sqlalchemy.exc import DBAPIError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception

from app.utils.settings import CHECKOUT_MAX_ATTEMPTS

# serialization_failure, deadlock_detected
PG_RETRY_ERRCODES = {"40001", "40P01"}

_RETRY_MESSAGES = ("deadlock detected", "could not serialize access", "database is locked")


def _pgcode_from(exc: BaseException):
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(exc, "pgcode", None)


def is_transient_db_error(exc: BaseException) -> bool:
    if not isinstance(exc, DBAPIError):
        return False
    code = _pgcode_from(exc)
    if code and code in PG_RETRY_ERRCODES:
        return True
    msg = str(exc).lower()
    return any(m in msg for m in _RETRY_MESSAGES)


def tx_retry(max_attempts: int | None = None):
    """Retries the whole unit of work; wrap only code that starts its own transaction."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(max_attempts or CHECKOUT_MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
        retry=retry_if_exception(is_transient_db_error),
    )
