# legacy_orders/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from legacy_orders.domain.errors import LockTimeout
from legacy_orders.utils.settings import LOCK_RETRY_ATTEMPTS


def lock_retry(attempts: int | None = None):
    """
    Retry po stronie wywolujacego, tylko dla LockTimeout.
    StorageFailure i bledy walidacji leca dalej od razu.
    """
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts or LOCK_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type(LockTimeout),
    )
