import logging
import time
from typing import Callable, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryResult(BaseModel, Generic[T]):
    """
    Result of a bounded retry

    ``value`` is the last value produced by the operation, whether it was
    accepted or not. ``exhausted`` is True when no attempt was accepted.
    """
    value: Optional[T] = Field(None, description="Last value produced by the operation")
    attempts: int = Field(..., description="Number of attempts made", ge=1)
    exhausted: bool = Field(..., description="Whether no attempt was accepted")

    class Config:
        frozen = True

    @property
    def succeeded(self) -> bool:
        return not self.exhausted


def retry(
    max_attempts: int,
    interval: float,
    operation: Callable[[], T],
    accept: Callable[[T], bool] = bool,
    sleep: Callable[[float], None] = time.sleep,
    on_retry: Optional[Callable[[int, T], None]] = None,
) -> RetryResult[T]:
    """
    Run ``operation`` until ``accept`` returns True for its value

    Args:
        max_attempts: Total number of attempts, including the first one
        interval: Seconds to sleep between two attempts
        operation: Callable producing a value
        accept: Predicate deciding whether the value ends the loop
        sleep: Sleep function
        on_retry: Called with (attempt, value) after each rejected attempt

    Returns:
        RetryResult: last value, number of attempts and whether the bound was hit
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    value = None
    for attempt in range(1, max_attempts + 1):
        value = operation()
        if accept(value):
            return RetryResult(value=value, attempts=attempt, exhausted=False)

        if on_retry:
            on_retry(attempt, value)
        if attempt < max_attempts:
            sleep(interval)

    logger.debug(f"Giving up after {max_attempts} attempts")
    return RetryResult(value=value, attempts=max_attempts, exhausted=True)
