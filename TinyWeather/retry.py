"""Retry policy and a generic retry combinator for fallible operations."""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Tuple, Type, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    How many times to try an operation and how long to wait in between.

    The delay grows linearly: ``base_delay_seconds * attempt`` after the
    first, second, ... failed attempt.
    """
    max_attempts: int = 3
    base_delay_seconds: float = 1.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.base_delay_seconds < 0:
            raise ValueError(f"base_delay_seconds must not be negative, got {self.base_delay_seconds}")

    def delay_for(self, attempt: int) -> float:
        """Delay after the given 1-based failed attempt."""
        return self.base_delay_seconds * attempt


def call_with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
    description: str = "operation",
) -> T:
    """
    Run ``operation`` until it succeeds or the policy runs out of attempts.

    Args:
        operation: Zero-argument callable to run
        policy: Attempt count and delay schedule
        retry_on: Exception types that trigger a retry; anything else propagates immediately
        sleep: Function used to wait between attempts (patched in tests)
        description: Name used in log messages

    Returns:
        Whatever ``operation`` returns on its first successful attempt

    Raises:
        The error from the final attempt once all attempts have failed
    """
    last_error = None
    for attempt in range(1, policy.max_attempts + 1):
        try:
            logging.debug(f"{description} attempt {attempt}/{policy.max_attempts}")
            return operation()
        except retry_on as e:
            last_error = e
            logging.warning(f"{description} attempt {attempt} failed: {e}")
            if attempt < policy.max_attempts:
                retry_delay = policy.delay_for(attempt)
                logging.info(f"Retrying {description} in {retry_delay}s...")
                sleep(retry_delay)

    logging.error(f"{description} failed after {policy.max_attempts} attempts")
    raise last_error
