import random
import time
from collections.abc import Callable
from typing import TypeVar

from constructia.config.settings import Settings
from constructia.lifecycle.exceptions import ExternalUploadError
from constructia.logging.logger import Log

T = TypeVar("T")


class RetryPolicy:
    """Bounded retries with capped exponential backoff and additive jitter.

    The delay before attempt n+1 is min(base * 2**(n-1), max) + uniform(0, jitter).
    """

    def __init__(
        self,
        *,
        max_attempts: int = 3,
        base_delay_seconds: float = 1.0,
        max_delay_seconds: float = 5.0,
        jitter_seconds: float = 0.5,
        retry_on: tuple[type[Exception], ...] = (ExternalUploadError,),
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self._base_delay = max(0.0, base_delay_seconds)
        self._max_delay = max(0.0, max_delay_seconds)
        self._jitter = max(0.0, jitter_seconds)
        self._retry_on = retry_on
        self._sleep = sleep
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.handoff_max_attempts,
            base_delay_seconds=settings.handoff_backoff_base_seconds,
            max_delay_seconds=settings.handoff_backoff_max_seconds,
            jitter_seconds=settings.handoff_backoff_jitter_seconds,
        )

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        delay = min(self._base_delay * 2 ** (attempt - 1), self._max_delay)
        if self._jitter:
            delay += self._rng.uniform(0.0, self._jitter)
        return delay

    def call(self, operation: Callable[[], T], description: str = "operation") -> T:
        """Run operation, retrying retryable errors until attempts run out."""
        attempt = 1
        while True:
            try:
                return operation()
            except self._retry_on as exc:
                if attempt >= self.max_attempts:
                    Log.error(
                        f"{description} failed after {attempt} attempt(s): {exc}"
                    )
                    raise
                delay = self.backoff_delay(attempt)
                Log.warning(
                    f"{description} failed (attempt {attempt}/{self.max_attempts}), "
                    f"retrying in {delay:.2f}s: {exc}"
                )
                self._sleep(delay)
                attempt += 1
