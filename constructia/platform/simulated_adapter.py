"""Stand-in for the external validation platform.

The real Obralia/Nalanda integration does not exist yet. This adapter waits a
configurable delay and succeeds with a configurable probability so the rest of
the lifecycle can run end to end.
"""

import random
import time
from collections.abc import Callable

from constructia.database.models import ClientCredentials
from constructia.logging.logger import Log
from constructia.platform.base import BasePlatformClient
from constructia.platform.exceptions import PlatformNetworkError
from constructia.platform.models import PlatformUploadResult


class SimulatedPlatformClient(BasePlatformClient):
    """Simulated platform with a fixed latency and success rate."""

    FAILURE_MESSAGE = "Connection error with external platform"

    def __init__(
        self,
        *,
        success_rate: float = 0.9,
        delay_seconds: float = 2.0,
        timeout_seconds: float = 30.0,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError("success_rate must be between 0 and 1")
        self._success_rate = success_rate
        self._delay_seconds = max(0.0, delay_seconds)
        self._timeout_seconds = timeout_seconds
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._clock = clock

    def upload(
        self,
        credentials: ClientCredentials,
        file_path: str,
        classification: str | None = None,
        confidence: int | None = None,
    ) -> PlatformUploadResult:
        Log.debug(
            "Simulated platform upload",
            user=credentials.username,
            file_path=file_path,
            classification=classification,
            confidence=confidence,
        )
        if self._delay_seconds > self._timeout_seconds:
            self._sleep(self._timeout_seconds)
            raise PlatformNetworkError(
                f"External platform timed out after {self._timeout_seconds}s"
            )
        if self._delay_seconds:
            self._sleep(self._delay_seconds)

        if self._rng.random() < self._success_rate:
            return PlatformUploadResult(
                success=True,
                external_id=f"OBR_{int(self._clock() * 1000)}",
            )
        return PlatformUploadResult(success=False, error=self.FAILURE_MESSAGE)
