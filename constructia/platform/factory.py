from constructia.config.settings import Settings
from constructia.platform.base import BasePlatformClient
from constructia.platform.http_adapter import HttpPlatformClient
from constructia.platform.simulated_adapter import SimulatedPlatformClient


class PlatformClientFactory:
    """Creates the external platform adapter selected by settings."""

    PROVIDERS = ("simulated", "http")

    @classmethod
    def create(cls, settings: Settings) -> BasePlatformClient:
        provider = settings.platform_provider.lower()
        if provider == "simulated":
            return SimulatedPlatformClient(
                success_rate=settings.platform_simulated_success_rate,
                delay_seconds=settings.platform_simulated_delay_seconds,
                timeout_seconds=settings.platform_timeout_seconds,
            )
        if provider == "http":
            url = settings.platform_base_url.strip()
            if not url:
                raise ValueError("platform_base_url is required for platform_provider=http")
            return HttpPlatformClient(
                base_url=url,
                timeout_seconds=settings.platform_timeout_seconds,
            )
        raise ValueError(
            f"Unknown platform provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
