class PlatformError(Exception):
    """Raised when the external validation platform cannot be reached or used."""


class PlatformNetworkError(PlatformError):
    """Raised on timeouts and transport failures talking to the platform."""
