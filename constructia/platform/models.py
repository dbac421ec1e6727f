from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformUploadResult:
    """Outcome of one upload attempt on the external validation platform."""

    success: bool
    external_id: str | None = None
    error: str | None = None
