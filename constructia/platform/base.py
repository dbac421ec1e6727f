from abc import ABC, abstractmethod

from constructia.database.models import ClientCredentials
from constructia.platform.models import PlatformUploadResult


class BasePlatformClient(ABC):
    """Contract for external validation platform adapters."""

    @abstractmethod
    def upload(
        self,
        credentials: ClientCredentials,
        file_path: str,
        classification: str | None = None,
        confidence: int | None = None,
    ) -> PlatformUploadResult:
        """Submit one stored document to the platform.

        Args:
            credentials: The owning client's platform credentials.
            file_path: Storage path of the document file.
            classification: Optional AI classification label.
            confidence: Optional classification confidence, 0-100.

        Returns:
            PlatformUploadResult; a rejected upload is a result with success=False.

        Raises:
            PlatformError: if the platform could not be reached at all.
        """
