from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from constructia.database.models import (
    SYSTEM_ACTOR,
    AuditAction,
    ClientCredentials,
    UploadStatus,
)
from constructia.database.repositories.clients_repository import ClientsRepository
from constructia.database.repositories.documents_repository import DocumentsRepository
from constructia.lifecycle.audit import AuditLogWriter
from constructia.lifecycle.exceptions import (
    ClientNotFoundError,
    ConfigurationError,
    DocumentNotFoundError,
    ExternalUploadError,
    InvalidTransitionError,
)
from constructia.lifecycle.retry import RetryPolicy
from constructia.logging.logger import Log
from constructia.platform.base import BasePlatformClient
from constructia.platform.exceptions import PlatformError

_HANDOFF_STATUSES = frozenset({UploadStatus.PENDING, UploadStatus.UPLOADING})


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class HandoffResult:
    document_id: str
    external_id: str | None
    deletion_scheduled_at: datetime


class UploadHandoffService:
    """Moves one document from internal storage to the external validation platform.

    pending/uploading -> uploading (external pending) -> uploaded (external validated).
    A failed platform call leaves the document uploading so the handoff can be
    repeated later.
    """

    USER_AGENT = "ConstructIA-Handoff/1.0"

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        clients_repo: ClientsRepository,
        platform_client: BasePlatformClient,
        audit_writer: AuditLogWriter,
        retry_policy: RetryPolicy,
        *,
        retention_days: int = 7,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._doc_repo = doc_repo
        self._clients_repo = clients_repo
        self._platform_client = platform_client
        self._audit_writer = audit_writer
        self._retry_policy = retry_policy
        self._retention = timedelta(days=retention_days)
        self._clock = clock

    def handoff(
        self,
        document_id: str,
        client_id: str,
        file_path: str,
        classification: str | None = None,
        confidence: int | None = None,
    ) -> HandoffResult:
        """Upload a document to the external platform and schedule its deletion.

        Raises:
            ConfigurationError: client missing or credentials not configured.
            DocumentNotFoundError: document missing or owned by another client.
            InvalidTransitionError: document already past the upload stage.
            StaleDocumentError: document changed concurrently.
            ExternalUploadError: platform call failed after all retries.
        """
        if confidence is not None and not 0 <= confidence <= 100:
            raise ValueError(f"confidence must be between 0 and 100, got {confidence}")

        credentials = self._load_credentials(client_id)
        document = self._doc_repo.find_by_id(document_id)
        if document.client_id != client_id:
            raise DocumentNotFoundError(
                f"Document {document_id} not found for client {client_id}"
            )
        if document.upload_status not in _HANDOFF_STATUSES:
            raise InvalidTransitionError(
                f"Document {document_id} is {document.upload_status}, cannot hand off"
            )

        self._doc_repo.mark_uploading(document_id, document.upload_status, document.version)
        Log.info(f"Uploading document {document_id} to external platform", client_id=client_id)

        external_id = self._retry_policy.call(
            lambda: self._upload_once(credentials, file_path, classification, confidence),
            description=f"External upload of document {document_id}",
        )

        deletion_scheduled_at = self._clock() + self._retention
        self._doc_repo.mark_uploaded(document_id, external_id, deletion_scheduled_at)
        self._audit_writer.record_best_effort(
            SYSTEM_ACTOR,
            client_id,
            AuditAction.DOCUMENT_UPLOADED_EXTERNAL,
            f"Document {document_id} uploaded to external platform as {external_id}",
        )
        Log.info(
            f"Document {document_id} validated externally",
            external_id=external_id,
            deletion_scheduled_at=deletion_scheduled_at.isoformat(),
        )
        return HandoffResult(
            document_id=document_id,
            external_id=external_id,
            deletion_scheduled_at=deletion_scheduled_at,
        )

    def _load_credentials(self, client_id: str) -> ClientCredentials:
        try:
            credentials = self._clients_repo.get_credentials(client_id)
        except ClientNotFoundError as exc:
            raise ConfigurationError(str(exc)) from exc
        if not credentials.configured:
            raise ConfigurationError(
                f"External platform credentials not configured for client {client_id}"
            )
        return credentials

    def _upload_once(
        self,
        credentials: ClientCredentials,
        file_path: str,
        classification: str | None,
        confidence: int | None,
    ) -> str | None:
        try:
            result = self._platform_client.upload(
                credentials, file_path, classification, confidence
            )
        except PlatformError as exc:
            raise ExternalUploadError(str(exc)) from exc
        if not result.success:
            raise ExternalUploadError(result.error or "Unknown external platform error")
        return result.external_id
