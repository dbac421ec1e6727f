from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class UploadStatus(StrEnum):
    """Internal upload progress. Only ever advances left to right."""

    PENDING = "pending"
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    COMPLETED = "completed"


class ExternalStatus(StrEnum):
    """Status of the document on the external validation platform."""

    PENDING = "pending"
    VALIDATED = "validated"


class AuditAction(StrEnum):
    DOCUMENT_UPLOADED_EXTERNAL = "DOCUMENT_UPLOADED_EXTERNAL"
    DOCUMENT_DELETED_CLEANUP = "DOCUMENT_DELETED_CLEANUP"


SYSTEM_ACTOR = "system"


@dataclass(frozen=True)
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    client_id: str
    file_path: str
    mime_type: str
    upload_status: UploadStatus
    external_status: ExternalStatus
    version: int = 1
    original_name: str | None = None
    file_size: int | None = None
    file_hash: str | None = None
    classification: str | None = None
    classification_confidence: int | None = None
    external_id: str | None = None
    deletion_scheduled_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def file_name(self) -> str:
        return self.original_name or self.file_path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ClientCredentials:
    """External platform credentials stored on the clients table."""

    username: str = ""
    password: str = ""
    configured: bool = False
    api_key: str | None = None


@dataclass(frozen=True)
class AuditLogEntry:
    """Represents a row of the append-only audit_logs table."""

    actor_id: str
    client_id: str | None
    action: AuditAction
    details: str
    ip_address: str
    user_agent: str
    id: int | None = None
    created_at: datetime | None = None
