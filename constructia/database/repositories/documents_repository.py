from collections.abc import Sequence
from datetime import datetime
from typing import Any

from psycopg.rows import dict_row

from constructia.database.connection import get_connection
from constructia.database.models import DocumentRecord, ExternalStatus, UploadStatus
from constructia.lifecycle.exceptions import DocumentNotFoundError, StaleDocumentError

_COLUMNS = """
    id, client_id, file_path, original_name, mime_type, file_size, file_hash,
    version, classification, classification_confidence, upload_status,
    external_status, external_id, deletion_scheduled_at, created_at
"""


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=str(row["id"]),
        client_id=str(row["client_id"]),
        file_path=row["file_path"],
        original_name=row["original_name"],
        mime_type=row["mime_type"],
        file_size=row["file_size"],
        file_hash=row["file_hash"],
        version=row["version"],
        classification=row["classification"],
        classification_confidence=row["classification_confidence"],
        upload_status=UploadStatus(row["upload_status"]),
        external_status=ExternalStatus(row["external_status"]),
        external_id=row["external_id"],
        deletion_scheduled_at=row["deletion_scheduled_at"],
        created_at=row["created_at"],
    )


class DocumentsRepository:
    """Database operations for the documents table."""

    def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_record(row)

    def find_ready_for_handoff(
        self, limit: int, exclude_ids: Sequence[str] = ()
    ) -> list[DocumentRecord]:
        """Pending documents whose client has usable credentials, oldest first.

        The client predicate matches build_credentials(): configured must be
        JSON true and username/password must be strings.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE upload_status = %s
                      AND NOT (id::text = ANY(%s))
                      AND client_id IN (
                          SELECT id FROM clients
                          WHERE jsonb_typeof(platform_credentials) = 'object'
                            AND platform_credentials -> 'configured' = 'true'::jsonb
                            AND jsonb_typeof(platform_credentials -> 'username') = 'string'
                            AND jsonb_typeof(platform_credentials -> 'password') = 'string'
                      )
                    ORDER BY created_at
                    LIMIT %s
                    """,
                    (UploadStatus.PENDING.value, list(exclude_ids), limit),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def mark_uploading(
        self,
        document_id: str,
        expected_status: UploadStatus,
        expected_version: int,
    ) -> None:
        """Move a document to uploading if nobody changed it since it was read.

        Raises:
            StaleDocumentError: if the status or version no longer match.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET upload_status = %s, external_status = %s
                    WHERE id = %s
                      AND upload_status = %s
                      AND version = %s
                    """,
                    (
                        UploadStatus.UPLOADING.value,
                        ExternalStatus.PENDING.value,
                        document_id,
                        expected_status.value,
                        expected_version,
                    ),
                )
                if cur.rowcount == 0:
                    raise StaleDocumentError(
                        f"Document {document_id} changed since it was read "
                        f"(expected status={expected_status}, version={expected_version})"
                    )
            conn.commit()

    def mark_uploaded(
        self,
        document_id: str,
        external_id: str | None,
        deletion_scheduled_at: datetime,
    ) -> None:
        """Record a successful external upload and schedule the file deletion.

        Raises:
            StaleDocumentError: if the document is no longer uploading.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET upload_status = %s,
                        external_status = %s,
                        external_id = %s,
                        deletion_scheduled_at = %s
                    WHERE id = %s AND upload_status = %s
                    """,
                    (
                        UploadStatus.UPLOADED.value,
                        ExternalStatus.VALIDATED.value,
                        external_id,
                        deletion_scheduled_at,
                        document_id,
                        UploadStatus.UPLOADING.value,
                    ),
                )
                if cur.rowcount == 0:
                    raise StaleDocumentError(f"Document {document_id} is no longer uploading")
            conn.commit()

    def update_classification(
        self, document_id: str, classification: str, confidence: int
    ) -> None:
        """Persist the AI classification label and its 0-100 confidence.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET classification = %s, classification_confidence = %s
                    WHERE id = %s
                    """,
                    (classification, confidence, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def find_due_for_deletion(self, now: datetime) -> list[DocumentRecord]:
        """Validated documents whose deletion date is at or before now."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE external_status = %s
                      AND deletion_scheduled_at IS NOT NULL
                      AND deletion_scheduled_at <= %s
                    ORDER BY deletion_scheduled_at
                    """,
                    (ExternalStatus.VALIDATED.value, now),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def mark_cleaned(self, document_id: str) -> None:
        """Finalize the lifecycle after the stored file has been removed.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET upload_status = %s, deletion_scheduled_at = NULL
                    WHERE id = %s
                    """,
                    (UploadStatus.COMPLETED.value, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()
