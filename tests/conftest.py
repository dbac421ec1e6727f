import io
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from constructia.database.models import DocumentRecord, ExternalStatus, UploadStatus
from constructia.lifecycle.exceptions import DocumentNotFoundError, StaleDocumentError


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page PDF with a recognisable insurance certificate line."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 720, "Certificado de seguro RC poliza POL789456")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.showPage()
    c.save()
    return buf.getvalue()


class InMemoryDocuments:
    """Dict-backed stand-in for DocumentsRepository with the same predicates."""

    def __init__(self, *documents: DocumentRecord) -> None:
        self.rows: dict[str, DocumentRecord] = {d.id: d for d in documents}

    def find_by_id(self, document_id: str) -> DocumentRecord:
        if document_id not in self.rows:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return self.rows[document_id]

    def mark_uploading(
        self, document_id: str, expected_status: UploadStatus, expected_version: int
    ) -> None:
        row = self.rows.get(document_id)
        if row is None or row.upload_status != expected_status or row.version != expected_version:
            raise StaleDocumentError(f"Document {document_id} changed since it was read")
        self.rows[document_id] = replace(
            row, upload_status=UploadStatus.UPLOADING, external_status=ExternalStatus.PENDING
        )

    def mark_uploaded(
        self, document_id: str, external_id: str | None, deletion_scheduled_at: datetime
    ) -> None:
        row = self.rows[document_id]
        if row.upload_status != UploadStatus.UPLOADING:
            raise StaleDocumentError(f"Document {document_id} is no longer uploading")
        self.rows[document_id] = replace(
            row,
            upload_status=UploadStatus.UPLOADED,
            external_status=ExternalStatus.VALIDATED,
            external_id=external_id,
            deletion_scheduled_at=deletion_scheduled_at,
        )

    def find_due_for_deletion(self, now: datetime) -> list[DocumentRecord]:
        return [
            row
            for row in self.rows.values()
            if row.external_status == ExternalStatus.VALIDATED
            and row.deletion_scheduled_at is not None
            and row.deletion_scheduled_at <= now
        ]

    def mark_cleaned(self, document_id: str) -> None:
        self.rows[document_id] = replace(
            self.rows[document_id],
            upload_status=UploadStatus.COMPLETED,
            deletion_scheduled_at=None,
        )


@pytest.fixture()
def in_memory_documents() -> type[InMemoryDocuments]:
    return InMemoryDocuments


@pytest.fixture()
def make_document() -> Callable[..., DocumentRecord]:
    """Build DocumentRecord instances with sensible defaults."""

    def _make(**overrides: Any) -> DocumentRecord:
        values: dict[str, Any] = {
            "id": "doc-1",
            "client_id": "client-1",
            "file_path": "client-1/doc-1.pdf",
            "original_name": "seguro_rc.pdf",
            "mime_type": "application/pdf",
            "upload_status": UploadStatus.PENDING,
            "external_status": ExternalStatus.PENDING,
            "version": 1,
        }
        values.update(overrides)
        return DocumentRecord(**values)

    return _make
