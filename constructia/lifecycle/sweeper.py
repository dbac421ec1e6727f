from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from constructia.database.models import SYSTEM_ACTOR, AuditAction, DocumentRecord
from constructia.database.repositories.documents_repository import DocumentsRepository
from constructia.lifecycle.audit import AuditLogWriter
from constructia.lifecycle.exceptions import SweepQueryError
from constructia.lifecycle.handoff import utc_now
from constructia.logging.logger import Log
from constructia.storage.base import BaseFileStorage
from constructia.storage.exceptions import StorageError


@dataclass(frozen=True)
class SweepResult:
    deleted: int = 0
    errors: int = 0


class CleanupSweeper:
    """Deletes stored files of validated documents whose deletion date has passed."""

    USER_AGENT = "ConstructIA-Cleanup/1.0"

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        storage: BaseFileStorage,
        audit_writer: AuditLogWriter,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._doc_repo = doc_repo
        self._storage = storage
        self._audit_writer = audit_writer
        self._clock = clock

    def sweep(self, now: datetime | None = None) -> SweepResult:
        """Run one scan-and-delete cycle.

        Per-document failures are counted, never raised.

        Raises:
            SweepQueryError: if the candidate query fails; nothing is mutated.
        """
        now = now or self._clock()
        try:
            documents = self._doc_repo.find_due_for_deletion(now)
        except Exception as exc:
            raise SweepQueryError(f"Failed to load documents due for deletion: {exc}") from exc

        Log.info(f"Sweep found {len(documents)} document(s) due for deletion", now=now.isoformat())
        deleted = 0
        errors = 0
        for document in documents:
            if self._clean(document):
                deleted += 1
            else:
                errors += 1

        Log.info(f"Sweep finished: {deleted} deleted, {errors} errors")
        return SweepResult(deleted=deleted, errors=errors)

    def _clean(self, document: DocumentRecord) -> bool:
        try:
            self._storage.remove(document.file_path)
        except StorageError as exc:
            Log.error(f"Failed to delete file {document.file_path}: {exc}", document_id=document.id)
            return False

        try:
            self._doc_repo.mark_cleaned(document.id)
        except Exception as exc:
            Log.error(f"Failed to finalize document {document.id}: {exc}")
            return False

        self._audit_writer.record_best_effort(
            SYSTEM_ACTOR,
            document.client_id,
            AuditAction.DOCUMENT_DELETED_CLEANUP,
            f"Document {document.file_path} deleted after external validation",
        )
        return True
