import time

from constructia.config.settings import Settings
from constructia.database.models import DocumentRecord
from constructia.database.repositories.documents_repository import DocumentsRepository
from constructia.logging.logger import Log
from constructia.worker.document_runner import DocumentRunner


class Worker:
    """Poll loop: fetch ready documents -> dispatch -> sleep when idle.

    A pending document whose handoff fails is not claimed, so it would come
    back on the next fetch. Such ids are skipped for worker_failed_retry_seconds.
    """

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        runner: DocumentRunner,
        settings: Settings,
    ) -> None:
        self._doc_repo = doc_repo
        self._runner = runner
        self._settings = settings
        self._failed_at: dict[str, float] = {}

    def run(self, max_documents: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_documents is set, stop after dispatching that many documents.
        """
        Log.info("Worker started, polling for documents ready for handoff")
        dispatched = 0
        try:
            while max_documents is None or dispatched < max_documents:
                batch = self._fetch_batch()
                if not batch:
                    Log.debug("No documents ready, sleeping")
                    time.sleep(self._settings.worker_poll_interval_seconds)
                    continue
                succeeded = 0
                for document in batch:
                    if self._dispatch(document):
                        succeeded += 1
                    dispatched += 1
                    if max_documents is not None and dispatched >= max_documents:
                        break
                if not succeeded:
                    Log.debug("No handoff succeeded in batch, sleeping")
                    time.sleep(self._settings.worker_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def _dispatch(self, document: DocumentRecord) -> bool:
        if self._runner.run(document) is not None:
            self._failed_at.pop(document.id, None)
            return True
        self._failed_at[document.id] = time.monotonic()
        return False

    def _fetch_batch(self) -> list[DocumentRecord]:
        """Load the next batch. Database errors are logged and retried next poll."""
        try:
            return self._doc_repo.find_ready_for_handoff(
                self._settings.worker_batch_size,
                exclude_ids=self._skipped_ids(),
            )
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return []

    def _skipped_ids(self) -> list[str]:
        cutoff = time.monotonic() - self._settings.worker_failed_retry_seconds
        self._failed_at = {
            doc_id: failed_at
            for doc_id, failed_at in self._failed_at.items()
            if failed_at > cutoff
        }
        return list(self._failed_at)
