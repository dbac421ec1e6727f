import sys
from collections.abc import Sequence

from constructia.classification.base import BaseClassifier
from constructia.classification.factory import ClassifierFactory
from constructia.config.settings import Settings
from constructia.database.connection import close_pool, init_pool
from constructia.database.repositories.audit_log_repository import AuditLogRepository
from constructia.database.repositories.clients_repository import ClientsRepository
from constructia.database.repositories.documents_repository import DocumentsRepository
from constructia.lifecycle.audit import AuditLogWriter
from constructia.lifecycle.exceptions import LifecycleError, SweepQueryError
from constructia.lifecycle.handoff import UploadHandoffService
from constructia.lifecycle.retry import RetryPolicy
from constructia.lifecycle.sweeper import CleanupSweeper
from constructia.logging.logger import Log
from constructia.platform.factory import PlatformClientFactory
from constructia.storage.factory import StorageFactory
from constructia.worker.document_runner import DocumentRunner
from constructia.worker.worker import Worker


def build_handoff_service(settings: Settings) -> UploadHandoffService:
    """Wire the handoff service from settings."""
    audit_writer = AuditLogWriter(
        AuditLogRepository(),
        user_agent=UploadHandoffService.USER_AGENT,
        ip_address=settings.audit_ip_address,
    )
    return UploadHandoffService(
        DocumentsRepository(),
        ClientsRepository(),
        PlatformClientFactory.create(settings),
        audit_writer,
        RetryPolicy.from_settings(settings),
        retention_days=settings.retention_days,
    )


def build_sweeper(settings: Settings) -> CleanupSweeper:
    """Wire the cleanup sweeper from settings."""
    audit_writer = AuditLogWriter(
        AuditLogRepository(),
        user_agent=CleanupSweeper.USER_AGENT,
        ip_address=settings.audit_ip_address,
    )
    return CleanupSweeper(DocumentsRepository(), StorageFactory.create(settings), audit_writer)


def build_worker(settings: Settings) -> Worker:
    """Wire the polling worker from settings."""
    doc_repo = DocumentsRepository()
    classifier: BaseClassifier | None = None
    if settings.classification_enabled:
        classifier = ClassifierFactory.create(settings)
    runner = DocumentRunner(
        build_handoff_service(settings),
        doc_repo,
        StorageFactory.create(settings),
        classifier,
    )
    return Worker(doc_repo, runner, settings)


def _bootstrap() -> Settings:
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)
    return settings


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = _bootstrap()
    try:
        build_worker(settings).run()
    finally:
        close_pool()


def sweep_main() -> int:
    """Entry point for one scheduled cleanup sweep."""
    settings = _bootstrap()
    try:
        result = build_sweeper(settings).sweep()
    except SweepQueryError as exc:
        Log.error(f"Sweep aborted: {exc}")
        return 1
    finally:
        close_pool()
    Log.info(f"Cleanup done: {result.deleted} documents deleted, {result.errors} errors")
    return 0


def handoff_main(argv: Sequence[str] | None = None) -> int:
    """Entry point to retry the handoff of one document: constructia-handoff DOCUMENT_ID."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("usage: constructia-handoff DOCUMENT_ID", file=sys.stderr)
        return 2

    settings = _bootstrap()
    try:
        service = build_handoff_service(settings)
        document = DocumentsRepository().find_by_id(args[0])
        result = service.handoff(
            document.id,
            document.client_id,
            document.file_path,
            document.classification,
            document.classification_confidence,
        )
    except LifecycleError as exc:
        print(f"upload failed: {exc}", file=sys.stderr)
        return 1
    finally:
        close_pool()
    print(f"uploaded {result.document_id} as {result.external_id}")
    return 0


if __name__ == "__main__":
    main()
