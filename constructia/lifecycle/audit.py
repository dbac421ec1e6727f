from constructia.database.models import AuditAction, AuditLogEntry
from constructia.database.repositories.audit_log_repository import AuditLogRepository
from constructia.lifecycle.exceptions import AuditWriteError
from constructia.logging.logger import Log


class AuditLogWriter:
    """Appends one immutable audit entry per lifecycle transition."""

    def __init__(
        self,
        audit_repo: AuditLogRepository,
        *,
        user_agent: str,
        ip_address: str = "127.0.0.1",
    ) -> None:
        self._audit_repo = audit_repo
        self._user_agent = user_agent
        self._ip_address = ip_address

    def record(
        self,
        actor_id: str,
        client_id: str | None,
        action: AuditAction,
        detail: str,
    ) -> AuditLogEntry:
        """Persist an entry.

        Raises:
            AuditWriteError: if the entry could not be stored.
        """
        entry = AuditLogEntry(
            actor_id=actor_id,
            client_id=client_id,
            action=action,
            details=detail,
            ip_address=self._ip_address,
            user_agent=self._user_agent,
        )
        try:
            return self._audit_repo.insert(entry)
        except Exception as exc:
            raise AuditWriteError(f"Failed to write audit entry {action}: {exc}") from exc

    def record_best_effort(
        self,
        actor_id: str,
        client_id: str | None,
        action: AuditAction,
        detail: str,
    ) -> AuditLogEntry | None:
        """Like record(), but a write failure is logged instead of raised."""
        try:
            return self.record(actor_id, client_id, action, detail)
        except AuditWriteError as exc:
            Log.error(str(exc), client_id=client_id, detail=detail)
            return None
