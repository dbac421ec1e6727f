from dataclasses import replace

from psycopg.rows import dict_row

from constructia.database.connection import get_connection
from constructia.database.models import AuditLogEntry


class AuditLogRepository:
    """Append-only access to the audit_logs table."""

    def insert(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Insert one entry and return it with its generated id and timestamp."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO audit_logs
                        (user_id, client_id, action, details, ip_address, user_agent)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING id, created_at
                    """,
                    (
                        entry.actor_id,
                        entry.client_id,
                        entry.action.value,
                        entry.details,
                        entry.ip_address,
                        entry.user_agent,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            return entry
        return replace(entry, id=row["id"], created_at=row["created_at"])
