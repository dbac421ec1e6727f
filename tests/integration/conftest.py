import os
from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.types.json import Jsonb

from constructia.config.settings import Settings
from constructia.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "constructia_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Client ids to delete after the test. Documents cascade."""
    client_ids: list[str] = []
    yield client_ids
    if not client_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for client_id in client_ids:
                cur.execute("DELETE FROM audit_logs WHERE client_id = %s", (client_id,))
                cur.execute("DELETE FROM clients WHERE id = %s", (client_id,))
        conn.commit()


@pytest.fixture
def seed_client(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[str],
) -> Callable[..., str]:
    """Insert a client. Credentials default to a configured platform account."""

    def _seed(credentials: dict[str, Any] | None = None) -> str:
        if credentials is None:
            credentials = {"username": "obra", "password": "secret", "configured": True}
        with db_conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO clients (company_name, platform_credentials)
                VALUES (%s, %s)
                RETURNING id
                """,
                ("Construcciones Norte SL", Jsonb(credentials)),
            )
            row = cur.fetchone()
            assert row is not None
        db_conn.commit()
        client_id = str(row[0])
        integration_cleanup.append(client_id)
        return client_id

    return _seed


@pytest.fixture
def seed_stored_document(db_conn: psycopg.Connection[Any]) -> Callable[..., str]:
    """Insert a document row for an existing client and return its id."""

    def _seed(
        client_id: str,
        *,
        file_path: str = "docs/seguro_rc.pdf",
        upload_status: str = "pending",
        external_status: str = "pending",
        deletion_scheduled_at: datetime | None = None,
    ) -> str:
        with db_conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO documents
                    (client_id, file_path, original_name, mime_type,
                     upload_status, external_status, deletion_scheduled_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (
                    client_id,
                    file_path,
                    Path(file_path).name,
                    "application/pdf",
                    upload_status,
                    external_status,
                    deletion_scheduled_at,
                ),
            )
            row = cur.fetchone()
            assert row is not None
        db_conn.commit()
        return str(row[0])

    return _seed
