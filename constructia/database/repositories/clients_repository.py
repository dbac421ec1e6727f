from typing import Any

from constructia.database.connection import get_connection
from constructia.database.models import ClientCredentials
from constructia.lifecycle.exceptions import ClientNotFoundError


def build_credentials(raw: Any) -> ClientCredentials:
    """Build credentials from the JSONB column. Anything malformed is unconfigured."""
    if not isinstance(raw, dict):
        return ClientCredentials()

    username = raw.get("username")
    password = raw.get("password")
    api_key = raw.get("api_key")
    if not isinstance(username, str) or not isinstance(password, str):
        return ClientCredentials()

    return ClientCredentials(
        username=username,
        password=password,
        configured=raw.get("configured") is True,
        api_key=api_key if isinstance(api_key, str) and api_key else None,
    )


class ClientsRepository:
    """Read access to the clients table."""

    def get_credentials(self, client_id: str) -> ClientCredentials:
        """Fetch the external platform credentials for a client.

        Raises:
            ClientNotFoundError: if no client with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT platform_credentials FROM clients WHERE id = %s",
                    (client_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ClientNotFoundError(f"Client {client_id} not found")
        return build_credentials(row[0])
