"""Supabase Storage adapter.

Talks to the Storage REST API of the hosted backend with a service-role key.
Object paths are relative to the configured bucket.
"""

from urllib.parse import quote

import httpx

from constructia.storage.base import BaseFileStorage
from constructia.storage.exceptions import StorageError, StorageNotFoundError


class SupabaseStorage(BaseFileStorage):
    """Bucket-scoped file storage over the Supabase Storage API."""

    def __init__(
        self,
        *,
        base_url: str,
        service_key: str,
        bucket: str,
        timeout_seconds: int = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._bucket = bucket
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/storage/v1",
            headers={
                "Authorization": f"Bearer {service_key}",
                "apikey": service_key,
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    def read(self, path: str) -> bytes:
        response = self._request("GET", self._object_url(path))
        if response.status_code in (400, 404):
            raise StorageNotFoundError(f"File not found: {path}")
        self._raise_for_status(response, f"read {path}")
        return response.content

    def remove(self, path: str) -> None:
        response = self._request(
            "DELETE",
            f"/object/{quote(self._bucket)}",
            json={"prefixes": [self._object_key(path)]},
        )
        self._raise_for_status(response, f"remove {path}")

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        response = self._request(
            "POST",
            self._object_url(path),
            content=data,
            headers={"Content-Type": content_type, "x-upsert": "true"},
        )
        self._raise_for_status(response, f"upload {path}")

    def close(self) -> None:
        self._client.close()

    def _object_url(self, path: str) -> str:
        return f"/object/{quote(self._bucket)}/{quote(self._object_key(path))}"

    @staticmethod
    def _object_key(path: str) -> str:
        key = path.lstrip("/")
        if not key or ".." in key.split("/"):
            raise StorageError(f"Invalid object path: {path}")
        return key

    def _request(self, method: str, url: str, **kwargs: object) -> httpx.Response:
        try:
            return self._client.request(method, url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise StorageError(f"Storage request failed: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get("message", response.text) if isinstance(body, dict) else response.text
        raise StorageError(
            f"Storage failed to {operation}: HTTP {response.status_code} {message}"
        )
