import httpx

from constructia.database.models import ClientCredentials
from constructia.platform.base import BasePlatformClient
from constructia.platform.exceptions import PlatformError, PlatformNetworkError
from constructia.platform.models import PlatformUploadResult


class HttpPlatformClient(BasePlatformClient):
    """Platform adapter for a JSON-over-HTTP upload endpoint.

    POST {base_url}/documents with the document reference and classification.
    The response body is expected to be {"success", "external_id", "error"}.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
        )

    def upload(
        self,
        credentials: ClientCredentials,
        file_path: str,
        classification: str | None = None,
        confidence: int | None = None,
    ) -> PlatformUploadResult:
        headers = {"Accept": "application/json"}
        if credentials.api_key:
            headers["X-API-Key"] = credentials.api_key

        try:
            response = self._client.post(
                "/documents",
                auth=(credentials.username, credentials.password),
                headers=headers,
                json={
                    "file_path": file_path,
                    "classification": classification,
                    "confidence": confidence,
                },
            )
        except httpx.TimeoutException as exc:
            raise PlatformNetworkError(f"External platform timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise PlatformNetworkError(f"External platform network error: {exc}") from exc

        payload = self._parse_body(response)
        if not response.is_success:
            error = payload.get("error") or f"HTTP {response.status_code}"
            return PlatformUploadResult(success=False, error=str(error))

        if payload.get("success") is True:
            external_id = payload.get("external_id")
            return PlatformUploadResult(
                success=True,
                external_id=str(external_id) if external_id is not None else None,
            )
        error = payload.get("error") or "Unknown external platform error"
        return PlatformUploadResult(success=False, error=str(error))

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _parse_body(response: httpx.Response) -> dict[str, object]:
        try:
            payload = response.json()
        except ValueError as exc:
            if not response.is_success:
                return {}
            raise PlatformError("External platform returned a non-JSON response") from exc
        if not isinstance(payload, dict):
            raise PlatformError("External platform response must be a JSON object")
        return payload
