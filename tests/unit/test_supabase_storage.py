import json

import httpx
import pytest

from constructia.storage.exceptions import StorageError, StorageNotFoundError
from constructia.storage.supabase_adapter import SupabaseStorage


def _make_storage(handler) -> SupabaseStorage:
    return SupabaseStorage(
        base_url="https://project.supabase.co/",
        service_key="service-key",
        bucket="documents",
        transport=httpx.MockTransport(handler),
    )


class TestRemove:
    def test_sends_prefixes_to_bucket(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"name": "client-1/a.pdf"}])

        _make_storage(handler).remove("client-1/a.pdf")

        request = seen[0]
        assert request.method == "DELETE"
        assert request.url.path == "/storage/v1/object/documents"
        assert json.loads(request.content) == {"prefixes": ["client-1/a.pdf"]}
        assert request.headers["Authorization"] == "Bearer service-key"
        assert request.headers["apikey"] == "service-key"

    def test_error_response_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "bucket offline"})

        with pytest.raises(StorageError, match="bucket offline"):
            _make_storage(handler).remove("client-1/a.pdf")

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(StorageError, match="Storage request failed"):
            _make_storage(handler).remove("client-1/a.pdf")


class TestRead:
    def test_returns_object_bytes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/storage/v1/object/documents/client-1/a.pdf"
            return httpx.Response(200, content=b"%PDF")

        assert _make_storage(handler).read("client-1/a.pdf") == b"%PDF"

    def test_missing_object_raises_not_found(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Object not found"})

        with pytest.raises(StorageNotFoundError):
            _make_storage(handler).read("client-1/a.pdf")


class TestUpload:
    def test_posts_content_with_upsert(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"Key": "documents/client-1/a.pdf"})

        _make_storage(handler).upload("client-1/a.pdf", b"%PDF", "application/pdf")

        request = seen[0]
        assert request.method == "POST"
        assert request.content == b"%PDF"
        assert request.headers["Content-Type"] == "application/pdf"
        assert request.headers["x-upsert"] == "true"


class TestPathValidation:
    def test_rejects_parent_segments(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        storage = _make_storage(handler)
        with pytest.raises(StorageError, match="Invalid object path"):
            storage.remove("../other-bucket/a.pdf")
        with pytest.raises(StorageError, match="Invalid object path"):
            storage.read("client-1/../../a.pdf")
