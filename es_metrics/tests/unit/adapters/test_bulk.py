"""Tests unitaires pour le framing bulk et l'upload."""

import json
import os

import httpx
import pytest

from es_metrics.adapters.elasticsearch import (
    AsyncBulkUploader,
    BulkUploader,
    serialize_bulk,
)
from es_metrics.core.errors import UploadFailure
from es_metrics.domain.models import Document, DocumentField


BULK_URL = "http://es.test:9200/_bulk"


def make_document(name, index="metrics", type_="Gauge", value=1.0):
    return Document(
        index=index,
        type=type_,
        fields=(
            DocumentField("Name", name),
            DocumentField("Tags", ["a"]),
            DocumentField("Value", value),
        ),
    )


class TestSerializeBulk:
    """Tests pour le format NDJSON."""

    def test_two_lines_per_document(self):
        documents = [
            make_document("a", index="metrics-2024-03-07"),
            make_document("b", type_="Counter"),
            make_document("c"),
        ]

        body = serialize_bulk(documents).decode("utf-8")
        lines = body.split(os.linesep)

        assert body.endswith(os.linesep)
        assert lines[-1] == ""
        lines = lines[:-1]
        assert len(lines) == 6

        for k, document in enumerate(documents):
            meta = json.loads(lines[2 * k])
            source = json.loads(lines[2 * k + 1])
            assert meta == {"index": {"_index": document.index, "_type": document.type}}
            assert source == document.source()
            assert list(source) == document.field_names

    def test_empty_batch(self):
        assert serialize_bulk([]) == b""

    def test_default_separator_is_platform(self):
        body = serialize_bulk([make_document("a")]).decode("utf-8")
        assert body.count(os.linesep) == 2
        assert body.endswith(os.linesep)

    def test_custom_separator(self):
        body = serialize_bulk([make_document("a")], line_separator="\r\n")
        assert body.count(b"\r\n") == 2

    def test_utf8(self):
        body = serialize_bulk([make_document("requêtes")])
        assert "requêtes" in json.loads(body.decode("utf-8").splitlines()[1])["Name"]


class TestBulkUploader:
    """Tests pour l'upload synchrone."""

    def test_posts_body_once(self, make_client):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"errors": False})

        uploader = BulkUploader(BULK_URL, client=make_client(handler))
        documents = [make_document("a"), make_document("b")]

        sent = uploader.send(documents)

        assert sent == 2
        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert str(requests[0].url) == BULK_URL
        assert requests[0].headers["Content-Type"] == "application/x-ndjson"
        assert requests[0].content == serialize_bulk(documents)

    def test_empty_batch_not_sent(self, make_client):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200)

        uploader = BulkUploader(BULK_URL, client=make_client(handler))

        assert uploader.send([]) == 0
        assert requests == []

    def test_http_error_raises_upload_failure(self, make_client):
        uploader = BulkUploader(
            BULK_URL, client=make_client(lambda request: httpx.Response(400, json={}))
        )

        with pytest.raises(UploadFailure) as exc_info:
            uploader.send([make_document("a")])

        assert exc_info.value.status_code == 400
        assert exc_info.value.document_count == 1
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_network_error_raises_upload_failure(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        uploader = BulkUploader(BULK_URL, client=make_client(handler))

        with pytest.raises(UploadFailure) as exc_info:
            uploader.upload(b"{}\n{}\n")

        assert exc_info.value.status_code is None
        assert exc_info.value.url == BULK_URL

    def test_malformed_url_raises_upload_failure(self):
        uploader = BulkUploader("http://localhost:abc/_bulk")

        with pytest.raises(UploadFailure) as exc_info:
            uploader.send([make_document("a")])

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    def test_no_retry(self, make_client):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        uploader = BulkUploader(BULK_URL, client=make_client(handler))

        with pytest.raises(UploadFailure):
            uploader.send([make_document("a")])

        assert len(calls) == 1


class TestAsyncBulkUploader:
    """Tests pour l'upload asynchrone."""

    @pytest.mark.asyncio
    async def test_posts_body(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"errors": False})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            uploader = AsyncBulkUploader(BULK_URL, client=client)
            sent = await uploader.send([make_document("a")])

        assert sent == 1
        assert requests[0].content == serialize_bulk([make_document("a")])

    @pytest.mark.asyncio
    async def test_error_raises_upload_failure(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        async with httpx.AsyncClient(transport=transport) as client:
            uploader = AsyncBulkUploader(BULK_URL, client=client)
            with pytest.raises(UploadFailure) as exc_info:
                await uploader.send([make_document("a")])

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_empty_batch_not_sent(self):
        uploader = AsyncBulkUploader(BULK_URL)
        assert await uploader.send([]) == 0

    @pytest.mark.asyncio
    async def test_malformed_url_raises_upload_failure(self):
        uploader = AsyncBulkUploader("http://localhost:abc/_bulk")

        with pytest.raises(UploadFailure) as exc_info:
            await uploader.send([make_document("a")])

        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
