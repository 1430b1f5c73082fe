from __future__ import annotations

from dataclasses import dataclass, field

import pytest
import requests

from storefront.domain.errors import ErrorKind
from storefront.services import storage_client as storage_module
from storefront.services.storage_client import StorageClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@dataclass
class FakeHttp:
    buckets: list[dict] = field(default_factory=lambda: [{"name": "images"}])
    fail_upload: bool = False
    calls: list[tuple] = field(default_factory=list)

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        self.calls.append((method, url, headers, kwargs))
        if method == "GET" and url.endswith("/bucket"):
            return FakeResponse(payload=self.buckets)
        if method == "POST" and "/object/" in url and self.fail_upload:
            return FakeResponse(status_code=500)
        return FakeResponse()


@pytest.fixture()
def http(monkeypatch) -> FakeHttp:
    fake = FakeHttp()
    monkeypatch.setattr(storage_module.requests, "request", fake.request)
    return fake


@pytest.fixture()
def client() -> StorageClient:
    return StorageClient(
        base_url="http://storage.test/",
        service_key="secret",
        name_factory=lambda: "abc123",
    )


def test_upload_stores_under_products_and_returns_public_url(http, client) -> None:
    result = client.upload_image("Pizza.JPG", b"bytes", "image/jpeg")

    assert result.ok
    assert result.value == "http://storage.test/storage/v1/object/public/images/products/abc123.jpg"

    method, url, headers, kwargs = http.calls[-1]
    assert method == "POST"
    assert url == "http://storage.test/storage/v1/object/images/products/abc123.jpg"
    assert headers["Authorization"] == "Bearer secret"
    assert headers["Content-Type"] == "image/jpeg"
    assert headers["x-upsert"] == "true"
    assert kwargs["data"] == b"bytes"


def test_upload_creates_missing_bucket(http, client) -> None:
    http.buckets = []

    client.upload_image("a.png", b"x", "image/png")

    bucket_calls = [(m, kw.get("json")) for m, u, _, kw in http.calls if u.endswith("/bucket")]
    assert bucket_calls == [
        ("GET", None),
        ("POST", {"id": "images", "name": "images", "public": True}),
    ]


def test_upload_failure_is_reported(http, client) -> None:
    http.fail_upload = True

    result = client.upload_image("a.png", b"x", "image/png")

    assert not result.ok
    assert result.kind == ErrorKind.UNAVAILABLE
    assert "500" in result.error


def test_remove_image_by_public_url(http, client) -> None:
    url = client.public_url("products/abc123.png")

    result = client.remove_image(url)

    assert result.ok
    method, called_url, _, kwargs = http.calls[-1]
    assert (method, called_url) == ("DELETE", "http://storage.test/storage/v1/object/images")
    assert kwargs["json"] == {"prefixes": ["products/abc123.png"]}


def test_remove_foreign_image_is_refused(http, client) -> None:
    result = client.remove_image("https://cdn.example.com/pizza.jpg")

    assert result.kind == ErrorKind.VALIDATION
    assert http.calls == []
