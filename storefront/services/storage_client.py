# storefront/services/storage_client.py
import os
import secrets
from typing import Callable

import requests
from requests import RequestException

from storefront.domain.errors import ErrorKind
from storefront.domain.results import StoreResult
from storefront.utils.retry import http_retry
from storefront.utils.settings import IMAGES_BUCKET, STORAGE_SERVICE_KEY, STORAGE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class StorageClient:
    """
    Klient object storage (REST /storage/v1) dla zdjec produktow.
    Publiczny bucket, pliki w products/<losowa nazwa>.<ext>.
    """

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        bucket: str = IMAGES_BUCKET,
        timeout: int = 10,
        name_factory: Callable[[], str] | None = None,
    ):
        self.base_url = (base_url or STORAGE_URL).rstrip("/")
        self.service_key = STORAGE_SERVICE_KEY if service_key is None else service_key
        self.bucket = bucket
        self.timeout = timeout
        self.name_factory = name_factory or (lambda: secrets.token_hex(8))

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }

    @property
    def public_prefix(self) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/"

    def public_url(self, path: str) -> str:
        return f"{self.public_prefix}{path}"

    @http_retry()
    def _request(self, method: str, path: str, headers: dict | None = None, **kwargs) -> requests.Response:
        url = f"{self.base_url}/storage/v1/{path}"
        logger.info(f"StorageClient {method} {url}")

        resp = requests.request(
            method,
            url,
            headers={**self.headers, **(headers or {})},
            timeout=self.timeout,
            **kwargs,
        )
        resp.raise_for_status()
        return resp

    def ensure_bucket(self) -> StoreResult[str]:
        """Tworzy publiczny bucket jesli go nie ma."""
        try:
            buckets = self._request("GET", "bucket").json()
            if any(b.get("name") == self.bucket for b in buckets):
                return StoreResult.success(self.bucket)

            logger.info(f"Creating storage bucket {self.bucket}")
            self._request(
                "POST",
                "bucket",
                json={"id": self.bucket, "name": self.bucket, "public": True},
            )
        except RequestException as e:
            logger.error(f"Bucket check failed: {e}")
            return StoreResult.failure(ErrorKind.UNAVAILABLE, str(e))

        return StoreResult.success(self.bucket)

    def upload_image(self, filename: str, content: bytes, content_type: str | None) -> StoreResult[str]:
        ext = os.path.splitext(filename or "")[1].lstrip(".").lower() or "bin"
        path = f"products/{self.name_factory()}.{ext}"

        bucket = self.ensure_bucket()
        if not bucket.ok:
            return bucket

        try:
            self._request(
                "POST",
                f"object/{self.bucket}/{path}",
                data=content,
                headers={
                    "Content-Type": content_type or "application/octet-stream",
                    "x-upsert": "true",
                },
            )
        except RequestException as e:
            logger.error(f"Image upload failed for {path}: {e}")
            return StoreResult.failure(ErrorKind.UNAVAILABLE, str(e))

        logger.info(f"Uploaded image {path}")
        return StoreResult.success(self.public_url(path))

    def owns(self, url: str | None) -> bool:
        return bool(url) and url.startswith(self.public_prefix)

    def remove_image(self, url: str) -> StoreResult[str]:
        if not self.owns(url):
            return StoreResult.failure(ErrorKind.VALIDATION, "La imagen no pertenece al bucket")

        path = url[len(self.public_prefix):]

        try:
            self._request("DELETE", f"object/{self.bucket}", json={"prefixes": [path]})
        except RequestException as e:
            logger.error(f"Image removal failed for {path}: {e}")
            return StoreResult.failure(ErrorKind.UNAVAILABLE, str(e))

        return StoreResult.success(path)
