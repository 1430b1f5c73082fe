"""Shared pytest fixtures: in-memory database, fake Redis, fake collaborators."""
from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_API_KEY"] = ""

from dataclasses import dataclass, field
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api import create_app
from storefront.api import deps
from storefront.data.database import Base, get_db
from storefront.domain.results import StoreResult
from storefront.repos.cart_repo import CartStorage
from storefront.services.cart_service import CartStore
from storefront.services.lock_service import LockService


@dataclass
class FakeRedisClient:
    data: dict[str, str] = field(default_factory=dict)
    expiry: dict[str, int] = field(default_factory=dict)

    def get(self, key: str):
        return self.data.get(key)

    def set(self, name: str, value: str, nx: bool = False, ex: int | None = None):
        if nx and name in self.data:
            return None
        self.data[name] = value
        if ex is not None:
            self.expiry[name] = ex
        return True

    def delete(self, key: str) -> int:
        existed = 1 if key in self.data else 0
        self.data.pop(key, None)
        self.expiry.pop(key, None)
        return existed

    def eval(self, _script: str, _keys_count: int, key: str, token: str) -> int:
        if self.data.get(key) == token:
            self.delete(key)
            return 1
        return 0

    def transaction(self, func, *_keys, value_from_callable: bool = False):
        result = func(FakePipeline(self))
        return result if value_from_callable else [True]


@dataclass
class FakePipeline:
    """WATCH/MULTI pipeline: reads go straight through, writes apply on set/delete."""

    client: FakeRedisClient
    in_multi: bool = False

    def get(self, key: str):
        return self.client.get(key)

    def multi(self):
        self.in_multi = True

    def set(self, name: str, value: str, ex: int | None = None):
        return self.client.set(name, value, ex=ex)

    def delete(self, key: str):
        return self.client.delete(key)


@dataclass
class FakeNotificationService:
    sent: list[tuple] = field(default_factory=list)
    fail: bool = False

    def send_new_order_notification(self, order_id, customer_name, total):
        if self.fail:
            raise ConnectionError("broker down")
        self.sent.append((order_id, customer_name, total))


@dataclass
class FakeStorageClient:
    prefix: str = "http://storage.test/storage/v1/object/public/images/"
    uploaded: list[tuple] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def owns(self, url):
        return bool(url) and url.startswith(self.prefix)

    def upload_image(self, filename, content, content_type):
        self.uploaded.append((filename, content, content_type))
        return StoreResult.success(f"{self.prefix}products/abc.png")

    def remove_image(self, url):
        self.removed.append(url)
        return StoreResult.success(url[len(self.prefix):])


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fake_redis() -> FakeRedisClient:
    return FakeRedisClient()


@pytest.fixture()
def cart_storage(fake_redis) -> CartStorage:
    return CartStorage(client=fake_redis)


@pytest.fixture()
def lock_service(fake_redis) -> LockService:
    return LockService(client=fake_redis)


@pytest.fixture()
def notifications() -> FakeNotificationService:
    return FakeNotificationService()


@pytest.fixture()
def storage_client() -> FakeStorageClient:
    return FakeStorageClient()


@pytest.fixture()
def cart(cart_storage) -> CartStore:
    return CartStore(storage=cart_storage, session_id="s1")


@pytest.fixture()
def client(db, cart_storage, lock_service, notifications, storage_client):
    app = create_app(init_database=False)

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[deps.get_cart_storage] = lambda: cart_storage
    app.dependency_overrides[deps.get_lock_service] = lambda: lock_service
    app.dependency_overrides[deps.get_notification_service] = lambda: notifications
    app.dependency_overrides[deps.get_storage_client] = lambda: storage_client

    with TestClient(app) as c:
        c.headers["X-Session-Id"] = "session-1"
        yield c
