# storefront/api/deps.py
import re
import secrets
import uuid
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, Request, Response
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.repos.cart_repo import CartStorage
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartStore
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.storage_client import StorageClient
from storefront.utils.settings import ADMIN_API_KEY, SESSION_COOKIE_NAME

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@lru_cache
def get_cart_storage() -> CartStorage:
    return CartStorage()


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_storage_client() -> StorageClient:
    return StorageClient()


def get_session_id(request: Request, response: Response) -> str:
    sid = request.cookies.get(SESSION_COOKIE_NAME) or request.headers.get("X-Session-Id")

    if not sid or not _SESSION_ID_RE.match(sid):
        sid = uuid.uuid4().hex

    response.set_cookie(SESSION_COOKIE_NAME, sid, httponly=True, samesite="lax")
    return sid


def get_cart_store(
    session_id: str = Depends(get_session_id),
    storage: CartStorage = Depends(get_cart_storage),
) -> CartStore:
    return CartStore(storage=storage, session_id=session_id)


def get_order_repo(db: Session = Depends(get_db)) -> OrderRepo:
    return OrderRepo(db)


def require_admin(x_admin_key: str | None = Header(default=None)):
    #bez skonfigurowanego klucza panel jest otwarty (dev)
    if ADMIN_API_KEY and not secrets.compare_digest((x_admin_key or "").encode(), ADMIN_API_KEY.encode()):
        raise HTTPException(status_code=403, detail="Acceso denegado")
