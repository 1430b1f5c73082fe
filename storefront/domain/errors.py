# storefront/domain/errors.py
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    IN_PROGRESS = "in_progress"
    ORDER_INSERT = "order_insert"
    ITEMS_INSERT = "items_insert"
    UPDATE = "update"
    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"


class CheckoutError(Exception):
    """Blad procesu zamowienia, zawsze do ponowienia przez uzytkownika."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class NotFoundError(Exception):
    pass
