# storefront/domain/results.py
from dataclasses import dataclass
from typing import Generic, TypeVar

from storefront.domain.errors import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """
    Wynik wywolania zewnetrznego magazynu (baza, storage).
    Zamiast wyjatku zwracamy wartosc albo blad z rodzajem.
    """

    value: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, error: str) -> "StoreResult[T]":
        return cls(error=error, kind=kind)
