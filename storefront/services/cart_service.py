# storefront/services/cart_service.py
import json
from dataclasses import replace
from decimal import Decimal
from typing import Callable, List

from redis.exceptions import RedisError

from storefront.domain.cart import CartItem, CartSnapshot
from storefront.repos.cart_repo import CartStorage
from storefront.utils.settings import CART_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartStore:
    """
    Koszyk jednej sesji przegladarki.

    Tworzony jawnie (na request) i przekazywany dalej - brak globalnego stanu.
    Kazda zmiana to atomowy read-modify-write na aktualnym stanie w magazynie,
    wiec rownolegle requesty tej samej sesji nie nadpisuja sobie koszyka.
    Pusty koszyk = brak klucza w magazynie.
    Totale sa liczone z items, nigdy nie sa trzymane osobno.
    """

    def __init__(self, storage: CartStorage, session_id: str, ttl: int = CART_TTL_SECONDS):
        self.storage = storage
        self.session_id = session_id
        self.ttl = ttl
        self._items: List[CartItem] = self._load()

    @property
    def key(self) -> str:
        return f"cart:{self.session_id}"

    #query
    @property
    def items(self) -> List[CartItem]:
        return [replace(i) for i in self._items]

    @property
    def total_items(self) -> int:
        return sum(i.quantity for i in self._items)

    @property
    def total_price(self) -> Decimal:
        return sum((i.subtotal for i in self._items), Decimal("0.00"))

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            items=tuple(self.items),
            total_items=self.total_items,
            total_price=self.total_price,
        )

    def reload(self) -> None:
        self._items = self._load()

    #commands
    def add_to_cart(self, item: CartItem) -> None:
        def change(items: List[CartItem]) -> None:
            existing = _find(items, item.id)
            if existing:
                existing.quantity += item.quantity
            else:
                items.append(replace(item))

        logger.info(f"Dodaje produkt {item.id} x{item.quantity} do koszyka {self.session_id}")
        self._mutate(change)

    def remove_from_cart(self, item_id: str) -> None:
        def change(items: List[CartItem]) -> None:
            items[:] = [i for i in items if i.id != item_id]

        logger.info(f"Usuwanie produktu {item_id} z koszyka {self.session_id}")
        self._mutate(change)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_from_cart(item_id)
            return

        def change(items: List[CartItem]) -> None:
            existing = _find(items, item_id)
            if existing:
                existing.quantity = quantity

        self._mutate(change)

    def clear_cart(self) -> None:
        logger.info(f"Czyszczenie koszyka {self.session_id}")
        self._items = []
        try:
            self.storage.remove(self.key)
        except RedisError as e:
            logger.warning(f"Nie udalo sie wyczyscic koszyka {self.session_id}: {e}")

    def _mutate(self, change: Callable[[List[CartItem]], None]) -> None:
        applied: List[CartItem] = []

        def apply(raw: str | None) -> str | None:
            #przy konflikcie WATCH wolane ponownie na swiezej wartosci
            items = self._decode(raw)
            change(items)
            applied[:] = items
            return json.dumps([i.to_dict() for i in items]) if items else None

        try:
            self.storage.update(self.key, apply, ttl=self.ttl)
        except RedisError as e:
            #magazyn niedostepny - zmiana tylko w pamieci tego requestu
            logger.warning(f"Nie udalo sie zapisac koszyka {self.session_id}: {e}")
            applied = [replace(i) for i in self._items]
            change(applied)

        self._items = applied

    def _load(self) -> List[CartItem]:
        try:
            raw = self.storage.get(self.key)
        except RedisError as e:
            logger.warning(f"Nie udalo sie wczytac koszyka {self.session_id}: {e}")
            return []

        return self._decode(raw)

    def _decode(self, raw: str | None) -> List[CartItem]:
        if not raw:
            return []

        try:
            return [CartItem.from_dict(d) for d in json.loads(raw)]
        except (ValueError, TypeError, KeyError, ArithmeticError) as e:
            #uszkodzony zapis - startujemy z pustym koszykiem
            logger.warning(f"Blad parsowania koszyka {self.session_id}: {e}")
            return []


def _find(items: List[CartItem], item_id: str) -> CartItem | None:
    return next((i for i in items if i.id == item_id), None)
