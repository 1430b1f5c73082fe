# storefront/domain/cart.py
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict, Tuple


@dataclass
class CartItem:
    """Pozycja koszyka - nazwa i cena zapisane w chwili dodania."""

    id: str
    name: str
    price: Decimal
    quantity: int
    image: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["price"] = str(self.price)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            price=Decimal(str(data["price"])),
            quantity=int(data["quantity"]),
            image=data.get("image"),
        )

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class CartSnapshot:
    items: Tuple[CartItem, ...]
    total_items: int
    total_price: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.items
