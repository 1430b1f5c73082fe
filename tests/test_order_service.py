from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import NotFoundError
from storefront.services.order_service import OrderService


def create_order(db, name="Ana", created_at=None, items=(("Margherita", "12.99", 2),)) -> OrderModel:
    order = OrderModel(
        customer_name=name,
        customer_phone="555",
        customer_address="Calle X",
        delivery_method="delivery",
        payment_method="efectivo",
        notes="",
        total=sum((Decimal(p) * q for _, p, q in items), Decimal("0")),
        status="pending",
        created_at=created_at or datetime.now(timezone.utc),
    )
    order.items = [OrderItemModel(product_name=n, price=Decimal(p), quantity=q) for n, p, q in items]
    db.add(order)
    db.commit()
    return order


def test_list_orders_newest_first_with_items(db) -> None:
    now = datetime.now(timezone.utc)
    older = create_order(db, name="Older", created_at=now - timedelta(hours=1))
    newer = create_order(db, name="Newer", created_at=now, items=(("Fugazzeta", "13.75", 1), ("Gaseosa", "3", 2)))

    orders = OrderService(db).list_orders()

    assert [o.id for o in orders] == [newer.id, older.id]
    assert [i.product_name for i in orders[0].items] == ["Fugazzeta", "Gaseosa"]


def test_get_order_not_found(db) -> None:
    with pytest.raises(NotFoundError):
        OrderService(db).get_order("missing")


def test_update_status_changes_only_status(db) -> None:
    order = create_order(db)
    total_before = order.total

    result = OrderService(db).update_order_status(order.id, "processing")

    assert result.success
    assert result.error is None
    assert result.order.id == order.id
    assert result.order.status == "processing"
    assert result.order.total == total_before
    assert db.get(OrderModel, order.id).status == "processing"
    assert db.get(OrderModel, order.id).customer_name == "Ana"


def test_update_status_rejects_unknown_status(db) -> None:
    order = create_order(db)

    result = OrderService(db).update_order_status(order.id, "shipped")

    assert not result.success
    assert "shipped" in result.error
    assert db.get(OrderModel, order.id).status == "pending"


def test_update_status_of_missing_order(db) -> None:
    result = OrderService(db).update_order_status("missing", "completed")

    assert result.success is False
    assert result.error == "Pedido no encontrado"
    assert result.order is None
