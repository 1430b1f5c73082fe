# storefront/repos/order_repo.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import ErrorKind
from storefront.domain.results import StoreResult
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order_with_items(
        self,
        order: OrderModel,
        items: List[OrderItemModel],
    ) -> StoreResult[OrderModel]:
        """
        Zamowienie i jego pozycje w jednej transakcji.
        Blad pozycji cofa tez zamowienie - nie zostaja zamowienia bez items.
        """
        try:
            self.db.add(order)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Order insert failed: {e}")
            return StoreResult.failure(ErrorKind.ORDER_INSERT, f"Error al crear el pedido: {e}")

        try:
            for item in items:
                item.order_id = order.id
            self.db.add_all(items)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Order items insert failed for order {order.id}: {e}")
            return StoreResult.failure(
                ErrorKind.ITEMS_INSERT,
                f"Error al crear los items del pedido: {e}",
            )

        #expire_on_commit=False - pola zamowienia zostaja po commit
        return StoreResult.success(order)

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).order_by(OrderModel.created_at.desc())
            ).scalars().all()
        )

    def update_order_status(self, order_id: str, status: str) -> StoreResult[OrderModel]:
        order = self.get_order(order_id)
        if not order:
            return StoreResult.failure(ErrorKind.NOT_FOUND, "Pedido no encontrado")

        try:
            order.status = status
            order.updated_at = datetime.now(timezone.utc)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Order {order_id} status update failed: {e}")
            return StoreResult.failure(ErrorKind.UPDATE, f"Error al actualizar el estado: {e}")

        self.db.refresh(order)
        return StoreResult.success(order)
