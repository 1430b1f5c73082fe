# storefront/services/order_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import ORDER_STATUSES, OrderOut, StatusUpdateOut
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien po stronie panelu admina.
    Tworzenie zamowien jest w CheckoutWorkflow.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def list_orders(self) -> List[OrderModel]:
        """
        Use Case: lista zamowien (Query), najnowsze pierwsze, razem z pozycjami.
        """
        return self.repo.list_orders()

    def get_order(self, order_id: str) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Pedido no encontrado")

        return order

    def update_order_status(self, order_id: str, status: str) -> StatusUpdateOut:
        """
        Use Case: zmiana statusu (Command) - jedyne pole zmieniane po utworzeniu.
        Nie rzuca wyjatkow; zwraca zaktualizowany rekord, zeby klient
        podmienil swoja lokalna kopie zamiast zgadywac.
        """
        if status not in ORDER_STATUSES:
            return StatusUpdateOut(success=False, error=f"Estado inválido: {status}")

        result = self.repo.update_order_status(order_id, status)

        if not result.ok:
            logger.error(f"Status update for order {order_id} failed: {result.error}")
            return StatusUpdateOut(success=False, error=result.error)

        logger.info(f"Order {order_id} status -> {status}")

        return StatusUpdateOut(
            success=True,
            order=OrderOut.model_validate(result.value),
        )
