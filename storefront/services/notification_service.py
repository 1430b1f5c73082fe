# storefront/services/notification_service.py
from decimal import Decimal

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o nowych zamowieniach.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_new_order_notification(order_id: str, customer_name: str, total: Decimal):
        send_new_order_notification_task.delay(order_id, customer_name, str(total))


@celery_app.task(name="storefront.services.notification_service.send_new_order_notification_task")
def send_new_order_notification_task(order_id: str, customer_name: str, total: str):
    """
    Celery task - panel admina widzi zamowienie w bazie, tu tylko log.
    """
    logger.info(f"[NOTIFICATION] Nuevo pedido {order_id} de {customer_name}, total ${total}")

    return {"order_id": order_id, "status": "sent"}
