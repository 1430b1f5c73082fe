# storefront/services/checkout_service.py
import uuid
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from urllib.parse import quote

from redis.exceptions import RedisError

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.cart import CartSnapshot
from storefront.domain.errors import CheckoutError, ErrorKind
from storefront.domain.schemas import CheckoutIn
from storefront.domain.validators import is_valid_uuid
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartStore
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import (
    CHECKOUT_LOCK_TTL_SECONDS,
    PICKUP_LABEL,
    WHATSAPP_OPEN_DELAY_MS,
    WHATSAPP_PHONE,
    WHATSAPP_SEND_URL,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SUCCESS_TITLE = "¡Pedido realizado con éxito!"
SUCCESS_DESCRIPTION = "Se ha abierto WhatsApp con los detalles de tu pedido."


class CheckoutState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckoutResult:
    order: OrderModel
    whatsapp_url: str
    open_delay_ms: int


def _money(value: Decimal) -> str:
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_order_summary(form: CheckoutIn, snapshot: CartSnapshot) -> str:
    """Tekst zamowienia dla WhatsApp, linie laczone przez \\n (w URL -> %0A)."""
    is_delivery = form.delivery_method == "delivery"

    items_text = "\n".join(
        f"{i.quantity}x {i.name} - ${_money(i.subtotal)}" for i in snapshot.items
    )

    lines = [
        f"*Nuevo Pedido de {form.name}*",
        "",
        "*Productos:*",
        items_text,
        "",
        f"*Total:* ${_money(snapshot.total_price)}",
        "",
        f"*Método de entrega:* {'Delivery' if is_delivery else PICKUP_LABEL}",
        f"*Dirección:* {form.address if is_delivery else PICKUP_LABEL}",
        f"*Teléfono:* {form.phone}",
        f"*Método de pago:* {form.payment_method}",
        f"*Notas:* {form.notes or 'Ninguna'}",
    ]
    return "\n".join(lines)


def build_whatsapp_url(
    summary: str,
    phone: str = WHATSAPP_PHONE,
    base_url: str = WHATSAPP_SEND_URL,
) -> str:
    return f"{base_url}?phone={quote(phone, safe='')}&text={quote(summary, safe='')}"


class CheckoutWorkflow:
    """
    Use Case: zamowienie z koszyka sesji.

    IDLE -> SUBMITTING -> SUCCESS | FAILED
    FAILED wraca do IDLE (mozna ponowic), SUCCESS konczy instancje.
    Kroki:
    1. Walidacja koszyka (pusty -> blad, bez zapisow)
    2. Order + OrderItems w jednej transakcji
    3. Tekst zamowienia + link WhatsApp
    4. Czyszczenie koszyka i powiadomienie (async)
    """

    def __init__(
        self,
        cart: CartStore,
        order_repo: OrderRepo,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.cart = cart
        self.order_repo = order_repo
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()
        self.state = CheckoutState.IDLE
        self.last_error: CheckoutError | None = None

    def submit(self, form: CheckoutIn) -> CheckoutResult:
        if self.state == CheckoutState.SUBMITTING:
            raise CheckoutError(ErrorKind.IN_PROGRESS, "El pedido ya se está procesando")
        if self.state == CheckoutState.SUCCESS:
            raise CheckoutError(ErrorKind.VALIDATION, "El pedido ya fue realizado")

        session_id = self.cart.session_id
        token = uuid.uuid4().hex

        try:
            locked = self.lock_service.acquire_checkout_lock(
                session_id=session_id,
                token=token,
                ttl=CHECKOUT_LOCK_TTL_SECONDS,
            )
        except RedisError as e:
            logger.error(f"Checkout lock unavailable for session {session_id}: {e}")
            raise CheckoutError(ErrorKind.UNAVAILABLE, "No se pudo procesar el pedido, intenta nuevamente")

        if not locked:
            raise CheckoutError(ErrorKind.IN_PROGRESS, "El pedido ya se está procesando")

        self.state = CheckoutState.SUBMITTING
        try:
            result = self._run(form)
        except CheckoutError as e:
            logger.warning(f"Checkout failed for session {session_id}: {e.message}")
            self.state = CheckoutState.FAILED
            self.last_error = e
            raise
        finally:
            self._release(session_id, token)

        self.state = CheckoutState.SUCCESS
        self.last_error = None
        return result

    def _run(self, form: CheckoutIn) -> CheckoutResult:
        #stan koszyka z magazynu, nie z chwili utworzenia requestu
        self.cart.reload()
        snapshot = self.cart.snapshot()

        if snapshot.is_empty:
            raise CheckoutError(ErrorKind.VALIDATION, "No hay productos en el carrito")

        order = OrderModel(
            customer_name=form.name,
            customer_phone=form.phone,
            customer_address=form.address if form.delivery_method == "delivery" else PICKUP_LABEL,
            delivery_method=form.delivery_method,
            payment_method=form.payment_method,
            notes=form.notes,
            #total z koszyka, nie przeliczany z pozycji
            total=snapshot.total_price,
            status="pending",
        )

        items = [
            OrderItemModel(
                product_id=i.id if is_valid_uuid(i.id) else None,
                product_name=i.name,
                price=i.price,
                quantity=i.quantity,
            )
            for i in snapshot.items
        ]

        logger.info(
            f"Tworze zamowienie dla sesji {self.cart.session_id}: "
            f"{snapshot.total_items} szt., total {snapshot.total_price}"
        )
        created = self.order_repo.create_order_with_items(order, items)
        if not created.ok:
            raise CheckoutError(created.kind, created.error)

        #zamowienie zapisane - koszyk czyszczony zanim cokolwiek innego moze sie wywrocic
        self.cart.clear_cart()

        order = created.value
        logger.info(f"Order {order.id} created with {len(items)} items")

        summary = format_order_summary(form, snapshot)
        whatsapp_url = build_whatsapp_url(summary)

        self._notify(order)

        return CheckoutResult(
            order=order,
            whatsapp_url=whatsapp_url,
            open_delay_ms=WHATSAPP_OPEN_DELAY_MS,
        )

    def _notify(self, order: OrderModel) -> None:
        try:
            self.notification_service.send_new_order_notification(
                order.id, order.customer_name, order.total
            )
        except Exception as e:
            #zamowienie juz zapisane, powiadomienie jest best-effort
            logger.warning(f"Failed to enqueue notification for order {order.id}: {e}")

    def _release(self, session_id: str, token: str) -> None:
        try:
            self.lock_service.release_checkout_lock(session_id, token)
        except RedisError as e:
            #lock i tak wygasnie po TTL
            logger.warning(f"Failed to release checkout lock for session {session_id}: {e}")
