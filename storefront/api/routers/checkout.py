# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import (
    get_cart_store,
    get_lock_service,
    get_notification_service,
    get_order_repo,
)
from storefront.domain.errors import CheckoutError, ErrorKind
from storefront.domain.schemas import CheckoutIn, CheckoutOut
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartStore
from storefront.services.checkout_service import (
    CheckoutWorkflow,
    SUCCESS_DESCRIPTION,
    SUCCESS_TITLE,
)
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService

router = APIRouter(prefix="/checkout", tags=["checkout"])

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.IN_PROGRESS: 409,
    ErrorKind.ORDER_INSERT: 502,
    ErrorKind.ITEMS_INSERT: 502,
    ErrorKind.UNAVAILABLE: 503,
}


@router.post("", response_model=CheckoutOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    cart: CartStore = Depends(get_cart_store),
    order_repo: OrderRepo = Depends(get_order_repo),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Tworzy zamowienie z koszyka sesji i zwraca link WhatsApp.
    Przy bledzie koszyk zostaje bez zmian - formularz mozna wyslac ponownie.
    """
    workflow = CheckoutWorkflow(
        cart=cart,
        order_repo=order_repo,
        lock_service=lock_service,
        notification_service=notification_service,
    )
    try:
        result = workflow.submit(payload)
    except CheckoutError as e:
        raise HTTPException(status_code=_STATUS_BY_KIND.get(e.kind, 400), detail=e.message)

    return CheckoutOut(
        order_id=result.order.id,
        total=result.order.total,
        whatsapp_url=result.whatsapp_url,
        open_delay_ms=result.open_delay_ms,
        title=SUCCESS_TITLE,
        description=SUCCESS_DESCRIPTION,
    )
