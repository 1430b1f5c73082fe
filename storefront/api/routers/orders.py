# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import OrderOut, OrderStatusIn, StatusUpdateOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"], dependencies=[Depends(require_admin)])


def get_service(db: Session):
    return OrderService(db)


@router.get("", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db)):
    return get_service(db).list_orders()


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}/status", response_model=StatusUpdateOut)
def update_order_status(order_id: str, payload: OrderStatusIn, db: Session = Depends(get_db)):
    """
    Zmienia tylko status. Zwraca {success, error?, order?} - klient podmienia
    lokalna kopie na zwrocony rekord.
    """
    return get_service(db).update_order_status(order_id, payload.status)
