# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_notification_service, require_admin, require_user
from storefront.data.database import get_db
from storefront.domain.schemas import OrderOut, OrderStatusIn, UserRead
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session, notifications: NotificationService | None = None):
    return OrderService(db, notification_service=notifications)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    db: Session = Depends(get_db),
    user: UserRead = Depends(require_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    """
    Tworzy zamowienie z koszyka zalogowanego uzytkownika (platnosc reczna).
    Wysyla powiadomienie asynchronicznie.
    """
    return get_service(db, notifications).place_order(user)


@router.get("", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    return get_service(db).list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db), user: UserRead = Depends(require_user)):
    """
    Szczegoly zamowienia z pozycjami.
    """
    return get_service(db).get_order(order_id, user)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    db: Session = Depends(get_db),
    _: UserRead = Depends(require_admin),
):
    return get_service(db).update_status(order_id, payload.status)
