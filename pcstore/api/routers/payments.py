# pcstore/api/routers/payments.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from pcstore.api.deps import get_current_user, get_notification_service, is_admin
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.data.models.user import UserModel
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import PaymentIn, PaymentOut
from pcstore.services.notification_service import NotificationService
from pcstore.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


def get_service(db: Session, notification_service: NotificationService):
    return PaymentService(db, notification_service=notification_service)


@router.post("/", response_model=PaymentOut, status_code=201)
def record_payment(
    payload: PaymentIn,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
):
    """
    Opłaca zamówienie. Kwota liczona z aktualnych cen produktów.
    Powiadomienie wysyłane asynchronicznie.
    """
    svc = get_service(db, notifications)
    try:
        return svc.record_payment(payload.order_id, payload.method, current.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)


@router.get("/order/{order_id}", response_model=List[PaymentOut])
def list_payments(
    order_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
):
    svc = get_service(db, notifications)
    try:
        return svc.list_payments(order_id, current.id, is_admin(current))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)


@router.get("/order/{order_id}/receipt")
def download_receipt(
    order_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
):
    svc = get_service(db, notifications)
    try:
        content = svc.generate_receipt(order_id, current.id, is_admin(current))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)

    return Response(
        content=content,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="receipt-{order_id}.txt"'},
    )
