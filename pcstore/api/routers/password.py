# pcstore/api/routers/password.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pcstore.api.deps import get_notification_service, get_reset_code_store
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import (
    MessageOut,
    PasswordResetRequest,
    PasswordResetUpdate,
    PasswordResetValidate,
)
from pcstore.services.notification_service import NotificationService
from pcstore.services.password_reset_service import PasswordResetService
from pcstore.services.reset_code_store import ResetCodeStore

router = APIRouter(prefix="/password", tags=["password"])


def get_service(
    db: Session = Depends(get_db),
    code_store: ResetCodeStore = Depends(get_reset_code_store),
    notifications: NotificationService = Depends(get_notification_service),
):
    return PasswordResetService(db, code_store=code_store, notification_service=notifications)


@router.post("/reset", response_model=MessageOut)
def request_reset(payload: PasswordResetRequest, svc: PasswordResetService = Depends(get_service)):
    svc.request_reset(payload.email)
    #ta sama odpowiedź dla nieznanego maila
    return MessageOut(message="If the email is registered, a reset code has been sent")


@router.post("/validate", response_model=MessageOut)
def validate_code(payload: PasswordResetValidate, svc: PasswordResetService = Depends(get_service)):
    if not svc.validate(payload.email, payload.code):
        raise HTTPException(status_code=400, detail="Invalid or expired reset code")
    return MessageOut(message="Code is valid")


@router.post("/update", response_model=MessageOut)
def update_password(payload: PasswordResetUpdate, svc: PasswordResetService = Depends(get_service)):
    try:
        svc.update_password(payload.email, payload.code, payload.new_password)
    except StoreError as e:
        raise http_error(e)
    return MessageOut(message="Password updated")
