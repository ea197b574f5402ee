# pcstore/api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pcstore.api.deps import get_current_user, is_admin
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.data.models.user import UserModel
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import LoginIn, TokenOut, UserCreate, UserProfile, UserRead, UserUpdate
from pcstore.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_service(db: Session):
    return UserService(db)


def _check_self_or_admin(user_id: int, current: UserModel) -> None:
    if current.id != user_id and not is_admin(current):
        raise HTTPException(status_code=403, detail="You can only manage your own account")


@router.post("/register", response_model=TokenOut, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.register(payload)
    except StoreError as e:
        raise http_error(e)


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.login(payload)
    except StoreError as e:
        raise http_error(e)


@router.get("/me", response_model=UserProfile)
def me(current: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).get_profile(current.id)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _check_self_or_admin(user_id, current)
    svc = get_service(db)
    try:
        return svc.get_user(user_id)
    except StoreError as e:
        raise http_error(e)


@router.get("/{user_id}/profile", response_model=UserProfile)
def get_profile(
    user_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _check_self_or_admin(user_id, current)
    svc = get_service(db)
    try:
        return svc.get_profile(user_id)
    except StoreError as e:
        raise http_error(e)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _check_self_or_admin(user_id, current)
    svc = get_service(db)
    try:
        return svc.update_user(user_id, payload)
    except StoreError as e:
        raise http_error(e)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _check_self_or_admin(user_id, current)
    svc = get_service(db)
    try:
        svc.delete_user(user_id)
    except StoreError as e:
        raise http_error(e)
