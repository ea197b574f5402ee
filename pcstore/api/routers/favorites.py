# pcstore/api/routers/favorites.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pcstore.api.deps import get_current_user
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.data.models.user import UserModel
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import FavoriteIn, FavoriteOut
from pcstore.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["favorites"])


def get_service(db: Session):
    return FavoriteService(db)


@router.post("/", response_model=FavoriteOut, status_code=201)
def add_favorite(
    payload: FavoriteIn,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_favorite(current.id, payload.product_id)
    except StoreError as e:
        raise http_error(e)


@router.get("/", response_model=List[FavoriteOut])
def list_favorites(current: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).list_favorites(current.id)


@router.delete("/{product_id}", status_code=204)
def remove_favorite(
    product_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove_favorite(current.id, product_id)
    except StoreError as e:
        raise http_error(e)
