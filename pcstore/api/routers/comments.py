# pcstore/api/routers/comments.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pcstore.api.deps import get_current_user
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.data.models.user import UserModel
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import CommentIn, CommentOut, CommentUpdate
from pcstore.services.comment_service import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


def get_service(db: Session):
    return CommentService(db)


@router.post("/", response_model=CommentOut, status_code=201)
def add_comment(
    payload: CommentIn,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_comment(current.id, payload.product_id, payload.content)
    except StoreError as e:
        raise http_error(e)


@router.get("/product/{product_id}", response_model=List[CommentOut])
def list_comments(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.list_by_product(product_id)
    except StoreError as e:
        raise http_error(e)


@router.put("/{comment_id}", response_model=CommentOut)
def edit_comment(
    comment_id: int,
    payload: CommentUpdate,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.edit_comment(comment_id, current.id, payload.content)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)


@router.delete("/{comment_id}", status_code=204)
def delete_comment(
    comment_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_comment(comment_id, current.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)
