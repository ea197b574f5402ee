# pcstore/api/routers/orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from pcstore.api.deps import get_current_user, is_admin
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.data.models.user import UserModel
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import OrderCreate, OrderOut, OrderProductIn
from pcstore.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("/", response_model=List[OrderOut])
def list_orders(
    user_id: Optional[int] = Query(None),
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Zamówienia zalogowanego usera. Admin może podać user_id.
    """
    if user_id is not None and user_id != current.id and not is_admin(current):
        raise HTTPException(status_code=403, detail="No access to other users' orders")
    return get_service(db).list_orders(user_id if user_id is not None else current.id)


@router.get("/active", response_model=OrderOut)
def get_active_order(current: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    order = get_service(db).get_active_order(current.id)
    if not order:
        raise HTTPException(status_code=404, detail="No active cart")
    return order


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order(order_id, current.id, is_admin(current))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Tworzy koszyk (CART), opcjonalnie od razu z produktami.
    Jeden aktywny koszyk na usera - drugi to 409.
    """
    svc = get_service(db)
    try:
        return svc.create_order(current.id, payload.product_ids)
    except StoreError as e:
        raise http_error(e)


@router.post("/cart/products", response_model=OrderOut)
def add_to_cart(
    payload: OrderProductIn,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_product_to_cart(current.id, payload.product_id)
    except StoreError as e:
        raise http_error(e)


@router.post("/{order_id}/products", response_model=OrderOut)
def add_product(
    order_id: int,
    payload: OrderProductIn,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_product(order_id, payload.product_id, current.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)


@router.delete("/{order_id}/products/{product_id}", response_model=OrderOut)
def remove_product(
    order_id: int,
    product_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.remove_product(order_id, product_id, current.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)


@router.put("/{order_id}/products", response_model=OrderOut)
def replace_products(
    order_id: int,
    payload: OrderCreate,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.replace_products(order_id, payload.product_ids, current.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)


@router.delete("/{order_id}", status_code=204)
def delete_order(
    order_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_order(order_id, current.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        raise http_error(e)
