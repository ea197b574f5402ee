# pcstore/api/routers/products.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pcstore.api.deps import require_admin
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.domain.enums import ProductCategory
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import (
    ProductCreate,
    ProductOut,
    ProductUpdate,
    SpecificationIdsIn,
    SpecificationLinkIn,
)
from pcstore.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("/", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return get_service(db).list_products()


@router.get("/category/{category}", response_model=List[ProductOut])
def list_by_category(category: ProductCategory, db: Session = Depends(get_db)):
    return get_service(db).list_by_category(category.value)


@router.get("/search", response_model=List[ProductOut])
def search(q: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return get_service(db).search(q)


@router.get("/filter", response_model=List[ProductOut])
def filter_products(
    ram: Optional[List[str]] = Query(None),
    processor: Optional[List[str]] = Query(None),
    graphics_card: Optional[List[str]] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    in_stock: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Filtrowanie po nazwach specyfikacji RAM / CPU / GPU i po cenie.
    Kilka wartości tego samego parametru = OR.
    """
    return get_service(db).filter_products(
        ram=ram,
        processor=processor,
        graphics_card=graphics_card,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
    )


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_product(product_id)
    except StoreError as e:
        raise http_error(e)


@router.post("/", response_model=ProductOut, status_code=201, dependencies=[Depends(require_admin)])
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.create_product(payload)
    except StoreError as e:
        raise http_error(e)


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_product(product_id, payload)
    except StoreError as e:
        raise http_error(e)


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.delete_product(product_id)
    except StoreError as e:
        raise http_error(e)


@router.post(
    "/{product_id}/specifications",
    response_model=ProductOut,
    dependencies=[Depends(require_admin)],
)
def add_specification(product_id: int, payload: SpecificationLinkIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_specification_link(product_id, payload.specification_id, payload.quantity)
    except StoreError as e:
        raise http_error(e)


@router.delete(
    "/{product_id}/specifications/{spec_id}",
    response_model=ProductOut,
    dependencies=[Depends(require_admin)],
)
def remove_specification(product_id: int, spec_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.remove_specification_link(product_id, spec_id)
    except StoreError as e:
        raise http_error(e)


@router.put(
    "/{product_id}/specifications",
    response_model=ProductOut,
    dependencies=[Depends(require_admin)],
)
def replace_specifications(product_id: int, payload: SpecificationIdsIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.replace_all_links(product_id, payload.specification_ids)
    except StoreError as e:
        raise http_error(e)
