# pcstore/api/routers/specifications.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pcstore.api.deps import require_admin
from pcstore.api.errors import http_error
from pcstore.data.database import get_db
from pcstore.domain.exceptions import StoreError
from pcstore.domain.schemas import SpecificationIn, SpecificationOut
from pcstore.services.specification_service import SpecificationService

router = APIRouter(prefix="/specifications", tags=["specifications"])


def get_service(db: Session):
    return SpecificationService(db)


@router.get("/", response_model=List[SpecificationOut])
def list_specifications(db: Session = Depends(get_db)):
    return get_service(db).list_all()


@router.get("/search", response_model=List[SpecificationOut])
def search(name: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return get_service(db).search_by_name(name)


@router.get("/filter", response_model=List[SpecificationOut])
def filter_specifications(
    brand: Optional[str] = Query(None),
    spec_type: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return get_service(db).filter_by_brand_and_type(brand, spec_type)


@router.post("/", response_model=SpecificationOut, status_code=201, dependencies=[Depends(require_admin)])
def register(payload: SpecificationIn, db: Session = Depends(get_db)):
    return get_service(db).register(payload)


@router.put("/{spec_id}", response_model=SpecificationOut, dependencies=[Depends(require_admin)])
def update(spec_id: int, payload: SpecificationIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update(spec_id, payload)
    except StoreError as e:
        raise http_error(e)


@router.delete("/{spec_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete(spec_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.delete(spec_id)
    except StoreError as e:
        raise http_error(e)
