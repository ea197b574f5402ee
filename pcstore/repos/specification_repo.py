# pcstore/repos/specification_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from pcstore.data.models.specification import SpecificationModel
from pcstore.data.models.product_specification import ProductSpecificationModel


class SpecificationRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_specification(self, spec_id: int) -> SpecificationModel | None:
        return self.db.get(SpecificationModel, spec_id)

    def get_many(self, spec_ids) -> list[SpecificationModel]:
        if not spec_ids:
            return []
        return list(
            self.db.execute(
                select(SpecificationModel).where(SpecificationModel.id.in_(spec_ids))
            ).scalars().all()
        )

    def list_all(self) -> list[SpecificationModel]:
        return list(
            self.db.execute(select(SpecificationModel).order_by(SpecificationModel.name)).scalars().all()
        )

    def search_by_name(self, name: str) -> list[SpecificationModel]:
        return list(
            self.db.execute(
                select(SpecificationModel)
                .where(SpecificationModel.name.ilike(f"%{name}%"))
                .order_by(SpecificationModel.name)
            ).scalars().all()
        )

    def filter_by_brand_and_type(self, brand: str, spec_type: str) -> list[SpecificationModel]:
        return list(
            self.db.execute(
                select(SpecificationModel)
                .where(
                    SpecificationModel.brand.ilike(f"%{brand}%"),
                    SpecificationModel.spec_type.ilike(f"%{spec_type}%"),
                )
                .order_by(SpecificationModel.name)
            ).scalars().all()
        )

    def is_linked(self, spec_id: int) -> bool:
        count = self.db.execute(
            select(func.count())
            .select_from(ProductSpecificationModel)
            .where(ProductSpecificationModel.specification_id == spec_id)
        ).scalar_one()
        return count > 0

    def linked_product_ids(self, spec_id: int) -> list[int]:
        return list(
            self.db.execute(
                select(ProductSpecificationModel.product_id)
                .where(ProductSpecificationModel.specification_id == spec_id)
            ).scalars().all()
        )

    def create_specification(self, spec: SpecificationModel) -> SpecificationModel:
        self.db.add(spec)
        self.db.commit()
        self.db.refresh(spec)
        return spec

    def delete(self, spec: SpecificationModel) -> None:
        self.db.delete(spec)
        self.db.commit()

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
