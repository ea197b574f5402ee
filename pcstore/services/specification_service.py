from typing import List

from sqlalchemy.orm import Session

from pcstore.data.models.specification import SpecificationModel
from pcstore.repos.specification_repo import SpecificationRepo
from pcstore.repos.product_repo import ProductRepo
from pcstore.domain.exceptions import ConflictError, NotFoundError
from pcstore.domain.schemas import SpecificationIn, SpecificationOut
from pcstore.services.pricing import compute_effective_price, to_money
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


class SpecificationService:
    def __init__(self, db: Session):
        self.repo = SpecificationRepo(db)
        self.product_repo = ProductRepo(db)

    def register(self, payload: SpecificationIn) -> SpecificationOut:
        spec = SpecificationModel(
            name=payload.name,
            description=payload.description,
            brand=payload.brand,
            spec_type=payload.spec_type,
            additional_price=to_money(payload.additional_price),
        )
        created = self.repo.create_specification(spec)
        logger.info(f"Registered specification {created.id} '{created.name}'")
        return SpecificationOut.model_validate(created)

    def update(self, spec_id: int, payload: SpecificationIn) -> SpecificationOut:
        """
        Aktualizacja specyfikacji. Zmiana ceny dodatkowej przelicza ceny
        wszystkich produktów, do których jest podpięta.
        """
        spec = self._get(spec_id)
        new_price = to_money(payload.additional_price)
        price_changed = new_price != to_money(spec.additional_price)

        try:
            spec.name = payload.name
            spec.description = payload.description
            spec.brand = payload.brand
            spec.spec_type = payload.spec_type
            spec.additional_price = new_price
            self.repo.flush()

            if price_changed:
                self._reprice_linked_products(spec_id)

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Updated specification {spec_id}")
        return SpecificationOut.model_validate(self._get(spec_id))

    def delete(self, spec_id: int) -> None:
        spec = self._get(spec_id)
        if self.repo.is_linked(spec_id):
            raise ConflictError("Specification is linked to a product and cannot be deleted")
        self.repo.delete(spec)
        logger.info(f"Deleted specification {spec_id}")

    def list_all(self) -> List[SpecificationOut]:
        return [SpecificationOut.model_validate(s) for s in self.repo.list_all()]

    def search_by_name(self, name: str) -> List[SpecificationOut]:
        return [SpecificationOut.model_validate(s) for s in self.repo.search_by_name(name)]

    def filter_by_brand_and_type(self, brand: str | None, spec_type: str | None) -> List[SpecificationOut]:
        specs = self.repo.filter_by_brand_and_type(brand or "", spec_type or "")
        return [SpecificationOut.model_validate(s) for s in specs]

    def _reprice_linked_products(self, spec_id: int) -> None:
        for product_id in self.repo.linked_product_ids(spec_id):
            product = self.product_repo.get_product(product_id)
            new_price = compute_effective_price(product)

            rowcount = self.product_repo.update_product_version(
                product_id=product.id,
                old_version=product.version,
                new_data={"price": new_price, "version": product.version + 1},
            )
            if rowcount == 0:
                raise ConflictError("Product was modified by another operation")
            logger.info(f"Repriced product {product_id} to {new_price}")

    def _get(self, spec_id: int) -> SpecificationModel:
        spec = self.repo.get_specification(spec_id)
        if not spec:
            raise NotFoundError("Specification not found")
        return spec
