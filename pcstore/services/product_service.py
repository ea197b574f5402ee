# pcstore/services/product_service.py
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from pcstore.data.models.product import ProductModel
from pcstore.data.models.product_specification import ProductSpecificationModel
from pcstore.repos.product_repo import ProductRepo
from pcstore.repos.specification_repo import SpecificationRepo
from pcstore.domain.exceptions import ConflictError, NotFoundError, ValidationError
from pcstore.domain.schemas import ProductCreate, ProductUpdate
from pcstore.services.pricing import compute_effective_price, effective_price, link_price, to_money
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)

RAM_TYPES = {"ram", "memoria ram"}
PROCESSOR_TYPES = {"cpu", "procesador", "processor"}
GRAPHICS_CARD_TYPES = {"gpu", "tarjeta gráfica", "tarjeta grafica", "graphics card"}


def product_to_dict(product: ProductModel) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "base_price": product.base_price,
        "price": product.price,
        "stock": product.stock,
        "image": product.image,
        "category": product.category,
        "product_type": product.product_type,
        "specifications": [
            {
                "id": link.specification.id,
                "name": link.specification.name,
                "additional_price": link.specification.additional_price,
                "quantity": link.quantity,
            }
            for link in product.specification_links
        ],
    }


class ProductService:
    """
    Katalog produktów i składanie ceny z dodatkowych specyfikacji.

    Pole price jest cache'em: base_price + suma(additional_price * quantity).
    Każda zmiana linków przelicza je w tej samej transakcji, a zapis ceny
    idzie przez optimistic locking na kolumnie version.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.spec_repo = SpecificationRepo(db)

    #query
    def get_product(self, product_id: int) -> Dict[str, Any]:
        return product_to_dict(self._get(product_id))

    def list_products(self) -> List[Dict[str, Any]]:
        return [product_to_dict(p) for p in self.repo.list_products()]

    def list_by_category(self, category: str) -> List[Dict[str, Any]]:
        return [product_to_dict(p) for p in self.repo.list_by_category(category)]

    def search(self, text: str) -> List[Dict[str, Any]]:
        return [product_to_dict(p) for p in self.repo.search(text)]

    def filter_products(
        self,
        ram: Iterable[str] | None = None,
        processor: Iterable[str] | None = None,
        graphics_card: Iterable[str] | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        in_stock: bool | None = None,
    ) -> List[Dict[str, Any]]:
        result = []
        for product in self.repo.list_products():
            if not self._matches_spec(product, RAM_TYPES, ram):
                continue
            if not self._matches_spec(product, PROCESSOR_TYPES, processor):
                continue
            if not self._matches_spec(product, GRAPHICS_CARD_TYPES, graphics_card):
                continue
            if min_price is not None and product.price < min_price:
                continue
            if max_price is not None and product.price > max_price:
                continue
            if in_stock and product.stock <= 0:
                continue
            result.append(product_to_dict(product))
        return result

    @staticmethod
    def _matches_spec(product: ProductModel, types: set, wanted: Iterable[str] | None) -> bool:
        wanted = [w.lower() for w in (wanted or []) if w]
        if not wanted:
            return True

        for link in product.specification_links:
            spec = link.specification
            if spec.spec_type.lower() in types and any(w in spec.name.lower() for w in wanted):
                return True
        return False

    #commands
    def create_product(self, payload: ProductCreate) -> Dict[str, Any]:
        if self.repo.find_by_name(payload.name):
            raise ConflictError("A product with this name already exists")

        specs = self._load_specs(payload.specification_ids)

        product = ProductModel(
            name=payload.name,
            description=payload.description,
            base_price=to_money(payload.base_price),
            stock=payload.stock,
            image=payload.image,
            category=payload.category.value,
            product_type=payload.product_type.value,
            version=1,
        )
        for spec in specs:
            product.specification_links.append(ProductSpecificationModel(specification=spec, quantity=1))
        product.price = compute_effective_price(product)

        try:
            self.repo.add(product)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Created product {product.id} '{product.name}' with price {product.price}")
        return product_to_dict(product)

    def update_product(self, product_id: int, payload: ProductUpdate) -> Dict[str, Any]:
        product = self._get(product_id)

        existing = self.repo.find_by_name(payload.name)
        if existing and existing.id != product.id:
            raise ConflictError("A product with this name already exists")

        base_price = to_money(payload.base_price)
        new_data = {
            "name": payload.name,
            "description": payload.description,
            "base_price": base_price,
            "price": effective_price(base_price, product.specification_links),
            "stock": payload.stock,
            "image": payload.image,
        }
        if payload.category is not None:
            new_data["category"] = payload.category.value
        if payload.product_type is not None:
            new_data["product_type"] = payload.product_type.value

        self._write(product, new_data)
        logger.info(f"Updated product {product_id}")
        return self.get_product(product_id)

    def delete_product(self, product_id: int) -> None:
        product = self._get(product_id)

        if self.repo.count_paid_orders_with_product(product_id):
            raise ConflictError("Product belongs to a paid order and cannot be deleted")

        try:
            #z koszyków produkt po prostu znika
            cart_ids = self.repo.remove_from_orders(product_id)
            self.repo.delete(product)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Deleted product {product_id}, removed from carts {cart_ids}")

    def add_specification_link(self, product_id: int, spec_id: int, quantity: int = 1) -> Dict[str, Any]:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        product = self._get(product_id)
        spec = self.spec_repo.get_specification(spec_id)
        if not spec:
            raise NotFoundError("Specification not found")

        try:
            link = self.repo.get_link(product_id, spec_id)
            if link:
                logger.info(
                    f"Specification {spec_id} already on product {product_id}, "
                    f"quantity {link.quantity} -> {link.quantity + quantity}"
                )
                link.quantity += quantity
            else:
                self.repo.add_link(
                    ProductSpecificationModel(
                        product_id=product_id,
                        specification_id=spec_id,
                        quantity=quantity,
                    )
                )

            new_price = to_money(product.price) + link_price(spec.additional_price, quantity)
            self._bump(product, {"price": new_price})
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Product {product_id} price is now {new_price}")
        return self.get_product(product_id)

    def remove_specification_link(self, product_id: int, spec_id: int) -> Dict[str, Any]:
        product = self._get(product_id)

        link = self.repo.get_link(product_id, spec_id)
        if not link:
            raise NotFoundError("Specification is not linked to this product")

        try:
            new_price = to_money(product.price) - link_price(link.specification.additional_price, link.quantity)
            self.repo.delete_link(link)
            self._bump(product, {"price": new_price})
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Removed specification {spec_id} from product {product_id}, price {new_price}")
        return self.get_product(product_id)

    def replace_all_links(self, product_id: int, spec_ids: Iterable[int]) -> Dict[str, Any]:
        product = self._get(product_id)
        specs = self._load_specs(spec_ids)

        try:
            product.specification_links.clear()
            self.repo.flush()
            for spec in specs:
                product.specification_links.append(ProductSpecificationModel(specification=spec, quantity=1))
            self.repo.flush()

            #od ceny bazowej w górę
            self._bump(product, {"price": compute_effective_price(product)})
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Replaced specifications of product {product_id} with {[s.id for s in specs]}")
        return self.get_product(product_id)

    # helpers
    def _get(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def _load_specs(self, spec_ids: Iterable[int]) -> list:
        #kolejność zachowana, duplikaty pominięte
        ids = list(dict.fromkeys(spec_ids or []))
        specs = {s.id: s for s in self.spec_repo.get_many(ids)}
        missing = [i for i in ids if i not in specs]
        if missing:
            raise NotFoundError(f"Specifications not found: {missing}")
        return [specs[i] for i in ids]

    def _bump(self, product: ProductModel, new_data: dict) -> None:
        rowcount = self.repo.update_product_version(
            product_id=product.id,
            old_version=product.version,
            new_data={**new_data, "version": product.version + 1},
        )
        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Concurrent modification of product {product.id}")
            raise ConflictError("Product was modified by another operation")

    def _write(self, product: ProductModel, new_data: dict) -> None:
        try:
            self._bump(product, new_data)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
