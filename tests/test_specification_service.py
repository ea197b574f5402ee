from decimal import Decimal

import pytest

from pcstore.domain.enums import ProductCategory, ProductType
from pcstore.domain.exceptions import ConflictError, NotFoundError
from pcstore.domain.schemas import ProductCreate, SpecificationIn
from pcstore.services.product_service import ProductService
from pcstore.services.specification_service import SpecificationService


def _spec_in(name="16GB DDR4", price="20.00", brand="Kingston", spec_type="RAM"):
    return SpecificationIn(
        name=name, description=None, brand=brand, spec_type=spec_type, additional_price=Decimal(price)
    )


def _product_with(db, spec_id):
    return ProductService(db).create_product(
        ProductCreate(
            name="Gaming PC",
            base_price=Decimal("500.00"),
            category=ProductCategory.COMPUTERS,
            product_type=ProductType.DESKTOP_PC,
            specification_ids=[spec_id],
        )
    )


class TestSpecifications:

    def test_register_and_list(self, db):
        svc = SpecificationService(db)
        svc.register(_spec_in("B module"))
        svc.register(_spec_in("A module"))

        assert [s.name for s in svc.list_all()] == ["A module", "B module"]

    def test_search_and_filter(self, db):
        svc = SpecificationService(db)
        svc.register(_spec_in("16GB DDR4", brand="Kingston", spec_type="RAM"))
        svc.register(_spec_in("RTX 4070", brand="Nvidia", spec_type="GPU"))

        assert [s.name for s in svc.search_by_name("ddr")] == ["16GB DDR4"]
        assert [s.name for s in svc.filter_by_brand_and_type("nvid", None)] == ["RTX 4070"]
        assert [s.name for s in svc.filter_by_brand_and_type(None, "ram")] == ["16GB DDR4"]
        assert len(svc.filter_by_brand_and_type(None, None)) == 2

    def test_price_change_reprices_linked_products(self, db):
        svc = SpecificationService(db)
        spec = svc.register(_spec_in(price="20.00"))
        product = _product_with(db, spec.id)
        assert product["price"] == Decimal("520.00")

        svc.update(spec.id, _spec_in(price="35.00"))

        assert ProductService(db).get_product(product["id"])["price"] == Decimal("535.00")

    def test_delete_blocked_while_linked(self, db):
        svc = SpecificationService(db)
        spec = svc.register(_spec_in())
        _product_with(db, spec.id)

        with pytest.raises(ConflictError):
            svc.delete(spec.id)

    def test_delete_unlinked(self, db):
        svc = SpecificationService(db)
        spec = svc.register(_spec_in())

        svc.delete(spec.id)

        with pytest.raises(NotFoundError):
            svc.update(spec.id, _spec_in())
