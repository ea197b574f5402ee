"""Catalog and pricing rule through ProductService."""

from decimal import Decimal

import pytest

from pcstore.domain.enums import ProductCategory, ProductType
from pcstore.domain.exceptions import ConflictError, NotFoundError, ValidationError
from pcstore.domain.schemas import ProductCreate, ProductUpdate
from pcstore.services.order_service import OrderService
from pcstore.services.payment_service import PaymentService
from pcstore.services.product_service import ProductService
from tests.fakes import FakeNotificationService


def _create(svc, name="Gaming PC", base_price="500.00", spec_ids=()):
    return svc.create_product(
        ProductCreate(
            name=name,
            description="desc",
            base_price=Decimal(base_price),
            stock=3,
            image="pc.png",
            category=ProductCategory.COMPUTERS,
            product_type=ProductType.DESKTOP_PC,
            specification_ids=list(spec_ids),
        )
    )


class TestCreateProduct:

    def test_price_starts_at_base_price(self, db):
        product = _create(ProductService(db))
        assert product["price"] == Decimal("500.00")
        assert product["specifications"] == []

    def test_initial_specifications_are_linked_once(self, db, make_spec):
        ram = make_spec("16GB DDR4", "20.00")
        gpu = make_spec("RTX 4060", "300.00", brand="Nvidia", spec_type="GPU")

        product = _create(ProductService(db), spec_ids=[ram.id, gpu.id, ram.id])

        assert product["price"] == Decimal("820.00")
        assert sorted(s["quantity"] for s in product["specifications"]) == [1, 1]

    def test_duplicate_name_rejected(self, db):
        svc = ProductService(db)
        _create(svc, name="Gaming PC")

        with pytest.raises(ConflictError):
            _create(svc, name="gaming pc")

    def test_unknown_specification_rejected(self, db):
        with pytest.raises(NotFoundError, match="999"):
            _create(ProductService(db), spec_ids=[999])


class TestSpecificationLinks:

    def test_add_then_remove_link_restores_price(self, db, make_spec):
        svc = ProductService(db)
        spec = make_spec("16GB DDR4", "20.00")
        product = _create(svc, base_price="500.00")

        added = svc.add_specification_link(product["id"], spec.id, 2)
        assert added["price"] == Decimal("540.00")
        assert added["specifications"][0]["quantity"] == 2

        removed = svc.remove_specification_link(product["id"], spec.id)
        assert removed["price"] == Decimal("500.00")
        assert removed["specifications"] == []

    def test_adding_existing_link_increments_quantity(self, db, make_spec):
        svc = ProductService(db)
        spec = make_spec("16GB DDR4", "20.00")
        product = _create(svc)

        svc.add_specification_link(product["id"], spec.id, 1)
        result = svc.add_specification_link(product["id"], spec.id, 2)

        assert result["specifications"][0]["quantity"] == 3
        assert result["price"] == Decimal("560.00")

    def test_zero_quantity_rejected(self, db, make_spec):
        svc = ProductService(db)
        spec = make_spec()
        product = _create(svc)

        with pytest.raises(ValidationError):
            svc.add_specification_link(product["id"], spec.id, 0)

        assert svc.get_product(product["id"])["price"] == Decimal("500.00")

    def test_remove_missing_link(self, db, make_spec):
        svc = ProductService(db)
        spec = make_spec()
        product = _create(svc)

        with pytest.raises(NotFoundError):
            svc.remove_specification_link(product["id"], spec.id)

    def test_replace_all_links_recomputes_from_base(self, db, make_spec):
        svc = ProductService(db)
        ram = make_spec("16GB DDR4", "20.00")
        ssd = make_spec("1TB NVMe", "80.00", brand="Samsung", spec_type="SSD")
        product = _create(svc)
        svc.add_specification_link(product["id"], ram.id, 2)

        result = svc.replace_all_links(product["id"], [ssd.id])

        assert result["price"] == Decimal("580.00")
        assert [s["id"] for s in result["specifications"]] == [ssd.id]


class TestUpdateAndDelete:

    def test_update_reprices_from_new_base(self, db, make_spec):
        svc = ProductService(db)
        spec = make_spec("16GB DDR4", "20.00")
        product = _create(svc, spec_ids=[spec.id])

        updated = svc.update_product(
            product["id"],
            ProductUpdate(name="Gaming PC", description="new", base_price=Decimal("600.00"), stock=1),
        )

        assert updated["base_price"] == Decimal("600.00")
        assert updated["price"] == Decimal("620.00")
        assert updated["category"] == ProductCategory.COMPUTERS.value

    def test_delete_removes_product_from_carts(self, db, make_user):
        svc = ProductService(db)
        user = make_user()
        product = _create(svc)
        orders = OrderService(db)
        order = orders.create_order(user.id, [product["id"]])

        svc.delete_product(product["id"])

        assert orders.get_order(order["id"], user.id)["products"] == []
        with pytest.raises(NotFoundError):
            svc.get_product(product["id"])

    def test_delete_blocked_by_paid_order(self, db, make_user):
        svc = ProductService(db)
        user = make_user()
        product = _create(svc)
        order = OrderService(db).create_order(user.id, [product["id"]])
        PaymentService(db, FakeNotificationService()).record_payment(order["id"], "card", user.id)

        with pytest.raises(ConflictError):
            svc.delete_product(product["id"])


class TestBrowse:

    def test_filter_by_ram_and_price(self, db, make_spec):
        svc = ProductService(db)
        ram = make_spec("Corsair 32GB", "150.00", brand="Corsair", spec_type="RAM")
        _create(svc, name="Workstation", base_price="900.00", spec_ids=[ram.id])
        _create(svc, name="Office PC", base_price="400.00")

        names = [p["name"] for p in svc.filter_products(ram=["32gb"])]
        assert names == ["Workstation"]

        cheap = [p["name"] for p in svc.filter_products(max_price=Decimal("500"))]
        assert cheap == ["Office PC"]

    def test_search_matches_name_or_description(self, db):
        svc = ProductService(db)
        _create(svc, name="Gaming PC")
        assert [p["name"] for p in svc.search("gaming")] == ["Gaming PC"]
        assert [p["name"] for p in svc.search("desc")] == ["Gaming PC"]
        assert svc.search("laptop") == []
