import os

#przed importem pcstore - settings czytają env przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["MAIL_API_URL"] = ""
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin123"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from pcstore.api.deps import get_notification_service, get_reset_code_store
from pcstore.data.database import Base, SessionLocal, engine, init_db
from pcstore.data.models import ProductModel, SpecificationModel, UserModel
from pcstore.domain.enums import ProductCategory, ProductType, Role
from pcstore.main import create_app
from pcstore.utils.security import hash_password
from tests.fakes import FakeNotificationService, FakeResetCodeStore


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifications():
    return FakeNotificationService()


@pytest.fixture
def code_store():
    return FakeResetCodeStore()


@pytest.fixture
def make_user(db):
    def _make(username="alice", password="secret1", email=None, role=Role.USER):
        user = UserModel(
            username=username,
            password_hash=hash_password(password),
            first_name=username.capitalize(),
            last_name="Tester",
            email=email or f"{username}@example.com",
            role=role.value,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_spec(db):
    def _make(name="16GB DDR4", additional_price="20.00", brand="Kingston", spec_type="RAM"):
        spec = SpecificationModel(
            name=name,
            description=f"{name} module",
            brand=brand,
            spec_type=spec_type,
            additional_price=Decimal(additional_price),
        )
        db.add(spec)
        db.commit()
        return spec

    return _make


@pytest.fixture
def make_product(db):
    """Produkt bez specyfikacji, price == base_price."""

    def _make(name="Office PC", price="500.00", stock=5):
        product = ProductModel(
            name=name,
            description=f"{name} description",
            base_price=Decimal(price),
            price=Decimal(price),
            stock=stock,
            image="",
            category=ProductCategory.COMPUTERS.value,
            product_type=ProductType.DESKTOP_PC.value,
            version=1,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def client(db, notifications, code_store):
    app = create_app()
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_reset_code_store] = lambda: code_store

    # context manager odpala lifespan: tabele + konto admina
    with TestClient(app) as c:
        yield c


def login(client, username, password):
    resp = client.post("/users/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, "admin", "admin123")


@pytest.fixture
def user_headers(client):
    resp = client.post(
        "/users/register",
        json={
            "username": "alice",
            "password": "secret1",
            "first_name": "Alice",
            "last_name": "Tester",
            "email": "alice@example.com",
        },
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}
