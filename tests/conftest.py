import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from storefront_admin.admin.client import AdminApiClient
from storefront_admin.config import settings
from storefront_admin.database import Base, get_db
from storefront_admin.main import app
from storefront_admin.models import Brand, Category, Product, User
from storefront_admin.utils.security import create_access_token, get_password_hash

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def client(engine, tmp_path, monkeypatch):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    monkeypatch.setattr(settings, "PUBLIC_DIR", str(tmp_path / "public"))
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email, is_admin=False, is_active=True, name="Test User"):
    user = User(
        email=email,
        name=name,
        password_hash=get_password_hash(PASSWORD, rounds=4),
        is_admin=is_admin,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return make_user(db, "admin@example.com", is_admin=True, name="Admin")


@pytest.fixture
def shopper(db):
    return make_user(db, "shopper@example.com", name="Shopper")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': admin_user.id})}"}


@pytest.fixture
def shopper_headers(shopper):
    return {"Authorization": f"Bearer {create_access_token({'sub': shopper.id})}"}


@pytest.fixture
def api(client, admin_user):
    """AdminApiClient talking to the app through the test client"""
    return AdminApiClient(
        base_url="http://testserver",
        token=create_access_token({"sub": admin_user.id}),
        session=client,
    )


def add_category(db, name, slug=None, parent=None, **kwargs):
    category = Category(
        name=name,
        slug=slug or name.lower().replace(" ", "-"),
        parent_id=parent.id if parent else None,
        **kwargs
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def add_brand(db, name, slug=None):
    brand = Brand(name=name, slug=slug or name.lower().replace(" ", "-"))
    db.add(brand)
    db.commit()
    db.refresh(brand)
    return brand


def add_product(db, name, category=None, brand=None, quantity=50, price=10, is_active=True):
    product = Product(
        name=name,
        slug=name.lower().replace(" ", "-"),
        price=price,
        quantity=quantity,
        category_id=category.id if category else None,
        brand_id=brand.id if brand else None,
        is_active=is_active,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product
