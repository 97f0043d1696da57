import os
from decimal import Decimal

# przed importem app.*: settings czytane sa przy imporcie
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from app.data import models  # noqa: F401
from app.data.database import Base, get_db, make_engine, make_session_factory
from app.data.models.product import ProductModel
from app.data.models.user import UserModel


@pytest.fixture()
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'shop.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    app = create_app()

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make(email=None):
        counter["n"] += 1
        user = UserModel(
            email=email or f"user{counter['n']}@example.com",
            password_hash="x",
            first_name="Test",
            last_name=f"User{counter['n']}",
        )
        db.add(user)
        db.commit()
        return user.id

    return _make


@pytest.fixture()
def make_product(db):
    def _make(name="Widget", price="10.00", stock=5, category="misc", description=None):
        product = ProductModel(
            name=name,
            description=description,
            price=Decimal(price),
            category=category,
            stock=stock,
        )
        db.add(product)
        db.commit()
        return product.id

    return _make
