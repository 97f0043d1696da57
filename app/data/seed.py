# app/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel

SAMPLE_PRODUCTS = [
    {"name": "Mechanical Keyboard", "description": "Tenkeyless, brown switches", "price": Decimal("199.99"), "category": "electronics", "stock": 25},
    {"name": "Wireless Mouse", "description": "Ergonomic, 2.4 GHz", "price": Decimal("49.50"), "category": "electronics", "stock": 40},
    {"name": "27in Monitor", "description": "1440p IPS panel", "price": Decimal("899.00"), "category": "electronics", "stock": 8},
    {"name": "Cotton T-Shirt", "description": "Unisex, organic cotton", "price": Decimal("19.90"), "category": "clothing", "stock": 100},
    {"name": "Python Cookbook", "description": "Recipes for Python 3", "price": Decimal("39.00"), "category": "books", "stock": 12},
]


def seed(db: Session) -> int:
    # tylko gdy katalog jest pusty
    if db.execute(select(ProductModel.id).limit(1)).first():
        return 0
    db.add_all(ProductModel(**p) for p in SAMPLE_PRODUCTS)
    db.commit()
    return len(SAMPLE_PRODUCTS)


if __name__ == "__main__":
    from app.data.database import Base, SessionLocal, engine
    from app.data import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        print(f"Seeded {seed(db)} products")
    finally:
        db.close()
