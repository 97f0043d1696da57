# app/repos/product_repo.py
from sqlalchemy import select, update, delete, or_, func
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, category: str | None = None, search: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel)

        if category:
            stmt = stmt.where(ProductModel.category == category)

        if search:
            like = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(ProductModel.name).like(like),
                    func.lower(ProductModel.description).like(like),
                )
            )

        stmt = stmt.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product_id: int, new_data: dict) -> ProductModel | None:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(**new_data, updated_at=func.now())
        )
        if result.rowcount == 0:
            self.db.rollback()
            return None
        self.db.commit()
        return self.db.get(ProductModel, product_id, populate_existing=True)

    def delete_product(self, product_id: int) -> int:
        result = self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        self.db.commit()
        return result.rowcount

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        """
        Compare-and-decrement: odejmuje tylko gdy stan jest wystarczajacy.
        Zwraca rowcount (0 = za malo towaru). Nie commituje.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def rollback(self):
        self.db.rollback()
