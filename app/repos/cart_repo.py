# app/repos/cart_repo.py
from sqlalchemy import select, delete, text
from sqlalchemy.orm import Session

from app.data.models.cart_item import CartItemModel
from app.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    # ---------- queries ----------
    def get_cart_lines(self, user_id: int):
        """(CartItemModel, ProductModel) pairs for display."""
        stmt = (
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        )
        return self.db.execute(stmt).all()

    def lock_cart_lines(self, user_id: int):
        """
        Same join as get_cart_lines, but locks both the cart rows and the
        product rows (SELECT ... FOR UPDATE OF cart_items, products). Product
        ids are locked in ascending order so two checkouts never deadlock on
        each other; a second checkout of the same cart waits and then sees
        the cart rows already deleted.
        """
        if self.db.get_bind().dialect.name == "sqlite":
            # SQLite nie ma blokad wierszy, bierzemy blokade zapisu calej bazy od razu
            self.db.execute(text("BEGIN IMMEDIATE"))

        stmt = (
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.user_id == user_id)
            .order_by(ProductModel.id)
            .with_for_update(of=(CartItemModel, ProductModel))
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).all()

    def get_cart_item(self, item_id: int, user_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def get_cart_item_by_product(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    # ---------- commands ----------
    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item_id: int, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.user_id == user_id,
            )
        )
        return result.rowcount

    def clear_cart(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
