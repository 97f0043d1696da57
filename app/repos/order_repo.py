# app/repos/order_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from app.data.models.order import OrderModel, OrderItemModel
from app.data.models.product import ProductModel
from app.data.models.user import UserModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        """Dodaje zamówienie razem z pozycjami. Nie commituje."""
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_user_order(self, order_id: int, user_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id, OrderModel.user_id == user_id)
        ).scalar_one_or_none()

    def list_user_orders(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
        )

    def list_all_orders(self):
        """(OrderModel, UserModel) pairs, newest first."""
        return self.db.execute(
            select(OrderModel, UserModel)
            .join(UserModel, OrderModel.user_id == UserModel.id)
            .options(selectinload(OrderModel.items))
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        ).all()

    def product_names(self, product_ids) -> dict[int, str]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel.id, ProductModel.name).where(ProductModel.id.in_(ids))
        ).all()
        return {pid: name for pid, name in rows}

    def update_order_status(self, order_id: int, status: str, updated_at) -> OrderModel | None:
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(status=status, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            return None
        self.db.commit()
        return self.db.get(OrderModel, order_id, populate_existing=True)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
