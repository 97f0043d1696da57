# app/services/order_query_service.py
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.domain.errors import NotFound
from app.domain.schemas import OrderDetailOut, OrderItemOut, AdminOrderOut, OrderOut
from app.repos.order_repo import OrderRepo


class OrderQueryService:
    """
    Projekcje tylko do odczytu: zamówienie + pozycje (zamrożona cena,
    aktualna nazwa produktu).
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def _items(self, order: OrderModel, names: dict[int, str]) -> list[OrderItemOut]:
        return [
            OrderItemOut(
                product_id=i.product_id,
                name=names.get(i.product_id),
                quantity=i.quantity,
                price=i.price,
            )
            for i in order.items
        ]

    def _names_for(self, orders) -> dict[int, str]:
        return self.repo.product_names(i.product_id for o in orders for i in o.items)

    def _detail(self, order: OrderModel, names: dict[int, str]) -> OrderDetailOut:
        base = OrderOut.model_validate(order).model_dump()
        return OrderDetailOut(**base, items=self._items(order, names))

    def list_user_orders(self, user_id: int) -> list[OrderDetailOut]:
        orders = self.repo.list_user_orders(user_id)
        names = self._names_for(orders)
        return [self._detail(o, names) for o in orders]

    def get_user_order(self, order_id: int, user_id: int) -> OrderDetailOut:
        order = self.repo.get_user_order(order_id, user_id)
        if not order:
            raise NotFound("Order not found")
        return self._detail(order, self._names_for([order]))

    def list_all_orders(self) -> list[AdminOrderOut]:
        rows = self.repo.list_all_orders()
        names = self._names_for(o for o, _ in rows)
        return [
            AdminOrderOut(
                **self._detail(order, names).model_dump(),
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
            )
            for order, user in rows
        ]
