# app/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel, OrderItemModel, ORDER_STATUSES
from app.domain.errors import ShopError, EmptyCart, InsufficientStock, InvalidStatus, NotFound, Internal
from app.domain.schemas import OrderOut
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.utils.retry import tx_retry
from app.utils.settings import ORDER_STATUS_STRICT
from app.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")

STRICT_TRANSITIONS = {
    "pending": {"processing", "cancelled"},
    "processing": {"shipped", "cancelled"},
    "shipped": {"delivered"},
    "delivered": set(),
    "cancelled": set(),
}


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień: składanie zamówienia
    z koszyka oraz zmiana statusu.
    """

    def __init__(self, db: Session, strict_status: bool = ORDER_STATUS_STRICT):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.strict_status = strict_status

    def place_order(self, user_id: int, shipping_address=None, payment_method: str | None = None) -> OrderOut:
        """
        Use Case: Zamówienie z koszyka, wszystko albo nic.

        1. Blokuje wiersze koszyka i produktów (FOR UPDATE)
        2. Sprawdza aktualny stan każdej pozycji
        3. Liczy total po aktualnych cenach
        4. Tworzy zamówienie i pozycje z zamrożoną ceną
        5. Odejmuje stan (compare-and-decrement)
        6. Czyści koszyk (musi usunąć dokładnie zablokowane pozycje) i commituje
        """
        try:
            order = self._place_order_tx(user_id, shipping_address, payment_method)
        except ShopError:
            raise
        except SQLAlchemyError as e:
            logger.error("Order placement failed", user_id=user_id, error=str(e))
            raise Internal("Could not place order") from e

        logger.info(
            "Order placed",
            order_id=order.id,
            user_id=user_id,
            items=len(order.items),
            total=str(order.total_amount),
        )
        return OrderOut.model_validate(order)

    @tx_retry()
    def _place_order_tx(self, user_id: int, shipping_address, payment_method) -> OrderModel:
        # zaczynamy od czystej transakcji, wczesniejsze odczyty w sesji nie moga byc nieaktualne
        if self.db.in_transaction():
            self.db.rollback()

        try:
            lines = self.carts.lock_cart_lines(user_id)

            if not lines:
                raise EmptyCart()

            total = Decimal("0.00")
            for item, product in lines:
                if item.quantity > product.stock:
                    raise InsufficientStock(
                        f"Not enough stock for {product.name}. Available: {product.stock}",
                        product_id=product.id,
                        available=product.stock,
                    )
                total += Decimal(product.price) * item.quantity

            order = OrderModel(
                user_id=user_id,
                status="pending",
                total_amount=total.quantize(CENT),
                shipping_address=shipping_address,
                payment_method=payment_method,
                items=[
                    OrderItemModel(
                        product_id=product.id,
                        quantity=item.quantity,
                        price=product.price,
                    )
                    for item, product in lines
                ],
            )
            self.repo.add_order(order)

            for item, product in lines:
                if self.products.decrement_stock(product.id, item.quantity) == 0:
                    # stan zmienil sie miedzy odczytem a zapisem (baza bez blokad wierszy)
                    raise InsufficientStock(
                        f"Not enough stock for {product.name}",
                        product_id=product.id,
                    )

            if self.carts.clear_cart(user_id) != len(lines):
                # koszyk zostal juz zamieniony na zamowienie przez inne zadanie
                logger.warning("Cart changed during checkout", user_id=user_id, expected=len(lines))
                raise EmptyCart()

            self.db.commit()
            return order
        except Exception:
            self.db.rollback()
            raise

    def set_status(self, order_id: int, status: str) -> OrderOut:
        """
        Use Case: Zmiana statusu przez administratora.
        Domyślnie dowolny status -> dowolny status z dozwolonego zbioru;
        w trybie strict obowiązuje graf STRICT_TRANSITIONS.
        """
        if status not in ORDER_STATUSES:
            raise InvalidStatus("Invalid status")

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        if self.strict_status and status != order.status and status not in STRICT_TRANSITIONS[order.status]:
            raise InvalidStatus(f"Cannot change status from {order.status} to {status}")

        previous = order.status
        updated = self.repo.update_order_status(order_id, status, datetime.now(timezone.utc))
        if not updated:
            raise NotFound("Order not found")

        logger.info("Order status changed", order_id=order_id, previous=previous, status=status)
        return OrderOut.model_validate(updated)
