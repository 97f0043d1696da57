# app/services/cart_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart_item import CartItemModel
from app.domain.errors import NotFound, InvalidInput, InsufficientStock
from app.domain.schemas import CartLineOut, CartItemOut
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Serwis obsługujący Use Case'y dla koszyka.
    Koszyk to zbior wierszy (user, product, quantity); cena i stan
    magazynowy zawsze czytane na zywo z produktu.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    # =====================================================
    # QUERY
    # =====================================================
    def list_cart(self, user_id: int) -> list[CartLineOut]:
        """
        Use Case: Pobranie koszyka (Query). Bez ponownej walidacji stanu.
        """
        return [
            CartLineOut(
                id=item.id,
                quantity=item.quantity,
                product_id=product.id,
                name=product.name,
                price=product.price,
                image_url=product.image_url,
            )
            for item, product in self.repo.get_cart_lines(user_id)
        ]

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_product(self, user_id: int, product_id: int, quantity: int = 1) -> tuple[CartItemOut, bool]:
        """
        Use Case: Dodanie produktu do koszyka (Command).

        Walidacja:
        - quantity > 0
        - produkt istnieje
        - ilosc w koszyku + quantity <= aktualny stan

        Zwraca (pozycja, created) - created=False gdy ilosc zostala zsumowana.
        """
        if quantity is None or quantity <= 0:
            raise InvalidInput("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        existing = self.repo.get_cart_item_by_product(user_id, product_id)

        if existing:
            new_quantity = existing.quantity + quantity
            if new_quantity > product.stock:
                raise InsufficientStock("Not enough stock available", product_id=product_id, available=product.stock)

            existing.quantity = new_quantity
            self.repo.commit()
            logger.info("Cart quantity increased", user_id=user_id, product_id=product_id, quantity=new_quantity)
            return CartItemOut.model_validate(existing), False

        if quantity > product.stock:
            raise InsufficientStock("Not enough stock available", product_id=product_id, available=product.stock)

        try:
            item = self.repo.add_cart_item(
                CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
            )
        except IntegrityError:
            self.repo.rollback()
            if self.repo.get_cart_item_by_product(user_id, product_id):
                # ktos wstawil ten sam wiersz rownolegle, sumujemy
                return self.add_product(user_id, product_id, quantity)
            raise NotFound("User not found")
        self.repo.commit()
        logger.info("Product added to cart", user_id=user_id, product_id=product_id, quantity=quantity)
        return CartItemOut.model_validate(item), True

    def set_quantity(self, user_id: int, item_id: int, quantity: int) -> CartItemOut | None:
        """
        Use Case: Zmiana ilosci. quantity <= 0 usuwa pozycje (zwraca None).
        """
        item = self.repo.get_cart_item(item_id, user_id)
        if not item:
            raise NotFound("Cart item not found")

        if quantity <= 0:
            self.repo.delete_cart_item(item_id, user_id)
            self.repo.commit()
            logger.info("Cart item removed", user_id=user_id, item_id=item_id)
            return None

        item.quantity = quantity
        self.repo.commit()
        return CartItemOut.model_validate(item)

    def remove_item(self, user_id: int, item_id: int) -> None:
        """
        Use Case: Usunięcie pozycji z koszyka (Command).
        """
        deleted = self.repo.delete_cart_item(item_id, user_id)
        if deleted == 0:
            self.repo.rollback()
            raise NotFound("Cart item not found")

        self.repo.commit()
        logger.info("Cart item removed", user_id=user_id, item_id=item_id)
