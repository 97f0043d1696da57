# app/services/catalog_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain.errors import NotFound, Conflict
from app.domain.schemas import ProductIn, ProductOut
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Product CRUD and filtered listing."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, category: str | None = None, search: str | None = None) -> list[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_products(category, search)]

    def get_product(self, product_id: int) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return ProductOut.model_validate(product)

    def create_product(self, payload: ProductIn) -> ProductOut:
        created = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info("Product created", product_id=created.id, stock=created.stock)
        return ProductOut.model_validate(created)

    def update_product(self, product_id: int, payload: ProductIn) -> ProductOut:
        updated = self.repo.update_product(product_id, payload.model_dump())
        if not updated:
            raise NotFound("Product not found")
        logger.info("Product updated", product_id=product_id, price=str(updated.price), stock=updated.stock)
        return ProductOut.model_validate(updated)

    def delete_product(self, product_id: int) -> None:
        try:
            deleted = self.repo.delete_product(product_id)
        except IntegrityError:
            self.repo.rollback()
            raise Conflict("Product is referenced by existing orders")

        if deleted == 0:
            raise NotFound("Product not found")
        logger.info("Product deleted", product_id=product_id)
