# app/domain/errors.py


class ShopError(Exception):
    """Base class for failures surfaced to the caller of a use case."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ShopError):
    status_code = 404


class InvalidInput(ShopError):
    pass


class InsufficientStock(ShopError):
    def __init__(self, message: str, product_id: int | None = None, available: int | None = None):
        super().__init__(message)
        self.product_id = product_id
        self.available = available


class EmptyCart(ShopError):
    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class InvalidStatus(ShopError):
    pass


class Conflict(ShopError):
    pass


class Internal(ShopError):
    status_code = 500
