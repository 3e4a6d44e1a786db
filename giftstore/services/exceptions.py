"""
Domain exceptions raised by the service layer

Each carries the HTTP status it maps to; the API layer renders them as
{"success": false, "message": ...}.
"""
from typing import Optional


class StoreError(Exception):
    """Base exception for store errors"""
    status_code = 500
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """Malformed cart or request payload"""
    status_code = 400


class ProductNotFoundError(StoreError):
    """Product does not exist"""
    status_code = 404
    
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class ProductInactiveError(StoreError):
    """Product exists but is deactivated"""
    status_code = 400
    
    def __init__(self, product_id: int, name: Optional[str] = None):
        label = f"{name} (id={product_id})" if name else f"{product_id}"
        super().__init__(f"Product {label} is not available for sale")
        self.product_id = product_id


class InsufficientStockError(StoreError):
    """Fewer available gift codes than requested"""
    status_code = 409
    
    def __init__(self, product_id: int, name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {name}. Requested: {requested}, Available: {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class TransactionFailureError(StoreError):
    """Store error inside a multi-statement write; the transaction was rolled back"""
    status_code = 500


class ProductInUseError(StoreError):
    """Product is referenced by orders"""
    status_code = 400


class OrderNotFoundError(StoreError):
    status_code = 404
    
    def __init__(self, order_id: int):
        super().__init__("Order not found")
        self.order_id = order_id


class InvalidStatusTransitionError(StoreError):
    status_code = 400


class PaymentAlreadyProcessedError(StoreError):
    status_code = 400
    
    def __init__(self, order_id: int):
        super().__init__("Order is already processed")
        self.order_id = order_id


class CategoryNotFoundError(StoreError):
    status_code = 404
    
    def __init__(self, category_id: int):
        super().__init__("Category not found")
        self.category_id = category_id


class CategoryConflictError(StoreError):
    """Duplicate name or category still in use"""
    status_code = 400


class GiftCodeNotFoundError(StoreError):
    status_code = 404
    
    def __init__(self, gift_code_id: int):
        super().__init__("Gift code not found")
        self.gift_code_id = gift_code_id


class GiftCodeConflictError(StoreError):
    """One or more codes already exist"""
    status_code = 400


class GiftCodeLockedError(StoreError):
    """Code is sold or redeemed and must be kept"""
    status_code = 400
