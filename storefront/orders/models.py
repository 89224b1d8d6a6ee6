"""Order request/response models for the createOrder mutation."""
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class OrderItemInput(BaseModel):
    product_id: str
    quantity: int


class CreateOrderRequest(BaseModel):
    customer_email: str
    shipping_address: str
    items: list[OrderItemInput]

    def to_variables(self) -> dict:
        """GraphQL variables in the backend's camelCase shape."""
        return {
            "customerEmail": self.customer_email,
            "shippingAddress": self.shipping_address,
            "items": [{"productId": i.product_id, "quantity": i.quantity} for i in self.items],
        }


class OrderResponse(BaseModel):
    success: bool
    message: str = ""
    order_id: Optional[str] = None


class CheckoutStatus(str, Enum):
    SUCCESS = "success"
    EMPTY_CART = "empty_cart"
    IN_PROGRESS = "in_progress"
    INVALID = "invalid"
    FAILED = "failed"


class CheckoutResult(BaseModel):
    """Outcome of a checkout attempt; `message` is shown to the shopper."""
    status: CheckoutStatus
    message: str
    order_id: Optional[str] = None
    total: Optional[Decimal] = None
    currency: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == CheckoutStatus.SUCCESS
