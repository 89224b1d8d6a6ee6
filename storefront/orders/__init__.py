"""Orders package: createOrder client and checkout."""
from .checkout import CheckoutService, build_order_request
from .client import OrderClient
from .models import CheckoutResult, CheckoutStatus, CreateOrderRequest, OrderItemInput, OrderResponse

__all__ = [
    "CheckoutResult",
    "CheckoutService",
    "CheckoutStatus",
    "CreateOrderRequest",
    "OrderClient",
    "OrderItemInput",
    "OrderResponse",
    "build_order_request",
]
