"""
Checkout - turns the current cart into an order.

Only product ids and quantities are sent; variant selections stay in the
cart. The cart is cleared only after the backend confirms the order.
"""
import re
from typing import Sequence

from storefront.cart import CartStore, ClearCart, LineItem
from storefront.errors import (
    ERROR_CART_EMPTY,
    ERROR_CHECKOUT_IN_PROGRESS,
    ERROR_INVALID_ADDRESS,
    ERROR_INVALID_EMAIL,
    ERROR_ORDER_FAILED,
    MESSAGE_ORDER_PLACED,
    OrderSubmissionError,
)
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging

from .client import OrderClient
from .models import CheckoutResult, CheckoutStatus, CreateOrderRequest, OrderItemInput

logger = get_logger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


def build_order_request(
    items: Sequence[LineItem],
    customer_email: str,
    shipping_address: str,
) -> CreateOrderRequest:
    return CreateOrderRequest(
        customer_email=customer_email,
        shipping_address=shipping_address,
        items=[OrderItemInput(product_id=item.product_id, quantity=item.quantity) for item in items],
    )


class CheckoutService:
    """
    Submits the cart held by `store` through `orders`.

    A busy flag blocks a second submission while one is pending. There is no
    cancellation: a submitted order is awaited until it succeeds or fails.
    """

    def __init__(self, store: CartStore, orders: OrderClient):
        self.store = store
        self.orders = orders
        self._busy = False

    @property
    def is_busy(self) -> bool:
        return self._busy

    async def checkout(self, customer_email: str, shipping_address: str) -> CheckoutResult:
        if self._busy:
            return CheckoutResult(status=CheckoutStatus.IN_PROGRESS, message=ERROR_CHECKOUT_IN_PROGRESS)

        state = self.store.state
        if state.is_empty:
            return CheckoutResult(status=CheckoutStatus.EMPTY_CART, message=ERROR_CART_EMPTY)

        email = (customer_email or "").strip()
        address = (shipping_address or "").strip()
        if not _EMAIL_RE.match(email):
            return CheckoutResult(status=CheckoutStatus.INVALID, message=ERROR_INVALID_EMAIL)
        if not address:
            return CheckoutResult(status=CheckoutStatus.INVALID, message=ERROR_INVALID_ADDRESS)

        request = build_order_request(state.items, email, address)
        total = state.total_price
        currency = state.currency_label()

        self._busy = True
        try:
            response = await self.orders.create_order(request)
        except OrderSubmissionError as e:
            logger.warning(f"Order submission failed for {sanitize_string_for_logging(email)}: {e}")
            return CheckoutResult(status=CheckoutStatus.FAILED, message=ERROR_ORDER_FAILED)
        finally:
            self._busy = False

        if not response.success:
            logger.warning(f"Order rejected: {sanitize_string_for_logging(response.message)}")
            return CheckoutResult(
                status=CheckoutStatus.FAILED,
                message=response.message or ERROR_ORDER_FAILED,
            )

        self.store.dispatch(ClearCart())
        logger.info(
            f"Order {sanitize_id_for_logging(response.order_id)} placed: "
            f"{len(request.items)} line(s), total {total} {currency}"
        )
        return CheckoutResult(
            status=CheckoutStatus.SUCCESS,
            message=response.message or MESSAGE_ORDER_PLACED,
            order_id=response.order_id,
            total=total,
            currency=currency,
        )
