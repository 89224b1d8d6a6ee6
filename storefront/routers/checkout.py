"""Checkout Router - places the order for the current cart."""
from fastapi import APIRouter, Depends, HTTPException

from storefront.orders import CheckoutService, CheckoutStatus
from storefront.services.money import to_float

from .deps import get_checkout_service
from .models import CheckoutRequest

router = APIRouter(tags=["checkout"])

# Failure statuses -> HTTP status; the detail is the shopper-facing notice
_STATUS_CODES = {
    CheckoutStatus.EMPTY_CART: 400,
    CheckoutStatus.INVALID: 400,
    CheckoutStatus.IN_PROGRESS: 409,
    CheckoutStatus.FAILED: 502,
}


@router.post("/checkout")
async def checkout(request: CheckoutRequest, service: CheckoutService = Depends(get_checkout_service)):
    result = await service.checkout(request.customer_email, request.shipping_address)
    if not result.success:
        raise HTTPException(status_code=_STATUS_CODES[result.status], detail=result.message)

    return {
        "success": True,
        "message": result.message,
        "order_id": result.order_id,
        "total": to_float(result.total),
        "currency": result.currency,
    }
