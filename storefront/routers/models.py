"""
Shell API Pydantic Models

Request bodies for the cart and checkout endpoints.
"""
from typing import Optional

from pydantic import BaseModel, Field


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: str
    selected_attributes: dict[str, str] = {}
    image_index: int = 0
    quantity: int = Field(1, ge=1)


class UpdateQuantityRequest(BaseModel):
    line_key: Optional[str] = None
    product_id: Optional[str] = None  # only used when line_key is missing
    quantity: int  # 0 removes the line


class UpdateAttributeRequest(BaseModel):
    product_id: str
    attribute_name: str
    value: str
    line_key: Optional[str] = None


# ==================== CHECKOUT MODELS ====================

class CheckoutRequest(BaseModel):
    customer_email: str
    shipping_address: str
