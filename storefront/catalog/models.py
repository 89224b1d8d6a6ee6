"""Catalog Models - Pydantic models for products returned by the GraphQL API."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from storefront.cart.models import AttributeOption, AttributeSet
from storefront.services.money import parse_price


class Currency(BaseModel):
    label: str = "USD"
    symbol: str = "$"


class AttributeItem(BaseModel):
    display_value: str
    value: str


class Attribute(BaseModel):
    """Variant axis (Size, Color, Capacity, ...)."""
    name: str
    type: str = "text"
    items: list[AttributeItem] = []

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v):
        return v or "text"

    @field_validator("items", mode="before")
    @classmethod
    def default_items(cls, v):
        return v or []

    def values(self) -> list[str]:
        return [item.value for item in self.items]

    def to_attribute_set(self) -> AttributeSet:
        return AttributeSet(
            name=self.name,
            type=self.type,
            items=tuple(AttributeOption(value=i.value, display_value=i.display_value) for i in self.items),
        )


class Product(BaseModel):
    """Product as listed in the catalog."""
    id: str
    name: str
    price: Decimal = Decimal("0")
    currency: Currency = Currency()
    images: list[str] = []
    category_name: Optional[str] = None
    in_stock: int = 0

    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields from the API

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return parse_price(v)

    @field_validator("currency", mode="before")
    @classmethod
    def default_currency(cls, v):
        return v or {}

    @field_validator("images", mode="before")
    @classmethod
    def drop_empty_images(cls, v):
        # Products without images come back as [""] (or null)
        return [image for image in (v or []) if image]

    @field_validator("in_stock", mode="before")
    @classmethod
    def convert_stock_flag(cls, v):
        return int(v or 0)

    @property
    def is_in_stock(self) -> bool:
        return self.in_stock > 0


class ProductDetails(Product):
    """Single product with description and attribute catalog."""
    description: Optional[str] = None
    brand: Optional[str] = None
    attributes: list[Attribute] = []

    @field_validator("attributes", mode="before")
    @classmethod
    def drop_empty_attributes(cls, v):
        # A product with no attribute sets aggregates to [{"name": null, ...}]
        if v is None:
            return []
        if isinstance(v, list):
            return [a for a in v if not isinstance(a, dict) or a.get("name")]
        return v
