"""Turning a product page selection into a cart line."""
from typing import Mapping, Optional

from storefront.cart.models import LineItem
from storefront.errors import (
    AttributeSelectionError,
    ERROR_INVALID_ATTRIBUTE_VALUE,
    ERROR_SELECT_ATTRIBUTE,
    ERROR_UNKNOWN_ATTRIBUTE,
    ProductUnavailableError,
)

from .models import ProductDetails

SIZE_ABBREVIATIONS = {
    "extra small": "XS",
    "small": "S",
    "medium": "M",
    "large": "L",
    "extra large": "XL",
    "2x large": "2XL",
    "xx large": "2XL",
    "3x large": "3XL",
    "xxx large": "3XL",
}


def size_abbreviation(display_value: str) -> str:
    """Short label for a size button ("Extra Large" -> "XL"); unknown values pass through."""
    return SIZE_ABBREVIATIONS.get(display_value.strip().lower(), display_value)


def build_line_item(
    product: ProductDetails,
    selected_attributes: Optional[Mapping[str, str]] = None,
    image_index: int = 0,
    quantity: int = 1,
) -> LineItem:
    """
    Snapshot a product and the shopper's selection as a cart line.

    Every attribute in the product's catalog must have a selected value that
    is one of its options.

    Raises:
        ProductUnavailableError: product is out of stock
        AttributeSelectionError: missing, unknown or invalid selection
    """
    if not product.is_in_stock:
        raise ProductUnavailableError(product.id)

    selected = {name: value for name, value in (selected_attributes or {}).items() if value}

    for attribute in product.attributes:
        value = selected.get(attribute.name)
        if not value:
            raise AttributeSelectionError(
                ERROR_SELECT_ATTRIBUTE.format(name=attribute.name.lower()), attribute.name
            )
        if attribute.items and value not in attribute.values():
            raise AttributeSelectionError(
                ERROR_INVALID_ATTRIBUTE_VALUE.format(name=attribute.name, value=value), attribute.name
            )

    known = {attribute.name for attribute in product.attributes}
    unknown = sorted(name for name in selected if name not in known)
    if unknown:
        raise AttributeSelectionError(ERROR_UNKNOWN_ATTRIBUTE.format(name=unknown[0]), unknown[0])

    images = product.images
    if 0 <= image_index < len(images):
        image = images[image_index]
    else:
        image = images[0] if images else ""

    return LineItem(
        product_id=product.id,
        name=product.name,
        image=image,
        unit_price=product.price,
        currency=product.currency.symbol,
        quantity=quantity,
        selected_attributes=selected,
        attributes=tuple(attribute.to_attribute_set() for attribute in product.attributes),
    )
