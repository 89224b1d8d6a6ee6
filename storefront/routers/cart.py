"""
Cart Router

Cart overlay endpoints. Every mutation goes through CartStore.dispatch and
returns the full cart, so the client always renders the store's state.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.cart import AddItem, CartState, CartStore, UpdateAttribute, UpdateQuantity
from storefront.cart.store import describe_line
from storefront.catalog import CatalogClient, build_line_item
from storefront.config import Settings
from storefront.errors import (
    AttributeSelectionError,
    ERROR_CATALOG_UNAVAILABLE,
    ERROR_INVALID_ATTRIBUTE_VALUE,
    ERROR_INVALID_REQUEST,
    GraphQLRequestError,
    ProductNotFoundError,
    ProductUnavailableError,
)
from storefront.logging import get_logger
from storefront.services.money import format_money, to_float

from .deps import get_cart_overlay, get_cart_store, get_catalog_client, get_settings_dep
from .models import AddToCartRequest, UpdateAttributeRequest, UpdateQuantityRequest
from .overlay import CartOverlay

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


def _format_cart_response(state: CartState, overlay: CartOverlay, settings: Settings) -> dict:
    currency = state.currency_label(settings.default_currency_symbol)
    return {
        "items": [
            {
                "line_key": item.line_key,
                "product_id": item.product_id,
                "name": item.name,
                "image": item.image,
                "currency": item.currency,
                "quantity": item.quantity,
                "unit_price": to_float(item.unit_price),
                "total_price": to_float(item.total_price),
                "selected_attributes": dict(item.selected_attributes),
                "attributes": [a.to_dict() for a in item.attributes or ()],
            }
            for item in state.items
        ],
        "line_count": len(state.items),
        "total_items": state.total_items,
        "total": to_float(state.total_price),
        "total_display": format_money(state.total_price, currency),
        "currency": currency,
        "overlay_open": overlay.is_open,
        "last_added_key": overlay.last_added_key,
    }


@router.get("/cart")
async def get_cart(
    store: CartStore = Depends(get_cart_store),
    overlay: CartOverlay = Depends(get_cart_overlay),
    settings: Settings = Depends(get_settings_dep),
):
    return _format_cart_response(store.state, overlay, settings)


@router.post("/cart/items")
async def add_to_cart(
    request: AddToCartRequest,
    store: CartStore = Depends(get_cart_store),
    catalog: CatalogClient = Depends(get_catalog_client),
    overlay: CartOverlay = Depends(get_cart_overlay),
    settings: Settings = Depends(get_settings_dep),
):
    """Add the selected product configuration (merges with an identical line)."""
    try:
        product = await catalog.get_product(request.product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GraphQLRequestError as e:
        logger.error(f"Catalog lookup failed: {e}")
        raise HTTPException(status_code=502, detail=ERROR_CATALOG_UNAVAILABLE)

    try:
        item = build_line_item(
            product,
            request.selected_attributes,
            image_index=request.image_index,
            quantity=request.quantity,
        )
    except (ProductUnavailableError, AttributeSelectionError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    store.dispatch(AddItem(item))
    logger.info(f"Added to cart: {describe_line(item)}")
    return _format_cart_response(store.state, overlay, settings)


@router.patch("/cart/items/quantity")
async def update_quantity(
    request: UpdateQuantityRequest,
    store: CartStore = Depends(get_cart_store),
    overlay: CartOverlay = Depends(get_cart_overlay),
    settings: Settings = Depends(get_settings_dep),
):
    """Set a line's quantity (0 = remove). Unknown lines are ignored."""
    if not request.line_key and not request.product_id:
        raise HTTPException(status_code=400, detail=ERROR_INVALID_REQUEST)

    store.dispatch(
        UpdateQuantity(
            quantity=request.quantity,
            line_key=request.line_key,
            product_id=request.product_id,
        )
    )
    return _format_cart_response(store.state, overlay, settings)


@router.patch("/cart/items/attribute")
async def update_attribute(
    request: UpdateAttributeRequest,
    store: CartStore = Depends(get_cart_store),
    overlay: CartOverlay = Depends(get_cart_overlay),
    settings: Settings = Depends(get_settings_dep),
):
    """Change a variant on a line; merges into an existing line with the same configuration."""
    line = store.state.find(line_key=request.line_key, product_id=request.product_id)
    if line is not None and not line.accepts(request.attribute_name, request.value):
        raise HTTPException(
            status_code=400,
            detail=ERROR_INVALID_ATTRIBUTE_VALUE.format(name=request.attribute_name, value=request.value),
        )

    store.dispatch(
        UpdateAttribute(
            product_id=request.product_id,
            attribute_name=request.attribute_name,
            value=request.value,
            line_key=request.line_key,
        )
    )
    return _format_cart_response(store.state, overlay, settings)


@router.post("/cart/overlay/close")
async def close_overlay(
    store: CartStore = Depends(get_cart_store),
    overlay: CartOverlay = Depends(get_cart_overlay),
    settings: Settings = Depends(get_settings_dep),
):
    overlay.close()
    return _format_cart_response(store.state, overlay, settings)
