"""Products Router - catalog listing and product page data."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from storefront.catalog import CatalogClient, Product, ProductDetails, size_abbreviation
from storefront.errors import ERROR_CATALOG_UNAVAILABLE, GraphQLRequestError, ProductNotFoundError
from storefront.logging import get_logger
from storefront.services.money import to_float

from .deps import get_catalog_client

logger = get_logger(__name__)

router = APIRouter(tags=["products"])

SIZE_ATTRIBUTE = "Size"


def _product_summary(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "price": to_float(product.price),
        "currency": product.currency.model_dump(),
        "image": product.images[0] if product.images else None,
        "category": product.category_name,
        "in_stock": product.is_in_stock,
    }


def _product_page(product: ProductDetails) -> dict:
    data = _product_summary(product)
    data.update({
        "description": product.description,
        "brand": product.brand,
        "images": product.images,
        "attributes": [
            {
                "name": attribute.name,
                "type": attribute.type,
                "items": [
                    {
                        "value": item.value,
                        "display_value": item.display_value,
                        "label": (
                            size_abbreviation(item.display_value)
                            if attribute.name == SIZE_ATTRIBUTE
                            else item.display_value
                        ),
                    }
                    for item in attribute.items
                ],
            }
            for attribute in product.attributes
        ],
    })
    return data


@router.get("/products")
async def list_products(
    category: Optional[str] = None,
    catalog: CatalogClient = Depends(get_catalog_client),
):
    try:
        products = await catalog.list_products(category)
    except GraphQLRequestError as e:
        logger.error(f"Failed to list products: {e}")
        raise HTTPException(status_code=502, detail=ERROR_CATALOG_UNAVAILABLE)
    return [_product_summary(p) for p in products]


@router.get("/products/{product_id}")
async def get_product(product_id: str, catalog: CatalogClient = Depends(get_catalog_client)):
    try:
        product = await catalog.get_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GraphQLRequestError as e:
        logger.error(f"Failed to load product: {e}")
        raise HTTPException(status_code=502, detail=ERROR_CATALOG_UNAVAILABLE)
    return _product_page(product)
