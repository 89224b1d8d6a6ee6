"""
FastAPI Routers Package

All routers are included in api/index.py under /api.
"""

from storefront.routers.cart import router as cart_router
from storefront.routers.checkout import router as checkout_router
from storefront.routers.products import router as products_router

__all__ = [
    "cart_router",
    "checkout_router",
    "products_router",
]
