"""
Shared Dependencies for Routers

Everything here is built once in the application lifespan (api/index.py)
and kept on `app.state`; endpoints receive it through Depends.
"""
from fastapi import Request

from storefront.cart import CartStore
from storefront.catalog import CatalogClient
from storefront.config import Settings
from storefront.orders import CheckoutService

from .overlay import CartOverlay


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def get_cart_overlay(request: Request) -> CartOverlay:
    return request.app.state.cart_overlay


def get_catalog_client(request: Request) -> CatalogClient:
    return request.app.state.catalog


def get_checkout_service(request: Request) -> CheckoutService:
    return request.app.state.checkout
