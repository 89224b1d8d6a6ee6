"""Pytest configuration and fixtures"""
import json
import os

import httpx
import pytest

# Set test environment variables (before storefront.config is read)
os.environ.setdefault("CART_STORAGE", "memory")
os.environ.setdefault("GRAPHQL_ENDPOINT", "http://catalog.test/graphql")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from storefront.cart import CartStorage, CartStore, LineItem, MemoryCartSlot  # noqa: E402
from storefront.graphql import GraphQLClient  # noqa: E402


def make_item(
    product_id: str = "P1",
    quantity: int = 1,
    price="10.00",
    currency: str = "$",
    **selected,
) -> LineItem:
    """Line item with attributes passed as keyword args (Size="M")."""
    return LineItem(
        product_id=product_id,
        name=f"Product {product_id}",
        image=f"https://img.test/{product_id}.jpg",
        unit_price=price,
        currency=currency,
        quantity=quantity,
        selected_attributes=selected,
    )


@pytest.fixture
def memory_slot():
    return MemoryCartSlot()


@pytest.fixture
def store(memory_slot):
    """Store backed by an in-memory slot"""
    return CartStore(CartStorage(memory_slot))


@pytest.fixture
def sample_product():
    """Product detail as returned by the `product` query"""
    return {
        "id": "huarache-x-stussy-le",
        "name": "Nike Air Huarache Le",
        "description": "<p>Great sneakers for everyday use!</p>",
        "brand": "Nike x Stussy",
        "price": 144.69,
        "currency": {"label": "USD", "symbol": "$"},
        "images": [
            "https://img.test/huarache-1.jpg",
            "https://img.test/huarache-2.jpg",
        ],
        "attributes": [
            {
                "name": "Size",
                "type": "text",
                "items": [
                    {"display_value": "40", "value": "40"},
                    {"display_value": "41", "value": "41"},
                    {"display_value": "42", "value": "42"},
                ],
            },
            {
                "name": "Color",
                "type": "swatch",
                "items": [
                    {"display_value": "Green", "value": "#44FF03"},
                    {"display_value": "Black", "value": "#000000"},
                ],
            },
        ],
        "in_stock": 1,
    }


@pytest.fixture
def sample_products():
    """Product list as returned by the `products` query"""
    return [
        {
            "id": "ps-5",
            "name": "PlayStation 5",
            "price": 844.02,
            "currency": {"label": "USD", "symbol": "$"},
            "images": ["https://img.test/ps5.jpg"],
            "category_name": "tech",
            "in_stock": 1,
        },
        {
            "id": "jacket-canada-goosee",
            "name": "Jacket",
            "price": 518.47,
            "currency": {"label": "USD", "symbol": "$"},
            "images": ["https://img.test/jacket.jpg"],
            "category_name": "clothes",
            "in_stock": 0,
        },
    ]


def graphql_client_for(handler) -> GraphQLClient:
    """GraphQLClient whose HTTP calls are answered by `handler(request) -> httpx.Response`."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GraphQLClient("http://catalog.test/graphql", http_client=http_client)


def request_body(request: httpx.Request) -> dict:
    return json.loads(request.content.decode("utf-8"))


def saved_records(slot) -> list:
    """Decoded contents of a cart slot."""
    blob = slot.read()
    return json.loads(blob) if blob else []
