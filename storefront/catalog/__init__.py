"""Catalog package: product models, GraphQL queries, line-item construction."""
from .client import CatalogClient
from .models import Attribute, AttributeItem, Currency, Product, ProductDetails
from .selection import build_line_item, size_abbreviation

__all__ = [
    "Attribute",
    "AttributeItem",
    "CatalogClient",
    "Currency",
    "Product",
    "ProductDetails",
    "build_line_item",
    "size_abbreviation",
]
