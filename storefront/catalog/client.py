"""Catalog queries against the storefront GraphQL API."""
from pydantic import ValidationError

from storefront.errors import GraphQLRequestError, ProductNotFoundError
from storefront.graphql import GraphQLClient
from storefront.logging import get_logger, sanitize_id_for_logging

from .models import Product, ProductDetails

logger = get_logger(__name__)

ALL_CATEGORIES = "all"

PRODUCTS_QUERY = """
query Products {
  products {
    id
    name
    price
    currency { label symbol }
    images
    category_name
    in_stock
  }
}
"""

PRODUCT_QUERY = """
query Product($id: String!) {
  product(id: $id) {
    id
    name
    description
    brand
    price
    currency { label symbol }
    images
    attributes {
      name
      type
      items { display_value value }
    }
    in_stock
  }
}
"""


class CatalogClient:
    """Read-only access to products and their attribute catalogs."""

    def __init__(self, graphql: GraphQLClient):
        self.graphql = graphql

    async def list_products(self, category: str | None = None) -> list[Product]:
        """All products, optionally filtered by category name ("all" or None = no filter)."""
        data = await self.graphql.execute(PRODUCTS_QUERY)

        products = []
        for row in data.get("products") or []:
            try:
                products.append(Product.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed product: {e.error_count()} error(s)")

        if category and category.lower() != ALL_CATEGORIES:
            wanted = category.lower()
            products = [p for p in products if (p.category_name or "").lower() == wanted]
        return products

    async def get_product(self, product_id: str) -> ProductDetails:
        """
        Raises:
            ProductNotFoundError: unknown id
            GraphQLRequestError: transport failure or malformed product
        """
        data = await self.graphql.execute(PRODUCT_QUERY, {"id": product_id})
        row = data.get("product")
        if not row:
            raise ProductNotFoundError(product_id)

        try:
            return ProductDetails.model_validate(row)
        except ValidationError as e:
            logger.warning(f"Malformed product {sanitize_id_for_logging(product_id)}: {e.error_count()} error(s)")
            raise GraphQLRequestError("Malformed product data")
