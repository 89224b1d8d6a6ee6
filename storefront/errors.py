"""
Common Errors

Centralized error messages (shown to the shopper as notices) and the
exception types raised by the service layer.
"""

# Cart / product selection
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_PRODUCT_OUT_OF_STOCK = "Product out of stock"
ERROR_SELECT_ATTRIBUTE = "Please select a {name}"
ERROR_INVALID_ATTRIBUTE_VALUE = "Invalid {name} option: {value}"
ERROR_UNKNOWN_ATTRIBUTE = "Product has no {name} option"

# Checkout
ERROR_CART_EMPTY = "Your cart is empty"
ERROR_CHECKOUT_IN_PROGRESS = "Your order is already being placed"
ERROR_INVALID_EMAIL = "Please enter a valid email address"
ERROR_INVALID_ADDRESS = "Please enter a shipping address"
ERROR_ORDER_FAILED = "Failed to place order. Please try again."

# Generic
ERROR_INVALID_REQUEST = "Invalid request"
ERROR_CATALOG_UNAVAILABLE = "Catalog is unavailable"

MESSAGE_ORDER_PLACED = "Order placed successfully"


class StorefrontError(Exception):
    """Base class for storefront service errors."""


class GraphQLRequestError(StorefrontError):
    """Transport failure or error payload from the GraphQL endpoint."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class OrderSubmissionError(StorefrontError):
    """The order could not be submitted or the backend rejected it."""


class ProductNotFoundError(StorefrontError):
    def __init__(self, product_id: str):
        super().__init__(ERROR_PRODUCT_NOT_FOUND)
        self.product_id = product_id


class ProductUnavailableError(StorefrontError):
    def __init__(self, product_id: str):
        super().__init__(ERROR_PRODUCT_OUT_OF_STOCK)
        self.product_id = product_id


class AttributeSelectionError(StorefrontError):
    """A required variant attribute is missing or has an unknown value."""

    def __init__(self, message: str, attribute_name: str):
        super().__init__(message)
        self.attribute_name = attribute_name
