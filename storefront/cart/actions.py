"""Actions accepted by the cart reducer."""
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .models import LineItem


@dataclass(frozen=True)
class AddItem:
    """Add one line (merging by line key) or a batch restored from storage."""
    payload: Union[LineItem, Sequence[LineItem]]

    @property
    def is_batch(self) -> bool:
        return not isinstance(self.payload, LineItem)


@dataclass(frozen=True)
class UpdateQuantity:
    """Set a line's quantity; lines at zero or below are removed.

    `line_key` is preferred. `product_id` is only consulted when no key is
    given (saved carts written before line keys existed).
    """
    quantity: object
    line_key: Optional[str] = None
    product_id: Optional[str] = None


@dataclass(frozen=True)
class UpdateAttribute:
    """Change one selected attribute on an existing line."""
    product_id: str
    attribute_name: str
    value: str
    line_key: Optional[str] = None


@dataclass(frozen=True)
class ClearCart:
    pass


CartAction = Union[AddItem, UpdateQuantity, UpdateAttribute, ClearCart]
