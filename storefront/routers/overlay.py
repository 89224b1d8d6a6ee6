"""Cart overlay state owned by the shell."""
from typing import Optional

from storefront.cart import LineItem


class CartOverlay:
    """Opens when an item is added (registered via CartStore.on_item_added)."""

    def __init__(self):
        self.is_open = False
        self.last_added_key: Optional[str] = None

    def open(self, item: LineItem) -> None:
        self.is_open = True
        self.last_added_key = item.line_key

    def close(self) -> None:
        self.is_open = False
