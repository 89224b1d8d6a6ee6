"""Cart package: models, reducer, storage, and the store."""
from .actions import AddItem, CartAction, ClearCart, UpdateAttribute, UpdateQuantity
from .models import AttributeOption, AttributeSet, CartState, LineItem, line_key
from .reducer import cart_reducer
from .storage import CartStorage, FileCartSlot, MemoryCartSlot, RedisCartSlot, create_cart_slot
from .store import CartStore, create_cart_store

__all__ = [
    "AddItem",
    "AttributeOption",
    "AttributeSet",
    "CartAction",
    "CartState",
    "CartStorage",
    "CartStore",
    "ClearCart",
    "FileCartSlot",
    "LineItem",
    "MemoryCartSlot",
    "RedisCartSlot",
    "UpdateAttribute",
    "UpdateQuantity",
    "cart_reducer",
    "create_cart_slot",
    "create_cart_store",
    "line_key",
]
