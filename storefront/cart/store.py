"""
Cart store: holds the current cart, applies actions through the reducer and
notifies observers.

One store per running client. It is built once at the application root and
handed to every consumer; there is no module-level instance.
"""
from typing import Callable, List, Optional, Tuple

from storefront.logging import get_logger, sanitize_id_for_logging

from .actions import AddItem, CartAction
from .models import CartState, LineItem
from .reducer import cart_reducer
from .storage import CartStorage

logger = get_logger(__name__)

Listener = Callable[[CartState, CartAction], None]
ItemAddedCallback = Callable[[LineItem], None]


class CartStore:
    """
    State container for the cart.

    - `dispatch(action)` runs the reducer synchronously; when the state
      changes, observers run in registration order.
    - With a storage adapter, the first observer writes the new collection
      to the durable slot.
    - `on_item_added` callbacks fire after a single (non-batch) AddItem,
      e.g. to open the cart overlay.
    """

    def __init__(self, storage: Optional[CartStorage] = None):
        self._state = CartState()
        self._storage = storage
        self._listeners: List[Listener] = []
        self._item_added: List[ItemAddedCallback] = []

        if storage is not None:
            self.subscribe(self._persist)

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return self._state.items

    def dispatch(self, action: CartAction) -> CartState:
        previous = self._state
        next_state = cart_reducer(previous, action)
        if next_state is previous:
            return previous

        self._state = next_state
        for listener in list(self._listeners):
            listener(next_state, action)

        if isinstance(action, AddItem) and not action.is_batch:
            for callback in list(self._item_added):
                callback(action.payload)

        return next_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state-change observer. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def on_item_added(self, callback: ItemAddedCallback) -> Callable[[], None]:
        self._item_added.append(callback)
        return lambda: self._item_added.remove(callback)

    def hydrate(self) -> int:
        """Load the saved cart into the store. Returns the number of lines."""
        if self._storage is None:
            return 0

        items = self._storage.load_items()
        if items:
            self.dispatch(AddItem(tuple(items)))
        logger.info(f"Cart hydrated with {len(self._state.items)} line(s)")
        return len(self._state.items)

    def _persist(self, state: CartState, action: CartAction) -> None:
        if not self._storage.save_items(state.items):
            logger.debug(f"Unsaved after {type(action).__name__}, lines={len(state.items)}")


def create_cart_store(storage: Optional[CartStorage] = None, hydrate: bool = True) -> CartStore:
    """Build a store and, by default, restore the saved cart into it."""
    store = CartStore(storage)
    if hydrate:
        store.hydrate()
    return store


def describe_line(item: LineItem) -> str:
    """Short, log-safe description of a cart line."""
    return f"{sanitize_id_for_logging(item.product_id)} x{item.quantity}"
