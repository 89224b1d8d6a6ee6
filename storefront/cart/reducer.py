"""
Cart reducer - pure transition function (state, action) -> state.

Invariants kept by every transition:
- no two lines share a line key
- every line has quantity >= 1
- lines keep the order in which they were first added

A transition that changes nothing returns the same state object.
"""
from typing import List

from .actions import AddItem, CartAction, ClearCart, UpdateAttribute, UpdateQuantity
from .models import CartState, LineItem, coerce_quantity


def cart_reducer(state: CartState, action: CartAction) -> CartState:
    if isinstance(action, AddItem):
        return _add_items(state, action)
    if isinstance(action, UpdateQuantity):
        return _update_quantity(state, action)
    if isinstance(action, UpdateAttribute):
        return _update_attribute(state, action)
    if isinstance(action, ClearCart):
        return state if state.is_empty else CartState()
    return state


def _merge_into(items: List[LineItem], incoming: LineItem) -> bool:
    """Merge `incoming` into `items` in place. Returns False if nothing changed."""
    if incoming.quantity < 1:
        return False

    key = incoming.line_key
    for index, existing in enumerate(items):
        if existing.line_key == key:
            items[index] = existing.with_quantity(existing.quantity + incoming.quantity)
            return True

    items.append(incoming)
    return True


def _add_items(state: CartState, action: AddItem) -> CartState:
    batch = list(action.payload) if action.is_batch else [action.payload]

    items = list(state.items)
    changed = False
    for incoming in batch:
        # Batches come from storage: duplicates there collapse into the first line
        changed = _merge_into(items, incoming) or changed

    return CartState(tuple(items)) if changed else state


def _update_quantity(state: CartState, action: UpdateQuantity) -> CartState:
    index = state.index_of(line_key=action.line_key, product_id=action.product_id)
    if index is None:
        return state

    quantity = coerce_quantity(action.quantity)
    if quantity == state.items[index].quantity:
        return state

    items = list(state.items)
    items[index] = items[index].with_quantity(quantity)
    return CartState(tuple(item for item in items if item.quantity > 0))


def _update_attribute(state: CartState, action: UpdateAttribute) -> CartState:
    index = state.index_of(line_key=action.line_key, product_id=action.product_id)
    if index is None or not action.attribute_name:
        return state

    target = state.items[index]
    if not target.accepts(action.attribute_name, action.value):
        return state
    candidate = target.with_attribute(action.attribute_name, action.value)
    new_key = candidate.line_key
    if new_key == target.line_key:
        return state

    items = list(state.items)
    for other_index, other in enumerate(items):
        if other_index != index and other.line_key == new_key:
            # Same configuration already in the cart: fold the target into it
            items[other_index] = other.with_quantity(other.quantity + target.quantity)
            del items[index]
            return CartState(tuple(items))

    items[index] = candidate
    return CartState(tuple(items))
