"""
Tests for the cart reducer
"""

import random
from dataclasses import replace
from decimal import Decimal

from conftest import make_item
from storefront.cart import (
    AddItem,
    AttributeOption,
    AttributeSet,
    CartState,
    ClearCart,
    UpdateAttribute,
    UpdateQuantity,
    cart_reducer,
)


def _state(*items) -> CartState:
    return CartState(tuple(items))


class TestAddItem:
    """Tests for AddItem."""

    def test_add_to_empty_cart(self):
        state = cart_reducer(CartState(), AddItem(make_item("P1", quantity=2, Size="M")))

        assert len(state.items) == 1
        assert state.items[0].quantity == 2

    def test_same_configuration_merges(self):
        state = _state(make_item("P1", quantity=2, Size="M"))

        state = cart_reducer(state, AddItem(make_item("P1", quantity=3, Size="M")))

        assert len(state.items) == 1
        assert state.items[0].quantity == 5

    def test_different_configuration_appends_in_order(self):
        state = _state(make_item("P1", Size="S"))

        state = cart_reducer(state, AddItem(make_item("P2")))
        state = cart_reducer(state, AddItem(make_item("P1", Size="M")))

        assert [item.line_key for item in state.items] == ["P1_Size:S", "P2_", "P1_Size:M"]

    def test_merge_keeps_original_snapshot(self):
        """Merging adds quantity only; the first line's price stays."""
        state = _state(make_item("P1", price="10"))

        state = cart_reducer(state, AddItem(make_item("P1", price="99")))

        assert state.items[0].unit_price == Decimal("10")
        assert state.items[0].quantity == 2

    def test_zero_quantity_is_noop(self):
        state = _state(make_item("P1"))

        assert cart_reducer(state, AddItem(make_item("P2", quantity=0))) is state

    def test_batch_restores_lines(self):
        batch = (make_item("P1", Size="S"), make_item("P2", quantity=4))

        state = cart_reducer(CartState(), AddItem(batch))

        assert [item.product_id for item in state.items] == ["P1", "P2"]
        assert state.total_items == 5

    def test_batch_duplicates_merge(self):
        batch = (
            make_item("P1", quantity=1, Size="S"),
            make_item("P2", quantity=1),
            make_item("P1", quantity=2, Size="S"),
        )

        state = cart_reducer(CartState(), AddItem(batch))

        assert [item.line_key for item in state.items] == ["P1_Size:S", "P2_"]
        assert state.items[0].quantity == 3

    def test_values_with_separators_stay_separate_lines(self):
        state = _state(make_item("P1", Color="Red", Size="M"))

        state = cart_reducer(state, AddItem(make_item("P1", Color="Red|Size:M")))

        assert len(state.items) == 2
        assert state.total_items == 2

    def test_empty_batch_is_noop(self):
        state = CartState()

        assert cart_reducer(state, AddItem(())) is state


class TestUpdateQuantity:
    """Tests for UpdateQuantity."""

    def test_set_quantity_by_key(self):
        state = _state(make_item("P1", Size="S"), make_item("P1", Size="M"))

        state = cart_reducer(state, UpdateQuantity(7, line_key="P1_Size:M"))

        assert state.items[0].quantity == 1
        assert state.items[1].quantity == 7

    def test_zero_removes_line(self):
        state = _state(make_item("P1"), make_item("P2"))

        state = cart_reducer(state, UpdateQuantity(0, line_key="P1_"))

        assert [item.product_id for item in state.items] == ["P2"]

    def test_negative_removes_line(self):
        state = _state(make_item("P1"))

        state = cart_reducer(state, UpdateQuantity(-2, line_key="P1_"))

        assert state.is_empty

    def test_fractional_quantity_floors(self):
        state = _state(make_item("P1"))

        state = cart_reducer(state, UpdateQuantity(3.8, line_key="P1_"))

        assert state.items[0].quantity == 3

    def test_product_id_fallback_updates_first_match(self):
        state = _state(make_item("P1", Size="S"), make_item("P1", Size="M"))

        state = cart_reducer(state, UpdateQuantity(4, product_id="P1"))

        assert state.items[0].quantity == 4
        assert state.items[1].quantity == 1

    def test_key_takes_precedence_over_product_id(self):
        state = _state(make_item("P1", Size="S"), make_item("P1", Size="M"))

        state = cart_reducer(state, UpdateQuantity(4, line_key="P1_Size:M", product_id="P1"))

        assert state.items[0].quantity == 1
        assert state.items[1].quantity == 4

    def test_unknown_line_is_noop(self):
        state = _state(make_item("P1"))

        assert cart_reducer(state, UpdateQuantity(5, line_key="P9_")) is state
        assert cart_reducer(state, UpdateQuantity(5, product_id="P9")) is state
        assert cart_reducer(state, UpdateQuantity(5)) is state

    def test_unchanged_quantity_is_noop(self):
        state = _state(make_item("P1", quantity=2))

        assert cart_reducer(state, UpdateQuantity(2, line_key="P1_")) is state


class TestUpdateAttribute:
    """Tests for UpdateAttribute."""

    def test_change_in_place(self):
        state = _state(make_item("P1", Size="S"), make_item("P2"))

        state = cart_reducer(state, UpdateAttribute("P1", "Size", "M", line_key="P1_Size:S"))

        assert [item.line_key for item in state.items] == ["P1_Size:M", "P2_"]

    def test_collision_merges_quantities(self):
        """Switching S to M when M is already in the cart folds S into M."""
        state = _state(
            make_item("P1", quantity=2, Size="S"),
            make_item("P1", quantity=3, Size="M"),
        )

        state = cart_reducer(state, UpdateAttribute("P1", "Size", "M", line_key="P1_Size:S"))

        assert len(state.items) == 1
        assert state.items[0].line_key == "P1_Size:M"
        assert state.items[0].quantity == 5

    def test_collision_by_product_id_merges_quantities(self):
        """Without a key the first line of the product is the one changed."""
        state = _state(
            make_item("P1", quantity=2, Size="S"),
            make_item("P1", quantity=3, Size="M"),
        )

        state = cart_reducer(state, UpdateAttribute("P1", "Size", "M"))

        assert len(state.items) == 1
        assert state.items[0].line_key == "P1_Size:M"
        assert state.items[0].quantity == 5

    def test_value_outside_saved_catalog_is_noop(self):
        sizes = AttributeSet("Size", (AttributeOption("S", "Small"), AttributeOption("M", "Medium")))
        state = _state(replace(make_item("P1", Size="S"), attributes=(sizes,)))

        assert cart_reducer(state, UpdateAttribute("P1", "Size", "banana")) is state
        assert cart_reducer(state, UpdateAttribute("P1", "Color", "Red")) is state
        assert cart_reducer(state, UpdateAttribute("P1", "Size", "M")).items[0].line_key == "P1_Size:M"

    def test_collision_keeps_surviving_line_position(self):
        state = _state(
            make_item("P1", Size="M"),
            make_item("P2"),
            make_item("P1", Size="S"),
        )

        state = cart_reducer(state, UpdateAttribute("P1", "Size", "M", line_key="P1_Size:S"))

        assert [item.line_key for item in state.items] == ["P1_Size:M", "P2_"]
        assert state.items[0].quantity == 2

    def test_product_id_fallback(self):
        state = _state(make_item("P1", Size="S", Color="Red"))

        state = cart_reducer(state, UpdateAttribute("P1", "Color", "Blue"))

        assert state.items[0].selected_attributes == {"Size": "S", "Color": "Blue"}

    def test_key_addresses_second_line(self):
        state = _state(make_item("P1", Size="S"), make_item("P1", Size="L"))

        state = cart_reducer(state, UpdateAttribute("P1", "Size", "XL", line_key="P1_Size:L"))

        assert [item.line_key for item in state.items] == ["P1_Size:S", "P1_Size:XL"]

    def test_same_value_is_noop(self):
        state = _state(make_item("P1", Size="S"))

        assert cart_reducer(state, UpdateAttribute("P1", "Size", "S")) is state

    def test_unknown_line_is_noop(self):
        state = _state(make_item("P1", Size="S"))

        assert cart_reducer(state, UpdateAttribute("P9", "Size", "M")) is state


class TestClearCart:
    """Tests for ClearCart."""

    def test_clear(self):
        state = _state(make_item("P1"), make_item("P2"))

        assert cart_reducer(state, ClearCart()).is_empty

    def test_clear_empty_is_noop(self):
        state = CartState()

        assert cart_reducer(state, ClearCart()) is state


def test_reducer_does_not_mutate_input():
    original = _state(make_item("P1", quantity=2, Size="S"))
    items_before = original.items

    cart_reducer(original, AddItem(make_item("P1", Size="S")))
    cart_reducer(original, UpdateQuantity(0, line_key="P1_Size:S"))
    cart_reducer(original, UpdateAttribute("P1", "Size", "M"))
    cart_reducer(original, ClearCart())

    assert original.items is items_before
    assert original.items[0].quantity == 2
    assert original.items[0].selected_attributes == {"Size": "S"}


def test_random_action_sequences_keep_invariants():
    """Unique keys, quantities >= 1 and totals matching the lines."""
    rng = random.Random(20240611)
    sizes = ["S", "M", "L"]
    prices = {
        product_id: Decimal(rng.randint(1, 99999)) / 100
        for product_id in ("P1", "P2", "P3", "P4")
    }
    products = list(prices)

    for _ in range(50):
        state = CartState()
        for _ in range(40):
            roll = rng.random()
            product_id = rng.choice(products)
            size = rng.choice(sizes)
            if roll < 0.5:
                action = AddItem(make_item(product_id, quantity=rng.randint(0, 3), price=prices[product_id], Size=size))
            elif roll < 0.75:
                action = UpdateQuantity(rng.randint(-1, 4), line_key=f"{product_id}_Size:{size}")
            elif roll < 0.97:
                action = UpdateAttribute(product_id, "Size", rng.choice(sizes), line_key=f"{product_id}_Size:{size}")
            else:
                action = ClearCart()

            units_before = state.total_items
            next_state = cart_reducer(state, action)

            keys = [item.line_key for item in next_state.items]
            assert len(keys) == len(set(keys))
            assert all(item.quantity >= 1 for item in next_state.items)
            assert all(item.unit_price == prices[item.product_id] for item in next_state.items)
            assert next_state.total_price == sum(
                (prices[item.product_id] * item.quantity for item in next_state.items), Decimal("0")
            )
            if isinstance(action, UpdateAttribute):
                assert next_state.total_items == units_before

            state = next_state
