"""Cart models: line items, cart state and line-key derivation."""
import math
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Mapping, Optional, Tuple

from storefront.services.money import ZERO, multiply, parse_price

DEFAULT_CURRENCY_LABEL = "$"

# Saved carts from before selectedAttributes existed carry these flat keys
LEGACY_SELECTION_KEYS = {
    "selectedSize": "Size",
    "selectedColor": "Color",
}


def _escape(text: str, separators: str) -> str:
    text = text.replace("\\", "\\\\")
    for separator in separators:
        text = text.replace(separator, "\\" + separator)
    return text


def line_key(product_id: str, selected_attributes: Mapping[str, str]) -> str:
    """
    Identity of a cart line: product id plus the selected attributes sorted
    by attribute name, so assignment order never matters.

    line_key("P1", {"Size": "M", "Color": "Red"}) -> "P1_Color:Red|Size:M"
    line_key("P1", {}) -> "P1_"

    Separators inside ids, names and values are backslash-escaped, so two
    different selections never share a key:
    line_key("P1", {"Color": "Red|Size:M"}) -> "P1_Color:Red\\|Size\\:M"
    """
    parts = [
        f"{_escape(str(name), ':|')}:{_escape(str(value), ':|')}"
        for name, value in sorted(selected_attributes.items(), key=lambda kv: kv[0])
        if name and value
    ]
    return f"{_escape(str(product_id), '_')}_{'|'.join(parts)}"


def coerce_quantity(value: object) -> int:
    """Quantity as a non-negative int; fractions floor, garbage becomes 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        quantity = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return 0
        quantity = math.floor(value)
    elif isinstance(value, (str, Decimal)):
        try:
            number = Decimal(value.strip()) if isinstance(value, str) else value
        except InvalidOperation:
            return 0
        if not number.is_finite():
            return 0
        quantity = int(number.to_integral_value(rounding=ROUND_FLOOR))
    else:
        return 0
    return max(quantity, 0)


@dataclass(frozen=True)
class AttributeOption:
    value: str
    display_value: str

    def to_dict(self) -> dict:
        return {"value": self.value, "display_value": self.display_value}


@dataclass(frozen=True)
class AttributeSet:
    """One variant axis from the catalog (e.g. Size) with its options."""
    name: str
    items: Tuple[AttributeOption, ...] = ()
    type: str = "text"

    def values(self) -> Tuple[str, ...]:
        return tuple(option.value for option in self.items)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "items": [option.to_dict() for option in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttributeSet":
        options = tuple(
            AttributeOption(
                value=str(option.get("value", "")),
                display_value=str(option.get("display_value") or option.get("value", "")),
            )
            for option in (data.get("items") or [])
            if isinstance(option, dict)
        )
        return cls(name=str(data["name"]), items=options, type=str(data.get("type") or "text"))


def attributes_from_list(data: object) -> Optional[Tuple[AttributeSet, ...]]:
    """Parse a saved attribute catalog, skipping malformed entries."""
    if not isinstance(data, list):
        return None
    return tuple(
        AttributeSet.from_dict(entry)
        for entry in data
        if isinstance(entry, dict) and entry.get("name")
    )


@dataclass(frozen=True)
class LineItem:
    """
    One distinct purchasable configuration in the cart.

    Name, image, price and currency are a snapshot taken when the product
    was added. `line_key` is derived from the product id and the selected
    attributes and cannot be set.
    """
    product_id: str
    name: str
    image: str
    unit_price: Decimal
    currency: str
    quantity: int
    selected_attributes: Mapping[str, str] = field(default_factory=dict)
    attributes: Optional[Tuple[AttributeSet, ...]] = None

    def __post_init__(self):
        # Normalize on entry: price repaired to >= 0, quantity to an int >= 0,
        # empty selections dropped
        object.__setattr__(self, "unit_price", parse_price(self.unit_price))
        object.__setattr__(self, "quantity", coerce_quantity(self.quantity))
        object.__setattr__(
            self,
            "selected_attributes",
            {
                str(name): str(value)
                for name, value in (self.selected_attributes or {}).items()
                if name and value not in (None, "")
            },
        )

    @property
    def line_key(self) -> str:
        return line_key(self.product_id, self.selected_attributes)

    @property
    def total_price(self) -> Decimal:
        """Price for all units (exact, unrounded)."""
        return multiply(self.unit_price, self.quantity)

    def with_quantity(self, quantity: int) -> "LineItem":
        return replace(self, quantity=quantity)

    def with_attribute(self, name: str, value: str) -> "LineItem":
        selected = dict(self.selected_attributes)
        selected[name] = value
        return replace(self, selected_attributes=selected)

    def accepts(self, name: str, value: str) -> bool:
        """
        Whether `value` is a valid choice for attribute `name` on this line.

        Lines without a saved attribute catalog accept anything.
        """
        if self.attributes is None:
            return True
        attribute = next((a for a in self.attributes if a.name == name), None)
        if attribute is None:
            return False
        return not attribute.items or value in attribute.values()

    def to_dict(self) -> dict:
        """Record written to the durable cart slot."""
        return {
            "id": self.product_id,
            "name": self.name,
            "image": self.image,
            "price": str(self.unit_price),
            "currency": self.currency,
            "quantity": self.quantity,
            "selectedAttributes": dict(self.selected_attributes),
            "attributes": [a.to_dict() for a in self.attributes] if self.attributes is not None else None,
            "cartItemId": self.line_key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """
        Create from a saved record.

        Raises:
            ValueError: the record has no product id
        """
        product_id = data.get("id") or data.get("productId")
        if not product_id:
            raise ValueError("cart record has no product id")

        selected = data.get("selectedAttributes")
        selected = dict(selected) if isinstance(selected, dict) else {}
        for legacy_key, attribute_name in LEGACY_SELECTION_KEYS.items():
            if data.get(legacy_key) and attribute_name not in selected:
                selected[attribute_name] = data[legacy_key]

        return cls(
            product_id=str(product_id),
            name=str(data.get("name") or ""),
            image=str(data.get("image") or ""),
            unit_price=parse_price(data.get("price")),
            currency=str(data.get("currency") or ""),
            quantity=data.get("quantity", 1),
            selected_attributes=selected,
            attributes=attributes_from_list(data.get("attributes")),
        )


@dataclass(frozen=True)
class CartState:
    """Insertion-ordered cart lines, unique by line key."""
    items: Tuple[LineItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        """Total number of units in the cart."""
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> Decimal:
        """Sum of unit price x quantity over all lines, recomputed on access."""
        return sum((item.total_price for item in self.items), ZERO)

    def currency_label(self, default: str = DEFAULT_CURRENCY_LABEL) -> str:
        # Carts are single-currency in practice; the first line decides
        if self.items and self.items[0].currency:
            return self.items[0].currency
        return default

    def index_of(self, line_key: Optional[str] = None, product_id: Optional[str] = None) -> Optional[int]:
        """Position of the addressed line; the key wins, product id is a fallback (first match)."""
        if line_key:
            return next((i for i, item in enumerate(self.items) if item.line_key == line_key), None)
        if product_id:
            return next((i for i, item in enumerate(self.items) if item.product_id == product_id), None)
        return None

    def find(self, line_key: Optional[str] = None, product_id: Optional[str] = None) -> Optional[LineItem]:
        index = self.index_of(line_key=line_key, product_id=product_id)
        return None if index is None else self.items[index]
