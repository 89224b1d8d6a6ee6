# Services Module
from .money import format_money, parse_price, round_money, to_decimal, to_float

__all__ = ["format_money", "parse_price", "round_money", "to_decimal", "to_float"]
