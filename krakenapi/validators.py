"""
Input validators for order parameters.

Every public function raises ``ValueError`` with a human-readable message
when validation fails.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

# Kraken pairs are alphanumeric, either altnames (XBTEUR) or full names (XXBTZEUR).
_PAIR_RE = re.compile(r"^[A-Z0-9.]{4,20}$")

VALID_SIDES = ("buy", "sell")
VALID_ORDER_TYPES = (
    "market",
    "limit",
    "stop-loss",
    "take-profit",
    "stop-loss-limit",
    "take-profit-limit",
    "trailing-stop",
    "trailing-stop-limit",
    "settle-position",
)
# Order types that take a secondary price (``price2``).
TWO_PRICE_ORDER_TYPES = ("stop-loss-limit", "take-profit-limit", "trailing-stop-limit")
_PRICELESS_ORDER_TYPES = ("market", "settle-position")


def validate_pair(pair: str) -> str:
    """Return the uppercased pair or raise on invalid format."""
    pair = pair.strip().upper()
    if not _PAIR_RE.match(pair):
        raise ValueError(
            f"Invalid pair '{pair}'. "
            "Expected uppercase alphanumeric (e.g. XXBTZEUR)."
        )
    return pair


def validate_side(side: str) -> str:
    """Return the lowercased side or raise if not buy/sell."""
    side = side.strip().lower()
    if side not in VALID_SIDES:
        raise ValueError(
            f"Invalid side '{side}'. Must be one of: {', '.join(VALID_SIDES)}."
        )
    return side


def validate_order_type(order_type: str) -> str:
    """Return the lowercased order type or raise if unsupported."""
    order_type = order_type.strip().lower()
    if order_type not in VALID_ORDER_TYPES:
        raise ValueError(
            f"Invalid order type '{order_type}'. "
            f"Must be one of: {', '.join(VALID_ORDER_TYPES)}."
        )
    return order_type


def validate_volume(volume: Union[str, float, Decimal]) -> Decimal:
    """
    Return a positive ``Decimal`` volume or raise.

    Raises
    ------
    ValueError
        If *volume* is not a valid positive number.
    """
    try:
        vol = Decimal(str(volume))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid volume '{volume}'. Must be a positive number.")
    if not vol.is_finite() or vol <= 0:
        raise ValueError(f"Volume must be positive, got {vol}.")
    return vol


def validate_price(
    price: Union[str, float, Decimal, None],
    order_type: str,
) -> Optional[str]:
    """
    Validate *price* given an *order_type*.

    - For market and settle-position orders, price is ignored (returns ``None``).
    - For every other type, price is **required**.  Kraken accepts relative
      prices (``+10``, ``-5``) and percentages (``-5%``) for stop and
      trailing orders, so the value is returned as a string.

    Raises
    ------
    ValueError
        If *price* is missing or malformed.
    """
    if order_type in _PRICELESS_ORDER_TYPES:
        return None

    if price is None or str(price).strip() == "":
        raise ValueError(f"Price is required for {order_type} orders.")

    text = str(price).strip()
    number = text[:-1] if text.endswith("%") else text
    try:
        p = Decimal(number)
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid price '{price}'. Must be a number.")
    if not p.is_finite():
        raise ValueError(f"Invalid price '{price}'. Must be a number.")
    if number[:1] not in ("+", "-") and p <= 0:
        raise ValueError(f"Price must be positive, got {p}.")
    return text


def validate_all(
    pair: str,
    side: str,
    order_type: str,
    volume: Union[str, float, Decimal],
    price: Union[str, float, Decimal, None],
    price2: Union[str, float, Decimal, None] = None,
) -> dict:
    """
    Run every validator and return a clean parameter dict.

    Returns
    -------
    dict
        Keys: ``pair``, ``side``, ``order_type``, ``volume``, ``price``,
        ``price2``.

    Raises
    ------
    ValueError
        If any individual parameter is invalid.
    """
    v_pair = validate_pair(pair)
    v_side = validate_side(side)
    v_type = validate_order_type(order_type)
    v_volume = validate_volume(volume)
    v_price = validate_price(price, v_type)
    v_price2 = validate_price(price2, v_type) if v_type in TWO_PRICE_ORDER_TYPES else None

    return {
        "pair": v_pair,
        "side": v_side,
        "order_type": v_type,
        "volume": v_volume,
        "price": v_price,
        "price2": v_price2,
    }
