"""Tests for order parameter validation."""

from decimal import Decimal

import pytest

from krakenapi.validators import (
    validate_all,
    validate_order_type,
    validate_pair,
    validate_price,
    validate_side,
    validate_volume,
)


class TestValidators:
    def test_pair_is_uppercased(self):
        assert validate_pair(" xxbtzeur ") == "XXBTZEUR"

    @pytest.mark.parametrize("pair", ["", "XB", "XBT/EUR", "XBT-EUR"])
    def test_invalid_pair(self, pair):
        with pytest.raises(ValueError):
            validate_pair(pair)

    def test_side(self):
        assert validate_side("BUY") == "buy"
        with pytest.raises(ValueError):
            validate_side("long")

    def test_order_type(self):
        assert validate_order_type("Stop-Loss-Limit") == "stop-loss-limit"
        with pytest.raises(ValueError):
            validate_order_type("iceberg")

    def test_volume(self):
        assert validate_volume("0.01") == Decimal("0.01")
        for bad in ("0", "-1", "abc", "nan", "inf"):
            with pytest.raises(ValueError):
                validate_volume(bad)

    def test_price_required_except_market(self):
        assert validate_price(None, "market") is None
        assert validate_price("1", "settle-position") is None
        with pytest.raises(ValueError, match="required"):
            validate_price(None, "limit")

    def test_price_forms(self):
        assert validate_price(Decimal("320.5"), "limit") == "320.5"
        assert validate_price("-5.0000%", "trailing-stop") == "-5.0000%"
        assert validate_price("+10", "stop-loss") == "+10"
        for bad in ("0", "-", "abc%", "12x"):
            with pytest.raises(ValueError):
                validate_price(bad, "limit")

    def test_validate_all(self):
        params = validate_all("xbteur", "Sell", "take-profit-limit", "2", "31000", "30900")
        assert params == {
            "pair": "XBTEUR",
            "side": "sell",
            "order_type": "take-profit-limit",
            "volume": Decimal("2"),
            "price": "31000",
            "price2": "30900",
        }

    def test_validate_all_drops_price2_for_single_price_types(self):
        assert validate_all("XBTEUR", "buy", "limit", "1", "100", "99")["price2"] is None
