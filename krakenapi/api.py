"""
Typed facade over ``KrakenClient``.

One method per endpoint; each calls the generic dispatcher and decodes the
``result`` into the dataclasses in ``krakenapi.models``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from .client import KrakenClient
from .config import load_config, load_credentials
from .models import (
    AddOrderResponse,
    AssetInfo,
    AssetPairInfo,
    CancelOrderResponse,
    ClosedOrdersResponse,
    OHLCResponse,
    OpenOrdersResponse,
    Order,
    OrderBook,
    TickerInfo,
    TimeResponse,
    TradeBalance,
    TradesResponse,
)


def _args(args: Optional[Mapping[str, Any]], **extra: Any) -> Dict[str, Any]:
    params = dict(args or {})
    params.update({k: v for k, v in extra.items() if v is not None})
    return params


class KrakenAPI(KrakenClient):
    """Kraken REST API with typed per-endpoint methods."""

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **kwargs: Any) -> "KrakenAPI":
        """Build a client from ``KRAKEN_*`` environment variables / ``.env``."""
        api_key, api_secret = load_credentials(env_file)
        return cls(api_key, api_secret, config=load_config(env_file), **kwargs)

    # ── public market data ─────────────────────────────────────────────

    def time(self) -> TimeResponse:
        """Get server time (``Time``)."""
        return TimeResponse.from_api(self.query("Time"))

    def assets(self, *assets: str) -> Dict[str, AssetInfo]:
        """Get asset info, optionally restricted to *assets* (``Assets``)."""
        params = {"asset": ",".join(assets)} if assets else {}
        result = self.query("Assets", params)
        return {name: AssetInfo.from_api(info) for name, info in result.items()}

    def asset_pairs(self, *pairs: str) -> Dict[str, AssetPairInfo]:
        """Get tradable asset pairs (``AssetPairs``)."""
        params = {"pair": ",".join(pairs)} if pairs else {}
        result = self.query("AssetPairs", params)
        return {name: AssetPairInfo.from_api(info) for name, info in result.items()}

    def ticker(self, *pairs: str) -> Dict[str, TickerInfo]:
        """
        Get ticker information for one or more pairs (``Ticker``).

        Raises
        ------
        ValueError
            If no pair is given.
        """
        if not pairs:
            raise ValueError("Ticker requires at least one pair.")
        result = self.query("Ticker", {"pair": ",".join(pairs)})
        return {name: TickerInfo.from_api(info) for name, info in result.items()}

    def trades(self, pair: str, since: Optional[int] = None) -> TradesResponse:
        """Get recent trades for *pair*, optionally after trade id *since* (``Trades``)."""
        result = self.query("Trades", _args(None, pair=pair, since=since))
        return TradesResponse.from_api(result, pair)

    def depth(self, pair: str, count: Optional[int] = None) -> Dict[str, OrderBook]:
        """Get the order book for *pair* (``Depth``)."""
        result = self.query("Depth", _args(None, pair=pair, count=count))
        return {name: OrderBook.from_api(book) for name, book in result.items()}

    def ohlc(
        self,
        pair: str,
        interval: Optional[int] = None,
        since: Optional[int] = None,
    ) -> OHLCResponse:
        """Get OHLC candles for *pair*; *interval* is in minutes (``OHLC``)."""
        result = self.query("OHLC", _args(None, pair=pair, interval=interval, since=since))
        return OHLCResponse.from_api(result, pair)

    # ── private account data ───────────────────────────────────────────

    def balance(self) -> Dict[str, Decimal]:
        """Get account balances keyed by asset (``Balance``)."""
        result = self.query("Balance")
        return {asset: Decimal(str(amount)) for asset, amount in result.items()}

    def trade_balance(self, asset: Optional[str] = None) -> TradeBalance:
        """Get margin/trade balance summary (``TradeBalance``)."""
        return TradeBalance.from_api(self.query("TradeBalance", _args(None, asset=asset)))

    def open_orders(self, args: Optional[Mapping[str, Any]] = None) -> OpenOrdersResponse:
        """Get open orders; *args* are forwarded, e.g. ``trades`` (``OpenOrders``)."""
        return OpenOrdersResponse.from_api(self.query("OpenOrders", _args(args)))

    def closed_orders(self, args: Optional[Mapping[str, Any]] = None) -> ClosedOrdersResponse:
        """Get closed orders (``ClosedOrders``)."""
        return ClosedOrdersResponse.from_api(self.query("ClosedOrders", _args(args)))

    def query_orders(
        self,
        *txids: str,
        args: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Order]:
        """
        Get info for specific orders (``QueryOrders``).

        Raises
        ------
        ValueError
            If no transaction id is given.
        """
        if not txids:
            raise ValueError("QueryOrders requires at least one transaction id.")
        result = self.query("QueryOrders", _args(args, txid=",".join(txids)))
        return {txid: Order.from_api(order) for txid, order in result.items()}

    def add_order(
        self,
        pair: str,
        direction: str,
        order_type: str,
        volume: Any,
        args: Optional[Mapping[str, Any]] = None,
    ) -> AddOrderResponse:
        """
        Place a new order (``AddOrder``).

        Parameters
        ----------
        pair : str
            Asset pair, e.g. ``XXBTZEUR``.
        direction : str
            ``buy`` or ``sell``.
        order_type : str
            ``market``, ``limit``, ``stop-loss``, ...
        volume
            Order volume in base currency.
        args : mapping, optional
            Extra parameters such as ``price``, ``price2``, ``validate``.
        """
        params = _args(args, pair=pair, type=direction, ordertype=order_type, volume=volume)
        return AddOrderResponse.from_api(self.query("AddOrder", params))

    def cancel_order(self, txid: str) -> CancelOrderResponse:
        """Cancel an open order by transaction id (``CancelOrder``)."""
        return CancelOrderResponse.from_api(self.query("CancelOrder", {"txid": txid}))
