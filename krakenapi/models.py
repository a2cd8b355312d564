"""
Typed result structures for the Kraken REST endpoints.

Each dataclass exposes a ``from_api`` constructor taking the decoded JSON
``result`` (or one entry of it).  Prices and volumes become ``Decimal``;
timestamps keep the numeric type Kraken sends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional


def _dec(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal(0)
    return Decimal(str(value))


def _dec_list(values: Optional[List[Any]]) -> List[Decimal]:
    return [_dec(v) for v in values or []]


# ── Public market data ─────────────────────────────────────────────────────


@dataclass
class TimeResponse:
    unixtime: int
    rfc1123: str

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "TimeResponse":
        return cls(unixtime=int(data.get("unixtime", 0)), rfc1123=data.get("rfc1123", ""))


@dataclass
class AssetInfo:
    altname: str
    aclass: str
    decimals: int
    display_decimals: int

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "AssetInfo":
        return cls(
            altname=data.get("altname", ""),
            aclass=data.get("aclass", ""),
            decimals=int(data.get("decimals", 0)),
            display_decimals=int(data.get("display_decimals", 0)),
        )


@dataclass
class AssetPairInfo:
    """Trading rules and fee schedule of one asset pair."""

    altname: str
    wsname: str
    aclass_base: str
    base: str
    aclass_quote: str
    quote: str
    lot: str
    pair_decimals: int
    lot_decimals: int
    lot_multiplier: int
    leverage_buy: List[int]
    leverage_sell: List[int]
    fees: List[List[Decimal]]
    fees_maker: List[List[Decimal]]
    fee_volume_currency: str
    margin_call: int
    margin_stop: int
    ordermin: Decimal

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "AssetPairInfo":
        return cls(
            altname=data.get("altname", ""),
            wsname=data.get("wsname", ""),
            aclass_base=data.get("aclass_base", ""),
            base=data.get("base", ""),
            aclass_quote=data.get("aclass_quote", ""),
            quote=data.get("quote", ""),
            lot=data.get("lot", ""),
            pair_decimals=int(data.get("pair_decimals", 0)),
            lot_decimals=int(data.get("lot_decimals", 0)),
            lot_multiplier=int(data.get("lot_multiplier", 0)),
            leverage_buy=[int(x) for x in data.get("leverage_buy") or []],
            leverage_sell=[int(x) for x in data.get("leverage_sell") or []],
            fees=[_dec_list(tier) for tier in data.get("fees") or []],
            fees_maker=[_dec_list(tier) for tier in data.get("fees_maker") or []],
            fee_volume_currency=data.get("fee_volume_currency", ""),
            margin_call=int(data.get("margin_call", 0)),
            margin_stop=int(data.get("margin_stop", 0)),
            ordermin=_dec(data.get("ordermin")),
        )


@dataclass
class TickerInfo:
    """
    Ticker snapshot for one pair.

    ``ask``/``bid`` are ``[price, whole_lot_volume, lot_volume]``; ``close``
    is ``[price, lot_volume]``; ``volume``, ``vwap``, ``trades``, ``low``
    and ``high`` are ``[today, last_24_hours]``.
    """

    ask: List[Decimal]
    bid: List[Decimal]
    close: List[Decimal]
    volume: List[Decimal]
    vwap: List[Decimal]
    trades: List[int]
    low: List[Decimal]
    high: List[Decimal]
    opening_price: Decimal

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "TickerInfo":
        return cls(
            ask=_dec_list(data.get("a")),
            bid=_dec_list(data.get("b")),
            close=_dec_list(data.get("c")),
            volume=_dec_list(data.get("v")),
            vwap=_dec_list(data.get("p")),
            trades=[int(t) for t in data.get("t") or []],
            low=_dec_list(data.get("l")),
            high=_dec_list(data.get("h")),
            opening_price=_dec(data.get("o")),
        )


@dataclass
class TradeInfo:
    price: Decimal
    volume: Decimal
    time: float
    buy: bool
    sell: bool
    market: bool
    limit: bool
    miscellaneous: str

    @classmethod
    def from_api(cls, row: List[Any]) -> "TradeInfo":
        """Decode ``[price, volume, time, "b"|"s", "m"|"l", misc, ...]``."""
        side, kind = row[3], row[4]
        return cls(
            price=_dec(row[0]),
            volume=_dec(row[1]),
            time=float(row[2]),
            buy=side == "b",
            sell=side == "s",
            market=kind == "m",
            limit=kind == "l",
            miscellaneous=row[5] if len(row) > 5 else "",
        )


@dataclass
class TradesResponse:
    last: int
    trades: List[TradeInfo] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any], pair: str) -> "TradesResponse":
        return cls(
            last=int(data.get("last") or 0),
            trades=[TradeInfo.from_api(row) for row in data.get(pair) or []],
        )


@dataclass
class OrderBookItem:
    price: Decimal
    amount: Decimal
    ts: int

    @classmethod
    def from_api(cls, row: List[Any]) -> "OrderBookItem":
        return cls(price=_dec(row[0]), amount=_dec(row[1]), ts=int(row[2]))


@dataclass
class OrderBook:
    asks: List[OrderBookItem]
    bids: List[OrderBookItem]

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "OrderBook":
        return cls(
            asks=[OrderBookItem.from_api(row) for row in data.get("asks") or []],
            bids=[OrderBookItem.from_api(row) for row in data.get("bids") or []],
        )


@dataclass
class OHLCTick:
    time: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    vwap: Decimal
    volume: Decimal
    count: int

    @classmethod
    def from_api(cls, row: List[Any]) -> "OHLCTick":
        return cls(
            time=int(row[0]),
            open=_dec(row[1]),
            high=_dec(row[2]),
            low=_dec(row[3]),
            close=_dec(row[4]),
            vwap=_dec(row[5]),
            volume=_dec(row[6]),
            count=int(row[7]),
        )


@dataclass
class OHLCResponse:
    last: int
    ticks: List[OHLCTick] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any], pair: str) -> "OHLCResponse":
        return cls(
            last=int(data.get("last") or 0),
            ticks=[OHLCTick.from_api(row) for row in data.get(pair) or []],
        )


# ── Private account data ───────────────────────────────────────────────────


@dataclass
class TradeBalance:
    equivalent_balance: Decimal
    trade_balance: Decimal
    margin: Decimal
    net: Decimal
    cost: Decimal
    valuation: Decimal
    equity: Decimal
    free_margin: Decimal
    margin_level: Optional[Decimal] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "TradeBalance":
        margin_level = data.get("ml")
        return cls(
            equivalent_balance=_dec(data.get("eb")),
            trade_balance=_dec(data.get("tb")),
            margin=_dec(data.get("m")),
            net=_dec(data.get("n")),
            cost=_dec(data.get("c")),
            valuation=_dec(data.get("v")),
            equity=_dec(data.get("e")),
            free_margin=_dec(data.get("mf")),
            margin_level=_dec(margin_level) if margin_level is not None else None,
        )


@dataclass
class OrderDescription:
    """
    Human-readable order description.

    ``primary_price`` and ``secondary_price`` are kept verbatim: for
    trailing-stop orders they carry offsets such as ``"-5.0000%"``.
    """

    pair: str
    type: str
    order_type: str
    primary_price: str
    secondary_price: str
    leverage: str
    order: str
    close: str

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "OrderDescription":
        return cls(
            pair=data.get("pair", ""),
            type=data.get("type", ""),
            order_type=data.get("ordertype", ""),
            primary_price=data.get("price", ""),
            secondary_price=data.get("price2", ""),
            leverage=data.get("leverage", ""),
            order=data.get("order", ""),
            close=data.get("close", ""),
        )


@dataclass
class Order:
    reference_id: Optional[str]
    user_ref: Optional[int]
    status: str
    open_time: float
    start_time: float
    expire_time: float
    description: OrderDescription
    volume: Decimal
    volume_executed: Decimal
    cost: Decimal
    fee: Decimal
    price: Decimal
    stop_price: Decimal
    limit_price: Decimal
    misc: str
    order_flags: str
    trades: List[str] = field(default_factory=list)
    close_time: Optional[float] = None
    reason: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Order":
        close_time = data.get("closetm")
        return cls(
            reference_id=data.get("refid"),
            user_ref=data.get("userref"),
            status=data.get("status", ""),
            open_time=float(data.get("opentm") or 0),
            start_time=float(data.get("starttm") or 0),
            expire_time=float(data.get("expiretm") or 0),
            description=OrderDescription.from_api(data.get("descr") or {}),
            volume=_dec(data.get("vol")),
            volume_executed=_dec(data.get("vol_exec")),
            cost=_dec(data.get("cost")),
            fee=_dec(data.get("fee")),
            price=_dec(data.get("price")),
            stop_price=_dec(data.get("stopprice")),
            limit_price=_dec(data.get("limitprice")),
            misc=data.get("misc", ""),
            order_flags=data.get("oflags", ""),
            trades=list(data.get("trades") or []),
            close_time=float(close_time) if close_time is not None else None,
            reason=data.get("reason"),
        )


def _orders(data: Optional[Mapping[str, Any]]) -> Dict[str, Order]:
    return {txid: Order.from_api(order) for txid, order in (data or {}).items()}


@dataclass
class OpenOrdersResponse:
    open: Dict[str, Order]

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "OpenOrdersResponse":
        return cls(open=_orders(data.get("open")))


@dataclass
class ClosedOrdersResponse:
    closed: Dict[str, Order]
    count: int

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ClosedOrdersResponse":
        return cls(closed=_orders(data.get("closed")), count=int(data.get("count") or 0))


@dataclass
class AddOrderResponse:
    description: OrderDescription
    transaction_ids: List[str]

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "AddOrderResponse":
        return cls(
            description=OrderDescription.from_api(data.get("descr") or {}),
            transaction_ids=list(data.get("txid") or []),
        )


@dataclass
class CancelOrderResponse:
    count: int
    pending: bool

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "CancelOrderResponse":
        return cls(count=int(data.get("count") or 0), pending=bool(data.get("pending")))
