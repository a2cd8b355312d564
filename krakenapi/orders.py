"""
Order-placement logic.

Bridges user input and the typed ``KrakenAPI`` facade.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from .api import KrakenAPI
from .models import AddOrderResponse, OpenOrdersResponse
from .validators import validate_all

logger = logging.getLogger("krakenapi")

Number = Union[str, float, Decimal]


def place_order(
    api: KrakenAPI,
    pair: str,
    side: str,
    order_type: str,
    volume: Number,
    price: Optional[Number] = None,
    price2: Optional[Number] = None,
    validate: bool = False,
) -> AddOrderResponse:
    """
    Validate the order parameters and forward them to ``api.add_order``.

    Parameters
    ----------
    api : KrakenAPI
        Authenticated API client.
    pair, side, order_type, volume, price, price2
        Trading parameters; see ``krakenapi.validators``.
    validate : bool
        If ``True``, Kraken only validates the order without submitting it.

    Returns
    -------
    AddOrderResponse
        Order description and transaction ids.

    Raises
    ------
    ValueError
        If any parameter is invalid.
    """
    params = validate_all(pair, side, order_type, volume, price, price2)

    args: Dict[str, Any] = {}
    if params["price"] is not None:
        args["price"] = params["price"]
    if params["price2"] is not None:
        args["price2"] = params["price2"]
    if validate:
        args["validate"] = "true"

    logger.info(
        "Placing %s %s order: %s %s @ %s%s",
        params["side"],
        params["order_type"],
        params["volume"],
        params["pair"],
        params["price"] or "MARKET",
        " (validate only)" if validate else "",
    )

    response = api.add_order(
        params["pair"],
        params["side"],
        params["order_type"],
        params["volume"],
        args,
    )

    logger.info("Order placed  - txid=%s", ",".join(response.transaction_ids) or "N/A")
    logger.debug("Full order response: %s", response)

    return response


def format_order_response(response: AddOrderResponse) -> str:
    """Return a human-friendly multi-line summary of an AddOrder response."""
    lines = [
        "─── Order Response ───────────────────────────",
        f"  Transaction IDs : {', '.join(response.transaction_ids) or 'N/A'}",
        f"  Order           : {response.description.order or 'N/A'}",
        f"  Close           : {response.description.close or 'N/A'}",
        "───────────────────────────────────────────────",
    ]
    return "\n".join(lines)


def format_open_orders(response: OpenOrdersResponse) -> str:
    """
    Return one line per open order, oldest first.

    Shows the transaction id, the order description and the executed
    volume against the total.
    """
    if not response.open:
        return "No open orders."

    lines = ["─── Open Orders ──────────────────────────────"]
    for txid, order in sorted(response.open.items(), key=lambda item: item[1].open_time):
        lines.append(
            f"  {txid}  {order.description.order}  "
            f"({order.volume_executed}/{order.volume} executed, {order.status})"
        )
    lines.append("───────────────────────────────────────────────")
    return "\n".join(lines)
