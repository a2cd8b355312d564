"""
krakenapi: Python client for the Kraken REST API.

Submodules
----------
signing         Nonce generation and HMAC-SHA512 request signatures.
client          Generic transport: signed dispatch and envelope decoding.
api             Typed per-endpoint facade over the transport.
models          Dataclasses for decoded endpoint results.
orders          Order-placement helpers and response formatting.
validators      Input validation for order parameters.
config          Endpoint settings and credentials from the environment.
logging_config  Opt-in console / rotating-file output for the package logger.
"""

import logging

from krakenapi.api import KrakenAPI
from krakenapi.client import KrakenAPIError, KrakenAuthError, KrakenClient, KrakenError
from krakenapi.config import ClientConfig
from krakenapi.orders import format_order_response, place_order
from krakenapi.signing import create_signature
from krakenapi.validators import validate_all

logging.getLogger("krakenapi").addHandler(logging.NullHandler())

__all__ = [
    "KrakenAPI",
    "KrakenClient",
    "KrakenError",
    "KrakenAPIError",
    "KrakenAuthError",
    "ClientConfig",
    "create_signature",
    "place_order",
    "format_order_response",
    "validate_all",
]
