"""
Low-level Kraken REST client.

Handles authentication (HMAC-SHA512 signing), request dispatch, and
envelope decoding.  All query methods return the ``result`` member of the
response envelope or raise ``KrakenAPIError`` / ``requests`` exceptions.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, Mapping, Optional

import requests

from .config import ClientConfig
from .signing import NonceGenerator, create_signature, encode_values

logger = logging.getLogger("krakenapi")

PUBLIC_METHODS = frozenset({
    "Time",
    "Assets",
    "AssetPairs",
    "Ticker",
    "OHLC",
    "Depth",
    "Trades",
    "Spread",
})

PRIVATE_METHODS = frozenset({
    "Balance",
    "TradeBalance",
    "OpenOrders",
    "ClosedOrders",
    "QueryOrders",
    "TradesHistory",
    "QueryTrades",
    "OpenPositions",
    "Ledgers",
    "QueryLedgers",
    "TradeVolume",
    "AddOrder",
    "CancelOrder",
    "DepositMethods",
    "DepositAddresses",
    "DepositStatus",
    "WithdrawInfo",
    "Withdraw",
    "WithdrawStatus",
    "WithdrawCancel",
})

# ── Custom exceptions ──────────────────────────────────────────────────────


class KrakenError(Exception):
    """Base class for errors raised by this package."""


class KrakenAPIError(KrakenError):
    """Raised when the response envelope carries errors or the HTTP call fails."""

    def __init__(self, errors: list, status_code: Optional[int] = None):
        self.errors = list(errors)
        self.status_code = status_code
        message = ", ".join(str(e) for e in self.errors) or "unknown error"
        if status_code is not None and not 200 <= status_code < 300:
            message = f"[HTTP {status_code}] {message}"
        super().__init__(f"Kraken error: {message}")


class KrakenAuthError(KrakenError):
    """Raised when a private call is attempted without usable credentials."""


# ── Client ─────────────────────────────────────────────────────────────────


class KrakenClient:
    """Generic transport for the Kraken REST API."""

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        session: Optional[requests.Session] = None,
        config: Optional[ClientConfig] = None,
    ):
        self.api_key = api_key
        self.api_secret = api_secret
        self.config = config or ClientConfig()
        self.base_url = self.config.url.rstrip("/")
        self._session = session if session is not None else requests.Session()
        self._nonce = NonceGenerator()

    # ── context-manager support ────────────────────────────────────────

    def __enter__(self) -> "KrakenClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # ── dispatch ───────────────────────────────────────────────────────

    def query(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Call any supported API *method* by name.

        Raises
        ------
        ValueError
            If *method* is neither a known public nor private method.
        """
        if method in PUBLIC_METHODS:
            return self.query_public(method, params)
        if method in PRIVATE_METHODS:
            return self.query_private(method, params)
        raise ValueError(f"Method '{method}' is not supported.")

    def query_public(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Call a public endpoint, e.g. ``Time`` or ``Ticker``."""
        path = self.config.base_path("public", method)
        return self._request(path, dict(params or {}))

    def query_private(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Call a private endpoint, adding a nonce and the signature headers.

        Raises
        ------
        KrakenAuthError
            If the key or secret is missing, or the secret is not base64.
        """
        if not self.api_key or not self.api_secret:
            raise KrakenAuthError("API key and secret are required for private methods.")

        try:
            secret = base64.b64decode(self.api_secret, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise KrakenAuthError(f"API secret is not valid base64: {exc}") from exc

        path = self.config.base_path("private", method)
        values = dict(params or {})
        values["nonce"] = self._nonce()

        headers = {
            "API-Key": self.api_key,
            "API-Sign": create_signature(path, values, secret),
        }
        return self._request(path, values, headers)

    # ── internal helpers ───────────────────────────────────────────────

    def _request(
        self,
        path: str,
        values: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        POST *values* to *path* and decode the response envelope.

        Returns
        -------
        object
            The ``result`` member of the envelope.

        Raises
        ------
        KrakenAPIError
            If the envelope's ``error`` list is non-empty, or on a non-2xx
            response.
        requests.RequestException
            On network-level failures (timeout, DNS, etc.).
        """
        url = f"{self.base_url}{path}"
        body = encode_values(values)
        request_headers = {
            "User-Agent": self.config.user_agent,
            "Content-Type": "application/x-www-form-urlencoded",
        }
        request_headers.update(headers or {})

        logger.debug(
            "API request  -> POST %s params=%s",
            url,
            {k: v for k, v in values.items() if k != "nonce"},
        )

        response = self._session.post(
            url,
            data=body,
            headers=request_headers,
            timeout=self.config.timeout,
        )

        logger.debug(
            "API response <- %s (%.1f KB)",
            response.status_code,
            len(response.content) / 1024,
        )

        try:
            envelope = response.json()
        except ValueError:
            if not response.ok:
                raise KrakenAPIError([response.text], response.status_code)
            raise

        if not isinstance(envelope, dict):
            raise KrakenAPIError(["response is not a JSON object"], response.status_code)

        errors = envelope.get("error") or []
        if errors:
            logger.warning("API error for %s: %s", path, errors)
            raise KrakenAPIError(errors, response.status_code)

        if not response.ok:
            raise KrakenAPIError([response.reason or response.text], response.status_code)

        if "result" not in envelope:
            raise KrakenAPIError(["response has no result"], response.status_code)

        return envelope["result"]
