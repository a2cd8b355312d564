"""
Request signing for Kraken private endpoints.

Kraken authenticates private calls with an ``API-Sign`` header::

    base64(HMAC-SHA512(base64decode(secret), path + SHA256(nonce + body)))

where *body* is the url-encoded POST payload (which itself contains the
nonce).
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import threading
import time
from decimal import Decimal
from typing import Any, Mapping
from urllib.parse import urlencode


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        value = Decimal(repr(value))
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def encode_values(values: Mapping[str, Any]) -> str:
    """
    Url-encode *values* deterministically.

    Keys are emitted in sorted order.  A list or tuple value produces one
    ``key=value`` pair per element, in the order given.  Numbers are written
    in fixed-point notation and booleans as ``true``/``false``.
    """
    pairs = []
    for key in sorted(values):
        value = values[key]
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_value(v)) for v in value)
        else:
            pairs.append((key, _format_value(value)))
    return urlencode(pairs)


def create_signature(url_path: str, values: Mapping[str, Any], secret: bytes) -> str:
    """
    Compute the ``API-Sign`` header value for a private request.

    Parameters
    ----------
    url_path : str
        Request path, e.g. ``/0/private/OpenOrders``.
    values : mapping
        POST parameters, including ``nonce``.
    secret : bytes
        The already base64-decoded API secret.

    Returns
    -------
    str
        Base64-encoded HMAC-SHA512 digest.
    """
    nonce = values.get("nonce", "")
    payload = f"{nonce}{encode_values(values)}".encode("utf-8")
    sha_sum = hashlib.sha256(payload).digest()

    mac = hmac.new(secret, url_path.encode("utf-8") + sha_sum, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")


class NonceGenerator:
    """Hands out strictly increasing integer nonces based on wall-clock nanoseconds."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            nonce = max(time.time_ns(), self._last + 1)
            self._last = nonce
            return nonce
