"""
Pytest configuration and shared fixtures for krakenapi tests.

HTTP traffic is faked by handing the client a mocked ``requests.Session``
whose ``post`` returns canned responses.
"""

import json
from pathlib import Path
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests

from krakenapi.api import KrakenAPI
from krakenapi.config import ClientConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# base64 of b"secret"
TEST_KEY = "test-key"
TEST_SECRET = "c2VjcmV0"


def make_response(
    payload: Any = None,
    status_code: int = 200,
    text: Optional[str] = None,
    reason: str = "OK",
) -> Mock:
    """Build a fake ``requests.Response``."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    if payload is not None:
        response.text = json.dumps(payload)
        response.json.return_value = payload
    else:
        response.text = text or ""
        response.json.side_effect = ValueError("No JSON object could be decoded")
    response.content = response.text.encode("utf-8")
    return response


def envelope(result: Any = None, errors: Optional[list] = None) -> dict:
    return {"error": errors or [], "result": result if result is not None else {}}


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def session():
    """Mocked HTTP session; set ``session.post.return_value`` per test."""
    fake = Mock(spec=requests.Session)
    fake.post.return_value = make_response(envelope())
    return fake


@pytest.fixture
def test_config():
    return ClientConfig(url="https://kraken.test", api_version="0", user_agent="krakenapi test mode")


@pytest.fixture
def public_api(session, test_config):
    return KrakenAPI(session=session, config=test_config)


@pytest.fixture
def private_api(session, test_config):
    return KrakenAPI(TEST_KEY, TEST_SECRET, session=session, config=test_config)
