from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from applovin_max_mcp.config import MaxConfig
from applovin_max_mcp.max_client import MaxClient


def _make_response(status_code=200, text='{"results": []}'):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def _sent_url(send_mock):
    prepared = send_mock.call_args[0][0]
    return prepared.url


def _sent_query(send_mock):
    return parse_qs(urlsplit(_sent_url(send_mock)).query, keep_blank_values=True)


@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects usable as context managers."""
    return _make_response


@pytest.fixture
def sent_url():
    """URL of the last prepared request passed to a mocked Session.send."""
    return _sent_url


@pytest.fixture
def sent_query():
    """Decoded query of the last request passed to a mocked Session.send."""
    return _sent_query


@pytest.fixture
def session():
    session = requests.Session()
    session.send = MagicMock(return_value=_make_response())
    return session


@pytest.fixture
def client(session):
    return MaxClient(session=session)


@pytest.fixture
def config():
    return MaxConfig(api_key="test-key")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "APPLOVIN_API_KEY",
        "APPLOVIN_MAX_BASE_URL",
        "APPLOVIN_REQUEST_TIMEOUT",
        "APPLOVIN_AUDIT_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
