"""Pytest configuration and fixtures for ArtSpace Navigator tests."""

import json

import pytest
import requests

from art_navigator.catalog.static import StaticCatalog
from art_navigator.config import Settings
from art_navigator.extractors.gateway import ExtractionGateway
from art_navigator.reconciler import CascadeScheduler
from art_navigator.session import NavigatorSession
from art_navigator.url_state import HistoryAddressBar


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Settings with the remote extractor enabled."""
    return Settings(_env_file=None, openai_api_key="test-key", cascade_delay=0.3)


@pytest.fixture
def offline_settings() -> Settings:
    """Settings with no API key, so every query uses the keyword matcher."""
    return Settings(_env_file=None, openai_api_key="", cascade_delay=0.3)


@pytest.fixture
def catalog(settings) -> StaticCatalog:
    return StaticCatalog(settings=settings)


@pytest.fixture
def log_lines() -> list:
    return []


@pytest.fixture
def make_session(catalog, clock, log_lines):
    """Build a NavigatorSession over the built-in catalog and a fake clock."""

    def _make(settings, address_bar=None, gateway=None):
        session = NavigatorSession(
            catalog=catalog,
            gateway=gateway or ExtractionGateway(settings=settings),
            address_bar=address_bar or HistoryAddressBar(),
            scheduler=CascadeScheduler(clock),
            settings=settings,
        )
        session.set_logger(lambda level, message: log_lines.append((level, message)))
        session.start()
        return session

    return _make


@pytest.fixture
def completion_response(mocker):
    """Build a fake chat-completions HTTP response."""

    def _make(content=None, status=200, body=None):
        response = mocker.Mock()
        response.status_code = status
        if status >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(response=response)
        else:
            response.raise_for_status.return_value = None
        if body is None:
            body = {"choices": [{"message": {"role": "assistant", "content": content}}]}
        response.json.return_value = body
        return response

    return _make


def fields_json(**fields) -> str:
    """Serialize a model answer the way the service returns it."""
    base = {"start_time": None, "end_time": None, "country": None, "city": None}
    base.update(fields)
    return json.dumps(base, ensure_ascii=False)
