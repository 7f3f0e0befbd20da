"""Shared fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from flightcalc.aircraft import default_categories
from flightcalc.airports import default_airports
from flightcalc.main import app


@pytest.fixture
def airports():
    return default_airports()


@pytest.fixture
def categories():
    return default_categories()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
