from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from investcalc.app import create_app
from investcalc.config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(max_total_periods=1000, cors_origins=["http://localhost:5173"])


@pytest.fixture()
def client(settings: Settings) -> FlaskClient:
    app = create_app(settings)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
