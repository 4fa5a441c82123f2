from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("OTEL_SERVICE_NAME", "rpos-backend-test")
os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")
os.environ.setdefault("BUSINESS_TIMEZONE", "UTC")

from fakes import FixedClock, StaticInsights
from rpos.api.main import create_app
from rpos.infrastructure.bootstrap import Container, build_container


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def insights() -> StaticInsights:
    return StaticInsights("Push the combo at lunch.")


@pytest.fixture
def container(fixed_clock: FixedClock, insights: StaticInsights) -> Container:
    return build_container(clock=fixed_clock, insights=insights, seed_demo=False)


@pytest.fixture
def client(container: Container) -> Iterator[TestClient]:
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def filled_cart(client: TestClient) -> int:
    first = client.post("/v1/cart/lines", json={"productId": "p1", "modifierIds": ["sz_l"]})
    assert first.status_code == 201
    second = client.post("/v1/cart/lines", json={"productId": "p8", "quantity": 2})
    assert second.status_code == 201
    return second.json()["total"]
