from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fakes import FixedClock, RecordingPublisher
from rpos.domain.catalog.entities import Catalog
from rpos.infrastructure.catalog.static_catalog import build_catalog


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def catalog() -> Catalog:
    return build_catalog()
