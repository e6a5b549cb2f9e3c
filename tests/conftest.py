from __future__ import annotations

import random
from datetime import date

import pytest


@pytest.fixture
def target_day() -> date:
    return date(2025, 1, 15)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
