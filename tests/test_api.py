"""Real API integration tests.

These tests call random.org and are intentionally compact:
- ENABLE_API_TESTS=1 is required to run any API tests
- each test spends a single draw from the daily quota
"""

from __future__ import annotations

import pytest

import truedraw
from truedraw import InputRecord

pytestmark = pytest.mark.api


@pytest.mark.asyncio
async def test_real_draw_stays_in_range() -> None:
    result = await truedraw.draw(1, 6)

    assert 1 <= result.value <= 6
    assert result.source == "random.org"


@pytest.mark.asyncio
async def test_real_draw_many_preserves_order() -> None:
    records = [
        InputRecord(parameters={"min": 0, "max": 0}),
        InputRecord(parameters={"min": 5, "max": 5}),
    ]

    outputs = await truedraw.draw_many(records)

    assert [o.json["value"] for o in outputs] == [0, 5]
