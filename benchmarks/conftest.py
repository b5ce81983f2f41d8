from __future__ import annotations

import pytest

from benchmarks.fixtures.rows import LARGE_ROWS, SMALL_ROWS


@pytest.fixture
def small_rows() -> list[tuple[str, int]]:
    return SMALL_ROWS


@pytest.fixture
def large_rows() -> list[tuple[str, int]]:
    return LARGE_ROWS
