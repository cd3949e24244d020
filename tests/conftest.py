"""Shared test fixtures for the PPM image editor.

Provides the 2x2 reference grid, its P3 text form and a seeded random grid
so individual test modules stay focused.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from ppm_editor.models.pixel_grid import PixelGrid
from ppm_editor.repositories.ppm_repository import PpmRepository

SAMPLE_ROWS = [
    [(10, 20, 30), (40, 50, 60)],
    [(70, 80, 90), (100, 110, 120)],
]

SAMPLE_TEXT = "P3\n2 2\n255\n10 20 30 40 50 60\n70 80 90 100 110 120\n"


@pytest.fixture()
def sample_grid() -> PixelGrid:
    """The 2x2 grid used by most filter scenarios."""
    return PixelGrid.from_rows(SAMPLE_ROWS)


@pytest.fixture()
def random_grid() -> PixelGrid:
    """A 7x5 grid of seeded random 8-bit colors."""
    rng = np.random.default_rng(42)
    grid = PixelGrid.create(7, 5)
    grid.replace_pixels(rng.integers(0, 256, size=(5, 7, 3)))
    return grid


@pytest.fixture()
def repository() -> PpmRepository:
    return PpmRepository(separator=" ")


@pytest.fixture()
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.ppm"
    path.write_text(SAMPLE_TEXT, encoding="utf-8")
    return path



@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_TEXT
