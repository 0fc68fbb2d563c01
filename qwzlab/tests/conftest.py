"""Pytest configuration and fixtures for the qwzlab test-suite."""
from __future__ import annotations

import pytest

from qwzlab.pipeline import run_wilson_loop
from qwzlab.schema import WilsonSettings


@pytest.fixture
def small_settings() -> WilsonSettings:
    """A coarse grid that still resolves the M=-1 winding."""
    return WilsonSettings(nk=24)


@pytest.fixture(scope="session")
def topological_result():
    """M=-1 on a 40x40 grid, shared by the slower checks."""
    return run_wilson_loop(-1.0, WilsonSettings(nk=40))


@pytest.fixture(scope="session")
def trivial_result():
    return run_wilson_loop(-3.0, WilsonSettings(nk=40))
