# tests/conftest.py

import pytest

from hijricalc.bootstrap import build_registry
from hijricalc.config import HijriConfig
from hijricalc.core.time import HIJRA_MILLIS, ONE_DAY_MILLIS


@pytest.fixture
def registry():
    """A fresh registry with its own oracle and month cache."""
    return build_registry(HijriConfig())


@pytest.fixture
def civil(registry):
    return registry.get("islamic-civil")


@pytest.fixture
def tbla(registry):
    return registry.get("islamic-tbla")


@pytest.fixture
def umalqura(registry):
    return registry.get("islamic-umalqura")


@pytest.fixture
def astronomical(registry):
    return registry.get("islamic")


class LinearMoon:
    """
    Idealized moon: age grows uniformly, 360 deg per mean synodic month,
    with conjunctions at HIJRA_MILLIS + offset_days + k * synodic.
    Counts calls so tests can observe memoization.
    """

    SYNODIC_MS = 29.530588853 * ONE_DAY_MILLIS

    def __init__(self, offset_days: float = 0.4):
        self.t0 = HIJRA_MILLIS + offset_days * ONE_DAY_MILLIS
        self.calls = 0

    def __call__(self, ms):
        self.calls += 1
        return ((ms - self.t0) / self.SYNODIC_MS * 360.0 + 180.0) % 360.0 - 180.0


@pytest.fixture
def linear_moon():
    return LinearMoon()


@pytest.fixture
def moon_factory():
    return LinearMoon
