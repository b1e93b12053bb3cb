"""
Shared pytest fixtures for infrawatch tests.
"""

import logging
import random
from pathlib import Path

import pytest


class ScriptedRandom(random.Random):
    """Seeded Random whose coin flips can be forced.

    ``random()`` returns the queued values in ``coins`` first, then
    ``default_coin`` if set, and only then falls back to the seeded stream.
    ``uniform()`` always draws from the seeded stream, so forcing coins
    leaves the continuous draws untouched.
    """

    def __init__(self, seed=0):
        super().__init__(seed)
        self.coins: list[float] = []
        self.default_coin: float | None = None
        self.coin_draws = 0

    def random(self):
        self.coin_draws += 1
        if self.coins:
            return self.coins.pop(0)
        if self.default_coin is not None:
            return self.default_coin
        return super().random()

    def uniform(self, a, b):
        return a + (b - a) * super().random()


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom: ``scripted_rng(0.0, 0.9, seed=3)``."""

    def make(*coins: float, seed: int = 0, default: float | None = None) -> ScriptedRandom:
        rng = ScriptedRandom(seed)
        rng.coins.extend(coins)
        rng.default_coin = default
        return rng

    return make


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_name = request.node.name

    test_dir = test_output_root / module_name / test_name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


def _reset_logger(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_infrawatch_logging():
    """Give every test a silent infrawatch logger and restore it afterwards."""
    logger = logging.getLogger("infrawatch")
    _reset_logger(logger)
    yield
    _reset_logger(logger)
