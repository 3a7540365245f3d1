import logging
import random

import pytest

from nimsearch.games.nim_game import NimState


@pytest.fixture
def rng():
    """Seeded random source so best-move picks are reproducible"""
    return random.Random(1234)


@pytest.fixture
def initial_state():
    return NimState(piles=(1, 2, 4))


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Remove handlers installed by setup_logging between tests"""
    yield
    app_logger = logging.getLogger("nimsearch")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
