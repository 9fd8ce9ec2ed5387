import os
import random

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from herbsnake.model import Direction, Food, Snake
from herbsnake.scores import MemoryScoreStore
from herbsnake.simulation import new_game


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def sim(store):
    """A normal-difficulty game that has finished its countdown."""
    game = new_game("normal", store=store, rng=random.Random(1234))
    for _ in range(5):
        game.countdown_step()
    return game


def eat_one(game, channel="red"):
    """Put a short snake mid-board with a herb right in front of it and tick."""
    game.snake = Snake([(10, 5), (9, 5), (8, 5)], Direction.RIGHT)
    game.foods.items = [Food((11, 5), channel)]
    assert game.tick()
