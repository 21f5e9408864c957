import random
from concurrent.futures import Future

import pytest

from fruit_slicer.game.errors import ResourceLoadFailure
from fruit_slicer.game.game_core import GameConfig, GameEngine
from fruit_slicer.game.highscore import MemoryHighScoreStore
from fruit_slicer.game.scheduler import Scheduler


class ImmediateLoader:
    """Every sprite is ready at once; paths in `broken` fail to load."""

    def __init__(self, broken=()):
        self.broken = set(broken)
        self.requested = []

    def load(self, path):
        self.requested.append(path)
        future = Future()
        if path in self.broken:
            future.set_exception(ResourceLoadFailure(path))
        else:
            future.set_result(f"sprite:{path}")
        return future


class ManualLoader:
    """Futures stay pending until the test resolves them."""

    def __init__(self):
        self.futures = []

    def load(self, path):
        future = Future()
        self.futures.append((path, future))
        return future

    def resolve_all(self):
        for path, future in self.futures:
            if not future.done():
                future.set_result(f"sprite:{path}")


class RecordingSurface:
    def __init__(self):
        self.images = []

    def draw_image(self, sprite, x, y, w, h):
        self.images.append((sprite, x, y, w, h))


class Calls:
    def __init__(self):
        self.misses = 0
        self.scores = 0
        self.hazards = []

    def on_miss(self):
        self.misses += 1

    def on_score(self):
        self.scores += 1

    def on_hazard(self, reason):
        self.hazards.append(reason)


@pytest.fixture
def loader():
    return ImmediateLoader()


@pytest.fixture
def calls():
    return Calls()


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def game_overs():
    return []


@pytest.fixture
def engine(loader, scheduler, store, game_overs):
    return GameEngine(
        800,
        600,
        loader,
        GameConfig(),
        scheduler=scheduler,
        store=store,
        rng=random.Random(7),
        on_game_over=game_overs.append,
    )
