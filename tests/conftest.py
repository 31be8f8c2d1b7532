import pytest

import config
from grid import Grid
from maze_layout import parse_layout
from simulation import Simulation


class ScriptedRandom:
    """Random source returning queued values; records what choice() was offered"""

    def __init__(self, randoms=(), choices=()):
        self.randoms = list(randoms)
        self.choices = list(choices)
        self.choice_calls = []

    def random(self):
        return self.randoms.pop(0) if self.randoms else 0.0

    def choice(self, seq):
        self.choice_calls.append(list(seq))
        index = self.choices.pop(0) if self.choices else 0
        return seq[index]


CORRIDOR = [
    "######",
    "#....#",
    "######",
]

CROSSROADS = [
    "#####",
    "##.##",
    "#...#",
    "##.##",
    "#####",
]

T_JUNCTION = [
    "#####",
    "#...#",
    "##.##",
    "##.##",
    "#####",
]

OPEN_ROOM = [
    "#####",
    "#...#",
    "#...#",
    "#...#",
    "#####",
]


def make_grid(rows):
    return Grid(parse_layout(rows))


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(config, 'ENABLE_SIMULATION_LOGGING', False)


@pytest.fixture
def sim():
    simulation = Simulation(seed=1234)
    simulation.start_game()
    return simulation
