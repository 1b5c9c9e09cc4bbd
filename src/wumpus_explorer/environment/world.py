# src/wumpus_explorer/environment/world.py

import copy
from collections import namedtuple

from wumpus_explorer.utils.constants import (
    GRID_SIZE,
    HOME_POS,
    NORTH,
    DIRECTION_DELTAS,
    NEIGHBOR_OFFSETS,
)

# The five sensory signals available to the agent after each action.
Perception = namedtuple("Perception", ["stench", "breeze", "glitter", "bump", "scream"])


def is_valid_position(pos, size=GRID_SIZE):
    """Checks if a (row, col) position lies inside the grid."""
    return 0 <= pos[0] < size and 0 <= pos[1] < size


def get_neighbors(pos, size=GRID_SIZE):
    """Returns the in-bounds orthogonal neighbours of pos, in N, S, W, E order."""
    row, col = pos
    neighbors = []
    for d_row, d_col in NEIGHBOR_OFFSETS:
        n_pos = (row + d_row, col + d_col)
        if is_valid_position(n_pos, size):
            neighbors.append(n_pos)
    return neighbors


def step(pos, direction):
    """The position one cell ahead of pos along direction (may be out of bounds)."""
    d_row, d_col = DIRECTION_DELTAS[direction]
    return (pos[0] + d_row, pos[1] + d_col)


def manhattan_distance(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class Cell:
    """Ground-truth facts about one grid cell, plus exploration flags."""

    def __init__(self):
        self.has_wumpus = False
        self.has_pit = False
        self.has_gold = False
        self.has_stench = False
        self.has_breeze = False
        self.has_glitter = False
        self.is_visited = False
        self.is_safe = False
        self.is_dangerous = False
        self.is_blocked = False  # Reserved, no rule sets it

    @property
    def has_hazard(self):
        return self.has_wumpus or self.has_pit

    def __repr__(self):
        flags = [name for name, value in vars(self).items() if value]
        return f"Cell({', '.join(flags)})"


class WorldState:
    """
    The complete, hidden state of one episode: the grid, the agent's pose and
    inventory, and the score. It is built once by the world builder and then
    mutated in place only by the environment.
    """

    def __init__(self, grid=None, size=GRID_SIZE):
        self.size = size
        self.grid = grid if grid is not None else [[Cell() for _ in range(size)] for _ in range(size)]
        self.agent_position = HOME_POS
        self.agent_direction = NORTH
        self.agent_has_gold = False
        self.agent_has_arrow = True
        self.agent_alive = True
        self.wumpus_alive = True
        self.score = 0
        self.game_over = False
        self.game_won = False

    def cell(self, pos):
        return self.grid[pos[0]][pos[1]]

    def is_valid_position(self, pos):
        return is_valid_position(pos, self.size)

    def copy(self):
        """Deep copy; changes to it never reach this state's grid."""
        return copy.deepcopy(self)

    def __repr__(self):
        return (
            f"WorldState(agent={self.agent_position}, dir={self.agent_direction}, "
            f"gold={self.agent_has_gold}, arrow={self.agent_has_arrow}, "
            f"score={self.score}, over={self.game_over}, won={self.game_won})"
        )
