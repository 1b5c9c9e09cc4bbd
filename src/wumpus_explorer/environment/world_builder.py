# src/wumpus_explorer/environment/world_builder.py

import random

from wumpus_explorer.environment.world import WorldState, get_neighbors
from wumpus_explorer.utils.constants import (
    GRID_SIZE,
    HOME_POS,
    MIN_PITS,
    MAX_PITS,
    WUMPUS_SYMBOL,
    PIT_SYMBOL,
    GOLD_SYMBOL,
)


class WorldParseError(ValueError):
    """Raised when a world layout does not describe a 10x10 grid."""


class WorldBuilder:
    """
    Builds a fresh WorldState, either from a text layout or at random.
    The agent always starts at HOME_POS facing north, with one arrow.
    """

    def __init__(self, size=GRID_SIZE, rng=None):
        self.size = size
        self.rng = rng if rng is not None else random.Random()

    def parse(self, text):
        """
        Parses a layout of exactly `size` non-empty rows. W is the Wumpus,
        P a pit, G the gold; any other character is an empty cell. Short rows
        are padded with empty cells and extra columns are ignored.
        """
        lines = [line for line in text.strip().split("\n") if line.strip()]
        if len(lines) != self.size:
            raise WorldParseError(
                f"World must be {self.size}x{self.size} (got {len(lines)} rows)"
            )

        world = WorldState(size=self.size)
        for row, line in enumerate(lines):
            for col, char in enumerate(line[:self.size]):
                cell = world.grid[row][col]
                if char == WUMPUS_SYMBOL:
                    cell.has_wumpus = True
                elif char == PIT_SYMBOL:
                    cell.has_pit = True
                elif char == GOLD_SYMBOL:
                    cell.has_gold = True
                    cell.has_glitter = True

        self._finish(world)
        return world

    def generate(self):
        """
        Generates a random world: one Wumpus, 3 to 5 pits and one gold, none of
        them on the home cell. Cells are drawn by rejection sampling.
        """
        world = WorldState(size=self.size)

        # 1. Place the Wumpus.
        row, col = self._random_cell()
        world.grid[row][col].has_wumpus = True

        # 2. Place the pits. A pit never shares a cell with the Wumpus or another pit.
        num_pits = self.rng.randint(MIN_PITS, MAX_PITS)
        pits_placed = 0
        while pits_placed < num_pits:
            row, col = self._random_cell()
            cell = world.grid[row][col]
            if not cell.has_wumpus and not cell.has_pit:
                cell.has_pit = True
                pits_placed += 1

        # 3. Place the gold on a cell without a hazard.
        while True:
            row, col = self._random_cell()
            cell = world.grid[row][col]
            if not cell.has_hazard:
                cell.has_gold = True
                cell.has_glitter = True
                break

        self._finish(world)
        return world

    def _random_cell(self):
        """A uniformly random cell other than home."""
        while True:
            pos = (self.rng.randrange(self.size), self.rng.randrange(self.size))
            if pos != HOME_POS:
                return pos

    def _finish(self, world):
        add_percept_halos(world)
        home = world.cell(HOME_POS)
        home.is_safe = True
        home.is_visited = True


def add_percept_halos(world):
    """Sets stench around every Wumpus cell and breeze around every pit cell."""
    for row in range(world.size):
        for col in range(world.size):
            cell = world.grid[row][col]
            if not cell.has_hazard:
                continue
            for n_row, n_col in get_neighbors((row, col), world.size):
                neighbor = world.grid[n_row][n_col]
                if cell.has_wumpus:
                    neighbor.has_stench = True
                if cell.has_pit:
                    neighbor.has_breeze = True


def parse_world(text):
    return WorldBuilder().parse(text)


def generate_world(rng=None):
    return WorldBuilder(rng=rng).generate()


def load_world(path):
    """Reads a layout file and parses it."""
    with open(path, "r") as f:
        return parse_world(f.read())
