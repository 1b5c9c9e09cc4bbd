# src/wumpus_explorer/agent/facts.py

import copy
from collections import namedtuple

from wumpus_explorer.environment.world import get_neighbors
from wumpus_explorer.utils.constants import GRID_SIZE

# A typed fact about one position, e.g. Statement("WUMPUS", (3, 4), False).
Statement = namedtuple("Statement", ["kind", "position", "value"])

# Names of the classification sets a rule may add a position to.
MARK_SAFE = "safe"
MARK_PROBABLY_SAFE = "probably_safe"
MARK_UNCERTAIN = "uncertain"
MARK_DANGEROUS = "dangerous"
MARK_VISITED = "visited"


class FactBase:
    """
    The working memory of the inference engine: the append-only statement log,
    the classification sets and the inference trace. The sets are not
    disjoint; a position can be both safe and dangerous.
    """

    def __init__(self, size=GRID_SIZE):
        self.size = size
        self.statements: list[Statement] = []
        self._index: set[Statement] = set()
        self.inferences: list[str] = []
        self.safe: set[tuple[int, int]] = set()
        self.probably_safe: set[tuple[int, int]] = set()
        self.uncertain: set[tuple[int, int]] = set()
        self.dangerous: set[tuple[int, int]] = set()
        self.visited: set[tuple[int, int]] = set()

    def copy(self) -> "FactBase":
        return copy.deepcopy(self)

    def add_statement(self, kind: str, pos: tuple[int, int], value: bool) -> bool:
        """Appends a statement unless an identical one exists. Returns True if added."""
        statement = Statement(kind, pos, value)
        if statement in self._index:
            return False
        self._index.add(statement)
        self.statements.append(statement)
        return True

    def has(self, kind: str, pos: tuple[int, int], value: bool) -> bool:
        return Statement(kind, pos, value) in self._index

    def statements_of(self, kind: str, value: bool) -> list[Statement]:
        """All statements of one kind carrying one value, in log order."""
        return [s for s in self.statements if s.kind == kind and s.value == value]

    def mark(self, set_name: str, pos: tuple[int, int]) -> bool:
        """Adds pos to a classification set. Returns True if it wasn't there."""
        target = getattr(self, set_name)
        if pos in target:
            return False
        target.add(pos)
        return True

    def neighbors(self, pos: tuple[int, int]) -> list[tuple[int, int]]:
        return get_neighbors(pos, self.size)

    def all_positions(self):
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)
