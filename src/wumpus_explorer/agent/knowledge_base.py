# src/wumpus_explorer/agent/knowledge_base.py

from collections import namedtuple

from .facts import FactBase, MARK_PROBABLY_SAFE
from .inference_module import InferenceEngine
from wumpus_explorer.utils.constants import (
    GRID_SIZE,
    F_SAFE,
    F_VISITED,
    F_STENCH,
    F_BREEZE,
    RISK_SAFE,
    RISK_PROBABLY_SAFE,
    RISK_UNCERTAIN,
    RISK_DANGEROUS,
)

# Read-only view handed to observers.
KnowledgeSnapshot = namedtuple(
    "KnowledgeSnapshot",
    [
        "statements",
        "inferences",
        "safe_positions",
        "probably_safe_positions",
        "uncertain_positions",
        "dangerous_positions",
        "visited_positions",
    ],
)


class KnowledgeBase:
    """
    The agent's memory. It classifies every position as safe, probably safe,
    uncertain or dangerous using only the percepts it has been told about.
    """
    def __init__(self, size=GRID_SIZE, engine: InferenceEngine = None):
        self.size = size
        self.engine = engine if engine is not None else InferenceEngine()
        self._facts = FactBase(size)
        self.gold_found_at = None

    def add_perception(self, pos: tuple[int, int], stench: bool, breeze: bool, glitter: bool):
        """
        Records what was perceived at pos and re-runs the inference pipeline.
        A visited cell is always safe: the agent survived reaching it.
        """
        facts = self._facts.copy()
        facts.visited.add(pos)
        facts.safe.add(pos)

        facts.add_statement(F_STENCH, pos, stench)
        facts.add_statement(F_BREEZE, pos, breeze)
        facts.add_statement(F_VISITED, pos, True)
        facts.add_statement(F_SAFE, pos, True)

        if not stench and not breeze:
            for n_pos in facts.neighbors(pos):
                if n_pos not in facts.visited and n_pos not in facts.dangerous:
                    facts.mark(MARK_PROBABLY_SAFE, n_pos)

        if glitter and self.gold_found_at != pos:
            self.gold_found_at = pos
            facts.inferences.append(f"Glitter at {pos} - gold is here")

        self._facts = self.engine.apply_rules(facts)

    # --- Queries ---

    def get_risk_level(self, pos: tuple[int, int]) -> str:
        """Resolves overlapping classifications: dangerous > safe > probably safe > uncertain."""
        if pos in self._facts.dangerous:
            return RISK_DANGEROUS
        if pos in self._facts.safe:
            return RISK_SAFE
        if pos in self._facts.probably_safe:
            return RISK_PROBABLY_SAFE
        return RISK_UNCERTAIN

    def is_safe(self, pos: tuple[int, int]) -> bool:
        return pos in self._facts.safe or pos in self._facts.probably_safe

    def is_dangerous(self, pos: tuple[int, int]) -> bool:
        return pos in self._facts.dangerous

    def is_visited(self, pos: tuple[int, int]) -> bool:
        return pos in self._facts.visited

    def is_uncertain(self, pos: tuple[int, int]) -> bool:
        return pos in self._facts.uncertain

    def has_statement(self, kind: str, pos: tuple[int, int], value: bool) -> bool:
        return self._facts.has(kind, pos, value)

    def get_safe_unvisited_positions(self) -> list[tuple[int, int]]:
        """
        Confirmed-safe cells not yet visited. If there are none, falls back to
        probably-safe unvisited cells that aren't flagged dangerous.
        Positions come back in row-major order.
        """
        facts = self._facts
        positions = sorted(pos for pos in facts.safe if pos not in facts.visited)
        if not positions:
            positions = sorted(
                pos for pos in facts.probably_safe
                if pos not in facts.visited and pos not in facts.dangerous
            )
        return positions

    def get_knowledge_base(self) -> KnowledgeSnapshot:
        facts = self._facts
        return KnowledgeSnapshot(
            statements=tuple(facts.statements),
            inferences=tuple(facts.inferences),
            safe_positions=frozenset(facts.safe),
            probably_safe_positions=frozenset(facts.probably_safe),
            uncertain_positions=frozenset(facts.uncertain),
            dangerous_positions=frozenset(facts.dangerous),
            visited_positions=frozenset(facts.visited),
        )

    def get_recent_inferences(self, count: int = 5) -> list[str]:
        if count <= 0:
            return []
        return list(self._facts.inferences[-count:])

    def clear_inferences(self):
        """Drops the trace. Statements and classifications are kept."""
        self._facts.inferences.clear()
