# src/wumpus_explorer/agent/rules.py

from abc import ABC, abstractmethod
from collections import namedtuple

from .facts import FactBase, MARK_SAFE, MARK_UNCERTAIN, MARK_DANGEROUS
from wumpus_explorer.utils.constants import (
    F_WUMPUS,
    F_PIT,
    F_SAFE,
    F_STENCH,
    F_BREEZE,
    DANGER_POINTS_STENCH,
    DANGER_POINTS_BREEZE,
    DANGER_THRESHOLD,
)

# What a rule concluded about a position. `kind`/`value` describe a statement
# to assert (kind is None when there is none); `mark` names a classification
# set to add the position to (None when there is none).
Conclusion = namedtuple("Conclusion", ["position", "kind", "value", "mark", "reason"])

HAZARD_NAMES = {F_WUMPUS: "Wumpus", F_PIT: "Pit"}
PERCEPT_NAMES = {F_STENCH: "stench", F_BREEZE: "breeze"}


class Rule(ABC):
    @abstractmethod
    def apply(self, facts: FactBase) -> list[Conclusion]:
        pass


class NoPerceptRule(Rule):
    """No stench (breeze) at a cell means no Wumpus (pit) in any adjacent cell."""
    def __init__(self, percept_kind: str, hazard_kind: str):
        self.percept_kind = percept_kind
        self.hazard_kind = hazard_kind

    def apply(self, facts: FactBase) -> list[Conclusion]:
        conclusions = []
        hazard = HAZARD_NAMES[self.hazard_kind]
        percept = PERCEPT_NAMES[self.percept_kind]
        for source in facts.statements_of(self.percept_kind, False):
            reason = f"No {hazard} in cells adjacent to {source.position} - no {percept}"
            for n_pos in facts.neighbors(source.position):
                conclusions.append(Conclusion(n_pos, self.hazard_kind, False, None, reason))
        return conclusions


class MultiSourceLocalizationRule(Rule):
    """
    A cell that could explain two or more separate stench (breeze) percepts is
    taken to hold the hazard. Candidates already proven hazard-free don't count.
    """
    def __init__(self, percept_kind: str, hazard_kind: str, skip_visited: bool = False):
        self.percept_kind = percept_kind
        self.hazard_kind = hazard_kind
        self.skip_visited = skip_visited

    def apply(self, facts: FactBase) -> list[Conclusion]:
        counts: dict[tuple[int, int], int] = {}
        for source in facts.statements_of(self.percept_kind, True):
            for n_pos in facts.neighbors(source.position):
                if facts.has(self.hazard_kind, n_pos, False):
                    continue
                if self.skip_visited and n_pos in facts.visited:
                    continue
                counts[n_pos] = counts.get(n_pos, 0) + 1

        hazard = HAZARD_NAMES[self.hazard_kind]
        percept = PERCEPT_NAMES[self.percept_kind]
        return [
            Conclusion(pos, self.hazard_kind, True, MARK_DANGEROUS,
                       f"{hazard} likely at {pos} - multiple {percept} sources")
            for pos, count in counts.items()
            if count >= 2
        ]


class SingleSourceLocalizationRule(Rule):
    """
    If a stench (breeze) has exactly one unvisited neighbour that isn't proven
    hazard-free, that neighbour must be the source.
    """
    def __init__(self, percept_kind: str, hazard_kind: str):
        self.percept_kind = percept_kind
        self.hazard_kind = hazard_kind

    def apply(self, facts: FactBase) -> list[Conclusion]:
        conclusions = []
        hazard = HAZARD_NAMES[self.hazard_kind]
        for source in facts.statements_of(self.percept_kind, True):
            candidates = [
                n_pos for n_pos in facts.neighbors(source.position)
                if not facts.has(self.hazard_kind, n_pos, False) and n_pos not in facts.visited
            ]
            if len(candidates) == 1:
                the_one = candidates[0]
                conclusions.append(Conclusion(
                    the_one, self.hazard_kind, True, MARK_DANGEROUS,
                    f"{hazard} located at {the_one} - only possible position",
                ))
        return conclusions


class SafetyFromNoThreatsRule(Rule):
    """A cell is safe if it's known to contain neither a Wumpus NOR a pit."""
    def apply(self, facts: FactBase) -> list[Conclusion]:
        conclusions = []
        for pos in facts.all_positions():
            if pos in facts.visited or pos in facts.dangerous:
                continue
            if facts.has(F_WUMPUS, pos, False) and facts.has(F_PIT, pos, False):
                conclusions.append(Conclusion(
                    pos, F_SAFE, True, MARK_SAFE, f"{pos} is safe - no Wumpus and no pit",
                ))
        return conclusions


class StenchConstraintRule(Rule):
    """
    Every stench needs a Wumpus next to it. While none of its neighbours is a
    confirmed Wumpus, the unexplored ones are uncertain.
    """
    def apply(self, facts: FactBase) -> list[Conclusion]:
        conclusions = []
        for source in facts.statements_of(F_STENCH, True):
            neighbors = facts.neighbors(source.position)
            if any(facts.has(F_WUMPUS, n_pos, True) for n_pos in neighbors):
                continue
            reason = f"Unexplained stench at {source.position} - neighbours uncertain"
            for n_pos in neighbors:
                if n_pos not in facts.visited and n_pos not in facts.dangerous:
                    conclusions.append(Conclusion(n_pos, None, None, MARK_UNCERTAIN, reason))
        return conclusions


class DangerEscalationRule(Rule):
    """Uncertain cells bordering a stench or a breeze are treated as dangerous."""
    def apply(self, facts: FactBase) -> list[Conclusion]:
        conclusions = []
        for pos in sorted(facts.uncertain):
            neighbors = facts.neighbors(pos)
            danger_score = 0
            if any(facts.has(F_STENCH, n_pos, True) for n_pos in neighbors):
                danger_score += DANGER_POINTS_STENCH
            if any(facts.has(F_BREEZE, n_pos, True) for n_pos in neighbors):
                danger_score += DANGER_POINTS_BREEZE
            if danger_score >= DANGER_THRESHOLD:
                conclusions.append(Conclusion(
                    pos, None, None, MARK_DANGEROUS,
                    f"{pos} treated as dangerous - danger score {danger_score}",
                ))
        return conclusions


def default_rules() -> list[Rule]:
    """The inference pipeline, in the order it must run."""
    return [
        NoPerceptRule(F_STENCH, F_WUMPUS),
        NoPerceptRule(F_BREEZE, F_PIT),
        MultiSourceLocalizationRule(F_STENCH, F_WUMPUS),
        SingleSourceLocalizationRule(F_STENCH, F_WUMPUS),
        MultiSourceLocalizationRule(F_BREEZE, F_PIT, skip_visited=True),
        SingleSourceLocalizationRule(F_BREEZE, F_PIT),
        SafetyFromNoThreatsRule(),
        StenchConstraintRule(),
        DangerEscalationRule(),
    ]
