# src/wumpus_explorer/agent/inference_module.py

from .facts import FactBase
from .rules import Rule, default_rules


class InferenceEngine:
    """
    Forward-chaining over the whole statement log, one pass per call.

    `infer` never touches the FactBase it is given: it works on a copy and
    returns it. `apply_rules` runs the same pass in place, for callers that
    already hold a private copy. Each rule sees the conclusions of the rules
    before it, so the fixed rule order is part of the semantics.
    """
    def __init__(self, rules: list[Rule] = None):
        self.rules = rules if rules is not None else default_rules()

    def infer(self, facts: FactBase) -> FactBase:
        derived = facts.copy()
        self.apply_rules(derived)
        return derived

    def apply_rules(self, facts: FactBase) -> FactBase:
        for rule in self.rules:
            self._apply_conclusions(facts, rule.apply(facts))
        return facts

    def _apply_conclusions(self, facts, conclusions):
        """Adds a rule's conclusions and traces each reason that taught us something new."""
        traced = set()
        for conclusion in conclusions:
            changed = False
            if conclusion.kind is not None:
                changed |= facts.add_statement(conclusion.kind, conclusion.position, conclusion.value)
            if conclusion.mark is not None:
                changed |= facts.mark(conclusion.mark, conclusion.position)
            if changed and conclusion.reason not in traced:
                traced.add(conclusion.reason)
                facts.inferences.append(conclusion.reason)
