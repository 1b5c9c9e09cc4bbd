# src/wumpus_explorer/agent/agent.py

import random

from .knowledge_base import KnowledgeBase
from .pathfinding_module import PathfindingModule
from .planning_module import StrategicPlanner
from wumpus_explorer.utils.constants import GRID_SIZE, HOME_POS


class WumpusWorldAgent:
    """
    The thinking half of the game: it remembers what it perceived, where it
    has been, and decides what to do next. It never looks at the true map.
    """
    def __init__(self, start_pos=HOME_POS, size=GRID_SIZE, rng=None):
        self.rng = rng if rng is not None else random.Random()

        # Functional modules owned by the agent
        self.kb = KnowledgeBase(size)
        self.pathfinding_module = PathfindingModule(self.kb, size)
        self.strategic_planner = StrategicPlanner(self.kb, self.pathfinding_module, self.rng)

        # Movement memory, also used as a stack when returning home.
        self.position_history = [start_pos]
        self.current_goal = None

    def perceive(self, pos, perception):
        """Feeds a percept taken at pos into the knowledge base."""
        self.kb.add_perception(pos, perception.stench, perception.breeze, perception.glitter)

    def record_move(self, pos):
        self.position_history.append(pos)

    def decide_action(self, state, perception):
        action, self.current_goal = self.strategic_planner.create_plan(
            state, perception, self.position_history
        )
        return action

    def find_path(self, start_pos, goal_pos):
        return self.pathfinding_module.find_path(start_pos, goal_pos)
