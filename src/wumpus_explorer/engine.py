# src/wumpus_explorer/engine.py

import copy
from collections import namedtuple

from wumpus_explorer.agent.agent import WumpusWorldAgent
from wumpus_explorer.environment.environment import WumpusWorldEnvironment

ActionResult = namedtuple("ActionResult", ["success", "perception", "message"])


class GameEngine:
    """
    Runs one episode, one action per call. The engine owns a private copy of
    the world and the agent's knowledge base; everything handed out is a copy.

    Typical driver loop:

        engine = GameEngine(parse_world(text))
        while not engine.get_world_state().game_over:
            engine.execute_action(engine.suggest_move())
    """

    def __init__(self, world, rng=None):
        self.environment = WumpusWorldEnvironment(world.copy())
        self.agent = WumpusWorldAgent(world.agent_position, world.size, rng)
        self.action_history = []
        self.perception_history = []

        # The start cell is perceived before any action is taken.
        self.agent.perceive(world.agent_position, self.get_current_perception())

    @property
    def world(self):
        return self.environment.world

    @property
    def last_goal(self):
        """The planner priority behind the most recent suggestion."""
        return self.agent.current_goal

    def execute_action(self, action):
        """
        Applies action to the world. Returns ActionResult(success, perception,
        message); success is False only when the game was already over.
        """
        if self.world.game_over:
            return ActionResult(False, self.get_current_perception(), "Game is over")

        message, entered = self.environment.apply_action(action)
        self.action_history.append(action)

        if entered is not None:
            self.agent.record_move(entered)
            if self.world.agent_alive:
                self.agent.perceive(entered, self.get_current_perception())

        perception = self.get_current_perception()
        self.perception_history.append(perception)

        message += self.environment.check_victory()
        return ActionResult(True, perception, message)

    def suggest_move(self):
        """The agent's next action, or None once the game is over."""
        if self.world.game_over:
            return None
        return self.agent.decide_action(self.world, self.get_current_perception())

    def get_current_perception(self):
        return self.environment.get_percepts()

    def find_safe_path(self, start_pos, goal_pos):
        """Cheapest path avoiding known danger, as a list of positions, or None."""
        return self.agent.find_path(start_pos, goal_pos)

    # --- Read accessors; all return copies ---

    def get_world_state(self):
        return self.world.copy()

    def get_knowledge_base(self):
        return copy.deepcopy(self.agent.kb)

    def get_action_history(self):
        return list(self.action_history)

    def get_perception_history(self):
        return list(self.perception_history)

    def get_position_history(self):
        return list(self.agent.position_history)

    def get_arrow_animation(self):
        return dict(self.environment.arrow_animation)
