# src/wumpus_explorer/agent/planning_module.py
import random

from .agent_goal import AgentGoal
from wumpus_explorer.environment.world import get_neighbors, manhattan_distance, step
from wumpus_explorer.utils.constants import (
    ACTION_GRAB,
    ACTION_MOVE_FORWARD,
    ACTION_SHOOT,
    ACTION_TURN_LEFT,
    ACTION_TURN_RIGHT,
    DIRECTIONS,
    NORTH,
    EAST,
    SOUTH,
    WEST,
    F_STENCH,
    HOME_POS,
    RISK_SAFE,
    RISK_PROBABLY_SAFE,
    RISK_DANGEROUS,
    TARGET_INTERIOR_BONUS,
    TARGET_SAFE_NEIGHBOR_BONUS,
    DIRECTION_UNVISITED_BONUS,
    DIRECTION_SAFE_BONUS,
)


def turn_towards(facing, desired):
    """
    The turn that starts rotating from facing to desired, or None if already
    facing it. Only a one-step clockwise difference turns right; a 180 degree
    difference always turns left.
    """
    if facing == desired:
        return None
    turn_diff = (desired - facing) % len(DIRECTIONS)
    return ACTION_TURN_RIGHT if turn_diff == 1 else ACTION_TURN_LEFT


def direction_towards(current, target):
    """
    The cardinal direction to head from current towards target, favouring the
    axis with the larger difference (columns win ties).
    """
    row_diff = target[0] - current[0]
    col_diff = target[1] - current[1]
    if abs(row_diff) > abs(col_diff):
        return SOUTH if row_diff > 0 else NORTH
    return EAST if col_diff > 0 else WEST


class StrategicPlanner:
    """
    Picks the agent's next single action from its knowledge and its move
    history. Nothing is remembered between calls: each decision walks the
    same priority list from the top.
    """
    def __init__(self, knowledge_base, pathfinding_module, rng=None):
        self.kb = knowledge_base
        self.pathfinder = pathfinding_module
        self.rng = rng if rng is not None else random.Random()

    def create_plan(self, state, perception, position_history):
        """
        Returns (action, goal) for the current state. position_history is the
        agent's stack of visited positions; returning home pops it.
        """
        # 1. Gold is here: take it.
        if perception.glitter and not state.agent_has_gold:
            return ACTION_GRAB, AgentGoal.GRAB_GOLD

        # 2. Carrying gold: retrace the way home.
        if state.agent_has_gold:
            return self._plan_return_home(state, position_history), AgentGoal.RETURN_HOME

        # 3. Trapped next to the Wumpus: shoot it.
        if state.agent_has_arrow and self._must_shoot(state):
            return ACTION_SHOOT, AgentGoal.SHOOT_WUMPUS

        # 4. Head for the most promising safe cell not yet explored.
        safe_positions = self.kb.get_safe_unvisited_positions()
        if safe_positions:
            target = self._choose_best_target(safe_positions, state.agent_position)
            return self._action_towards(state, target), AgentGoal.EXPLORE_SAFELY

        # 5. Keep going if the cell ahead is safe.
        ahead = step(state.agent_position, state.agent_direction)
        if state.is_valid_position(ahead) and self._is_enterable(ahead):
            return ACTION_MOVE_FORWARD, AgentGoal.STEP_FORWARD

        # 6. Turn towards any safe neighbour.
        action = self._find_safe_direction(state)
        if action is not None:
            return action, AgentGoal.TURN_TO_SAFETY

        # 7. Nothing nearby: go back to where exploration can continue.
        return self._plan_backtrack(state, position_history)

    def _plan_return_home(self, state, position_history):
        current = state.agent_position
        # At home with the gold, a grab just spends a turn so the win check runs.
        if current == HOME_POS:
            return ACTION_GRAB

        # Drop entries for the cell we're standing on to avoid stepping in place.
        while position_history and position_history[-1] == current:
            position_history.pop()

        if not position_history:
            return ACTION_TURN_RIGHT

        desired = direction_towards(current, position_history[-1])
        return turn_towards(state.agent_direction, desired) or ACTION_MOVE_FORWARD

    def _must_shoot(self, state):
        """
        Shooting is a last resort: nothing safe is left to explore, every
        neighbour is dangerous, and the first dangerous cell straight ahead is
        backed by a stench we actually smelled next to it.
        """
        if self.kb.get_safe_unvisited_positions():
            return False

        for direction in DIRECTIONS:
            n_pos = step(state.agent_position, direction)
            if state.is_valid_position(n_pos) and (self.kb.is_safe(n_pos) or not self.kb.is_dangerous(n_pos)):
                return False

        target = self._find_shot_target(state)
        if target is None:
            return False

        return any(
            self.kb.is_visited(n_pos) and self.kb.has_statement(F_STENCH, n_pos, True)
            for n_pos in get_neighbors(target, state.size)
        )

    def _find_shot_target(self, state):
        """The first cell along the agent's facing that is classified dangerous."""
        pos = step(state.agent_position, state.agent_direction)
        while state.is_valid_position(pos):
            if self.kb.get_risk_level(pos) == RISK_DANGEROUS:
                return pos
            pos = step(pos, state.agent_direction)
        return None

    def _choose_best_target(self, positions, current):
        """Highest-scoring position; the first one seen wins ties."""
        best_target = positions[0]
        best_score = self._evaluate_position(best_target, current)
        for pos in positions[1:]:
            score = self._evaluate_position(pos, current)
            if score > best_score:
                best_score = score
                best_target = pos
        return best_target

    def _evaluate_position(self, pos, current):
        """
        Closer is better, interior cells beat edges and corners, and cells with
        many safe or explored neighbours are less likely to be dead ends.
        """
        score = -manhattan_distance(current, pos)

        size = self.pathfinder.N
        if 0 < pos[0] < size - 1 and 0 < pos[1] < size - 1:
            score += TARGET_INTERIOR_BONUS

        safe_adjacent = sum(
            1 for n_pos in get_neighbors(pos, size)
            if self.kb.is_safe(n_pos) or self.kb.is_visited(n_pos)
        )
        score += safe_adjacent * TARGET_SAFE_NEIGHBOR_BONUS
        return score

    def _is_enterable(self, pos):
        risk = self.kb.get_risk_level(pos)
        return risk == RISK_SAFE or (risk == RISK_PROBABLY_SAFE and not self.kb.is_visited(pos))

    def _find_safe_direction(self, state):
        """Turn (or step) towards the best enterable neighbour, or None if there is none."""
        best_direction = None
        best_score = -1
        for direction in DIRECTIONS:
            n_pos = step(state.agent_position, direction)
            if not state.is_valid_position(n_pos) or not self._is_enterable(n_pos):
                continue

            score = 0
            if not self.kb.is_visited(n_pos):
                score += DIRECTION_UNVISITED_BONUS
            if self.kb.get_risk_level(n_pos) == RISK_SAFE:
                score += DIRECTION_SAFE_BONUS

            if score > best_score:
                best_score = score
                best_direction = direction

        if best_direction is None:
            return None
        return turn_towards(state.agent_direction, best_direction) or ACTION_MOVE_FORWARD

    def _plan_backtrack(self, state, position_history):
        """
        Walks the history from the most recent entry back, looking for a safe
        cell next to something still worth exploring. Failing that, turns to a
        random neighbour that isn't known to be dangerous.
        """
        current = state.agent_position
        for pos in reversed(position_history):
            if pos == current or not self.kb.is_safe(pos):
                continue
            has_unexplored_safe = any(
                not self.kb.is_visited(n_pos)
                and (self.kb.is_safe(n_pos) or self.kb.get_risk_level(n_pos) == RISK_PROBABLY_SAFE)
                for n_pos in get_neighbors(pos, state.size)
            )
            if has_unexplored_safe:
                return self._action_towards(state, pos), AgentGoal.BACKTRACK

        open_directions = [
            direction for direction in DIRECTIONS
            if state.is_valid_position(step(current, direction))
            and not self.kb.is_dangerous(step(current, direction))
        ]
        if open_directions:
            direction = self.rng.choice(open_directions)
            action = turn_towards(state.agent_direction, direction) or ACTION_MOVE_FORWARD
            return action, AgentGoal.RANDOM_TURN

        return ACTION_TURN_RIGHT, AgentGoal.GET_UNSTUCK

    def _action_towards(self, state, target):
        """
        One action along the cheapest known-safe path to target. Without such a
        path, heads straight for it along the longer axis.
        Both exploration and backtracking come through here, so a step towards
        a new target may differ from the straight greedy heading when the path
        bends around danger.
        """
        current = state.agent_position
        path = self.pathfinder.find_path(current, target)
        if path and len(path) > 1:
            desired = direction_towards(current, path[1])
        else:
            desired = direction_towards(current, target)
        return turn_towards(state.agent_direction, desired) or ACTION_MOVE_FORWARD
