# src/wumpus_explorer/agent/pathfinding_module.py
import heapq

from wumpus_explorer.environment.world import get_neighbors, is_valid_position, manhattan_distance
from wumpus_explorer.utils.constants import (
    GRID_SIZE,
    RISK_DANGEROUS,
    RISK_UNCERTAIN,
    PATH_COST_VISITED,
    PATH_COST_UNCERTAIN,
    PATH_COST_DEFAULT,
)


class PathfindingModule:
    """
    Risk-aware A* over grid positions, driven by the knowledge base.
    Known-dangerous cells are never entered; visited cells are cheap and
    uncertain ones expensive, so paths hug explored ground.
    """
    def __init__(self, knowledge_base, size=GRID_SIZE):
        self.kb = knowledge_base
        self.N = size

    def _step_cost(self, pos):
        """
        Cost of entering pos, or None if it may not be entered.
        A visited cell is cheap even if it is also classified uncertain.
        """
        risk = self.kb.get_risk_level(pos)
        if risk == RISK_DANGEROUS:
            return None
        if self.kb.is_visited(pos):
            return PATH_COST_VISITED
        if risk == RISK_UNCERTAIN:
            return PATH_COST_UNCERTAIN
        return PATH_COST_DEFAULT

    def _get_heuristic_cost(self, pos, goal_pos):
        """
        Manhattan distance scaled by the cheapest step, so the estimate never
        exceeds the true cost and A* stays optimal.
        """
        return manhattan_distance(pos, goal_pos) * PATH_COST_VISITED

    def find_path(self, start_pos, goal_pos):
        """
        Finds the cheapest path from start_pos to goal_pos.

        Returns:
            list[tuple] or None: The positions from start to goal inclusive,
                                 or None if the goal can't be reached without
                                 entering a dangerous cell.
        """
        if not (is_valid_position(start_pos, self.N) and is_valid_position(goal_pos, self.N)):
            return None
        if start_pos == goal_pos:
            return [start_pos]

        # Entries are (f_cost, tie, g_cost, position); `tie` keeps pops in insertion order.
        counter = 0
        open_set = [(self._get_heuristic_cost(start_pos, goal_pos), counter, 0, start_pos)]
        g_costs = {start_pos: 0}
        came_from = {}

        while open_set:
            _, _, g_cost, current = heapq.heappop(open_set)

            # A cheaper route to this position was already expanded.
            if g_cost > g_costs.get(current, float("inf")):
                continue

            if current == goal_pos:
                return self._reconstruct(came_from, current)

            for neighbor in get_neighbors(current, self.N):
                step_cost = self._step_cost(neighbor)
                if step_cost is None:
                    continue

                new_g_cost = g_cost + step_cost
                if new_g_cost < g_costs.get(neighbor, float("inf")):
                    g_costs[neighbor] = new_g_cost
                    came_from[neighbor] = current
                    counter += 1
                    f_cost = new_g_cost + self._get_heuristic_cost(neighbor, goal_pos)
                    heapq.heappush(open_set, (f_cost, counter, new_g_cost, neighbor))

        return None

    def _reconstruct(self, came_from, current):
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path
