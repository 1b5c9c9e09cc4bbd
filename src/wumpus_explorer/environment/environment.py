# src/wumpus_explorer/environment/environment.py

from wumpus_explorer.environment.world import Perception, get_neighbors, step
from wumpus_explorer.utils.constants import (
    ACTIONS,
    ACTION_MOVE_FORWARD,
    ACTION_TURN_LEFT,
    ACTION_TURN_RIGHT,
    ACTION_GRAB,
    ACTION_RELEASE,
    ACTION_SHOOT,
    DIRECTIONS,
    HOME_POS,
    SCORE_TURN,
    SCORE_MOVE_FORWARD,
    SCORE_GRAB,
    SCORE_RELEASE,
    SCORE_SHOOT,
    SCORE_DIE,
    SCORE_WIN,
)
from wumpus_explorer.utils.logging_utils import log_error, log_success


class WumpusWorldEnvironment:
    """
    Applies actions to a WorldState it owns and reports percepts. This is the
    only place where the world's ground truth and the score change.
    """

    def __init__(self, world):
        self.world = world
        self.last_action = None
        self.arrow_fired = False
        self.arrow_animation = {
            "active": False,
            "direction": world.agent_direction,
            "start_position": world.agent_position,
        }

    def get_percepts(self):
        """
        Gathers the percepts at the agent's current cell. Bump is reported when
        the last action was a forward move and the cell ahead lies outside the
        grid; scream once the arrow has been fired and the Wumpus is dead.
        """
        world = self.world
        cell = world.cell(world.agent_position)
        ahead = step(world.agent_position, world.agent_direction)
        return Perception(
            stench=cell.has_stench,
            breeze=cell.has_breeze,
            glitter=cell.has_glitter,
            bump=self.last_action == ACTION_MOVE_FORWARD and not world.is_valid_position(ahead),
            scream=self.arrow_fired and not world.wumpus_alive,
        )

    def apply_action(self, action):
        """
        Processes one action. Returns (message, entered) where entered is the
        cell the agent stepped into, or None if it didn't move.
        The caller must check game_over first.
        """
        if action not in ACTIONS:
            raise ValueError(f"Unknown action: {action!r}")

        world = self.world
        self.last_action = action
        # The arrow is only shown in flight during the action that fired it.
        self.arrow_animation["active"] = False
        entered = None

        if action == ACTION_TURN_LEFT:
            world.agent_direction = (world.agent_direction - 1) % len(DIRECTIONS)
            world.score += SCORE_TURN
            message = "Turned left"

        elif action == ACTION_TURN_RIGHT:
            world.agent_direction = (world.agent_direction + 1) % len(DIRECTIONS)
            world.score += SCORE_TURN
            message = "Turned right"

        elif action == ACTION_MOVE_FORWARD:
            new_pos = step(world.agent_position, world.agent_direction)
            if world.is_valid_position(new_pos):
                world.agent_position = new_pos
                world.score += SCORE_MOVE_FORWARD
                world.cell(new_pos).is_visited = True
                entered = new_pos
                message = self._check_death() or "Moved forward"
            else:
                message = "Cannot move forward - blocked by wall"

        elif action == ACTION_GRAB:
            cell = world.cell(world.agent_position)
            if cell.has_gold and not world.agent_has_gold:
                world.agent_has_gold = True
                cell.has_gold = False
                cell.has_glitter = False
                log_success(f"Gold grabbed at {world.agent_position}")
                message = "Grabbed gold!"
            else:
                message = "Nothing to grab here"
            world.score += SCORE_GRAB

        elif action == ACTION_RELEASE:
            if world.agent_has_gold:
                world.agent_has_gold = False
                cell = world.cell(world.agent_position)
                cell.has_gold = True
                cell.has_glitter = True
                message = "Released gold"
            else:
                message = "No gold to release"
            world.score += SCORE_RELEASE

        else:  # ACTION_SHOOT
            message = self._shoot()

        return message, entered

    def check_victory(self):
        """Ends the game with a win if the agent holds the gold at home."""
        world = self.world
        if world.agent_has_gold and world.agent_position == HOME_POS and not world.game_won:
            world.game_won = True
            world.game_over = True
            world.score += SCORE_WIN
            log_success(f"Escaped with the gold, final score {world.score}")
            return " - You escaped with the gold! Victory!"
        return ""

    def find_arrow_target(self):
        """The first cell holding a live Wumpus along the agent's facing, or None."""
        world = self.world
        pos = step(world.agent_position, world.agent_direction)
        while world.is_valid_position(pos):
            if world.cell(pos).has_wumpus and world.wumpus_alive:
                return pos
            pos = step(pos, world.agent_direction)
        return None

    def _check_death(self):
        """Kills the agent if its cell holds a live Wumpus or a pit."""
        world = self.world
        cell = world.cell(world.agent_position)
        if cell.has_wumpus and world.wumpus_alive:
            reason = "Agent was eaten by Wumpus! Game Over!"
        elif cell.has_pit:
            reason = "Agent fell into a pit! Game Over!"
        else:
            return None

        world.agent_alive = False
        world.game_over = True
        world.score += SCORE_DIE
        log_error(f"{reason} (at {world.agent_position}, score {world.score})")
        return reason

    def _shoot(self):
        world = self.world
        if not world.agent_has_arrow:
            return "No arrow to shoot"

        world.agent_has_arrow = False
        world.score += SCORE_SHOOT
        self.arrow_fired = True
        self.arrow_animation = {
            "active": True,
            "direction": world.agent_direction,
            "start_position": world.agent_position,
        }

        target = self.find_arrow_target()
        if target is None:
            return "Arrow missed - it flew into the darkness"

        world.wumpus_alive = False
        world.cell(target).has_wumpus = False
        self._remove_stench_around(target)
        log_success(f"Wumpus killed at {target}")
        return "Arrow hit! Wumpus is dead! *SCREAM*"

    def _remove_stench_around(self, dead_pos):
        """Clears the stench around a dead Wumpus unless another live one still explains it."""
        world = self.world
        for neighbor in get_neighbors(dead_pos, world.size):
            still_smelly = any(
                world.cell(other).has_wumpus and world.wumpus_alive
                for other in get_neighbors(neighbor, world.size)
            )
            if not still_smelly:
                world.cell(neighbor).has_stench = False
