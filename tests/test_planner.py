"""Tests for the strategic planner's priority list and its turning helpers."""

import random

import pytest

from wumpus_explorer.agent.agent_goal import AgentGoal
from wumpus_explorer.agent.facts import FactBase
from wumpus_explorer.agent.knowledge_base import KnowledgeBase
from wumpus_explorer.agent.pathfinding_module import PathfindingModule
from wumpus_explorer.agent.planning_module import StrategicPlanner, direction_towards, turn_towards
from wumpus_explorer.engine import GameEngine
from wumpus_explorer.environment.world import Perception, WorldState
from wumpus_explorer.environment.world_builder import parse_world
from wumpus_explorer.utils.constants import (
    ACTION_GRAB,
    ACTION_MOVE_FORWARD,
    ACTION_SHOOT,
    ACTION_TURN_LEFT,
    ACTION_TURN_RIGHT,
    EAST,
    HOME_POS,
    NORTH,
    SOUTH,
    WEST,
)

NOTHING = Perception(stench=False, breeze=False, glitter=False, bump=False, scream=False)


def make_planner(visited=(), safe=(), probably_safe=(), dangerous=()):
    facts = FactBase()
    facts.visited = set(visited)
    facts.safe = set(safe)
    facts.probably_safe = set(probably_safe)
    facts.dangerous = set(dangerous)
    kb = KnowledgeBase()
    kb._facts = facts
    return StrategicPlanner(kb, PathfindingModule(kb), random.Random(0))


def make_state(pos, direction=NORTH, **attrs):
    state = WorldState()
    state.agent_position = pos
    state.agent_direction = direction
    for name, value in attrs.items():
        setattr(state, name, value)
    return state


@pytest.mark.parametrize(
    "facing, desired, expected",
    [
        (NORTH, NORTH, None),
        (NORTH, EAST, ACTION_TURN_RIGHT),
        (NORTH, WEST, ACTION_TURN_LEFT),
        (NORTH, SOUTH, ACTION_TURN_LEFT),
        (WEST, NORTH, ACTION_TURN_RIGHT),
        (EAST, WEST, ACTION_TURN_LEFT),
    ],
)
def test_turn_towards(facing, desired, expected):
    assert turn_towards(facing, desired) == expected


@pytest.mark.parametrize(
    "target, expected",
    [
        ((2, 5), NORTH),
        ((9, 6), SOUTH),
        ((5, 9), EAST),
        ((7, 3), WEST),  # equal distances go by column
        ((3, 7), EAST),
    ],
)
def test_direction_towards(target, expected):
    assert direction_towards((5, 5), target) == expected


def test_glitter_means_grab():
    planner = make_planner(visited=[(5, 5)], safe=[(5, 5)])
    perception = NOTHING._replace(glitter=True)

    action, goal = planner.create_plan(make_state((5, 5)), perception, [(5, 5)])

    assert (action, goal) == (ACTION_GRAB, AgentGoal.GRAB_GOLD)


def test_return_home_pops_current_position_from_history():
    planner = make_planner(visited=[(9, 0), (8, 0), (7, 0)], safe=[(9, 0), (8, 0), (7, 0)])
    state = make_state((7, 0), NORTH, agent_has_gold=True)
    history = [(9, 0), (8, 0), (7, 0), (7, 0)]

    action, goal = planner.create_plan(state, NOTHING, history)

    assert (action, goal) == (ACTION_TURN_LEFT, AgentGoal.RETURN_HOME)
    assert history == [(9, 0), (8, 0)]

    state.agent_direction = SOUTH
    action, _ = planner.create_plan(state, NOTHING, history)
    assert action == ACTION_MOVE_FORWARD


def test_return_home_with_exhausted_history_turns():
    planner = make_planner()
    state = make_state((5, 5), agent_has_gold=True)

    action, goal = planner.create_plan(state, NOTHING, [(5, 5)])

    assert (action, goal) == (ACTION_TURN_RIGHT, AgentGoal.RETURN_HOME)


def test_at_home_with_gold_grabs_to_finish():
    planner = make_planner()
    state = make_state(HOME_POS, agent_has_gold=True)

    action, goal = planner.create_plan(state, NOTHING, [HOME_POS])

    assert (action, goal) == (ACTION_GRAB, AgentGoal.RETURN_HOME)


def test_first_move_on_empty_world_goes_north(make_layout):
    engine = GameEngine(parse_world(make_layout(gold=(0, 9))), rng=random.Random(0))

    assert engine.suggest_move() == ACTION_MOVE_FORWARD
    assert engine.last_goal == AgentGoal.EXPLORE_SAFELY


def test_explore_targets_best_scoring_cell():
    # (4,5) is interior with a visited neighbour; (5,0) is an edge cell.
    planner = make_planner(
        visited=[(5, 5)],
        safe=[(5, 5), (4, 5), (5, 0)],
    )
    state = make_state((5, 5), EAST)

    action, goal = planner.create_plan(state, NOTHING, [(5, 5)])

    assert (action, goal) == (ACTION_TURN_LEFT, AgentGoal.EXPLORE_SAFELY)


def test_step_forward_when_cell_ahead_is_safe():
    planner = make_planner(visited=[(5, 5), (5, 6)], safe=[(5, 5), (5, 6)])
    state = make_state((5, 5), EAST)

    action, goal = planner.create_plan(state, NOTHING, [(5, 6), (5, 5)])

    assert (action, goal) == (ACTION_MOVE_FORWARD, AgentGoal.STEP_FORWARD)


def test_turn_to_safe_neighbour():
    planner = make_planner(visited=[(5, 5), (5, 6)], safe=[(5, 5), (5, 6)])
    state = make_state((5, 5), NORTH)

    action, goal = planner.create_plan(state, NOTHING, [(5, 6), (5, 5)])

    assert (action, goal) == (ACTION_TURN_RIGHT, AgentGoal.TURN_TO_SAFETY)


def test_equally_safe_directions_prefer_north():
    # North and east score the same; the N, E, S, W scan keeps the first.
    planner = make_planner(
        visited=[(5, 5), (4, 5), (5, 6)],
        safe=[(5, 5), (4, 5), (5, 6)],
        dangerous=[(5, 4), (6, 5)],
    )
    state = make_state((5, 5), WEST)

    action, goal = planner.create_plan(state, NOTHING, [(5, 5)])

    assert (action, goal) == (ACTION_TURN_RIGHT, AgentGoal.TURN_TO_SAFETY)


def test_equally_scored_targets_keep_first_in_row_order():
    # (4,5) and (5,4) both score 14; (5,4) would need a right turn instead.
    planner = make_planner(
        visited=[(5, 5)],
        safe=[(5, 5), (4, 5), (5, 4)],
    )
    state = make_state((5, 5), SOUTH)

    action, goal = planner.create_plan(state, NOTHING, [(5, 5)])

    assert (action, goal) == (ACTION_TURN_LEFT, AgentGoal.EXPLORE_SAFELY)


def test_backtrack_to_cell_with_unexplored_neighbour():
    planner = make_planner(
        visited=[(5, 5), (5, 6), (5, 7)],
        safe=[(5, 5), (5, 6), (5, 7)],
        probably_safe=[(4, 5)],
        dangerous=[(4, 5), (5, 6)],
    )
    state = make_state((5, 7), NORTH)

    action, goal = planner.create_plan(state, NOTHING, [(5, 5), (5, 6), (5, 7)])

    # (5,6) is blocked, so the path to (5,5) starts by heading south.
    assert (action, goal) == (ACTION_TURN_LEFT, AgentGoal.BACKTRACK)


def test_random_turn_towards_only_open_neighbour():
    planner = make_planner(
        visited=[(5, 5)],
        safe=[(5, 5)],
        dangerous=[(4, 5), (5, 4), (5, 6)],
    )
    state = make_state((5, 5), NORTH)

    action, goal = planner.create_plan(state, NOTHING, [(5, 5)])

    assert (action, goal) == (ACTION_TURN_LEFT, AgentGoal.RANDOM_TURN)


def test_stuck_without_arrow_turns_right():
    planner = make_planner(
        visited=[(5, 5)],
        safe=[(5, 5)],
        dangerous=[(4, 5), (6, 5), (5, 4), (5, 6)],
    )
    state = make_state((5, 5), NORTH, agent_has_arrow=False)

    action, goal = planner.create_plan(state, NOTHING, [(5, 5)])

    assert (action, goal) == (ACTION_TURN_RIGHT, AgentGoal.GET_UNSTUCK)


def test_cornered_agent_shoots_then_gets_unstuck(make_layout):
    engine = GameEngine(parse_world(make_layout(wumpus=(8, 0))), rng=random.Random(0))

    assert engine.suggest_move() == ACTION_SHOOT
    assert engine.last_goal == AgentGoal.SHOOT_WUMPUS

    result = engine.execute_action(ACTION_SHOOT)
    assert result.perception.scream
    assert not engine.get_world_state().wumpus_alive

    assert engine.suggest_move() == ACTION_TURN_RIGHT
    assert engine.last_goal == AgentGoal.GET_UNSTUCK


def test_no_shot_without_smelled_stench():
    # Cornered at home but the danger ahead has no stench evidence.
    planner = make_planner(
        visited=[HOME_POS],
        safe=[HOME_POS],
        dangerous=[(8, 0), (9, 1)],
    )
    state = make_state(HOME_POS, NORTH)

    action, goal = planner.create_plan(state, NOTHING, [HOME_POS])

    assert action != ACTION_SHOOT
    assert goal == AgentGoal.GET_UNSTUCK


def test_autoplay_fetches_adjacent_gold(make_layout):
    engine = GameEngine(parse_world(make_layout(gold=(8, 0))), rng=random.Random(0))

    actions = []
    action = engine.suggest_move()
    while action is not None and len(actions) < 20:
        actions.append(action)
        engine.execute_action(action)
        action = engine.suggest_move()

    state = engine.get_world_state()
    assert actions == [
        ACTION_MOVE_FORWARD,
        ACTION_GRAB,
        ACTION_TURN_LEFT,
        ACTION_TURN_LEFT,
        ACTION_MOVE_FORWARD,
    ]
    assert state.game_won
    assert state.score == 995
