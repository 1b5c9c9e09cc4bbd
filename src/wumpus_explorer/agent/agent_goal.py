# src/wumpus_explorer/agent/agent_goal.py
from enum import Enum, auto

class AgentGoal(Enum):
    GRAB_GOLD = auto()
    RETURN_HOME = auto()
    SHOOT_WUMPUS = auto()
    EXPLORE_SAFELY = auto()
    STEP_FORWARD = auto()
    TURN_TO_SAFETY = auto()
    BACKTRACK = auto()
    RANDOM_TURN = auto()
    GET_UNSTUCK = auto()
