# src/wumpus_explorer/utils/constants.py

# --- Game Configuration ---
GRID_SIZE = 10  # The world is always 10x10
HOME_POS = (9, 0)  # Bottom-left corner: start cell and required exit
MIN_PITS = 3
MAX_PITS = 5
MAX_STEPS_DEFAULT = 500  # A safeguard against infinite loops in automatic play

# --- Map Symbols (world text format) ---
WUMPUS_SYMBOL = "W"
PIT_SYMBOL = "P"
GOLD_SYMBOL = "G"
EMPTY_CELL_SYMBOL = "-"

# --- Agent Actions ---
ACTION_TURN_LEFT = "TURN_LEFT"
ACTION_TURN_RIGHT = "TURN_RIGHT"
ACTION_MOVE_FORWARD = "MOVE_FORWARD"
ACTION_GRAB = "GRAB"
ACTION_RELEASE = "RELEASE"
ACTION_SHOOT = "SHOOT"
ACTIONS = (
    ACTION_TURN_LEFT,
    ACTION_TURN_RIGHT,
    ACTION_MOVE_FORWARD,
    ACTION_GRAB,
    ACTION_RELEASE,
    ACTION_SHOOT,
)

# --- Directions ---
# Directions are indices into DIRECTION_DELTAS, given as (d_row, d_col).
# The order is important for turning logic (TurnRight is +1, TurnLeft is -1).
NORTH = 0
EAST = 1
SOUTH = 2
WEST = 3
DIRECTIONS = [NORTH, EAST, SOUTH, WEST]
DIRECTION_DELTAS = {
    NORTH: (-1, 0),
    EAST: (0, 1),
    SOUTH: (1, 0),
    WEST: (0, -1),
}
DIRECTION_NAMES = {NORTH: "NORTH", EAST: "EAST", SOUTH: "SOUTH", WEST: "WEST"}

# Neighbour scan order used by the knowledge base and the planner: N, S, W, E.
NEIGHBOR_OFFSETS = [(-1, 0), (1, 0), (0, -1), (0, 1)]

# --- Logical statement kinds ---
F_WUMPUS = "WUMPUS"
F_PIT = "PIT"
F_SAFE = "SAFE"
F_VISITED = "VISITED"
F_STENCH = "STENCH"
F_BREEZE = "BREEZE"

# --- Risk levels ---
RISK_SAFE = "SAFE"
RISK_PROBABLY_SAFE = "PROBABLY_SAFE"
RISK_UNCERTAIN = "UNCERTAIN"
RISK_DANGEROUS = "DANGEROUS"

# Danger points added during probabilistic escalation, and the promotion bar.
DANGER_POINTS_STENCH = 50
DANGER_POINTS_BREEZE = 50
DANGER_THRESHOLD = 50

# --- Scoring ---
SCORE_TURN = -1
SCORE_MOVE_FORWARD = -1
SCORE_GRAB = -1
SCORE_RELEASE = -1
SCORE_SHOOT = -10
SCORE_DIE = -1000
SCORE_WIN = 1000

# --- Planner weights ---
TARGET_INTERIOR_BONUS = 10
TARGET_SAFE_NEIGHBOR_BONUS = 5
DIRECTION_UNVISITED_BONUS = 10
DIRECTION_SAFE_BONUS = 5

# --- Path costs for the weighted search ---
PATH_COST_VISITED = 0.5
PATH_COST_UNCERTAIN = 3
PATH_COST_DEFAULT = 1
