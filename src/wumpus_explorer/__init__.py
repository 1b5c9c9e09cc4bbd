"""Wumpus Explorer: a knowledge-based agent for the 10x10 Wumpus World."""

from wumpus_explorer.engine import ActionResult, GameEngine
from wumpus_explorer.environment.world import Cell, Perception, WorldState
from wumpus_explorer.environment.world_builder import (
    WorldBuilder,
    WorldParseError,
    generate_world,
    load_world,
    parse_world,
)
from wumpus_explorer.agent.knowledge_base import KnowledgeBase

__all__ = [
    "ActionResult",
    "Cell",
    "GameEngine",
    "KnowledgeBase",
    "Perception",
    "WorldBuilder",
    "WorldParseError",
    "WorldState",
    "generate_world",
    "load_world",
    "parse_world",
]
