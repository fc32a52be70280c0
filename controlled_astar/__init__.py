# controlled_astar/__init__.py
"""A* pathfinding on grid graphs with editable per-cell adjacency."""

from controlled_astar.core.astar import AStar, AStarSearch, SearchState
from controlled_astar.core.cost import CostModel, HEURISTICS, resolve_heuristic
from controlled_astar.core.errors import (
    AStarError,
    ConfigError,
    GoalNodeBlocked,
    NodeNotFound,
    PathNotFound,
    StartNodeBlocked,
)
from controlled_astar.core.maps import load_map
from controlled_astar.core.node import Direction, Node, NodeGraph
from controlled_astar.core.render import format_matrix, print_matrix

__all__ = [
    "AStar", "AStarSearch", "SearchState",
    "CostModel", "HEURISTICS", "resolve_heuristic",
    "AStarError", "ConfigError", "GoalNodeBlocked", "NodeNotFound",
    "PathNotFound", "StartNodeBlocked",
    "load_map",
    "Direction", "Node", "NodeGraph",
    "format_matrix", "print_matrix",
]
