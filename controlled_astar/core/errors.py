# controlled_astar/core/errors.py
#!/usr/bin/env python3
"""
Errors raised by the search engine and its configuration layer.

Every query error is terminal for that query; nothing here is retried.
"""

from typing import Optional, Tuple

Position = Tuple[int, int]  # (x, y)


class AStarError(Exception):
    """Base class for everything find_shortest_path can raise."""


class StartNodeBlocked(AStarError):
    def __init__(self, position: Position):
        self.position = position
        super().__init__(f"start node {position} is blocked")


class GoalNodeBlocked(AStarError):
    def __init__(self, position: Position):
        self.position = position
        super().__init__(f"goal node {position} is blocked")


class NodeNotFound(AStarError):
    def __init__(self, position: Position):
        self.position = position
        super().__init__(f"node {position} is not part of the graph")


class PathNotFound(AStarError):
    def __init__(self, start: Position, goal: Position):
        self.start = start
        self.goal = goal
        super().__init__(f"no path from {start} to {goal}")


class ConfigError(AStarError, ValueError):
    """Bad heuristic name, non-positive cost or malformed map file."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
