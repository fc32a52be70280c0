# controlled_astar/core/closed_set.py
#!/usr/bin/env python3
from typing import Iterator, Set, Tuple

Position = Tuple[int, int]


class ClosedSet:
    """Positions already expanded. Keyed by position only."""

    def __init__(self) -> None:
        self._visited: Set[Position] = set()

    def mark_visited(self, pos: Position) -> None:
        self._visited.add(pos)

    def is_visited(self, pos: Position) -> bool:
        return pos in self._visited

    def __contains__(self, pos: object) -> bool:
        return pos in self._visited

    def __len__(self) -> int:
        return len(self._visited)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._visited)
