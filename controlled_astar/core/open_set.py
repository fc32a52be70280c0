# controlled_astar/core/open_set.py
#!/usr/bin/env python3
"""
Open set: the search frontier, ordered by priority (f-score).

Heap entries are (priority, tie_key(pos), seq, pos).
- Lower priority first, then the smaller tie key, then FIFO by seq.
- Decrease-key is lazy: a better priority pushes a fresh entry and the old one
  is dropped when it surfaces, because it no longer matches _best[pos].
"""

import heapq
from typing import Callable, Dict, Iterator, List, Optional, Tuple

Position = Tuple[int, int]
TieKey = Callable[[Position], Tuple]


def row_major(pos: Position) -> Tuple[int, int]:
    return (pos[1], pos[0])


class OpenSet:
    def __init__(self, tie_key: TieKey = row_major) -> None:
        self._heap: List[Tuple[float, Tuple, int, Position]] = []
        self._best: Dict[Position, float] = {}
        self._tie_key = tie_key
        self._seq = 0

    def _bump(self) -> int:
        self._seq += 1
        return self._seq

    def insert_or_update(self, pos: Position, priority: float) -> bool:
        """Returns False when pos is already queued at an equal or better priority."""
        current = self._best.get(pos)
        if current is not None and current <= priority:
            return False
        self._best[pos] = priority
        heapq.heappush(self._heap, (priority, self._tie_key(pos), self._bump(), pos))
        return True

    def extract_min(self) -> Optional[Position]:
        while self._heap:
            priority, _, _, pos = heapq.heappop(self._heap)
            if self._best.get(pos) == priority:
                del self._best[pos]
                return pos
        return None

    def contains(self, pos: Position) -> bool:
        return pos in self._best

    def is_empty(self) -> bool:
        return not self._best

    def priority_of(self, pos: Position) -> Optional[float]:
        return self._best.get(pos)

    def __contains__(self, pos: object) -> bool:
        return pos in self._best

    def __len__(self) -> int:
        return len(self._best)

    def __bool__(self) -> bool:
        return bool(self._best)

    def __iter__(self) -> Iterator[Position]:
        return iter(list(self._best))
