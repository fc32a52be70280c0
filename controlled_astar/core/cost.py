# controlled_astar/core/cost.py
#!/usr/bin/env python3
"""
Cost model: heuristic estimate plus per-edge move cost.

Heuristics (all take two positions):
- manhattan: |dx| + |dy|. Admissible for uniform cost, 4-connected moves.
- chebyshev: max(|dx|, |dy|). Admissible when a diagonal step costs hv_cost.
- octile:    max + (sqrt(2) - 1) * min. Admissible for diagonal = sqrt(2) * hv.
- euclidean: straight-line distance.

The model is pure; it keeps no per-search state.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from controlled_astar.core.errors import ConfigError

Position = Tuple[int, int]
Heuristic = Callable[[Position, Position], float]

_logger = logging.getLogger(__name__)


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Position, b: Position) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def octile(a: Position, b: Position) -> float:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return max(dx, dy) + (math.sqrt(2) - 1) * min(dx, dy)


def euclidean(a: Position, b: Position) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "chebyshev": chebyshev,
    "octile": octile,
    "euclidean": euclidean,
}


def resolve_heuristic(name: str) -> Heuristic:
    try:
        return HEURISTICS[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(HEURISTICS))
        raise ConfigError(f"unknown heuristic {name!r} (known: {known})") from None


def heuristic_name(fn: Heuristic) -> str:
    for k, v in HEURISTICS.items():
        if v is fn:
            return k
    return getattr(fn, "__name__", "custom")


@dataclass(frozen=True)
class CostModel:
    heuristic: Heuristic = manhattan
    hv_cost: float = 1
    diagonal_cost: Optional[float] = None

    def __post_init__(self):
        if self.hv_cost <= 0:
            raise ConfigError(f"hv_cost must be positive, got {self.hv_cost}")
        if self.diagonal_cost is not None:
            if self.diagonal_cost <= 0:
                raise ConfigError(f"diagonal_cost must be positive, got {self.diagonal_cost}")
            if self.heuristic is manhattan:
                # Left as configured: Manhattan overestimates once diagonal edges exist.
                _logger.warning(
                    "diagonal_cost=%s with the manhattan heuristic is not admissible "
                    "if diagonal edges are present; consider chebyshev or octile",
                    self.diagonal_cost,
                )

    def estimate(self, a: Position, b: Position) -> float:
        return self.heuristic(a, b) * self.hv_cost

    def edge_cost(self, a: Position, b: Position) -> float:
        if self.diagonal_cost is not None and a[0] != b[0] and a[1] != b[1]:
            return self.diagonal_cost
        return self.hv_cost
