# controlled_astar/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any

from controlled_astar.core.cost import CostModel, resolve_heuristic
from controlled_astar.core.node import Direction, NodeGraph

Cell = Tuple[int, int]  # (col, row)


@dataclass
class SearchRecord:
    """Per-position bookkeeping, scoped to one search call."""
    g: float
    h: float
    parent: Optional[Cell] = None

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class EdgeEdit:
    at: Cell
    direction: Direction
    target: Optional[Cell] = None
    remove: bool = False


@dataclass
class GridMap:
    width: int
    height: int
    cells: List[List[int]]             # [row][col]
    start: Cell
    goal: Cell
    heuristic: str = "manhattan"
    hv_cost: float = 1
    diagonal_cost: Optional[float] = None
    edges: List[EdgeEdit] = field(default_factory=list)

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def to_graph(self) -> NodeGraph:
        graph = NodeGraph.from_matrix(self.cells)
        for e in self.edges:
            if e.remove:
                graph.remove_edge(e.at, e.direction)
            else:
                graph.set_edge(e.at, e.direction, e.target)
        return graph

    def cost_model(self, heuristic: Optional[str] = None) -> CostModel:
        return CostModel(
            heuristic=resolve_heuristic(heuristic or self.heuristic),
            hv_cost=self.hv_cost,
            diagonal_cost=self.diagonal_cost,
        )


@dataclass
class StepResult:
    status: str                   # "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
