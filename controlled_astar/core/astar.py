# controlled_astar/core/astar.py
#!/usr/bin/env python3
"""
A* over a NodeGraph — one expansion per step(), or run to completion.

API:
- AStar(graph, cost).find_shortest_path(start, goal) -> List[Cell]
- AStar(graph, cost).search(start, goal) -> AStarSearch, stepped by the viewer

States: VALIDATING -> EXPANDING -> GOAL_FOUND | EXHAUSTED.

Tie-breaking in the open set:
- (f, h, y, x): lower f, then closer to the goal, then row-major order.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from controlled_astar.core.closed_set import ClosedSet
from controlled_astar.core.cost import CostModel, heuristic_name
from controlled_astar.core.errors import (
    GoalNodeBlocked,
    NodeNotFound,
    PathNotFound,
    StartNodeBlocked,
)
from controlled_astar.core.node import NodeGraph
from controlled_astar.core.open_set import OpenSet
from controlled_astar.core.path import reconstruct_path
from controlled_astar.core.types import SearchRecord, StepResult

Cell = Tuple[int, int]  # (col, row)

_logger = logging.getLogger(__name__)


class SearchState(Enum):
    VALIDATING = "validating"
    EXPANDING = "expanding"
    GOAL_FOUND = "goal_found"
    EXHAUSTED = "exhausted"


@dataclass
class AStarSearch:
    graph: NodeGraph
    start: Cell
    goal: Cell
    cost: CostModel = field(default_factory=CostModel)
    name: str = "A*"

    # Internal state, owned by this search only
    state: SearchState = field(default=SearchState.VALIDATING, init=False)
    records: Dict[Cell, SearchRecord] = field(default_factory=dict, init=False)
    closed_set: ClosedSet = field(default_factory=ClosedSet, init=False)
    open_set: OpenSet = field(init=False)
    path: Optional[List[Cell]] = field(default=None, init=False)
    popped_count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._validate()
        self.open_set = OpenSet(tie_key=self._tie_key)
        if self.start == self.goal:
            self.path = [self.start]
            self.records[self.start] = SearchRecord(g=0, h=0)
            self.state = SearchState.GOAL_FOUND
            return

        h0 = self.cost.estimate(self.start, self.goal)
        self.records[self.start] = SearchRecord(g=0, h=h0)
        self.open_set.insert_or_update(self.start, h0)
        self.state = SearchState.EXPANDING
        _logger.debug("A* %s -> %s (heuristic=%s)", self.start, self.goal,
                      heuristic_name(self.cost.heuristic))

    # -------------------- helpers --------------------

    def _validate(self) -> None:
        for pos in (self.start, self.goal):
            if pos not in self.graph:
                raise NodeNotFound(pos)
        if self.graph.is_blocked(self.start):
            raise StartNodeBlocked(self.start)
        if self.graph.is_blocked(self.goal):
            raise GoalNodeBlocked(self.goal)

    def _tie_key(self, c: Cell) -> Tuple[float, int, int]:
        rec = self.records.get(c)
        h = rec.h if rec is not None else self.cost.estimate(c, self.goal)
        return (h, c[1], c[0])

    def _expandable(self, v: Cell) -> bool:
        return v in self.graph and not self.graph.is_blocked(v) and v not in self.closed_set

    @property
    def finished(self) -> bool:
        return self.state in (SearchState.GOAL_FOUND, SearchState.EXHAUSTED)

    @property
    def total_cost(self) -> Optional[float]:
        if self.state is not SearchState.GOAL_FOUND:
            return None
        return self.records[self.goal].g

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE extraction:
          - Pop the lowest-f cell; stop if it is the goal.
          - Skip it if already closed, else close it and relax its edges.
        """
        if self.state is SearchState.GOAL_FOUND:
            return StepResult(status="done", path=self.path,
                              metrics=self._metrics(path_len=len(self.path)))

        if self.state is SearchState.EXHAUSTED:
            return StepResult(status="no_path", metrics=self._metrics())

        u = self.open_set.extract_min()
        if u is None:
            self.state = SearchState.EXHAUSTED
            _logger.debug("A* %s -> %s exhausted after %d expansions",
                          self.start, self.goal, self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        if u == self.goal:
            self.state = SearchState.GOAL_FOUND
            self.path = reconstruct_path(u, {c: r.parent for c, r in self.records.items()})
            _logger.debug("A* %s -> %s found, cost=%s, %d expansions",
                          self.start, self.goal, self.records[u].g, self.popped_count)
            return StepResult(status="done", current=u, path=self.path,
                              metrics=self._metrics(path_len=len(self.path)))

        # Ignore stale pops
        if u in self.closed_set:
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.closed_set.mark_visited(u)
        self.popped_count += 1

        g_u = self.records[u].g
        opened_now: List[Cell] = []
        for v in self.graph.neighbors(u):
            if not self._expandable(v):
                continue
            alt = g_u + self.cost.edge_cost(u, v)
            rec = self.records.get(v)
            if rec is not None and alt >= rec.g:
                continue
            rec = SearchRecord(g=alt, h=self.cost.estimate(v, self.goal), parent=u)
            self.records[v] = rec
            if v not in self.open_set:
                opened_now.append(v)
            self.open_set.insert_or_update(v, rec.f)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def run(self) -> List[Cell]:
        while not self.finished:
            self.step()
        if self.state is SearchState.EXHAUSTED:
            raise PathNotFound(self.start, self.goal)
        return list(self.path)

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.total_cost,
        }


class AStar:
    """Reusable front end: one graph, one cost model, any number of queries."""

    def __init__(self, graph: NodeGraph, cost: Optional[CostModel] = None):
        self.graph = graph
        self.cost = cost or CostModel()

    def search(self, start: Cell, goal: Cell) -> AStarSearch:
        return AStarSearch(self.graph, tuple(start), tuple(goal), self.cost)

    def find_shortest_path(self, start: Cell, goal: Cell) -> List[Cell]:
        return self.search(start, goal).run()
