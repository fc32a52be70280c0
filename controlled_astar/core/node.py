# controlled_astar/core/node.py
#!/usr/bin/env python3
"""
Node/graph model: per-cell traversability plus directed, editable adjacency.

- A Node owns a table Direction -> Optional[Position].
  A key mapped to None is an explicitly absent edge; a missing key is no edge.
- Edges are never validated here: they may point outside the grid or onto a
  blocked cell. The search engine filters them at expansion time.
- Default adjacency is the four cardinal directions clipped to the grid.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from controlled_astar.core.errors import NodeNotFound

Position = Tuple[int, int]  # (x, y) == (col, row)
Edge = Tuple["Direction", Optional[Position]]


class Direction(Enum):
    NORTH = (0, -1)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    EAST = (1, 0)
    NORTH_EAST = (1, -1)
    NORTH_WEST = (-1, -1)
    SOUTH_EAST = (1, 1)
    SOUTH_WEST = (-1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_diagonal(self) -> bool:
        return self.dx != 0 and self.dy != 0

    def step(self, pos: Position) -> Position:
        return (pos[0] + self.dx, pos[1] + self.dy)

    @classmethod
    def parse(cls, label: str) -> "Direction":
        """Accepts 'south_east', 'SouthEast', 'SOUTH-EAST' ..."""
        key = label.strip().replace("-", "_").upper()
        if key in cls.__members__:
            return cls[key]
        compact = key.replace("_", "")
        for d in cls:
            if d.name.replace("_", "") == compact:
                return d
        raise ValueError(f"unknown direction {label!r}")


CARDINALS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.WEST,
    Direction.EAST,
)


@dataclass
class Node:
    x: int
    y: int
    is_blocked: bool = False
    neighbors: Dict[Direction, Optional[Position]] = field(default_factory=dict)

    @classmethod
    def create(cls, x: int, y: int, is_blocked: bool, max_x: int, max_y: int) -> "Node":
        """Node with the default cardinal edges inside [0..max_x] x [0..max_y]."""
        node = cls(x, y, is_blocked)
        for d in CARDINALS:
            nx, ny = d.step((x, y))
            if 0 <= nx <= max_x and 0 <= ny <= max_y:
                node.neighbors[d] = (nx, ny)
        return node

    @property
    def position(self) -> Position:
        return (self.x, self.y)

    # -------------------- edge editing --------------------

    def set_neighbor(self, direction: Direction, target: Optional[Position]) -> None:
        self.neighbors[direction] = target

    def remove_neighbor(self, direction: Direction) -> None:
        self.neighbors.pop(direction, None)

    def set_blocked(self, blocked: bool) -> None:
        self.is_blocked = bool(blocked)

    # -------------------- queries --------------------

    def get_directions(self) -> List[Direction]:
        """Directions that currently lead somewhere."""
        return [d for d, t in self.neighbors.items() if t is not None]

    def edges(self) -> Set[Edge]:
        return set(self.neighbors.items())

    def targets(self) -> Iterator[Position]:
        for d in Direction:
            t = self.neighbors.get(d)
            if t is not None:
                yield t


class NodeGraph:
    """Position-keyed node table. Read by searches, edited by callers between them."""

    def __init__(self, nodes: Optional[Dict[Position, Node]] = None,
                 width: int = 0, height: int = 0):
        self._nodes: Dict[Position, Node] = dict(nodes or {})
        self.width = width
        self.height = height

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]], blocked_value: int = 1) -> "NodeGraph":
        """matrix[row][col]; a cell equal to blocked_value becomes a blocked node."""
        height = len(matrix)
        width = len(matrix[0]) if height else 0
        nodes: Dict[Position, Node] = {}
        for y, row in enumerate(matrix):
            if len(row) != width:
                raise ValueError("matrix rows must all have the same length")
            for x, v in enumerate(row):
                nodes[(x, y)] = Node.create(x, y, v == blocked_value, width - 1, height - 1)
        return cls(nodes, width, height)

    # -------------------- mapping protocol --------------------

    def __contains__(self, pos: object) -> bool:
        return pos in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._nodes)

    def get(self, pos: Position) -> Optional[Node]:
        return self._nodes.get(pos)

    def node(self, pos: Position) -> Node:
        n = self._nodes.get(pos)
        if n is None:
            raise NodeNotFound(pos)
        return n

    def add_node(self, node: Node) -> None:
        self._nodes[node.position] = node
        self.width = max(self.width, node.x + 1)
        self.height = max(self.height, node.y + 1)

    # -------------------- graph contract --------------------

    def is_blocked(self, pos: Position) -> bool:
        return self.node(pos).is_blocked

    def edges(self, pos: Position) -> Set[Edge]:
        return self.node(pos).edges()

    def neighbors(self, pos: Position) -> Iterator[Position]:
        return self.node(pos).targets()

    def set_edge(self, pos: Position, direction: Direction, target: Optional[Position]) -> None:
        self.node(pos).set_neighbor(direction, target)

    def remove_edge(self, pos: Position, direction: Direction) -> None:
        self.node(pos).remove_neighbor(direction)

    def set_blocked(self, pos: Position, blocked: bool) -> None:
        self.node(pos).set_blocked(blocked)

    def custom_edges(self) -> List[Tuple[Position, Position]]:
        """Edges that are not plain one-step cardinal moves (for drawing)."""
        out: List[Tuple[Position, Position]] = []
        for pos, n in self._nodes.items():
            for d, t in n.neighbors.items():
                if t is not None and (d not in CARDINALS or d.step(pos) != t):
                    out.append((pos, t))
        return out
