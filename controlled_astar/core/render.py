# controlled_astar/core/render.py
#!/usr/bin/env python3
"""
Text rendering of a 0/1 matrix with an optional path on top.

  S start   G goal   * path   # blocked   . open
"""

from typing import List, Optional, Sequence, Tuple

Cell = Tuple[int, int]


def format_matrix(matrix: Sequence[Sequence[int]], path: Optional[Sequence[Cell]] = None,
                  blocked_value: int = 1) -> str:
    on_path = set(path or ())
    start = path[0] if path else None
    goal = path[-1] if path else None
    lines: List[str] = []
    for y, row in enumerate(matrix):
        chars = []
        for x, v in enumerate(row):
            c = (x, y)
            if c == start:
                chars.append("S")
            elif c == goal:
                chars.append("G")
            elif c in on_path:
                chars.append("*")
            elif v == blocked_value:
                chars.append("#")
            else:
                chars.append(".")
        lines.append(" ".join(chars))
    return "\n".join(lines)


def print_matrix(matrix: Sequence[Sequence[int]], path: Optional[Sequence[Cell]] = None) -> None:
    print(format_matrix(matrix, path))
