# controlled_astar/core/path.py
#!/usr/bin/env python3
from typing import Dict, List, Optional, Tuple

Cell = Tuple[int, int]


def reconstruct_path(end: Cell, parents: Dict[Cell, Optional[Cell]]) -> List[Cell]:
    """Walk predecessors back from end; the cell without one is the start."""
    path: List[Cell] = []
    cur: Optional[Cell] = end
    while cur is not None:
        path.append(cur)
        cur = parents.get(cur)
    path.reverse()
    return path
