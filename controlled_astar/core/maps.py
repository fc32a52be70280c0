# controlled_astar/core/maps.py
#!/usr/bin/env python3
"""
JSON map loader.

{
  "width": 10, "height": 10,
  "cells": [[0, 1, ...], ...],          # [row][col], 1 = blocked
  "start": [0, 0], "goal": [9, 9],
  "heuristic": "manhattan",             # optional
  "hv_cost": 1, "diagonal_cost": null,  # optional
  "edges": [                            # optional edge edits, applied in order
    {"at": [0, 0], "dir": "south_east", "to": [1, 1]},
    {"at": [0, 0], "dir": "south", "to": null},
    {"at": [0, 0], "dir": "east", "remove": true}
  ]
}
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from controlled_astar.core.errors import ConfigError
from controlled_astar.core.node import Direction
from controlled_astar.core.types import Cell, EdgeEdit, GridMap


def _cell(value: Any, what: str, source: str) -> Cell:
    try:
        x, y = value
        return (int(x), int(y))
    except (TypeError, ValueError):
        raise ConfigError(f"{what} must be an [x, y] pair, got {value!r}", source) from None


def _cost(value: Any, what: str, source: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{what} must be a number, got {value!r}", source) from None


def _edge_edits(raw: List[Dict[str, Any]], source: str) -> List[EdgeEdit]:
    out: List[EdgeEdit] = []
    for i, e in enumerate(raw):
        try:
            direction = Direction.parse(e["dir"])
        except KeyError:
            raise ConfigError(f"edges[{i}] has no 'dir'", source) from None
        except ValueError as ex:
            raise ConfigError(f"edges[{i}]: {ex}", source) from None
        at = _cell(e.get("at"), f"edges[{i}].at", source)
        if e.get("remove"):
            out.append(EdgeEdit(at, direction, remove=True))
            continue
        to = e.get("to")
        out.append(EdgeEdit(at, direction, None if to is None else _cell(to, f"edges[{i}].to", source)))
    return out


def parse_map(data: Dict[str, Any], source: str = "<map>") -> GridMap:
    try:
        width  = int(data["width"])
        height = int(data["height"])
        cells  = data["cells"]
        start  = _cell(data["start"], "start", source)
        goal   = _cell(data["goal"], "goal", source)
    except KeyError as ex:
        raise ConfigError(f"missing key {ex}", source) from None

    if len(cells) != height or not all(len(r) == width for r in cells):
        raise ConfigError("cells size mismatch", source)

    grid = GridMap(width, height, cells, start, goal)
    if not grid.in_bounds(start):
        raise ConfigError("start out of bounds", source)
    if not grid.in_bounds(goal):
        raise ConfigError("goal out of bounds", source)

    grid.heuristic = str(data.get("heuristic", grid.heuristic))
    if "hv_cost" in data:
        grid.hv_cost = _cost(data["hv_cost"], "hv_cost", source)
    if data.get("diagonal_cost") is not None:
        grid.diagonal_cost = _cost(data["diagonal_cost"], "diagonal_cost", source)
    try:
        grid.cost_model()
    except ConfigError as ex:
        raise ConfigError(str(ex), source) from None

    grid.edges = _edge_edits(data.get("edges", []), source)
    for i, e in enumerate(grid.edges):
        if not grid.in_bounds(e.at):
            raise ConfigError(f"edges[{i}].at out of bounds", source)
    return grid


def load_map(path: Union[str, Path]) -> GridMap:
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as ex:
        raise ConfigError(f"invalid JSON: {ex}", str(path)) from None
    return parse_map(data, str(path))
