import json
from pathlib import Path

import pytest

from controlled_astar.core.astar import AStar
from controlled_astar.core.cost import chebyshev
from controlled_astar.core.errors import ConfigError
from controlled_astar.core.maps import load_map, parse_map
from controlled_astar.core.node import Direction
from controlled_astar.core.render import format_matrix, print_matrix

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"


def _base(**overrides):
    data = {
        "width": 3,
        "height": 2,
        "cells": [[0, 0, 0], [0, 1, 0]],
        "start": [0, 0],
        "goal": [2, 1],
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize("name", sorted(p.name for p in MAP_DIR.glob("*.json")))
def test_shipped_maps_are_solvable(name):
    grid = load_map(MAP_DIR / name)
    path = AStar(grid.to_graph(), grid.cost_model()).find_shortest_path(grid.start, grid.goal)
    assert path[0] == grid.start
    assert path[-1] == grid.goal


def test_custom_edges_map():
    grid = load_map(MAP_DIR / "02_custom_edges.json")
    assert grid.cost_model().heuristic is chebyshev
    graph = grid.to_graph()
    assert graph.edges((0, 0)) == {(Direction.SOUTH_EAST, (1, 1))}
    assert ((0, 0), (1, 1)) in graph.custom_edges()


def test_parse_defaults():
    grid = parse_map(_base())
    assert (grid.width, grid.height) == (3, 2)
    assert grid.start == (0, 0) and grid.goal == (2, 1)
    assert grid.heuristic == "manhattan"
    assert grid.edges == []
    assert grid.to_graph().is_blocked((1, 1))


def test_parse_edge_edits():
    grid = parse_map(_base(edges=[
        {"at": [0, 0], "dir": "east", "to": None},
        {"at": [1, 0], "dir": "south", "remove": True},
        {"at": [2, 0], "dir": "SouthWest", "to": [1, 1]},
    ]))
    graph = grid.to_graph()
    assert (Direction.EAST, None) in graph.edges((0, 0))
    assert Direction.SOUTH not in {d for d, _ in graph.edges((1, 0))}
    assert (Direction.SOUTH_WEST, (1, 1)) in graph.edges((2, 0))


@pytest.mark.parametrize("overrides, message", [
    ({"cells": [[0, 0], [0, 0]]}, "size mismatch"),
    ({"goal": [3, 0]}, "goal out of bounds"),
    ({"start": [0, -1]}, "start out of bounds"),
    ({"start": "corner"}, "start must be"),
    ({"heuristic": "zigzag"}, "unknown heuristic"),
    ({"edges": [{"at": [0, 0], "dir": "up", "to": [0, 1]}]}, "unknown direction"),
    ({"edges": [{"at": [0, 0], "to": [0, 1]}]}, "no 'dir'"),
    ({"edges": [{"at": [7, 7], "dir": "east", "remove": True}]}, "edges[0].at out of bounds"),
    ({"edges": [{"at": [0, 2], "dir": "north", "to": [0, 1]}]}, "edges[0].at out of bounds"),
    ({"hv_cost": "two"}, "hv_cost must be a number"),
    ({"hv_cost": [1]}, "hv_cost must be a number"),
    ({"diagonal_cost": "wide"}, "diagonal_cost must be a number"),
    ({"hv_cost": 0}, "hv_cost must be positive"),
    ({"diagonal_cost": -1.5, "heuristic": "octile"}, "diagonal_cost must be positive"),
])
def test_parse_errors(overrides, message):
    with pytest.raises(ConfigError) as ex:
        parse_map(_base(**overrides))
    assert message in str(ex.value)


def test_missing_key():
    data = _base()
    del data["goal"]
    with pytest.raises(ConfigError):
        parse_map(data)


def test_load_map_reports_file(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{ not json")
    with pytest.raises(ConfigError) as ex:
        load_map(bad)
    assert str(bad) in str(ex.value)


def test_load_map_roundtrip_from_disk(tmp_path):
    p = tmp_path / "m.json"
    p.write_text(json.dumps(_base(hv_cost=10)))
    grid = load_map(p)
    assert grid.cost_model().edge_cost((0, 0), (1, 0)) == 10


def test_format_matrix_with_path():
    text = format_matrix([[0, 0], [1, 0]], [(0, 0), (1, 0), (1, 1)])
    assert text == "S *\n# G"


def test_format_matrix_without_path():
    assert format_matrix([[0, 1], [0, 0]]) == ". #\n. ."


def test_print_matrix(capsys):
    print_matrix([[0, 0, 0]], [(0, 0), (1, 0), (2, 0)])
    assert capsys.readouterr().out == "S * G\n"


def test_numeric_strings_are_accepted_as_costs():
    grid = parse_map(_base(hv_cost="2", diagonal_cost="3", heuristic="octile"))
    cost = grid.cost_model()
    assert cost.edge_cost((0, 0), (1, 0)) == 2
    assert cost.edge_cost((0, 0), (1, 1)) == 3


def test_edge_targets_may_leave_the_grid():
    grid = parse_map(_base(edges=[{"at": [2, 0], "dir": "east", "to": [3, 0]}]))
    assert (Direction.EAST, (3, 0)) in grid.to_graph().edges((2, 0))


def test_bad_edge_cell_on_disk_is_a_config_error(tmp_path):
    p = tmp_path / "edges.json"
    p.write_text(json.dumps(_base(edges=[{"at": [7, 7], "dir": "east", "remove": True}])))
    with pytest.raises(ConfigError) as ex:
        load_map(p)
    assert str(p) in str(ex.value)
