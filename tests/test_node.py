import pytest

from controlled_astar.core.errors import NodeNotFound
from controlled_astar.core.node import Direction, Node, NodeGraph


def test_node_creation():
    node = Node.create(2, 3, False, 9, 9)
    assert (node.x, node.y) == (2, 3)
    assert node.is_blocked is False
    assert node.neighbors[Direction.NORTH] == (2, 2)
    assert node.neighbors[Direction.SOUTH] == (2, 4)
    assert node.neighbors[Direction.WEST] == (1, 3)
    assert node.neighbors[Direction.EAST] == (3, 3)


def test_node_creation_at_corners():
    top_left = Node.create(0, 0, False, 9, 9)
    bottom_right = Node.create(9, 9, False, 9, 9)

    assert Direction.NORTH not in top_left.neighbors
    assert Direction.WEST not in top_left.neighbors
    assert top_left.neighbors[Direction.SOUTH] == (0, 1)
    assert top_left.neighbors[Direction.EAST] == (1, 0)

    assert Direction.SOUTH not in bottom_right.neighbors
    assert Direction.EAST not in bottom_right.neighbors
    assert bottom_right.neighbors[Direction.NORTH] == (9, 8)
    assert bottom_right.neighbors[Direction.WEST] == (8, 9)


def test_set_neighbor_and_explicit_none():
    node = Node.create(2, 2, False, 9, 9)
    node.set_neighbor(Direction.NORTH, (5, 5))
    assert node.neighbors[Direction.NORTH] == (5, 5)

    node.set_neighbor(Direction.SOUTH, None)
    assert Direction.SOUTH in node.neighbors
    assert node.neighbors[Direction.SOUTH] is None
    assert Direction.SOUTH not in node.get_directions()


def test_remove_neighbor():
    node = Node.create(2, 2, False, 9, 9)
    node.remove_neighbor(Direction.NORTH)
    assert Direction.NORTH not in node.neighbors
    # removing twice is harmless
    node.remove_neighbor(Direction.NORTH)


def test_set_blocked():
    node = Node.create(2, 2, False, 9, 9)
    node.set_blocked(True)
    assert node.is_blocked


def test_get_directions():
    directions = Node.create(2, 2, False, 9, 9).get_directions()
    assert len(directions) == 4
    assert set(directions) == {Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST}


def test_from_matrix():
    graph = NodeGraph.from_matrix([[0, 1, 0], [1, 0, 1], [0, 1, 0]])
    assert len(graph) == 9
    assert (graph.width, graph.height) == (3, 3)
    assert not graph.is_blocked((0, 0))
    assert graph.is_blocked((0, 1))
    assert graph.is_blocked((1, 0))
    assert not graph.is_blocked((1, 1))


def test_from_matrix_rejects_ragged_rows():
    with pytest.raises(ValueError):
        NodeGraph.from_matrix([[0, 0], [0]])


def test_graph_edge_editing():
    graph = NodeGraph.from_matrix([[0, 0], [0, 0]])
    assert graph.edges((0, 0)) == {(Direction.SOUTH, (0, 1)), (Direction.EAST, (1, 0))}

    graph.set_edge((0, 0), Direction.SOUTH_EAST, (1, 1))
    graph.remove_edge((0, 0), Direction.EAST)
    graph.set_blocked((1, 0), True)

    assert (Direction.SOUTH_EAST, (1, 1)) in graph.edges((0, 0))
    assert list(graph.neighbors((0, 0))) == [(0, 1), (1, 1)]
    assert graph.is_blocked((1, 0))
    assert graph.custom_edges() == [((0, 0), (1, 1))]


def test_edges_may_point_outside_the_grid():
    graph = NodeGraph.from_matrix([[0]])
    graph.set_edge((0, 0), Direction.EAST, (7, 7))
    assert list(graph.neighbors((0, 0))) == [(7, 7)]


def test_unknown_position_raises():
    graph = NodeGraph.from_matrix([[0]])
    assert (3, 3) not in graph
    assert graph.get((3, 3)) is None
    with pytest.raises(NodeNotFound):
        graph.is_blocked((3, 3))


@pytest.mark.parametrize("label, expected", [
    ("south_east", Direction.SOUTH_EAST),
    ("SouthEast", Direction.SOUTH_EAST),
    ("north-west", Direction.NORTH_WEST),
    ("EAST", Direction.EAST),
])
def test_direction_parse(label, expected):
    assert Direction.parse(label) is expected


def test_direction_parse_unknown():
    with pytest.raises(ValueError):
        Direction.parse("up")
