from controlled_astar.core.closed_set import ClosedSet
from controlled_astar.core.open_set import OpenSet


def test_extract_in_priority_order():
    pq = OpenSet()
    pq.insert_or_update((1, 2), 10)
    pq.insert_or_update((2, 3), 5)
    pq.insert_or_update((0, 0), 15)

    assert pq.extract_min() == (2, 3)
    assert pq.extract_min() == (1, 2)
    assert pq.extract_min() == (0, 0)
    assert pq.is_empty()


def test_extract_on_empty_returns_none():
    assert OpenSet().extract_min() is None


def test_contains_and_len():
    pq = OpenSet()
    pq.insert_or_update((1, 2), 10)
    assert pq.contains((1, 2))
    assert (1, 2) in pq
    assert len(pq) == 1 and pq

    pq.extract_min()
    assert not pq.contains((1, 2))
    assert not pq


def test_decrease_key_does_not_duplicate():
    pq = OpenSet()
    pq.insert_or_update((1, 1), 10)
    pq.insert_or_update((2, 2), 8)
    assert pq.insert_or_update((1, 1), 5) is True

    assert len(pq) == 2
    assert pq.priority_of((1, 1)) == 5
    assert pq.extract_min() == (1, 1)
    assert pq.extract_min() == (2, 2)
    # the stale (1, 1)@10 entry is dropped, not returned
    assert pq.extract_min() is None


def test_worse_priority_is_ignored():
    pq = OpenSet()
    pq.insert_or_update((1, 1), 5)
    assert pq.insert_or_update((1, 1), 9) is False
    assert pq.insert_or_update((1, 1), 5) is False
    assert pq.priority_of((1, 1)) == 5


def test_ties_are_row_major_by_default():
    pq = OpenSet()
    pq.insert_or_update((0, 1), 4)
    pq.insert_or_update((1, 0), 4)
    pq.insert_or_update((0, 0), 4)
    assert [pq.extract_min() for _ in range(3)] == [(0, 0), (1, 0), (0, 1)]


def test_custom_tie_key():
    pq = OpenSet(tie_key=lambda p: (p[0], p[1]))
    pq.insert_or_update((1, 0), 4)
    pq.insert_or_update((0, 1), 4)
    assert pq.extract_min() == (0, 1)


def test_reinsert_after_extract():
    pq = OpenSet()
    pq.insert_or_update((3, 3), 7)
    assert pq.extract_min() == (3, 3)
    pq.insert_or_update((3, 3), 7)
    assert pq.extract_min() == (3, 3)
    assert pq.extract_min() is None


def test_closed_set_membership():
    closed = ClosedSet()
    assert not closed.is_visited((0, 0))
    closed.mark_visited((0, 0))
    closed.mark_visited((0, 0))
    assert closed.is_visited((0, 0))
    assert (0, 0) in closed
    assert len(closed) == 1
    assert list(closed) == [(0, 0)]
