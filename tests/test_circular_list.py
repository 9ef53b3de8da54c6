import random

import pytest

from linklist.csl_structure import CircularSinglyLinkedList


def build(make, *values):
    lst = make(CircularSinglyLinkedList)
    lst.init_structure()
    for value in reversed(values):
        lst.insert_first_node(value)
    return lst


def wrap_of(lst):
    wrap = lst.wrap_edge()
    return None if wrap is None else (wrap.source, wrap.target, wrap.cls)


def test_single_node_loops_onto_itself(make):
    lst = build(make, 5)
    assert wrap_of(lst) == (1, 1, "singleNodeCircleEdge")


def test_wrap_edge_follows_the_first_node(make):
    lst = build(make, 7, 5)
    assert lst.values() == [7, 5]
    assert wrap_of(lst) == (2, 1, "circleEdge")
    assert len([edge for edge in lst.graph.edges if edge.cls == "circleEdge"]) == 1


def test_wrap_edge_is_removed_once_empty(make):
    lst = build(make, 7, 5)
    lst.delete_first_node()
    assert lst.values() == [5]
    assert wrap_of(lst) == (1, 1, "singleNodeCircleEdge")

    lst.delete_first_node()
    assert lst.values() == []
    assert lst.wrap_edge() is None
    assert lst.graph.edges == []


def test_every_node_has_a_successor(make):
    lst = build(make, 1, 2, 3)
    sources = {edge.source for edge in lst.graph.edges}
    assert all(node.id in sources for node in lst.data_nodes)
    assert all(node.cls == "defaultNode" for node in lst.data_nodes)


def test_activate_next_wraps_around(make):
    lst = build(make, 7, 5)
    lst.activate_first_node()
    lst.activate_next_node()
    assert lst.active == 2
    lst.activate_next_node()
    assert lst.active == 1
    assert lst.active_node.value == 7


def test_delete_after_the_last_node_removes_the_first(make):
    lst = build(make, 7, 5)
    lst.activate_first_node()
    lst.activate_next_node()

    lst.delete_after_active_node()

    assert lst.values() == [5]
    assert lst.active_node.value == 5
    assert wrap_of(lst) == (1, 1, "singleNodeCircleEdge")


def test_insert_after_active_keeps_one_wrap_edge(make):
    lst = build(make, 1, 3)
    lst.activate_first_node()
    lst.insert_after_active_node(2)
    assert lst.values() == [1, 2, 3]
    assert wrap_of(lst) == (3, 1, "circleEdge")


def test_random_circular_list_is_closed(make):
    lst = make(CircularSinglyLinkedList, seed=11)
    lst.random_structure()
    data = lst.data_nodes
    assert wrap_of(lst)[:2] == (data[-1].id, data[0].id)


LIST_STEPS = (
    "insert_first_node", "insert_after_active_node",
    "delete_first_node", "delete_after_active_node",
    "activate_first_node", "activate_next_node",
)


@pytest.mark.parametrize("seed", range(6))
def test_exactly_one_wrap_edge_over_random_sequences(make, seed):
    rng = random.Random(seed)
    lst = make(CircularSinglyLinkedList)
    lst.init_structure()
    for _ in range(40):
        name = rng.choice(LIST_STEPS)
        if name.startswith("insert"):
            getattr(lst, name)(rng.randint(0, 99))
        else:
            getattr(lst, name)()

        wraps = [edge for edge in lst.graph.edges if edge.cls in ("circleEdge", "singleNodeCircleEdge")]
        data = lst.data_nodes
        if not data:
            assert wraps == []
            continue
        assert len(wraps) == 1
        assert (wraps[0].source, wraps[0].target) == (data[-1].id, data[0].id)
        assert [node.id for node in lst.nodes] == list(range(len(lst.nodes)))

    lst.normalize()
    once = [n.as_tuple() for n in lst.graph.nodes], [e.as_tuple() for e in lst.graph.edges]
    lst.normalize()
    assert ([n.as_tuple() for n in lst.graph.nodes], [e.as_tuple() for e in lst.graph.edges]) == once
