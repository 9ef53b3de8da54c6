from linklist.list_base import NODE_Y
from linklist.sl_structure import SinglyLinkedList


def build(make, *values):
    lst = make(SinglyLinkedList)
    lst.init_structure()
    for value in reversed(values):
        lst.insert_first_node(value)
    return lst


def edge_pairs(lst):
    return sorted((edge.source, edge.target) for edge in lst.graph.edges)


def test_init_creates_only_the_pointer(make, renderer):
    lst = make(SinglyLinkedList)
    lst.init_structure()
    assert [node.value for node in lst.nodes] == ["Init Pointer"]
    assert lst.is_empty
    assert renderer.nodes[0][0] == 0
    assert "pointer" in renderer.node_styles


def test_insert_first_keeps_ids_contiguous(make):
    lst = build(make, "a", "b", "c")
    assert lst.values() == ["a", "b", "c"]
    assert [node.id for node in lst.nodes] == [0, 1, 2, 3]
    assert edge_pairs(lst) == [(0, 1), (1, 2), (2, 3)]
    assert all(node.y == NODE_Y for node in lst.data_nodes)
    assert all(edge.opacity == 1.0 for edge in lst.graph.edges)


def test_last_node_shows_null(make):
    lst = build(make, "a", "b")
    assert [node.cls for node in lst.data_nodes] == ["defaultNode", "nodeWithNull"]


def test_insert_then_delete_first_restores_the_graph(make):
    lst = build(make, "a")
    nodes_before = [node.as_tuple() for node in lst.nodes]
    edges_before = sorted(edge.as_tuple() for edge in lst.graph.edges)

    lst.insert_first_node("b")
    lst.delete_first_node()

    assert [node.as_tuple() for node in lst.nodes] == nodes_before
    assert sorted(edge.as_tuple() for edge in lst.graph.edges) == edges_before


def test_delete_first_until_empty(make, output):
    lst = build(make, "a", "b")
    lst.delete_first_node()
    assert lst.values() == ["b"]
    lst.delete_first_node()
    assert lst.values() == []
    assert lst.graph.edges == []

    lst.delete_first_node()
    assert output.keys[-1] == "list.deleteFirstEmpty"


def test_no_temporary_pointer_survives_a_delete(make):
    lst = build(make, "a", "b", "c")
    lst.delete_first_node()
    assert all(node.id != "temp" for node in lst.nodes)
    assert all("temp" not in (edge.source, edge.target) for edge in lst.graph.edges)


def test_activity_moves_and_falls_off_the_end(make, output):
    lst = build(make, "a", "b")
    lst.activate_first_node()
    assert lst.active_node.value == "a"
    assert lst.active_node.cls == "activeNode"

    lst.activate_next_node()
    assert lst.active_node.value == "b"
    assert lst.active_node.cls == "activeNodeWithNull"

    lst.activate_next_node()
    assert lst.active is None
    lst.is_list_active()
    assert output.keys[-1] == "list.notActive"


def test_active_operations_need_an_active_node(make):
    lst = build(make, "a")
    assert not lst.insert_after_active_node("x").accepted
    assert not lst.delete_after_active_node().accepted
    assert not lst.set_active_node_value("x").accepted
    assert not lst.activate_next_node().accepted
    assert lst.values() == ["a"]


def test_insert_after_active_in_the_middle_and_at_the_end(make):
    lst = build(make, "a", "c")
    lst.activate_first_node()
    lst.insert_after_active_node("b")
    assert lst.values() == ["a", "b", "c"]
    assert lst.active_node.value == "a"

    lst.activate_next_node()
    lst.activate_next_node()
    lst.insert_after_active_node("d")
    assert lst.values() == ["a", "b", "c", "d"]
    assert edge_pairs(lst) == [(0, 1), (1, 2), (2, 3), (3, 4)]


def test_insert_first_shifts_the_active_index(make):
    lst = build(make, "a", "b")
    lst.activate_first_node()
    lst.activate_next_node()
    lst.insert_first_node("z")
    assert lst.active_node.value == "b"


def test_delete_after_active(make, output):
    lst = build(make, "a", "b", "c")
    lst.activate_first_node()
    lst.delete_after_active_node()
    assert lst.values() == ["a", "c"]
    assert edge_pairs(lst) == [(0, 1), (1, 2)]

    lst.delete_after_active_node()
    assert lst.values() == ["a"]
    lst.delete_after_active_node()
    assert output.keys[-1] == "list.deleteAfterEmpty"


def test_deleting_the_active_node_deactivates_the_list(make):
    lst = build(make, "a", "b")
    lst.activate_first_node()
    lst.delete_first_node()
    assert lst.active is None


def test_value_queries(make, output):
    lst = build(make)
    lst.get_first_node_value()
    lst.get_active_node_value()
    assert output.keys == ["list.getFirstError", "list.getActiveError"]

    lst.insert_first_node("a")
    lst.activate_first_node()
    lst.set_active_node_value("q")
    lst.get_first_node_value()
    assert output.entries[-2] == ("list.setActiveValue", {"value": "q"})
    assert output.entries[-1] == ("list.getFirstValue", {"value": "q"})


def test_random_list(make):
    lst = make(SinglyLinkedList, seed=3)
    lst.random_structure()
    assert lst.is_init
    assert 2 <= len(lst.values()) <= 5
    assert all(0 <= value <= 99 for value in lst.values())
    assert len(lst.graph.edges) == len(lst.values())
    assert lst.data_nodes[-1].cls == "nodeWithNull"


def test_normalize_twice_changes_nothing(make):
    lst = build(make, 4, 8, 15)
    lst.activate_first_node()
    lst.activate_next_node()
    lst.delete_after_active_node()

    lst.normalize()
    nodes = [node.as_tuple() for node in lst.graph.nodes]
    edges = [edge.as_tuple() for edge in lst.graph.edges]
    lst.normalize()
    assert [node.as_tuple() for node in lst.graph.nodes] == nodes
    assert [edge.as_tuple() for edge in lst.graph.edges] == edges
    assert lst.values() == [4, 8]
