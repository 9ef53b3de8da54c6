import pytest

from bst.bst_model import (
    LEAF,
    LEFT,
    MISSING,
    ONE_CHILD,
    RIGHT,
    TWO_CHILDREN,
    Key,
    Placeholder,
    TreeTable,
)


def table_of(*keys):
    table = TreeTable()
    for key in keys:
        table.insert(key)
    return table


def key_at(table, handle):
    return table[handle].key


def assert_full(table):
    assert len(table) == 2 * len(table.keys()) + 1


def test_graph_ids():
    assert Key(5).graph_id == 5
    assert Placeholder().graph_id == "nullNode"
    assert Placeholder(Key(3), LEFT).graph_id == "null-3-left"


def test_empty_table():
    table = TreeTable()
    assert table.is_empty
    assert len(table) == 1
    assert table.graph_id(table.root) == "nullNode"
    assert table.height() == 0
    assert table.plan_removal(4).case == MISSING


def test_insert_keeps_the_tree_full():
    table = table_of(5, 3, 8, 7, 9)
    assert table.keys() == [3, 5, 7, 8, 9]
    assert table.height() == 3
    assert_full(table)
    assert [entry.key for entry in table if not entry.is_placeholder] == [5, 3, 8, 7, 9]


def test_duplicate_insert_is_ignored():
    table = table_of(5, 3)
    assert table.insert(3) is None
    assert_full(table)


def test_descend_ends_on_key_or_placeholder():
    table = table_of(5, 3, 8, 7, 9)
    assert [key_at(table, h) for h in table.descend(7)] == [5, 8, 7]
    path = table.descend(6)
    assert table.graph_id(path[-1]) == "null-7-left"
    assert table.find(6) is None
    assert key_at(table, table.find(9)) == 9


def test_fill_placeholder_rejects_key_entries():
    table = table_of(5)
    with pytest.raises(ValueError):
        table.fill_placeholder(table.root, 6)


def test_layout_puts_root_at_origin():
    table = table_of(5, 3, 8, 7, 9)
    table.layout()
    root = table[table.root]
    three = table[table.find(3)]
    null_left_of_three = table[three.left]
    assert (root.x, root.y) == (0, 100)
    assert (three.x, three.y) == (-100, 170)
    assert (null_left_of_three.x, null_left_of_three.y) == (-150, 240)


def test_plan_cases():
    table = table_of(5, 3, 8, 7)
    assert table.plan_removal(3).case == LEAF

    one = table.plan_removal(8)
    assert one.case == ONE_CHILD
    assert key_at(table, one.target) == 8

    two = table.plan_removal(5)
    assert two.case == TWO_CHILDREN
    assert [key_at(table, h) for h in two.successor_path] == [8, 7]
    assert key_at(table, two.successor) == 7

    missing = table.plan_removal(42)
    assert missing.case == MISSING
    assert table[missing.path[-1]].is_placeholder


def test_remove_leaf_leaves_a_placeholder():
    table = table_of(5, 3, 8, 7, 9)
    assert table.remove(3) == []
    root = table[table.root]
    assert table.graph_id(root.left) == "null-5-left"
    assert_full(table)


def test_remove_with_one_child_moves_it_up():
    table = table_of(5, 3, 8, 7)
    table.remove(8)
    moved = table[table[table.root].right]
    assert moved.key == 7
    assert moved.parent == table.root
    assert moved.side == RIGHT
    assert table.keys() == [3, 5, 7]
    assert_full(table)


def test_remove_root_with_one_child():
    table = table_of(5, 8)
    table.remove(5)
    assert table.graph_id(table.root) == 8
    assert table[table.root].parent is None


def test_remove_with_two_children_promotes_the_successor():
    table = table_of(5, 3, 8, 7, 9)
    remaps = table.remove(5)
    assert table.keys() == [3, 7, 8, 9]
    assert key_at(table, table.root) == 7
    eight = table[table.find(8)]
    assert table.graph_id(eight.left) == "null-8-left"
    assert remaps == [(5, 7)]
    assert_full(table)


def test_promote_renames_placeholder_children():
    table = table_of(5, 3, 8)
    remaps = table.remove(5)
    assert remaps == [(5, 8), ("null-5-right", "null-8-right")]
    assert table.keys() == [3, 8]


def test_remove_last_key_empties_the_tree():
    table = table_of(5)
    table.remove(5)
    assert table.is_empty
    assert table.graph_id(table.root) == "nullNode"


def test_clear():
    table = table_of(5, 3)
    table.clear()
    assert len(table) == 1
    assert table.is_empty
