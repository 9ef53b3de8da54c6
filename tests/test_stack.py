import pytest

from stack.st_structure import Stack


def build(make, capacity, *values):
    stack = make(Stack)
    stack.init_structure(capacity)
    for value in values:
        stack.add_element(value)
    return stack


def test_init_lays_out_slots_and_indices(make, renderer):
    stack = build(make, 4)
    assert stack.capacity == 4
    assert [slot.id for slot in stack.slots] == ["node 0", "node 1", "node 2", "node 3"]
    assert [slot.x for slot in stack.slots] == [450, 500, 550, 600]
    assert [overlay.value for overlay in stack.overlays] == [0, 1, 2, 3]
    assert len(renderer.nodes) == 8


def test_capacity_must_be_positive(make):
    stack = make(Stack)
    with pytest.raises(ValueError):
        stack.init_structure(0)


def test_push_until_full(make, output):
    stack = build(make, 3, "a", "b", "c")
    assert stack.values() == ["a", "b", "c"]
    assert stack.full

    stack.add_element("d")
    assert output.keys[-1] == "stack.addFull"
    assert stack.values() == ["a", "b", "c"]


def test_pop_until_empty(make, output):
    stack = build(make, 3, "a", "b")
    stack.remove_element()
    assert stack.values() == ["a"]
    assert stack.slots[1].value == ""
    stack.remove_element()
    assert stack.empty

    stack.remove_element()
    assert output.keys[-1] == "stack.removeEmpty"


def test_queries(make, output):
    stack = build(make, 2)
    stack.is_empty()
    stack.is_full()
    stack.foremost_element()
    stack.add_element(1)
    stack.add_element(2)
    stack.is_empty()
    stack.is_full()
    assert output.keys == [
        "stack.empty",
        "stack.notFull",
        "stack.topError",
        "stack.notEmpty",
        "stack.full",
    ]


def test_top_marker_is_shown_then_removed(make, output, renderer):
    stack = build(make, 3, 4, 8)
    stack.foremost_element()
    assert output.entries[-1] == ("stack.top", {"value": 8})
    assert all(overlay.id != "top" for overlay in stack.overlays)
    faded = [element for element, _, _ in renderer.fades]
    assert faded.count(("node", "top")) == 2


def test_random_stack(make):
    stack = make(Stack, seed=2)
    stack.random_structure()
    assert 5 <= stack.capacity <= 10
    assert 2 <= len(stack.values()) < stack.capacity
