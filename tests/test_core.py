import pytest

from core.base_structure import BaseStructure, fit_zoom_and_pan
from core.clock import ImmediateClock, ManualClock
from core.global_ctrl import GlobalController
from core.graph_model import Edge, GraphModel, Node
from core.messages import format_message


class Blinker(BaseStructure):
    """Minimal structure: one node whose opacity is toggled by an operation."""

    def _create_initial(self):
        self.dot = self.graph.add_node(Node("dot", "x", 0, 0))

    def _populate_random(self):
        self.init_structure()

    def blink(self):
        return self.start(self._blink())

    def explode(self):
        return self.start(self._explode())

    def _blink(self):
        yield from self.before_animation_starts()
        yield from self.fade([self.dot], 0.0)
        yield from self.after_animation_ends()

    def _explode(self):
        yield from self.before_animation_starts()
        raise RuntimeError("boom")


class FakeSettings:
    def __init__(self, **values):
        self.values = dict(values)

    def value(self, key, default=None, type=None):
        raw = self.values.get(key, default)
        return type(raw) if type is not None else raw

    def setValue(self, key, value):
        self.values[key] = value


# ---------- graph model ----------

def test_renumber_maps_every_node_before_rewriting_edges():
    graph = GraphModel()
    a = graph.add_node(Node(0, "a", 0, 0))
    b = graph.add_node(Node(2, "b", 0, 0))
    c = graph.add_node(Node(1, "c", 0, 0))
    graph.add_edge(Edge(0, 2))
    graph.add_edge(Edge(2, 1))
    graph.add_edge(Edge("temp", 1))

    id_map = graph.renumber()

    assert id_map == {0: 0, 2: 1, 1: 2}
    assert [a.id, b.id, c.id] == [0, 1, 2]
    assert [(e.source, e.target) for e in graph.edges] == [(0, 1), (1, 2), ("temp", 2)]


def test_remove_node_by_handle_and_missing_lookups():
    graph = GraphModel()
    first = graph.add_node(Node(0, "same", 0, 0))
    twin = graph.add_node(Node(0, "same", 0, 0))

    assert graph.remove_node(twin) == 1
    assert graph.nodes == [first]
    with pytest.raises(LookupError):
        graph.remove_node(twin)
    with pytest.raises(LookupError):
        graph.remove_edge(Edge(0, 0))


def test_find_edge_filters():
    graph = GraphModel()
    graph.add_edge(Edge(0, 1, "defaultEdge"))
    wrap = graph.add_edge(Edge(1, 0, "circleEdge"))

    assert graph.find_edge(1, 0) is wrap
    assert graph.find_edge(where=lambda e: e.cls == "circleEdge") is wrap
    assert graph.find_edge(0, 1, where=lambda e: e.cls == "circleEdge") is None
    assert graph.out_degree() == {0: 1, 1: 1}


def test_mutations_bump_version():
    graph = GraphModel()
    start = graph.version
    graph.add_node(Node(0, "a", 0, 0))
    graph.add_edge(Edge(0, 0))
    graph.clear()
    assert graph.version == start + 3


# ---------- centering ----------

def test_fit_zoom_is_clamped_and_centres_the_box():
    zoom, pan_x, pan_y = fit_zoom_and_pan((0, 0, 100, 100), (1000, 700), 100)
    assert zoom == 2.0
    assert (pan_x, pan_y) == (400.0, 250.0)


def test_fit_zoom_shrinks_large_boxes():
    zoom, pan_x, pan_y = fit_zoom_and_pan((-500, 0, 1500, 200), (1000, 700), 100)
    assert zoom == pytest.approx(1000 / 2200)
    assert pan_x == pytest.approx(500 - zoom * 500)
    assert pan_y == pytest.approx(350 - zoom * 100)


def test_center_canvas_respects_the_centering_flag(make, renderer, global_ctrl):
    global_ctrl.set_centering(False)
    blinker = make(Blinker)
    blinker.init_structure()
    calls = len(renderer.zoom_calls)

    blinker.center_canvas()
    assert len(renderer.zoom_calls) == calls

    blinker.center_canvas(force=True)
    assert len(renderer.zoom_calls) == calls + 1


# ---------- clocks ----------

def test_manual_clock_runs_in_due_order():
    clock = ManualClock()
    seen = []
    clock.call_later(30, lambda: seen.append("late"))
    clock.call_later(10, lambda: seen.append("early"))

    assert clock.pending == 2
    clock.run_all()
    assert seen == ["early", "late"]
    assert clock.now == 30


def test_immediate_clock_does_not_recurse():
    clock = ImmediateClock()
    seen = []

    def chain(n):
        seen.append(n)
        if n < 2000:
            clock.call_later(1, lambda: chain(n + 1))

    clock.call_later(1, lambda: chain(0))
    assert len(seen) == 2001
    assert clock.now == 2001


# ---------- global controller ----------

def test_speed_is_clamped_and_scales_durations():
    ctrl = GlobalController()
    ctrl.set_speed(2.0)
    assert ctrl.scale_duration(400) == 200
    ctrl.set_speed(10)
    assert ctrl.speed == 3.0
    ctrl.set_speed(0.1)
    assert ctrl.speed == 0.5
    assert ctrl.scale_duration(400) == 800


def test_settings_are_loaded_and_written_back():
    settings = FakeSettings(animationSpeed=2.5, centeringEnable=False)
    ctrl = GlobalController(settings)
    assert ctrl.speed == 2.5
    assert ctrl.centering_enabled is False

    ctrl.set_speed(1.5)
    ctrl.set_centering(True)
    assert settings.values == {"animationSpeed": 1.5, "centeringEnable": True}


# ---------- operation driver ----------

def test_operations_are_rejected_before_init(make):
    blinker = make(Blinker)
    operation = blinker.blink()
    assert not operation.accepted
    assert operation.done


def test_operation_runs_phases_in_order(make, status, clock):
    blinker = make(Blinker)
    blinker.init_structure()

    operation = blinker.blink()

    assert operation.done
    assert blinker.dot.opacity == 0.0
    assert status.animating == [True, False]
    assert status.texts == ["status.centering", "status.animation", "status.centering", ""]
    # 1.5 + 1 before, 1 fade, 1 + 1.5 after
    assert clock.now == 600 + 400 + 400 + 400 + 600


def test_without_centering_only_the_animation_status_is_shown(make, status, global_ctrl):
    global_ctrl.set_centering(False)
    blinker = make(Blinker)
    blinker.init_structure()
    blinker.blink()
    assert status.texts == ["status.animation", ""]


def test_second_operation_is_dropped_while_animating(make):
    clock = ManualClock()
    blinker = make(Blinker, clock=clock)
    blinker.init_structure()

    first = blinker.blink()
    assert blinker.animating
    second = blinker.blink()
    assert not second.accepted

    clock.run_all()
    assert first.done
    assert not blinker.animating


def test_reset_is_ignored_while_animating(make):
    clock = ManualClock()
    blinker = make(Blinker, clock=clock)
    blinker.init_structure()
    blinker.blink()

    blinker.reset_structure()
    assert blinker.is_init
    clock.run_all()
    blinker.reset_structure()
    assert not blinker.is_init
    assert blinker.graph.nodes == []


def test_failing_operation_resets_the_structure(make, status, renderer):
    blinker = make(Blinker)
    blinker.init_structure()

    with pytest.raises(RuntimeError):
        blinker.explode()

    assert not blinker.animating
    assert status.animating[-1] is False
    assert not blinker.is_init
    assert blinker.graph.nodes == []
    assert renderer.clear_count == 1
    assert blinker.blink().accepted is False


def test_operation_is_done_once_the_clock_drains(make):
    clock = ManualClock()
    blinker = make(Blinker, clock=clock)
    blinker.init_structure()

    operation = blinker.blink()
    assert not operation.done
    clock.run_all()
    assert operation.done
    assert operation.error is None


def test_require_raises_lookup_error():
    assert BaseStructure.require(0, "index") == 0
    with pytest.raises(LookupError):
        BaseStructure.require(None, "active node")


def test_format_message():
    assert format_message("tree.height", {"height": 3}) == "Height(T): The height of the tree is 3."
    assert format_message("PreOrder: 5 3") == "PreOrder: 5 3"


def test_variants_expose_their_capability_traits():
    from arrayviz.arr_structure import ArrayStructure
    from bst.bst_structure import BinarySearchTree
    from core.interfaces import AnimatablePhase, Classifiable, Normalizable
    from linklist.csl_structure import CircularSinglyLinkedList
    from linklist.dl_structure import DoublyLinkedList
    from linklist.sl_structure import SinglyLinkedList

    for cls in (SinglyLinkedList, DoublyLinkedList, CircularSinglyLinkedList):
        lst = cls()
        assert isinstance(lst, Normalizable)
        assert isinstance(lst, Classifiable)
        assert isinstance(lst, AnimatablePhase)

    for cls in (ArrayStructure, BinarySearchTree):
        structure = cls()
        assert isinstance(structure, AnimatablePhase)
        assert not isinstance(structure, Normalizable)
