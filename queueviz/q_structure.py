from arrayviz.arr_structure import ARRAY_EDGE_STYLES, ARRAY_NODE_STYLES, ArrayStructure
from core.graph_model import Edge, Node
from core.styles import ARROW, HIGHLIGHT, STROKE, NodeStyle

QUEUE_NODE_STYLES = {
    **ARRAY_NODE_STYLES,
    "beginAndEndPtr": NodeStyle(shape="marker", width=60, height=22, fill=STROKE, stroke=STROKE),
    "beginPtr": NodeStyle(shape="marker", width=40, height=22, fill=ARROW, stroke=ARROW),
    "endPtr": NodeStyle(shape="marker", width=40, height=22, fill=STROKE, stroke=STROKE),
    "frontPtr": NodeStyle(shape="marker", width=40, height=22, fill=HIGHLIGHT, stroke=HIGHLIGHT),
}


def ring_is_full(begin: int, end: int, slots: int) -> bool:
    """True when advancing ``end`` by one slot would make it meet ``begin``."""
    return (end + 1) % slots == begin


class Queue(ArrayStructure):
    """
    Ring-buffer queue. A queue created for N elements owns N + 1 slots: one
    slot always stays free so that ``begin == end`` unambiguously means
    empty. A dashed wrap edge from the last slot to the first is shown while
    the filled region wraps around the end of the array.
    """

    NODE_STYLES = QUEUE_NODE_STYLES
    EDGE_STYLES = ARRAY_EDGE_STYLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.begin = 0
        self.end = 0
        self._markers = {}

    def _slot_count(self, capacity) -> int:
        return capacity + 1

    def _create_initial(self, capacity):
        super()._create_initial(capacity)
        self._markers = {
            "begAndEnd": Node("begAndEnd", "Begin & End", 0, 0, "beginAndEndPtr"),
            "begin": Node("begin", "Begin", 0, 0, "beginPtr", opacity=0.0),
            "end": Node("end", "End", 0, 0, "endPtr", opacity=0.0),
        }
        self.overlays.extend(self._markers.values())

    def _reset_state(self):
        super()._reset_state()
        self.begin = 0
        self.end = 0
        self._markers = {}

    @property
    def element_capacity(self) -> int:
        return self.capacity - 1

    @property
    def empty(self) -> bool:
        return self.begin == self.end

    @property
    def full(self) -> bool:
        return ring_is_full(self.begin, self.end, self.capacity)

    def values(self) -> list:
        result = []
        index = self.begin
        while index != self.end:
            result.append(self.slots[index].value)
            index = (index + 1) % self.capacity
        return result

    def refresh(self):
        if self._markers:
            self._place_markers()
        super().refresh()

    def _place_markers(self):
        begin = self.slots[self.begin]
        end = self.slots[self.end]
        together = self.begin == self.end
        combined = self._markers["begAndEnd"]
        combined.x, combined.y = begin.x, begin.y + 80
        combined.opacity = 1.0 if together else 0.0
        for key, slot in (("begin", begin), ("end", end)):
            marker = self._markers[key]
            marker.x, marker.y = slot.x, slot.y + 80
            marker.opacity = 0.0 if together else 1.0

    def _wrap_edge(self):
        return self.graph.find_edge(where=lambda edge: edge.cls == "circleEdge")

    def _store(self, value, opacity=1.0):
        """Write at ``end`` and advance it; returns the wrap edge if ``end`` wrapped."""
        self.write_slot(self.end, value, "arrayColorNode")
        self.end += 1
        if self.end != self.capacity:
            return None
        self.end = 0
        return self.graph.add_edge(
            Edge(self.slots[-1].id, self.slots[0].id, "circleEdge", opacity=opacity)
        )

    def _add_element(self, value):
        yield from self.before_animation_starts()
        if self.full:
            self.report("queue.addFull")
            yield from self.finish(False)
            return
        edge = self._store(value, opacity=0.0)
        if edge is not None:
            self.refresh()
            yield from self.fade([edge], 1.0)
        self.refresh()
        yield from self.after_animation_ends()

    def _remove_element(self):
        yield from self.before_animation_starts()
        if self.empty:
            self.report("queue.removeEmpty")
            yield from self.finish(False)
            return
        self.write_slot(self.begin, "", "arrayNode")
        self.refresh()
        self.begin += 1
        if self.begin == self.capacity:
            self.begin = 0
            self.refresh()
            edge = self._wrap_edge()
            if edge is not None:
                yield from self.fade([edge], 0.0)
                self.graph.remove_edge(edge)
        self.refresh()
        yield from self.after_animation_ends()

    def _is_empty(self):
        yield from self.before_animation_starts()
        self.report("queue.empty" if self.empty else "queue.notEmpty")
        yield from self.after_animation_ends()

    def _is_full(self):
        yield from self.before_animation_starts()
        self.report("queue.full" if self.full else "queue.notFull")
        yield from self.after_animation_ends()

    def _foremost_element(self):
        yield from self.before_animation_starts()
        if self.empty:
            self.report("queue.frontError")
            yield from self.finish(False)
            return
        slot = self.slots[self.begin]
        pointer = Node("front", "Front", slot.x, slot.y + 78, "frontPtr")
        yield from self.add_overlay(pointer)
        self.report("queue.front", {"value": slot.value})
        yield from self.wait(2)
        yield from self.remove_overlay(pointer)
        yield from self.after_animation_ends()
