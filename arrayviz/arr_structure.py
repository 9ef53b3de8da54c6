import logging
from typing import List

from core.base_structure import BaseStructure
from core.graph_model import Node
from core.styles import ACTIVE_FILL, MUTED, STROKE, EdgeStyle, NodeStyle

logger = logging.getLogger(__name__)

SLOT_SIZE = 50
INIT_X = 450
INIT_Y = 300

ARRAY_NODE_STYLES = {
    "arrayNode": NodeStyle(width=SLOT_SIZE, height=SLOT_SIZE),
    "arrayColorNode": NodeStyle(width=SLOT_SIZE, height=SLOT_SIZE, fill=ACTIVE_FILL),
    "indexNode": NodeStyle(shape="label", width=SLOT_SIZE, height=20, text=MUTED),
}

ARRAY_EDGE_STYLES = {
    "circleEdge": EdgeStyle(color=STROKE, route="under", bend=70, dashed=True),
}


class ArrayStructure(BaseStructure):
    """
    Fixed number of slot nodes laid out in a row, plus overlay nodes drawn
    on top of them (index labels and pointer markers). Slots are created
    once by ``init_structure`` and only their values and classes change.
    """

    CENTER_PADDING = 170
    NODE_STYLES = ARRAY_NODE_STYLES
    EDGE_STYLES = ARRAY_EDGE_STYLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.slots: List[Node] = []
        self.overlays: List[Node] = []

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def _slot_count(self, capacity) -> int:
        return capacity

    def _create_initial(self, capacity):
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        for index in range(self._slot_count(capacity)):
            x = INIT_X + index * SLOT_SIZE
            self.slots.append(Node(f"node {index}", "", x, INIT_Y, "arrayNode"))
            self.overlays.append(Node(f"index {index}", index, x, INIT_Y + 40, "indexNode"))
        logger.debug("%s created with %d slots", type(self).__name__, len(self.slots))

    def _reset_state(self):
        self.slots = []
        self.overlays = []

    def refresh(self):
        self.graph.nodes = [*self.slots, *self.overlays]
        self.graph.touch()
        super().refresh()

    def write_slot(self, index, value, cls="arrayNode"):
        slot = self.slots[index]
        slot.value = value
        slot.cls = cls
        self.graph.touch()

    def add_overlay(self, node: Node):
        node.opacity = 0.0
        self.overlays.append(node)
        self.refresh()
        yield from self.fade([node], 1.0)

    def remove_overlay(self, node: Node):
        yield from self.fade([node], 0.0)
        self.overlays = [overlay for overlay in self.overlays if overlay.handle != node.handle]
        self.refresh()

    def _populate_random(self):
        capacity = self.rng.randint(5, 10)
        self.init_structure(capacity)
        for _ in range(int(self.rng.random() * (capacity - 2)) + 2):
            self._store(self.rng.randint(0, 99))

    def _store(self, value):
        raise NotImplementedError

    # ---------- public operations ----------

    def add_element(self, value):
        return self.start(self._add_element(value))

    def remove_element(self):
        return self.start(self._remove_element())

    def is_empty(self):
        return self.start(self._is_empty())

    def is_full(self):
        return self.start(self._is_full())

    def foremost_element(self):
        return self.start(self._foremost_element())
