import logging
from typing import List, Optional

from core.base_structure import BaseStructure
from core.graph_model import Node

logger = logging.getLogger(__name__)

NODE_Y = 300
POINTER_Y = 200
POINTER_CLS = "pointer"


class LinkedListStructure(BaseStructure):
    """
    State shared by the list variants: the node array (sentinel pointers
    first, then data nodes in list order), the active index and the
    operations whose behaviour does not depend on the link layout.

    The active node is tracked as an index into ``graph.nodes``; every
    removal goes through ``remove_node`` so the index follows the node it
    refers to.
    """

    FIRST_INDEX = 1
    NODE_WIDTH = 100
    NODE_HEIGHT = 45
    NODE_STEP = 180

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.active: Optional[int] = None

    # ---------- geometry ----------

    @property
    def step(self) -> float:
        return self.NODE_STEP

    @property
    def new_node_y(self) -> float:
        return NODE_Y + 2 * self.NODE_HEIGHT

    # ---------- queries ----------

    @property
    def nodes(self) -> List[Node]:
        return self.graph.nodes

    @property
    def data_nodes(self) -> List[Node]:
        return [node for node in self.nodes[self.FIRST_INDEX:] if node.cls != POINTER_CLS]

    @property
    def is_empty(self) -> bool:
        return not self.data_nodes

    @property
    def first_node(self) -> Node:
        return self.nodes[self.FIRST_INDEX]

    @property
    def last_node(self) -> Node:
        return self.nodes[-1]

    @property
    def active_node(self) -> Optional[Node]:
        if self.active is None:
            return None
        return self.nodes[self.active]

    def values(self) -> list:
        return [node.value for node in self.data_nodes]

    def find_edge(self, source: Optional[Node] = None, target: Optional[Node] = None):
        return self.graph.find_edge(
            None if source is None else source.id,
            None if target is None else target.id,
        )

    def make_node(self, value, x, y, cls="defaultNode") -> Node:
        return Node(len(self.nodes), value, x, y, cls, opacity=0.0)

    # ---------- mutation ----------

    def remove_node(self, node: Node) -> int:
        index = self.graph.remove_node(node)
        if self.active is not None:
            if index == self.active:
                self.active = None
            elif index < self.active:
                self.active -= 1
        return index

    def normalize(self):
        id_map = self.graph.renumber()
        logger.debug("renumbered %d nodes", len(id_map))
        self.classify()

    def classify(self):
        raise NotImplementedError

    def _reset_state(self):
        self.active = None

    def _advance_active(self):
        following = self.active + 1
        self.active = following if following < len(self.nodes) else None

    # ---------- public operations ----------

    def insert_first_node(self, value):
        return self.start(self._insert_first_node(value))

    def delete_first_node(self):
        return self.start(self._delete_first_node())

    def insert_after_active_node(self, value):
        return self.start(self._insert_after_active_node(value), allowed=self.active is not None)

    def delete_after_active_node(self):
        return self.start(self._delete_after_active_node(), allowed=self.active is not None)

    def get_first_node_value(self):
        return self.start(self._get_first_node_value())

    def get_active_node_value(self):
        return self.start(self._get_active_node_value())

    def set_active_node_value(self, value):
        return self.start(self._set_active_node_value(value), allowed=self.active is not None)

    def is_list_active(self):
        return self.start(self._is_list_active())

    def activate_first_node(self):
        return self.start(self._activate_first_node())

    def activate_next_node(self):
        return self.start(self._activate_next_node(), allowed=self.active is not None)

    # ---------- shared bodies ----------

    def _get_first_node_value(self):
        yield from self.before_animation_starts()
        if self.is_empty:
            self.report("list.getFirstError")
            yield from self.finish(False)
            return
        self.report("list.getFirstValue", {"value": self.first_node.value})
        yield from self.after_animation_ends()

    def _get_active_node_value(self):
        yield from self.before_animation_starts()
        if self.active is None:
            self.report("list.getActiveError")
            yield from self.finish(False)
            return
        self.report("list.getActiveValue", {"value": self.active_node.value})
        yield from self.after_animation_ends()

    def _set_active_node_value(self, value):
        yield from self.before_animation_starts()
        self.active_node.value = value
        self.graph.touch()
        self.refresh()
        self.report("list.setActiveValue", {"value": value})
        yield from self.after_animation_ends()

    def _is_list_active(self):
        yield from self.before_animation_starts()
        self.report("list.notActive" if self.active is None else "list.active")
        yield from self.after_animation_ends()

    def _activate_first_node(self):
        yield from self.before_animation_starts()
        if self.is_empty:
            self.report("list.firstEmpty")
            yield from self.finish(False)
            return
        self.active = self.FIRST_INDEX
        self.classify()
        self.refresh()
        yield from self.after_animation_ends()

    def _activate_next_node(self):
        yield from self.before_animation_starts()
        self._advance_active()
        self.classify()
        self.refresh()
        yield from self.after_animation_ends()
