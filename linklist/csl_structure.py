import logging

from core.graph_model import Edge
from linklist import list_ops
from linklist.list_base import LinkedListStructure
from linklist.sl_structure import SINGLY_EDGE_STYLES, SINGLY_NODE_STYLES

logger = logging.getLogger(__name__)

WRAP_CLASSES = ("circleEdge", "singleNodeCircleEdge")


def _is_wrap(edge):
    return edge.cls in WRAP_CLASSES


class CircularSinglyLinkedList(LinkedListStructure):
    """
    Singly linked list whose last node links back to the first one.

    The wrap-around edge is never part of the insert / delete choreography:
    edge lookups skip it and ``sync_wrap_edge`` re-targets it after every
    normalisation. While a node is being inserted it stays where it is (the
    new node sits at the end of the array until it is spliced in).
    """

    CENTER_PADDING = 200
    NODE_STYLES = SINGLY_NODE_STYLES
    EDGE_STYLES = SINGLY_EDGE_STYLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._adding = False

    def _create_initial(self):
        list_ops.add_init_pointer(self)

    def _reset_state(self):
        super()._reset_state()
        self._adding = False

    def find_edge(self, source=None, target=None):
        return self.graph.find_edge(
            None if source is None else source.id,
            None if target is None else target.id,
            where=lambda edge: not _is_wrap(edge),
        )

    def wrap_edge(self):
        return self.graph.find_edge(where=_is_wrap)

    def normalize(self):
        self.graph.renumber()
        self.sync_wrap_edge()
        self.classify()

    def classify(self):
        list_ops.classify_by_out_degree(self)

    def sync_wrap_edge(self):
        wrap = self.wrap_edge()
        data = self.data_nodes
        if not data:
            if wrap is not None:
                self.graph.remove_edge(wrap)
                logger.debug("wrap edge removed, list is empty")
            return
        first, last = data[0], data[-1]
        cls = "singleNodeCircleEdge" if first is last else "circleEdge"
        if wrap is None:
            self.graph.add_edge(Edge(last.id, first.id, cls))
            logger.debug("wrap edge created %s -> %s", last.id, first.id)
        elif not self._adding:
            wrap.source, wrap.target, wrap.cls = last.id, first.id, cls

    def _advance_active(self):
        following = self.active + 1
        self.active = following if following < len(self.nodes) else self.FIRST_INDEX

    def _populate_random(self):
        self.init_structure()
        list_ops.build_random_chain(self)
        self.normalize()

    def _settle_insert(self):
        self.sync_wrap_edge()
        self.classify()
        self.refresh()

    def _insert_first_node(self, value):
        yield from self.before_animation_starts()
        self._adding = True
        try:
            yield from list_ops.insert_first(self, value)
        finally:
            self._adding = False
        self._settle_insert()
        yield from self.after_animation_ends()

    def _insert_after_active_node(self, value):
        yield from self.before_animation_starts()
        self._adding = True
        try:
            yield from list_ops.insert_after_active(self, value)
        finally:
            self._adding = False
        self._settle_insert()
        yield from self.after_animation_ends()

    def _delete_first_node(self):
        yield from self.before_animation_starts()
        changed = yield from list_ops.delete_first(self)
        yield from self.finish(changed)

    def _delete_after_active_node(self):
        yield from self.before_animation_starts()
        if self.active == len(self.nodes) - 1 and self.active != self.FIRST_INDEX:
            # the successor of the last node is the first one
            changed = yield from list_ops.delete_first(self)
        else:
            changed = yield from list_ops.delete_after_active(self)
        yield from self.finish(changed)
