from dataclasses import replace

from core.styles import ACTIVE_FILL, HIGHLIGHT, MUTED, POINTER, EdgeStyle, NodeStyle
from linklist import list_ops
from linklist.list_base import POINTER_CLS, LinkedListStructure

_NODE = NodeStyle(width=100, height=45)

SINGLY_NODE_STYLES = {
    POINTER_CLS: POINTER,
    "defaultNode": _NODE,
    "activeNode": replace(_NODE, fill=ACTIVE_FILL),
    "nodeWithNull": replace(_NODE, null_right=True),
    "activeNodeWithNull": replace(_NODE, fill=ACTIVE_FILL, null_right=True),
}

SINGLY_EDGE_STYLES = {
    "defaultEdge": EdgeStyle(),
    "edgeToNewNode": EdgeStyle(),
    "edgeFromNewNode": EdgeStyle(),
    "edgeOverDeletingFirstNode": EdgeStyle(color=HIGHLIGHT, route="curve", bend=90),
    "edgeOverDeletingAfterNode": EdgeStyle(color=HIGHLIGHT, route="curve", bend=90),
    "circleEdge": EdgeStyle(color=MUTED, route="under", bend=90),
    "singleNodeCircleEdge": EdgeStyle(color=MUTED, route="loop", bend=60),
}


class SinglyLinkedList(LinkedListStructure):
    """Singly linked list headed by a single ``Init Pointer`` sentinel."""

    CENTER_PADDING = 200
    NODE_STYLES = SINGLY_NODE_STYLES
    EDGE_STYLES = SINGLY_EDGE_STYLES

    def _create_initial(self):
        list_ops.add_init_pointer(self)

    def classify(self):
        list_ops.classify_by_out_degree(self)

    def _populate_random(self):
        self.init_structure()
        list_ops.build_random_chain(self)
        self.normalize()

    def _insert_first_node(self, value):
        yield from self.before_animation_starts()
        yield from list_ops.insert_first(self, value)
        yield from self.after_animation_ends()

    def _delete_first_node(self):
        yield from self.before_animation_starts()
        changed = yield from list_ops.delete_first(self)
        yield from self.finish(changed)

    def _insert_after_active_node(self, value):
        yield from self.before_animation_starts()
        yield from list_ops.insert_after_active(self, value)
        yield from self.after_animation_ends()

    def _delete_after_active_node(self):
        yield from self.before_animation_starts()
        changed = yield from list_ops.delete_after_active(self)
        yield from self.finish(changed)
