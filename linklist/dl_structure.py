from collections import Counter
from dataclasses import replace
from typing import Optional

from core.graph_model import Edge, Node
from core.styles import ACTIVE_FILL, HIGHLIGHT, POINTER, EdgeStyle, NodeStyle
from linklist.list_base import NODE_Y, POINTER_CLS, POINTER_Y, LinkedListStructure
from linklist.list_ops import (
    add_edges,
    add_node,
    add_temp_pointer,
    fade_out_batch,
    restyle_edge,
    shift_range,
    splice_new_node,
)

LINK = "roundCornerEdge"
SENTINEL_EDGE = "edgeFromInitPointer"

_NODE = NodeStyle(width=110, height=45)

DOUBLY_NODE_STYLES = {
    POINTER_CLS: POINTER,
    "defaultNode": _NODE,
    "activeNode": replace(_NODE, fill=ACTIVE_FILL),
    "nullDefaultNode": replace(_NODE, null_left=True),
    "nullActiveNode": replace(_NODE, fill=ACTIVE_FILL, null_left=True),
    "defaultNodeNull": replace(_NODE, null_right=True),
    "activeNodeNull": replace(_NODE, fill=ACTIVE_FILL, null_right=True),
    "nullDefaultNodeNull": replace(_NODE, null_left=True, null_right=True),
    "nullActiveNodeNull": replace(_NODE, fill=ACTIVE_FILL, null_left=True, null_right=True),
}

DOUBLY_EDGE_STYLES = {
    "defaultEdge": EdgeStyle(),
    LINK: EdgeStyle(route="curve", bend=14),
    SENTINEL_EDGE: EdgeStyle(),
    "edgeUnderNodeFromInit1": EdgeStyle(color=HIGHLIGHT, route="curve", bend=-90),
    "edgeUnderNodeFromInit2": EdgeStyle(color=HIGHLIGHT, route="curve", bend=90),
    "edgeUnderNodeFromNodes": EdgeStyle(color=HIGHLIGHT, route="curve", bend=-70),
    "edgeOverNodeFromNodes": EdgeStyle(color=HIGHLIGHT, route="curve", bend=-70),
}


class DoublyLinkedList(LinkedListStructure):
    """
    Doubly linked list with two sentinels: ``Init Pointer 1`` (index 0)
    points at the first node and ``Init Pointer 2`` (index 1) at the last.
    Data nodes start at index 2 and every adjacent pair is linked both ways.

    ``adding_future_id`` holds the index a node under construction will
    occupy once spliced in; classification uses it to draw the new node's
    NULL sides correctly while it still sits at the end of the array.
    """

    FIRST_INDEX = 2
    NODE_WIDTH = 110
    NODE_STEP = 198
    CENTER_PADDING = 220
    NODE_STYLES = DOUBLY_NODE_STYLES
    EDGE_STYLES = DOUBLY_EDGE_STYLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.adding_future_id: Optional[int] = None

    @property
    def init_first(self) -> Node:
        return self.nodes[0]

    @property
    def init_last(self) -> Node:
        return self.nodes[1]

    def _create_initial(self):
        self.graph.add_node(Node(0, "Init Pointer 1", 250, POINTER_Y, POINTER_CLS))
        self.graph.add_node(Node(1, "Init Pointer 2", 450, POINTER_Y, POINTER_CLS))

    def _reset_state(self):
        super()._reset_state()
        self.adding_future_id = None

    def _retreat_active(self):
        previous = self.active - 1
        self.active = previous if previous > 1 else None

    # ---------- classification ----------

    def classify(self):
        data_ids = {
            node.id
            for index, node in enumerate(self.nodes)
            if index >= self.FIRST_INDEX and node.cls != POINTER_CLS
        }
        out_degree = Counter(edge.source for edge in self.graph.edges)
        classes = {}
        future = self.adding_future_id

        def assign(node_id, active_cls, default_cls):
            if node_id in data_ids:
                classes[node_id] = active_cls if node_id == self.active else default_cls

        for edge in self.graph.edges:
            if edge.source not in data_ids:
                continue
            count = out_degree[edge.source]
            if count >= 2:
                assign(edge.source, "activeNode", "defaultNode")
            elif future is None:
                if edge.source > edge.target:
                    assign(edge.source, "activeNodeNull", "defaultNodeNull")
                else:
                    assign(edge.source, "nullActiveNode", "nullDefaultNode")
            elif edge.source == future:
                assign(edge.source, "activeNodeNull", "defaultNodeNull")
            elif edge.target == future:
                assign(edge.source, "nullActiveNode", "nullDefaultNode")

        # sentinel targets: the first node has nothing on its left, the last nothing on its right
        for edge in self.graph.edges:
            if out_degree[edge.target] != 1:
                continue
            if len(self.nodes) == 4 and future is not None:
                if edge.target == future:
                    if edge.source == 1:
                        assign(edge.target, "activeNodeNull", "defaultNodeNull")
                elif edge.source == 0:
                    assign(edge.target, "nullActiveNode", "nullDefaultNode")
            elif edge.source == 0:
                assign(edge.target, "nullActiveNode", "nullDefaultNode")
            elif edge.source == 1:
                assign(edge.target, "activeNodeNull", "defaultNodeNull")

        for node_id in data_ids:
            if out_degree[node_id] == 0:
                assign(node_id, "nullActiveNodeNull", "nullDefaultNodeNull")

        for node in self.nodes:
            if node.id in classes:
                node.cls = classes[node.id]

    # ---------- helpers ----------

    @staticmethod
    def _pair(a: Node, b: Node):
        return [Edge(a.id, b.id, LINK, opacity=0.0), Edge(b.id, a.id, LINK, opacity=0.0)]

    @staticmethod
    def _edge(a: Node, b: Node, cls=LINK):
        return Edge(a.id, b.id, cls, opacity=0.0)

    def _begin_adding(self, value, x, y, future):
        self.adding_future_id = future
        node = self.make_node(value, x, y, "nullDefaultNodeNull")
        yield from add_node(self, node)
        return node

    def _finish_adding(self, index):
        self.adding_future_id = None
        splice_new_node(self, index)

    def _relink(self, source: Node, old_target: Node, new_target: Node, cls=LINK):
        """Fade out source->old_target, then fade in source->new_target."""
        yield from fade_out_batch(self, [self.find_edge(source, old_target)], [])
        edge = self._edge(source, new_target, cls)
        yield from add_edges(self, [edge])
        return edge

    def _add_first(self, value):
        node = self.make_node(value, 350, NODE_Y, "nullDefaultNodeNull")
        yield from add_node(self, node)
        yield from add_edges(self, [
            self._edge(self.init_first, node, SENTINEL_EDGE),
            self._edge(self.init_last, node, SENTINEL_EDGE),
        ])

    def _remove_only(self):
        only = self.first_node
        yield from fade_out_batch(
            self,
            [self.find_edge(self.init_first, only), self.find_edge(self.init_last, only)],
            [only],
        )

    def _populate_random(self):
        self.init_structure()
        previous = None
        for _ in range(self.rng.randint(2, 5)):
            x = self.init_first.x + 100 if previous is None else previous.x + self.step
            node = self.graph.add_node(Node(len(self.nodes), self.rng.randint(0, 99), x, NODE_Y))
            if previous is not None:
                self.graph.add_edge(Edge(previous.id, node.id, LINK))
                self.graph.add_edge(Edge(node.id, previous.id, LINK))
            previous = node
        self.graph.add_edge(Edge(self.init_first.id, self.first_node.id, SENTINEL_EDGE))
        self.graph.add_edge(Edge(self.init_last.id, self.last_node.id, SENTINEL_EDGE))
        self.init_last.x = self.last_node.x + 100
        self.normalize()

    # ---------- public operations only the doubly list offers ----------

    def insert_last_node(self, value):
        return self.start(self._insert_last_node(value))

    def delete_last_node(self):
        return self.start(self._delete_last_node())

    def get_last_node_value(self):
        return self.start(self._get_last_node_value())

    def activate_last_node(self):
        return self.start(self._activate_last_node())

    def activate_previous_node(self):
        return self.start(self._activate_previous_node(), allowed=self.active is not None)

    def insert_before_active_node(self, value):
        return self.start(self._insert_before_active_node(value), allowed=self.active is not None)

    def delete_before_active_node(self):
        return self.start(self._delete_before_active_node(), allowed=self.active is not None)

    # ---------- insertions ----------

    def _insert_first_node(self, value):
        yield from self.before_animation_starts()
        if self.is_empty:
            yield from self._add_first(value)
        else:
            first = self.first_node
            node = yield from self._begin_adding(value, first.x, first.y + 2 * self.NODE_HEIGHT, 2)
            yield from shift_range(self, 1, len(self.nodes) - 2, self.step)
            yield from add_edges(self, self._pair(node, first))
            yield from self._relink(self.init_first, first, node, SENTINEL_EDGE)
            self._finish_adding(2)
        yield from self.after_animation_ends()

    def _insert_last_node(self, value):
        yield from self.before_animation_starts()
        if self.is_empty:
            yield from self._add_first(value)
        else:
            last = self.last_node
            node = yield from self._begin_adding(
                value, last.x + self.step, last.y + 2 * self.NODE_HEIGHT, len(self.nodes)
            )
            yield from shift_range(self, 1, 1, self.step)
            yield from add_edges(self, self._pair(node, last))
            yield from self._relink(self.init_last, last, node, SENTINEL_EDGE)
            self._finish_adding(len(self.nodes) - 1)
        yield from self.after_animation_ends()

    def _insert_after_active_node(self, value):
        yield from self.before_animation_starts()
        active = self.active_node
        future = self.active + 1
        if self.active == len(self.nodes) - 1:
            node = yield from self._begin_adding(value, active.x + self.step, self.new_node_y, future)
            yield from shift_range(self, 1, 1, self.step)
            yield from add_edges(self, self._pair(node, active))
            yield from self._relink(self.init_last, active, node, SENTINEL_EDGE)
        else:
            following = self.nodes[future]
            node = yield from self._begin_adding(value, following.x, self.new_node_y, future)
            yield from shift_range(self, 1, 1, self.step, wait=False)
            yield from shift_range(self, future, len(self.nodes) - 2, self.step)
            yield from add_edges(self, [self._edge(node, following), self._edge(node, active)])
            yield from self._relink(active, following, node)
            yield from self._relink(following, active, node)
        self._finish_adding(future)
        yield from self.after_animation_ends()

    def _insert_before_active_node(self, value):
        yield from self.before_animation_starts()
        active = self.active_node
        future = self.active
        node = yield from self._begin_adding(value, active.x, self.new_node_y, future)
        yield from shift_range(self, 1, 1, self.step, wait=False)
        yield from shift_range(self, future, len(self.nodes) - 2, self.step)
        if future == self.FIRST_INDEX:
            yield from add_edges(self, self._pair(node, active))
            yield from self._relink(self.init_first, active, node, SENTINEL_EDGE)
        else:
            previous = self.nodes[future - 1]
            yield from add_edges(self, [self._edge(node, active), self._edge(node, previous)])
            yield from self._relink(active, previous, node)
            yield from self._relink(previous, active, node)
        self._finish_adding(future)
        yield from self.after_animation_ends()

    # ---------- deletions ----------

    def _unlink_with_pointer(self, victim: Node, bridges, inner_edges):
        """
        Shared deletion choreography: mark ``victim``, fade in the bridging
        edges one relink at a time, then fade out the victim with its
        remaining links and the temporary pointer.

        ``bridges`` is a list of (source, cls, target) triples, each
        replacing the edge source->victim; ``inner_edges`` are the victim's
        own links removed together with it.
        """
        temp = yield from add_temp_pointer(self, victim)
        added = []
        for source, cls, target in bridges:
            edge = yield from self._relink_silently(source, victim, target, cls)
            added.append(edge)
        yield from fade_out_batch(
            self,
            [*inner_edges(), self.find_edge(temp, victim)],
            [victim, temp],
        )
        return added

    def _relink_silently(self, source: Node, victim: Node, target: Node, cls):
        yield from fade_out_batch(self, [self.find_edge(source, victim)], [], normalize=False)
        edge = self._edge(source, target, cls)
        yield from add_edges(self, [edge], classify=False)
        return edge

    def _delete_first_node(self):
        yield from self.before_animation_starts()
        if self.is_empty:
            self.report("list.deleteFirstEmpty")
            yield from self.finish(False)
            return
        if len(self.nodes) == 3:
            yield from self._remove_only()
        else:
            first, second = self.first_node, self.nodes[3]
            bridges = yield from self._unlink_with_pointer(
                first,
                [(self.init_first, "edgeUnderNodeFromInit1", second)],
                lambda: [self.find_edge(first, second), self.find_edge(second, first)],
            )
            yield from shift_range(self, 1, len(self.nodes) - 1, -self.step, wait=False)
            restyle_edge(self, bridges[0], SENTINEL_EDGE)
        yield from self.after_animation_ends()

    def _delete_last_node(self):
        yield from self.before_animation_starts()
        if self.is_empty:
            self.report("list.deleteLastEmpty")
            yield from self.finish(False)
            return
        if len(self.nodes) == 3:
            yield from self._remove_only()
        else:
            last, previous = self.last_node, self.nodes[-2]
            bridges = yield from self._unlink_with_pointer(
                last,
                [(self.init_last, "edgeUnderNodeFromInit2", previous)],
                lambda: [self.find_edge(last, previous), self.find_edge(previous, last)],
            )
            yield from shift_range(self, 1, 1, -self.step)
            restyle_edge(self, bridges[0], SENTINEL_EDGE)
        yield from self.after_animation_ends()

    def _delete_after_active_node(self):
        yield from self.before_animation_starts()
        if self.active == len(self.nodes) - 1:
            self.report("list.deleteAfterEmpty")
            yield from self.finish(False)
            return
        active = self.active_node
        victim = self.nodes[self.active + 1]
        if self.active == len(self.nodes) - 2:
            bridges = yield from self._unlink_with_pointer(
                victim,
                [(self.init_last, "edgeUnderNodeFromInit2", active)],
                lambda: [self.find_edge(active, victim), self.find_edge(victim, active)],
            )
            yield from shift_range(self, 1, 1, -self.step, wait=False)
            restyle_edge(self, bridges[0], SENTINEL_EDGE)
        else:
            following = self.nodes[self.active + 2]
            bridges = yield from self._unlink_with_pointer(
                victim,
                [
                    (active, "edgeUnderNodeFromNodes", following),
                    (following, "edgeOverNodeFromNodes", active),
                ],
                lambda: [self.find_edge(victim, following), self.find_edge(victim, active)],
            )
            yield from shift_range(self, 1, 1, -self.step, wait=False)
            yield from shift_range(self, self.active + 1, len(self.nodes) - 1, -self.step)
            for edge in bridges:
                restyle_edge(self, edge, LINK)
        yield from self.after_animation_ends()

    def _delete_before_active_node(self):
        yield from self.before_animation_starts()
        if self.active == self.FIRST_INDEX:
            self.report("list.deleteBeforeEmpty")
            yield from self.finish(False)
            return
        active = self.active_node
        victim = self.nodes[self.active - 1]
        if self.active == self.FIRST_INDEX + 1:
            bridges = yield from self._unlink_with_pointer(
                victim,
                [(self.init_first, "edgeUnderNodeFromInit1", active)],
                lambda: [self.find_edge(active, victim), self.find_edge(victim, active)],
            )
            yield from shift_range(self, self.active, len(self.nodes) - 1, -self.step)
            yield from shift_range(self, 1, 1, -self.step)
            restyle_edge(self, bridges[0], SENTINEL_EDGE)
        else:
            previous = self.nodes[self.active - 2]
            bridges = yield from self._unlink_with_pointer(
                victim,
                [
                    (active, "edgeOverNodeFromNodes", previous),
                    (previous, "edgeUnderNodeFromNodes", active),
                ],
                lambda: [self.find_edge(victim, previous), self.find_edge(victim, active)],
            )
            yield from shift_range(self, 1, 1, -self.step)
            yield from shift_range(self, self.active, len(self.nodes) - 1, -self.step)
            for edge in bridges:
                restyle_edge(self, edge, LINK)
        yield from self.after_animation_ends()

    # ---------- queries and activity ----------

    def _get_last_node_value(self):
        yield from self.before_animation_starts()
        if self.is_empty:
            self.report("list.getLastError")
            yield from self.finish(False)
            return
        self.report("list.getLastValue", {"value": self.last_node.value})
        yield from self.after_animation_ends()

    def _activate_last_node(self):
        yield from self.before_animation_starts()
        if self.is_empty:
            self.report("list.lastEmpty")
            yield from self.finish(False)
            return
        self.active = len(self.nodes) - 1
        self.classify()
        self.refresh()
        yield from self.after_animation_ends()

    def _activate_previous_node(self):
        yield from self.before_animation_starts()
        self._retreat_active()
        self.classify()
        self.refresh()
        yield from self.after_animation_ends()
