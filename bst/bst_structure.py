import logging
from collections import deque
from dataclasses import replace

from bst.bst_model import LEFT, MISSING, RIGHT, TWO_CHILDREN, TreeEntry, TreeTable
from core.base_structure import BaseStructure
from core.graph_model import Edge, Node
from core.styles import ACTIVE_FILL, ARROW, HIGHLIGHT, MUTED, POINTER, STROKE, EdgeStyle, NodeStyle

logger = logging.getLogger(__name__)

NODE_DIAMETER = 55
CURSOR_OFFSET = 45

_KEY = NodeStyle(shape="ellipse", width=NODE_DIAMETER, height=NODE_DIAMETER)

TREE_NODE_STYLES = {
    "pointer": POINTER,
    "nodeCursor": NodeStyle(shape="marker", width=22, height=18, fill=ARROW, stroke=ARROW),
    "defaultNode": _KEY,
    "nullNode": NodeStyle(shape="label", width=50, height=20, text=MUTED),
    "searchedNode": replace(_KEY, fill=ACTIVE_FILL),
    "highlightNode": replace(_KEY, stroke=HIGHLIGHT, border=4.0),
    "successorNode": replace(_KEY, fill=ACTIVE_FILL, stroke=HIGHLIGHT),
}

TREE_EDGE_STYLES = {
    "defaultEdge": EdgeStyle(color=STROKE, width=2.0),
    "highlightEdge": EdgeStyle(color=HIGHLIGHT, width=4.0),
}

TRAVERSAL_HEADERS = {
    "pre": "PreOrder:",
    "in": "InOrder:",
    "post": "PostOrder:",
    "level": "LevelOrder:",
}


class BinarySearchTree(BaseStructure):
    """
    Animated binary search tree.

    The tree itself lives in a ``TreeTable``; the flat graph handed to the
    renderer is rebuilt from it by ``transfer`` after every change. Besides
    the tree the graph always holds the ``initPointer`` sentinel (pointing at
    the root) and the ``nodeCursor`` marker that follows the descent.
    """

    CENTER_PADDING = 90
    NODE_STYLES = TREE_NODE_STYLES
    EDGE_STYLES = TREE_EDGE_STYLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.table = TreeTable()
        self.init_pointer = None
        self.cursor = None
        self._hot_edges = set()
        self._trail = ""

    # ---------- graph sync ----------

    def _create_initial(self):
        self.init_pointer = Node("initPointer", "Root", 0, 0, "pointer")
        self.cursor = Node("nodeCursor", "", 0, 0, "nodeCursor", opacity=0.0)
        self.transfer()

    def _reset_state(self):
        self.table.clear()
        self.init_pointer = None
        self.cursor = None
        self._hot_edges = set()
        self._trail = ""

    def transfer(self):
        """Lay the table out and rebuild the flat graph from it."""
        self.table.layout()
        table = self.table
        nodes = [self.init_pointer, self.cursor]
        edges = [Edge("initPointer", table.graph_id(table.root), opacity=table[table.root].opacity)]
        for entry in table.walk_pre_order():
            graph_id = table.graph_id(entry.handle)
            value = "NULL" if entry.is_placeholder else entry.key
            nodes.append(Node(graph_id, value, entry.x, entry.y, entry.cls, entry.opacity))
            for child in table.children(entry.handle):
                cls = "highlightEdge" if (entry.handle, child) in self._hot_edges else "defaultEdge"
                edges.append(Edge(graph_id, table.graph_id(child), cls, opacity=table[child].opacity))
        self.graph.nodes = nodes
        self.graph.edges = edges
        self.graph.touch()
        self.refresh()

    def _element_for(self, item):
        if isinstance(item, TreeEntry):
            return self.renderer.query_node(self.table.graph_id(item.handle))
        return super()._element_for(item)

    # ---------- queries ----------

    @property
    def is_empty(self) -> bool:
        return self.table.is_empty

    def keys(self):
        return self.table.keys()

    def height(self) -> int:
        return self.table.height()

    # ---------- animation helpers ----------

    def _move_cursor(self, handle):
        entry = self.table[handle]
        self.cursor.x = entry.x
        self.cursor.y = entry.y + CURSOR_OFFSET
        self.cursor.opacity = 1.0
        self.transfer()
        yield from self.wait()

    def _hide_cursor(self):
        self.cursor.opacity = 0.0
        self.transfer()

    def _traverse_edge(self, parent, child, multiplier=1.0):
        self._hot_edges.add((parent, child))
        self._hide_cursor()
        yield from self.wait(multiplier)
        self._hot_edges.discard((parent, child))
        self.transfer()

    def _restyle(self, handle, cls):
        self.table[handle].cls = cls
        self.transfer()

    def _blink(self, handle):
        for cls in ("searchedNode", "highlightNode", "searchedNode", "highlightNode"):
            self._restyle(handle, cls)
            yield from self.wait(0.5)
        self._restyle(handle, "defaultNode")

    def _descend(self, path, key):
        """Walk ``path`` with the cursor; returns the last handle reached."""
        for index, handle in enumerate(path):
            entry = self.table[handle]
            if entry.is_placeholder:
                return handle
            yield from self._move_cursor(handle)
            if entry.key == key:
                return handle
            yield from self._traverse_edge(handle, path[index + 1])
        return path[-1]

    def _fade_entries(self, handles, target):
        entries = [self.table[handle] for handle in handles]
        ids = {self.table.graph_id(handle) for handle in handles}
        edges = [
            edge for edge in self.graph.edges
            if edge.target in ids or (target == 0.0 and edge.source in ids)
        ]
        yield from self.fade([*entries, *edges], target)

    # ---------- public operations ----------

    def insert_node(self, key):
        return self.start(self._insert_node(int(key)))

    def delete_node(self, key):
        return self.start(self._delete_node(int(key)))

    def search_node(self, key):
        return self.start(self._search_node(int(key)))

    def pre_order_traversal(self):
        return self.start(self._traversal("pre"))

    def in_order_traversal(self):
        return self.start(self._traversal("in"))

    def post_order_traversal(self):
        return self.start(self._traversal("post"))

    def level_order_traversal(self):
        return self.start(self._traversal("level"))

    def show_height(self):
        return self.start(self._show_height())

    # ---------- insert / search ----------

    def _insert_node(self, key):
        yield from self.before_animation_starts()
        handle = yield from self._descend(self.table.descend(key), key)
        if not self.table[handle].is_placeholder:
            self._hide_cursor()
            yield from self._blink(handle)
            yield from self.after_animation_ends()
            return

        self._hide_cursor()
        yield from self.wait()
        yield from self._fade_entries([handle], 0.0)
        self.table.fill_placeholder(handle, key)
        placeholders = [self.table.add_placeholder(handle, side, opacity=0.0).handle for side in (LEFT, RIGHT)]
        self.transfer()
        yield from self._fade_entries([handle], 1.0)
        self.transfer()
        for child in placeholders:
            yield from self._fade_entries([child], 1.0)
            self.transfer()
        logger.debug("inserted key %s", key)
        yield from self.after_animation_ends()

    def _search_node(self, key):
        yield from self.before_animation_starts()
        handle = yield from self._descend(self.table.descend(key), key)
        self._hide_cursor()
        if self.table[handle].is_placeholder:
            self.report("tree.searchNotFound", {"key": key})
        else:
            yield from self._blink(handle)
            self.report("tree.searchFound", {"key": key})
        yield from self.wait(1.5)
        yield from self.after_animation_ends()

    # ---------- delete ----------

    def _delete_node(self, key):
        yield from self.before_animation_starts()
        if self.table.is_empty:
            self.report("tree.deleteEmpty")
            yield from self.finish(False)
            return

        plan = self.table.plan_removal(key)
        logger.debug("delete %s: %s", key, plan.case)
        yield from self._descend(plan.path, key)
        self._hide_cursor()
        if plan.case == MISSING:
            self.report("tree.deleteNotFound", {"key": key})
            yield from self.finish(False)
            return

        yield from self._blink(plan.target)
        if plan.case == TWO_CHILDREN:
            yield from self._delete_with_successor(plan)
        else:
            yield from self._detach_animated(plan.target, announce=True)
        yield from self.after_animation_ends()

    def _detach_animated(self, handle, announce):
        """Fade out and detach a key entry having at most one real child."""
        entry = self.table[handle]
        placeholders = [c for c in self.table.children(handle) if self.table[c].is_placeholder]
        if len(placeholders) == 2:
            yield from self._fade_entries([handle, *placeholders], 0.0)
            fresh = self.table.remove_leaf(handle)
            self.table[fresh].opacity = 0.0
            self.transfer()
            yield from self._fade_entries([fresh], 1.0)
            self.transfer()
            return

        child = entry.right if placeholders[0] == entry.left else entry.left
        if announce:
            yield from self._flash(child)
        yield from self._fade_entries([handle, placeholders[0]], 0.0)
        self.table.splice_out(handle)
        self.transfer()
        if announce:
            yield from self._flash(child)

    def _flash(self, handle):
        self._restyle(handle, "successorNode")
        yield from self.wait()
        self._restyle(handle, "defaultNode")
        yield from self.wait()

    def _delete_with_successor(self, plan):
        target = plan.target
        yield from self._traverse_edge(target, self.table[target].right)
        for handle in plan.successor_path[:-1]:
            yield from self._move_cursor(handle)
            yield from self._traverse_edge(handle, self.table[handle].left, 1.5)

        successor = plan.successor
        key = self.table[successor].key
        self._restyle(successor, "successorNode")
        self._hide_cursor()
        yield from self.wait()

        self._restyle(target, "successorNode")
        yield from self._detach_animated(successor, announce=False)
        remaps = self.table.promote(target, key)
        logger.debug("promoted %s, id remaps %s", key, remaps)
        self.transfer()
        yield from self.wait()
        self._restyle(target, "defaultNode")
        yield from self.wait()

    # ---------- traversals ----------

    def _traversal(self, order):
        yield from self.before_animation_starts()
        header = TRAVERSAL_HEADERS[order]
        self.report(header)
        self._trail = header
        if not self.table.is_empty:
            walk = {
                "pre": self._pre_order,
                "in": self._in_order,
                "post": self._post_order,
                "level": self._level_order,
            }[order]
            yield from walk(self.table.root)
            self._hide_cursor()
        yield from self.after_animation_ends()

    def _real_children(self, handle):
        return [c for c in self.table.children(handle) if not self.table[c].is_placeholder]

    def _visit(self, handle):
        entry = self.table[handle]
        self._trail = f"{self._trail} {entry.key}"
        if self.output is not None:
            self.output.update_last(self._trail)
        self._restyle(handle, "highlightNode")
        yield from self.wait()
        self._restyle(handle, "defaultNode")
        yield from self.wait()

    def _pre_order(self, handle):
        yield from self._move_cursor(handle)
        yield from self._visit(handle)
        for child in self._real_children(handle):
            yield from self._traverse_edge(handle, child)
            yield from self._pre_order(child)

    def _in_order(self, handle):
        entry = self.table[handle]
        yield from self._move_cursor(handle)
        if not self.table[entry.left].is_placeholder:
            yield from self._traverse_edge(handle, entry.left)
            yield from self._in_order(entry.left)
            yield from self._move_cursor(handle)
        yield from self._visit(handle)
        if not self.table[entry.right].is_placeholder:
            yield from self._traverse_edge(handle, entry.right)
            yield from self._in_order(entry.right)

    def _post_order(self, handle):
        yield from self._move_cursor(handle)
        for child in self._real_children(handle):
            yield from self._traverse_edge(handle, child)
            yield from self._post_order(child)
            yield from self._move_cursor(handle)
        yield from self._visit(handle)

    def _level_order(self, root):
        pending = deque([root])
        while pending:
            handle = pending.popleft()
            yield from self._move_cursor(handle)
            yield from self._visit(handle)
            pending.extend(self._real_children(handle))

    # ---------- height ----------

    def _show_height(self):
        yield from self.before_animation_starts()
        height = yield from self._height(self.table.root)
        self.report("tree.height", {"height": height})
        yield from self.wait(1.5)
        yield from self.after_animation_ends()

    def _height(self, handle):
        if self.table[handle].is_placeholder:
            return 0
        self._restyle(handle, "highlightNode")
        yield from self.wait()
        heights = []
        for side in (LEFT, RIGHT):
            child = self.table.child(handle, side)
            if self.table[child].is_placeholder:
                heights.append(0)
                continue
            self._hot_edges.add((handle, child))
            self.transfer()
            yield from self.wait()
            heights.append((yield from self._height(child)))
            self._hot_edges.discard((handle, child))
            self.transfer()
            yield from self.wait()
        self._restyle(handle, "defaultNode")
        return max(heights) + 1

    # ---------- random ----------

    def _populate_random(self):
        self.init_structure()
        count = self.rng.randint(3, 7)
        keys = [self.rng.randint(0, 99) for _ in range(count)]
        for key in keys:
            self.table.insert(key)
        logger.debug("random tree with keys %s", self.table.keys())
        self.transfer()
