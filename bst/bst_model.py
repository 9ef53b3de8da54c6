import itertools
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

LEFT = "left"
RIGHT = "right"

ROOT_X = 0
ROOT_Y = 100
LEVEL_SPACING = 70
NODE_SPACING = 50


@dataclass(frozen=True)
class Key:
    value: int

    @property
    def graph_id(self):
        return self.value


@dataclass(frozen=True)
class Placeholder:
    """Null leaf; ``parent`` is None for the placeholder standing in for an empty tree."""

    parent: Optional[Key] = None
    side: Optional[str] = None

    @property
    def graph_id(self):
        if self.parent is None:
            return "nullNode"
        return f"null-{self.parent.value}-{self.side}"


NodeRef = Union[Key, Placeholder]
Remap = Tuple[object, object]


@dataclass
class TreeEntry:
    handle: int
    key: Optional[int] = None
    parent: Optional[int] = None
    side: Optional[str] = None
    left: Optional[int] = None
    right: Optional[int] = None
    cls: str = "nullNode"
    opacity: float = 1.0
    x: float = 0.0
    y: float = 0.0

    @property
    def is_placeholder(self) -> bool:
        return self.key is None


@dataclass
class RemovalPlan:
    """
    Where a key sits and which deletion case applies.

    ``path`` lists the handles visited from the root down to the target (or
    to the placeholder where the search ended). For the two-children case
    ``successor_path`` runs from the target's right child down to the
    in-order successor.
    """

    case: str
    path: List[int]
    target: Optional[int] = None
    successor_path: Optional[List[int]] = None

    @property
    def successor(self) -> Optional[int]:
        return self.successor_path[-1] if self.successor_path else None


MISSING = "missing"
LEAF = "leaf"
ONE_CHILD = "one_child"
TWO_CHILDREN = "two_children"


class TreeTable:
    """
    Binary search tree kept as a full binary tree: every key entry has two
    children, each either another key entry or a placeholder entry.

    Entries are addressed by stable integer handles; the renderer-facing
    identity of an entry is derived on demand from its ``NodeRef``.
    """

    def __init__(self):
        self._handles = itertools.count()
        self._entries: Dict[int, TreeEntry] = {}
        self.root: int = self._new_entry().handle

    def clear(self):
        self._handles = itertools.count()
        self._entries = {}
        self.root = self._new_entry().handle

    # ---------- lookup ----------

    def __getitem__(self, handle) -> TreeEntry:
        return self._entries[handle]

    def __len__(self):
        return len(self._entries)

    def __iter__(self) -> Iterator[TreeEntry]:
        return iter(self.walk_pre_order())

    @property
    def is_empty(self) -> bool:
        return self._entries[self.root].is_placeholder

    def ref(self, handle) -> NodeRef:
        entry = self._entries[handle]
        if not entry.is_placeholder:
            return Key(entry.key)
        if entry.parent is None:
            return Placeholder()
        return Placeholder(Key(self._entries[entry.parent].key), entry.side)

    def graph_id(self, handle):
        return self.ref(handle).graph_id

    def find(self, key) -> Optional[int]:
        path = self.descend(key)
        last = self._entries[path[-1]]
        return None if last.is_placeholder else last.handle

    def descend(self, key) -> List[int]:
        """Handles from the root to the entry holding ``key`` or the placeholder where it would go."""
        path = [self.root]
        entry = self._entries[self.root]
        while not entry.is_placeholder and entry.key != key:
            entry = self._entries[entry.left if key < entry.key else entry.right]
            path.append(entry.handle)
        return path

    def child(self, handle, side) -> int:
        entry = self._entries[handle]
        return entry.left if side == LEFT else entry.right

    def children(self, handle) -> List[int]:
        entry = self._entries[handle]
        if entry.is_placeholder:
            return []
        return [entry.left, entry.right]

    def keys(self) -> List[int]:
        return [entry.key for entry in self.walk_in_order() if not entry.is_placeholder]

    def walk_pre_order(self, handle=None) -> List[TreeEntry]:
        handle = self.root if handle is None else handle
        entry = self._entries[handle]
        result = [entry]
        for child in self.children(handle):
            result.extend(self.walk_pre_order(child))
        return result

    def walk_in_order(self, handle=None) -> List[TreeEntry]:
        handle = self.root if handle is None else handle
        entry = self._entries[handle]
        if entry.is_placeholder:
            return [entry]
        return [*self.walk_in_order(entry.left), entry, *self.walk_in_order(entry.right)]

    def height(self, handle=None) -> int:
        handle = self.root if handle is None else handle
        entry = self._entries[handle]
        if entry.is_placeholder:
            return 0
        return max(self.height(entry.left), self.height(entry.right)) + 1

    # ---------- layout ----------

    def layout(self):
        """
        In-order index (placeholders included) drives x, depth drives y;
        everything is then shifted so the root sits at ROOT_X.
        """
        counter = itertools.count()

        def place(handle, depth):
            entry = self._entries[handle]
            if not entry.is_placeholder:
                place(entry.left, depth + 1)
            entry.x = ROOT_X + next(counter) * NODE_SPACING
            entry.y = ROOT_Y + depth * LEVEL_SPACING
            if not entry.is_placeholder:
                place(entry.right, depth + 1)

        place(self.root, 0)
        offset = self._entries[self.root].x - ROOT_X
        for entry in self._entries.values():
            entry.x -= offset

    # ---------- mutation ----------

    def _new_entry(self, **fields) -> TreeEntry:
        entry = TreeEntry(handle=next(self._handles), **fields)
        self._entries[entry.handle] = entry
        return entry

    def fill_placeholder(self, handle, key) -> TreeEntry:
        """Turn a placeholder into a key entry in place; children are added separately."""
        entry = self._entries[handle]
        if not entry.is_placeholder:
            raise ValueError(f"entry {handle} already holds key {entry.key}")
        entry.key = key
        entry.cls = "defaultNode"
        entry.opacity = 0.0
        return entry

    def add_placeholder(self, parent, side, opacity=1.0) -> TreeEntry:
        entry = self._new_entry(parent=parent, side=side, opacity=opacity)
        setattr(self._entries[parent], side, entry.handle)
        return entry

    def insert(self, key) -> Optional[int]:
        """Insert without animation; returns the new handle or None for a duplicate."""
        target = self.descend(key)[-1]
        if not self._entries[target].is_placeholder:
            return None
        entry = self.fill_placeholder(target, key)
        entry.opacity = 1.0
        self.add_placeholder(target, LEFT)
        self.add_placeholder(target, RIGHT)
        return target

    def _replace_in_parent(self, old, new):
        old_entry = self._entries[old]
        new_entry = self._entries[new]
        new_entry.parent = old_entry.parent
        new_entry.side = old_entry.side
        if old_entry.parent is None:
            self.root = new
        else:
            setattr(self._entries[old_entry.parent], old_entry.side, new)

    def remove_leaf(self, handle) -> int:
        """Drop a key entry whose children are both placeholders; a fresh placeholder takes its slot."""
        entry = self._entries[handle]
        for child in (entry.left, entry.right):
            del self._entries[child]
        fresh = self._new_entry()
        self._replace_in_parent(handle, fresh.handle)
        del self._entries[handle]
        return fresh.handle

    def splice_out(self, handle) -> int:
        """Drop a key entry with one real child; the child moves up into its slot."""
        entry = self._entries[handle]
        left, right = self._entries[entry.left], self._entries[entry.right]
        child, discarded = (left, right) if right.is_placeholder else (right, left)
        del self._entries[discarded.handle]
        self._replace_in_parent(handle, child.handle)
        del self._entries[handle]
        return child.handle

    def detach(self, handle) -> Optional[int]:
        """Remove a key entry having at most one real child."""
        entry = self._entries[handle]
        if self._entries[entry.left].is_placeholder and self._entries[entry.right].is_placeholder:
            return self.remove_leaf(handle)
        return self.splice_out(handle)

    def promote(self, handle, key) -> List[Remap]:
        """
        Show ``key`` in the entry ``handle`` (which keeps its position and
        children). Returns the (old graph id, new graph id) pairs this
        renaming causes, covering the entry and its placeholder children.
        """
        entry = self._entries[handle]
        affected = [handle, *[c for c in self.children(handle) if self._entries[c].is_placeholder]]
        before = [self.graph_id(h) for h in affected]
        entry.key = key
        after = [self.graph_id(h) for h in affected]
        return list(zip(before, after))

    # ---------- removal planning ----------

    def plan_removal(self, key) -> RemovalPlan:
        path = self.descend(key)
        target = self._entries[path[-1]]
        if target.is_placeholder:
            return RemovalPlan(MISSING, path)
        left, right = self._entries[target.left], self._entries[target.right]
        if left.is_placeholder and right.is_placeholder:
            return RemovalPlan(LEAF, path, target.handle)
        if left.is_placeholder or right.is_placeholder:
            return RemovalPlan(ONE_CHILD, path, target.handle)
        successor_path = [right.handle]
        current = right
        while not self._entries[current.left].is_placeholder:
            current = self._entries[current.left]
            successor_path.append(current.handle)
        return RemovalPlan(TWO_CHILDREN, path, target.handle, successor_path=successor_path)

    def apply_removal(self, plan: RemovalPlan) -> List[Remap]:
        if plan.case == MISSING:
            return []
        if plan.case == TWO_CHILDREN:
            key = self._entries[plan.successor].key
            self.detach(plan.successor)
            return self.promote(plan.target, key)
        self.detach(plan.target)
        return []

    def remove(self, key) -> List[Remap]:
        return self.apply_removal(self.plan_removal(key))
