import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

_handles = itertools.count()


@dataclass
class Node:
    """
    One drawable element of a structure. ``id`` is the renderer-facing key
    (an int index for lists, a string for slots and pointers, the key for
    tree nodes); ``handle`` never changes for the lifetime of the object.
    """

    id: Any
    value: Any
    x: float
    y: float
    cls: str = "defaultNode"
    opacity: float = 1.0
    handle: int = field(default_factory=lambda: next(_handles), compare=False)

    def as_tuple(self) -> Tuple:
        return (self.id, self.value, self.x, self.y, self.cls, self.opacity)


@dataclass
class Edge:
    source: Any
    target: Any
    cls: str = "defaultEdge"
    opacity: float = 1.0
    handle: int = field(default_factory=lambda: next(_handles), compare=False)

    def as_tuple(self) -> Tuple:
        return (self.source, self.target, self.cls, self.opacity)


class GraphModel:
    """
    Ordered node / edge lists shared between a structure and its renderer.

    Node order is meaningful: for linked lists the array index is the node id
    once ``renumber`` has run. Every structural mutation bumps ``version``.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.version = 0

    def touch(self):
        self.version += 1

    def clear(self):
        self.nodes = []
        self.edges = []
        self.touch()

    # ---------- nodes ----------

    def add_node(self, node: Node) -> Node:
        self.nodes.append(node)
        self.touch()
        return node

    def insert_node(self, index: int, node: Node) -> Node:
        self.nodes.insert(index, node)
        self.touch()
        return node

    def pop_node(self, index: int = -1) -> Node:
        node = self.nodes.pop(index)
        self.touch()
        return node

    def remove_node(self, node: Node) -> int:
        """Remove by handle and return the index the node occupied."""
        index = self.index_of_node(node)
        if index < 0:
            raise LookupError(f"node {node.id!r} is not part of the graph")
        del self.nodes[index]
        self.touch()
        return index

    def index_of_node(self, node: Node) -> int:
        for index, candidate in enumerate(self.nodes):
            if candidate.handle == node.handle:
                return index
        return -1

    # ---------- edges ----------

    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        self.touch()
        return edge

    def remove_edge(self, edge: Edge):
        for index, candidate in enumerate(self.edges):
            if candidate.handle == edge.handle:
                del self.edges[index]
                self.touch()
                return
        raise LookupError(f"edge {edge.source!r}->{edge.target!r} is not part of the graph")

    def find_edge(
        self,
        source=None,
        target=None,
        where: Optional[Callable[[Edge], bool]] = None,
    ) -> Optional[Edge]:
        """
        First edge in array order matching the given endpoints. ``None``
        for an endpoint means "any".
        """
        for edge in self.edges:
            if source is not None and edge.source != source:
                continue
            if target is not None and edge.target != target:
                continue
            if where is not None and not where(edge):
                continue
            return edge
        return None

    def out_degree(self) -> Dict[Any, int]:
        counts: Dict[Any, int] = {}
        for edge in self.edges:
            counts[edge.source] = counts.get(edge.source, 0) + 1
        return counts

    # ---------- normalisation ----------

    def renumber(self) -> Dict[Any, int]:
        """
        Re-key every node to its array index, then rewrite edge endpoints.
        All nodes are mapped before any edge is touched; endpoints that do
        not refer to a node (e.g. a temporary pointer) are left alone.
        """
        id_map: Dict[Any, int] = {}
        for index, node in enumerate(self.nodes):
            id_map[node.id] = index
        for index, node in enumerate(self.nodes):
            node.id = index
        for edge in self.edges:
            edge.source = id_map.get(edge.source, edge.source)
            edge.target = id_map.get(edge.target, edge.target)
        self.touch()
        return id_map

