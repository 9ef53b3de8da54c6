"""
Animated building blocks shared by the linked-list variants.

Every function takes the list structure as its first argument and is a
generator meant to be driven with ``yield from`` inside an operation.
"""

from core.graph_model import Edge, Node
from linklist.list_base import NODE_Y, POINTER_CLS, POINTER_Y


def add_node(lst, node: Node, normalize=True):
    lst.graph.add_node(node)
    if normalize:
        lst.normalize()
    lst.refresh()
    yield from lst.fade([node], 1.0)
    yield from lst.wait()


def add_edges(lst, edges, classify=True):
    for edge in edges:
        lst.graph.add_edge(edge)
        if classify:
            lst.classify()
        lst.refresh()
        yield from lst.fade([edge], 1.0)
    yield from lst.wait()


def fade_out_batch(lst, edges, nodes, normalize=True):
    """Fade edges and nodes out together, then drop them from the model."""
    edges = [edge for edge in edges if edge is not None]
    yield from lst.fade([*edges, *nodes], 0.0)
    for edge in edges:
        lst.graph.remove_edge(edge)
    for node in nodes:
        lst.remove_node(node)
    if normalize:
        lst.normalize()
    lst.refresh()


def add_temp_pointer(lst, target: Node):
    temp = Node("temp", "Temp Pointer", target.x, target.y - 100, POINTER_CLS, opacity=0.0)
    yield from add_node(lst, temp, normalize=False)
    yield from add_edges(lst, [Edge(temp.id, target.id, "defaultEdge", opacity=0.0)], classify=False)
    return temp


def shift_range(lst, lo, hi, dx, wait=True):
    """Move nodes lo..hi (inclusive) horizontally; positions only, ids stay."""
    for node in lst.nodes[lo:hi + 1]:
        node.x += dx
    lst.graph.touch()
    lst.refresh()
    if wait:
        yield from lst.wait()


def splice_new_node(lst, index):
    """Move the freshly appended node to ``index`` and lift it onto the list row."""
    node = lst.graph.pop_node()
    node.y = NODE_Y
    lst.graph.insert_node(index, node)
    if lst.active is not None and index <= lst.active:
        lst.active += 1
    lst.normalize()
    lst.refresh()


def restyle_edge(lst, edge: Edge, cls):
    edge.cls = cls
    lst.graph.touch()
    lst.refresh()


def classify_by_out_degree(lst):
    """Nodes without an outgoing edge show a NULL next field."""
    sources = {edge.source for edge in lst.graph.edges}
    for index, node in enumerate(lst.nodes):
        if index < lst.FIRST_INDEX or node.cls == POINTER_CLS:
            continue
        active = index == lst.active
        if node.id in sources:
            node.cls = "activeNode" if active else "defaultNode"
        else:
            node.cls = "activeNodeWithNull" if active else "nodeWithNull"


# ---------- singly-linked choreographies (also used by the circular list) ----------

def append_after(lst, pred: Node, value, edge_cls):
    offset = 1.6 * lst.NODE_WIDTH if pred.cls == POINTER_CLS else lst.step
    node = lst.make_node(value, pred.x + offset, NODE_Y)
    yield from add_node(lst, node)
    yield from add_edges(lst, [Edge(pred.id, node.id, edge_cls, opacity=0.0)])
    return node


def insert_between(lst, pred: Node, succ: Node, value):
    index = lst.graph.index_of_node(succ)
    node = lst.make_node(value, succ.x, lst.new_node_y)
    yield from add_node(lst, node)
    yield from shift_range(lst, index, len(lst.nodes) - 2, lst.step)
    yield from add_edges(lst, [Edge(node.id, succ.id, "edgeFromNewNode", opacity=0.0)])
    yield from fade_out_batch(lst, [lst.find_edge(pred, succ)], [])
    yield from add_edges(lst, [Edge(pred.id, node.id, "edgeToNewNode", opacity=0.0)])
    splice_new_node(lst, index)
    return node


def bypass_and_remove(lst, pred: Node, victim: Node, succ: Node, arc_cls, settled_cls):
    """
    Mark ``victim`` with a temporary pointer, route ``pred`` around it with
    an arc edge, remove it and close the gap.
    """
    index = lst.graph.index_of_node(victim)
    temp = yield from add_temp_pointer(lst, victim)
    yield from fade_out_batch(lst, [lst.find_edge(pred, victim)], [], normalize=False)
    bypass = Edge(pred.id, succ.id, arc_cls, opacity=0.0)
    yield from add_edges(lst, [bypass], classify=False)
    yield from fade_out_batch(
        lst,
        [lst.find_edge(victim, succ), lst.find_edge(temp, victim)],
        [victim, temp],
    )
    yield from shift_range(lst, index, len(lst.nodes) - 1, -lst.step, wait=False)
    restyle_edge(lst, bypass, settled_cls)


def insert_first(lst, value):
    init = lst.nodes[0]
    if lst.is_empty:
        yield from append_after(lst, init, value, "edgeToNewNode")
    else:
        yield from insert_between(lst, init, lst.first_node, value)


def delete_first(lst) -> bool:
    if lst.is_empty:
        lst.report("list.deleteFirstEmpty")
        return False
    init, first = lst.nodes[0], lst.first_node
    if len(lst.nodes) == 2:
        yield from fade_out_batch(lst, [lst.find_edge(init, first)], [first])
    else:
        yield from bypass_and_remove(
            lst, init, first, lst.nodes[2], "edgeOverDeletingFirstNode", "edgeToNewNode"
        )
    return True


def insert_after_active(lst, value):
    active = lst.active_node
    if lst.active == len(lst.nodes) - 1:
        yield from append_after(lst, active, value, "defaultEdge")
    else:
        yield from insert_between(lst, active, lst.nodes[lst.active + 1], value)


def delete_after_active(lst) -> bool:
    if lst.active == len(lst.nodes) - 1:
        lst.report("list.deleteAfterEmpty")
        return False
    active = lst.active_node
    victim = lst.nodes[lst.active + 1]
    if lst.active == len(lst.nodes) - 2:
        yield from fade_out_batch(lst, [lst.find_edge(active, victim)], [victim])
    else:
        yield from bypass_and_remove(
            lst, active, victim, lst.nodes[lst.active + 2],
            "edgeOverDeletingAfterNode", "defaultEdge",
        )
    return True


def add_init_pointer(lst):
    lst.graph.add_node(Node(0, "Init Pointer", 250, POINTER_Y, POINTER_CLS))


def build_random_chain(lst):
    """Append 2-5 linked nodes with random values 0..99 without animation."""
    previous = lst.nodes[0]
    for index in range(lst.rng.randint(2, 5)):
        offset = 1.6 * lst.NODE_WIDTH if index == 0 else lst.step
        node = lst.graph.add_node(
            Node(len(lst.nodes), lst.rng.randint(0, 99), previous.x + offset, NODE_Y)
        )
        lst.graph.add_edge(Edge(previous.id, node.id, "edgeToNewNode"))
        previous = node
