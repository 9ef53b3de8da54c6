from typing import Optional

from arrayviz.arr_structure import ARRAY_EDGE_STYLES, ARRAY_NODE_STYLES, ArrayStructure
from core.graph_model import Node
from core.styles import HIGHLIGHT, NodeStyle

STACK_NODE_STYLES = {
    **ARRAY_NODE_STYLES,
    "topNode": NodeStyle(shape="marker", width=40, height=22, fill=HIGHLIGHT, stroke=HIGHLIGHT),
}


class Stack(ArrayStructure):
    """Array-backed stack; ``top`` is the index of the top slot or None when empty."""

    NODE_STYLES = STACK_NODE_STYLES
    EDGE_STYLES = ARRAY_EDGE_STYLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.top: Optional[int] = None

    def _reset_state(self):
        super()._reset_state()
        self.top = None

    @property
    def full(self) -> bool:
        return self.top is not None and self.top >= self.capacity - 1

    @property
    def empty(self) -> bool:
        return self.top is None

    def values(self) -> list:
        if self.top is None:
            return []
        return [slot.value for slot in self.slots[:self.top + 1]]

    def _store(self, value):
        self.top = 0 if self.top is None else self.top + 1
        self.write_slot(self.top, value)

    def _add_element(self, value):
        yield from self.before_animation_starts()
        if self.full:
            self.report("stack.addFull")
            yield from self.finish(False)
            return
        self._store(value)
        self.refresh()
        yield from self.after_animation_ends()

    def _remove_element(self):
        yield from self.before_animation_starts()
        if self.empty:
            self.report("stack.removeEmpty")
            yield from self.finish(False)
            return
        self.write_slot(self.top, "")
        self.top = self.top - 1 if self.top > 0 else None
        self.refresh()
        yield from self.after_animation_ends()

    def _is_empty(self):
        yield from self.before_animation_starts()
        self.report("stack.empty" if self.empty else "stack.notEmpty")
        yield from self.after_animation_ends()

    def _is_full(self):
        yield from self.before_animation_starts()
        self.report("stack.full" if self.full else "stack.notFull")
        yield from self.after_animation_ends()

    def _foremost_element(self):
        yield from self.before_animation_starts()
        if self.empty:
            self.report("stack.topError")
            yield from self.finish(False)
            return
        slot = self.slots[self.top]
        marker = Node("top", "Top", slot.x, slot.y - 60, "topNode")
        yield from self.add_overlay(marker)
        self.report("stack.top", {"value": slot.value})
        yield from self.wait(2)
        yield from self.remove_overlay(marker)
        yield from self.after_animation_ends()
