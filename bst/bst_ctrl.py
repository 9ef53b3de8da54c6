from bst.bst_structure import BinarySearchTree
from core.base_ctrl import StructureController


class BSTController(StructureController):
    """Operation panel for the binary search tree; keys are up to three digits."""

    TITLE = "Binary Search Tree"
    STRUCTURE_CLS = BinarySearchTree

    def _operation_groups(self):
        structure = self.structure
        return [
            self._input_group("Insert", "Insert", self._on_insert, "Key"),
            self._input_group("Delete", "Delete", self._on_delete, "Key"),
            self._input_group("Find", "Find", self._on_find, "Key"),
            self._group(
                "Traversal",
                self._action("PreOrder", structure.pre_order_traversal),
                self._action("InOrder", structure.in_order_traversal),
                self._action("PostOrder", structure.post_order_traversal),
                self._action("LevelOrder", structure.level_order_traversal),
            ),
            self._group("Height", self._action("Height", structure.show_height)),
        ]

    def _on_insert(self, edit):
        key = self._read_key(edit)
        if key is not None:
            self.structure.insert_node(key)

    def _on_delete(self, edit):
        key = self._read_key(edit)
        if key is not None:
            self.structure.delete_node(key)

    def _on_find(self, edit):
        key = self._read_key(edit)
        if key is not None:
            self.structure.search_node(key)
