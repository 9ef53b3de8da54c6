from core.base_ctrl import StructureController
from linklist.csl_structure import CircularSinglyLinkedList
from linklist.dl_structure import DoublyLinkedList
from linklist.sl_structure import SinglyLinkedList


class LinkedListController(StructureController):
    """Panel shared by the singly and circular lists."""

    TITLE = "Singly Linked List"
    STRUCTURE_CLS = SinglyLinkedList

    def _operation_groups(self):
        structure = self.structure
        return [
            self._input_group("Insert First", "Insert", self._insert_first),
            self._input_group("Insert After Active", "Insert", self._insert_after),
            self._input_group("Set Active Value", "Set", self._set_active),
            self._group(
                "Delete",
                self._action("Delete First", structure.delete_first_node),
                self._action("Delete After Active", structure.delete_after_active_node),
            ),
            self._group(
                "Activity",
                self._action("Activate First", structure.activate_first_node),
                self._action("Activate Next", structure.activate_next_node),
                self._action("Is Active?", structure.is_list_active),
            ),
            self._group(
                "Read",
                self._action("Get First Value", structure.get_first_node_value),
                self._action("Get Active Value", structure.get_active_node_value),
            ),
        ]

    def _insert_first(self, edit):
        value = self._read_value(edit)
        if value is not None:
            self.structure.insert_first_node(value)

    def _insert_after(self, edit):
        value = self._read_value(edit)
        if value is not None:
            self.structure.insert_after_active_node(value)

    def _set_active(self, edit):
        value = self._read_value(edit)
        if value is not None:
            self.structure.set_active_node_value(value)


class CircularListController(LinkedListController):
    TITLE = "Circular Singly Linked List"
    STRUCTURE_CLS = CircularSinglyLinkedList


class DoublyListController(LinkedListController):
    TITLE = "Doubly Linked List"
    STRUCTURE_CLS = DoublyLinkedList

    def _operation_groups(self):
        structure = self.structure
        return [
            *super()._operation_groups(),
            self._input_group("Insert Last", "Insert", self._insert_last),
            self._input_group("Insert Before Active", "Insert", self._insert_before),
            self._group(
                "Delete (back)",
                self._action("Delete Last", structure.delete_last_node),
                self._action("Delete Before Active", structure.delete_before_active_node),
            ),
            self._group(
                "Activity (back)",
                self._action("Activate Last", structure.activate_last_node),
                self._action("Activate Previous", structure.activate_previous_node),
                self._action("Get Last Value", structure.get_last_node_value),
            ),
        ]

    def _insert_last(self, edit):
        value = self._read_value(edit)
        if value is not None:
            self.structure.insert_last_node(value)

    def _insert_before(self, edit):
        value = self._read_value(edit)
        if value is not None:
            self.structure.insert_before_active_node(value)
