from PyQt5.QtWidgets import QLineEdit

from core.base_ctrl import StructureController


class ArrayController(StructureController):
    """
    Panel for the array-backed structures. Creating one asks for its
    capacity; the remaining labels come from the subclass.
    """

    ADD_LABEL = "Add"
    REMOVE_LABEL = "Remove"
    PEEK_LABEL = "Foremost"

    def _lifecycle_group(self):
        group = super()._lifecycle_group()
        self.count_edit = QLineEdit()
        self.count_edit.setPlaceholderText("Capacity")
        group.layout().insertWidget(0, self.count_edit)
        return group

    def _operation_groups(self):
        structure = self.structure
        return [
            self._input_group(self.ADD_LABEL, self.ADD_LABEL, self._add),
            self._group(
                "Remove / Peek",
                self._action(self.REMOVE_LABEL, structure.remove_element),
                self._action(self.PEEK_LABEL, structure.foremost_element),
            ),
            self._group(
                "State",
                self._action("Is Empty?", structure.is_empty),
                self._action("Is Full?", structure.is_full),
            ),
        ]

    def _on_init(self):
        count = self._read_count(self.count_edit)
        if count is None:
            return
        self.count_edit.clear()
        self.structure.init_structure(count)
        self._refresh_inputs()

    def _refresh_inputs(self):
        super()._refresh_inputs()
        self.count_edit.setDisabled(self.structure.is_init or self._locked)

    def _add(self, edit):
        value = self._read_value(edit)
        if value is not None:
            self.structure.add_element(value)
