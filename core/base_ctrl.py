import logging
from typing import Optional

from PyQt5.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from core.base_view import GraphSceneView
from core.messages import format_message

logger = logging.getLogger(__name__)

GROUP_STYLE = """
    QGroupBox {
        border: 1px solid #d5d5d5;
        border-radius: 6px;
        margin-top: 12px;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 6px;
        color: #ffffff;
    }
"""


class StructureController(QWidget):
    """
    Operation panel for one structure. Owns the structure and its
    ``GraphSceneView`` (which is renderer, logger and status reporter at
    once), validates text input and keeps the controls disabled until the
    structure is initialized and while an animation runs.
    """

    TITLE = ""
    STRUCTURE_CLS = None

    def __init__(self, global_ctrl, rng=None):
        super().__init__()
        self.view = GraphSceneView(global_ctrl)
        self.structure = self.STRUCTURE_CLS(
            global_ctrl=global_ctrl,
            renderer=self.view,
            output=self.view,
            status=self.view,
            rng=rng,
        )
        self.panel_index = -1
        self._locked = False
        self._needs_init = []
        self.panel = self._create_panel()
        self.view.interactionLocked.connect(self._on_lock_state)
        self._refresh_inputs()

    # ---------- UI ----------

    def _create_panel(self):
        container = QWidget()
        layout = QGridLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setHorizontalSpacing(12)
        layout.setVerticalSpacing(12)
        layout.setColumnStretch(0, 1)
        layout.setColumnStretch(1, 1)
        layout.setColumnStretch(2, 1)

        groups = [self._lifecycle_group(), *self._operation_groups()]
        for index, group in enumerate(groups):
            layout.addWidget(group, index // 3, index % 3)
        layout.setRowStretch(len(groups) // 3 + 1, 1)
        return container

    def _lifecycle_group(self):
        self.init_btn = self._button("Create", self._on_init)
        self.reset_btn = self._button("Reset", self._on_reset)
        self.random_btn = self._button("Random", self._on_random)
        return self._group("Structure", self.init_btn, self.reset_btn, self.random_btn)

    def _operation_groups(self):
        return []

    @staticmethod
    def _group(title, *widgets):
        group = QGroupBox(title)
        group.setStyleSheet(GROUP_STYLE)
        vlayout = QVBoxLayout(group)
        vlayout.setContentsMargins(12, 20, 12, 12)
        vlayout.setSpacing(8)
        for widget in widgets:
            vlayout.addWidget(widget)
        return group

    @staticmethod
    def _button(text, handler):
        button = QPushButton(text)
        button.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        button.clicked.connect(handler)
        return button

    def _action(self, text, handler):
        """Button that only works once the structure exists."""
        button = self._button(text, handler)
        self._needs_init.append(button)
        return button

    def _input(self, placeholder="Value"):
        edit = QLineEdit()
        edit.setPlaceholderText(placeholder)
        self._needs_init.append(edit)
        return edit

    def _input_group(self, title, button_text, handler, placeholder="Value"):
        """Group with a line edit and a button; ``handler`` receives the edit."""
        edit = self._input(placeholder)
        button = self._action(button_text, lambda: handler(edit))
        edit.returnPressed.connect(lambda: handler(edit))
        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(0, 0, 0, 0)
        row_layout.addWidget(edit, 1)
        row_layout.addWidget(button)
        return self._group(title, row)

    def build_panel(self):
        return self.panel

    # ---------- lifecycle ----------

    def on_activate(self, graphics_view):
        self.view.bind_canvas(graphics_view)
        self.structure.center_canvas(force=True)

    def on_deactivate(self):
        self.view.bind_canvas(None)

    def center(self):
        self.structure.center_canvas(force=True)

    def _on_init(self):
        self.structure.init_structure()
        self._refresh_inputs()

    def _on_reset(self):
        self.structure.reset_structure()
        self._refresh_inputs()

    def _on_random(self):
        self.structure.random_structure()
        self._refresh_inputs()

    # ---------- validation ----------

    def _warn(self, key):
        logger.debug("%s: input rejected (%s)", self.TITLE, key)
        QMessageBox.warning(self, self.TITLE, format_message(key))

    def _read_value(self, edit: QLineEdit) -> Optional[str]:
        text = edit.text().strip()
        if not text:
            self._warn("errors.emptyInput")
            return None
        if len(text) > 3:
            self._warn("errors.max3Chars")
            return None
        edit.clear()
        return text

    def _read_key(self, edit: QLineEdit) -> Optional[int]:
        text = edit.text().strip()
        if not text:
            self._warn("errors.emptyInput")
            return None
        if not text.isdigit():
            self._warn("errors.onlyDigits")
            return None
        if len(text) > 3:
            self._warn("errors.max3Digits")
            return None
        edit.clear()
        return int(text)

    def _read_count(self, edit: QLineEdit) -> Optional[int]:
        text = edit.text().strip()
        if not text:
            self._warn("errors.emptyInput")
            return None
        try:
            count = int(text)
        except ValueError:
            self._warn("errors.inputNumber")
            return None
        if count <= 0:
            self._warn("errors.biggerThanZero")
            return None
        if count >= 100:
            self._warn("errors.lessThanHundred")
            return None
        return count

    # ---------- state ----------

    def _refresh_inputs(self):
        ready = self.structure.is_init and not self._locked
        self.init_btn.setDisabled(self.structure.is_init or self._locked)
        self.reset_btn.setDisabled(self._locked)
        self.random_btn.setDisabled(self._locked)
        for widget in self._needs_init:
            widget.setDisabled(not ready)

    def _on_lock_state(self, locked):
        self._locked = locked
        self._refresh_inputs()
