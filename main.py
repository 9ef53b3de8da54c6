import argparse
import logging
import sys

from PyQt5.QtCore import QSettings, Qt
from PyQt5.QtGui import QTextCursor
from PyQt5.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QStackedWidget,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from bst.bst_ctrl import BSTController
from core.global_ctrl import GlobalController
from linklist.list_ctrl import CircularListController, DoublyListController, LinkedListController
from queueviz.q_ctrl import QueueController
from stack.st_ctrl import StackController
from widgets.graphics_view import CustomGraphicsView

logger = logging.getLogger(__name__)

CONTROLLERS = (
    LinkedListController,
    DoublyListController,
    CircularListController,
    StackController,
    QueueController,
    BSTController,
)


def _speed_text(speed):
    return f"{speed:.1f}×"


class MainWindow(QMainWindow):
    """
    Structure picker and canvas on the left, the output log on the right.
    Every structure keeps its own controller; switching only swaps the
    scene shown by the shared canvas and the visible operation panel.
    """

    def __init__(self, settings=None):
        super().__init__()
        self.setWindowTitle("Data Structure Visualizer")
        self.resize(1280, 760)

        self.global_ctrl = GlobalController(settings)
        self._controllers = {}
        self._current = None
        self._log_lines = []

        central = QWidget(self)
        columns = QHBoxLayout(central)
        columns.setContentsMargins(8, 8, 8, 8)
        columns.setSpacing(8)
        columns.addWidget(self._canvas_column(), 14)
        columns.addWidget(self._output_column(), 6)
        self.setCentralWidget(central)

        for controller_cls in CONTROLLERS:
            self._register(controller_cls(self.global_ctrl))

        self.picker.currentTextChanged.connect(self._switch_to)
        if self._controllers:
            self._switch_to(self.picker.currentText())

    # ---------- layout ----------

    def _canvas_column(self):
        column = QWidget()
        layout = QVBoxLayout(column)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        header = QHBoxLayout()
        self.picker = QComboBox()
        self.picker.setObjectName("structureSelectCombo")
        center_btn = QPushButton("Center graph")
        center_btn.clicked.connect(self._center_current)
        header.addWidget(QLabel("Data Structure:"))
        header.addWidget(self.picker, 1)
        header.addWidget(center_btn)
        layout.addLayout(header)

        self.canvas = CustomGraphicsView()
        layout.addWidget(self.canvas, 1)

        self.status_label = QLabel("")
        self.status_label.setObjectName("statusLabel")
        layout.addWidget(self.status_label)

        layout.addLayout(self._playback_row())
        self.panels = QStackedWidget()
        layout.addWidget(self.panels)
        return column

    def _playback_row(self):
        row = QHBoxLayout()
        speed = self.global_ctrl.speed
        self.speed_label = QLabel(_speed_text(speed))
        slider = QSlider(Qt.Horizontal)
        slider.setRange(50, 300)  # 0.5x to 3x
        slider.setValue(int(round(speed * 100)))
        slider.valueChanged.connect(self._on_speed)
        centering = QCheckBox("Auto-centering")
        centering.setChecked(self.global_ctrl.centering_enabled)
        centering.toggled.connect(self.global_ctrl.set_centering)

        row.addWidget(QLabel("Animation Speed"))
        row.addWidget(slider, 1)
        row.addWidget(self.speed_label)
        row.addWidget(centering)
        return row

    def _output_column(self):
        column = QWidget()
        layout = QVBoxLayout(column)
        layout.setContentsMargins(0, 0, 0, 0)
        self.output = QTextEdit()
        self.output.setReadOnly(True)
        clear_btn = QPushButton("Clear output")
        clear_btn.clicked.connect(self._clear_log)
        layout.addWidget(QLabel("Output"))
        layout.addWidget(self.output, 1)
        layout.addWidget(clear_btn)
        return column

    def _register(self, controller):
        controller.panel_index = self.panels.addWidget(controller.build_panel())
        view = controller.view
        view.messageReported.connect(self._append_log)
        view.lastMessageUpdated.connect(self._replace_last_log)
        view.statusTextChanged.connect(self.status_label.setText)
        view.interactionLocked.connect(self.picker.setDisabled)
        self._controllers[controller.TITLE] = controller
        self.picker.addItem(controller.TITLE)

    # ---------- slots ----------

    def _on_speed(self, value):
        speed = value / 100.0
        self.speed_label.setText(_speed_text(speed))
        self.global_ctrl.set_speed(speed)

    def _center_current(self):
        if self._current is not None:
            self._current.center()

    def _switch_to(self, title):
        controller = self._controllers.get(title)
        if controller is None or controller is self._current:
            return
        if self._current is not None:
            self._current.on_deactivate()
        controller.on_activate(self.canvas)
        self.panels.setCurrentIndex(controller.panel_index)
        self._current = controller
        logger.debug("showing %s", title)

    # ---------- output log ----------

    def _append_log(self, text):
        self._log_lines.append(text)
        self._show_log()

    def _replace_last_log(self, text):
        if self._log_lines:
            self._log_lines[-1] = text
        else:
            self._log_lines.append(text)
        self._show_log()

    def _clear_log(self):
        self._log_lines = []
        self._show_log()

    def _show_log(self):
        self.output.setPlainText("\n".join(self._log_lines))
        self.output.moveCursor(QTextCursor.End)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Animated data structure visualizer")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv[:1])
    window = MainWindow(QSettings("DataStructureVisualizer", "Visualizer"))
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
