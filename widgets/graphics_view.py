from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPainter, QWheelEvent
from PyQt5.QtWidgets import QGraphicsView

ZOOM_STEP = 1.1
MIN_SCALE = 0.1
MAX_SCALE = 6.0


class CustomGraphicsView(QGraphicsView):
    """
    Shared canvas of all structures. Dragging pans, the wheel scrolls
    vertically and Ctrl + wheel zooms around the cursor. Scroll bars stay
    hidden since the structures recentre the view themselves.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        self.pan_factor = 0.2

    def wheelEvent(self, event: QWheelEvent):
        steps = event.angleDelta().y()
        if event.modifiers() & Qt.ControlModifier:
            self._zoom_by(ZOOM_STEP if steps > 0 else 1 / ZOOM_STEP)
        else:
            self.translate(0, -steps * self.pan_factor)
        event.accept()

    def _zoom_by(self, factor):
        scale = self.transform().m11() * factor
        if MIN_SCALE <= scale <= MAX_SCALE:
            self.scale(factor, factor)
