import math

from PyQt5.QtCore import QObject, QPointF, QRectF, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont, QFontMetrics, QPainterPath, QPen, QPolygonF
from PyQt5.QtWidgets import QGraphicsObject, QGraphicsScene

from core.animation import AnimationToolkit
from core.messages import format_message
from core.styles import EdgeStyle, NodeStyle

DEFAULT_CANVAS = (1000.0, 700.0)
SCENE_MARGIN = 2000


class NodeItem(QGraphicsObject):
    """One graph node, drawn centred on its position from a ``NodeStyle``."""

    LABEL_GAP = 6

    def __init__(self, node_id, value, style: NodeStyle):
        super().__init__()
        self.node_id = node_id
        self.style = style
        self._value = "" if value is None else str(value)
        self._font = QFont()
        self._font.setPointSize(12 if style.shape in ("box", "round", "ellipse") else 10)
        self._font.setBold(style.bold)
        self.setZValue(10)

    def value(self):
        return self._value

    def half_size(self):
        return self.style.width / 2.0, self.style.height / 2.0

    def _label_rect(self):
        metrics = QFontMetrics(self._font)
        width = max(self.style.width, metrics.horizontalAdvance(self._value) + 8)
        top = self.style.height / 2.0 + self.LABEL_GAP
        return QRectF(-width / 2.0, top, width, metrics.height())

    def boundingRect(self):
        w, h = self.half_size()
        rect = QRectF(-w, -h, 2 * w, 2 * h).adjusted(-2, -2, 2, 2)
        if self.style.shape in ("pointer", "marker") and self._value:
            rect = rect.united(self._label_rect())
        return rect

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        style = self.style
        w, h = self.half_size()
        body = QRectF(-w, -h, 2 * w, 2 * h)
        pen = QPen(QColor(style.stroke), style.border)
        painter.setPen(pen)
        painter.setBrush(QBrush(QColor(style.fill)))
        painter.setFont(self._font)

        if style.shape == "label":
            painter.setPen(QColor(style.text))
            painter.drawText(body, Qt.AlignCenter, self._value)
            return

        if style.shape in ("pointer", "marker"):
            if style.shape == "pointer":
                painter.drawRect(body)
            else:
                painter.drawPolygon(QPolygonF([QPointF(0, -h), QPointF(w, h), QPointF(-w, h)]))
            if self._value:
                painter.setPen(QColor(style.text))
                painter.drawText(self._label_rect(), Qt.AlignCenter, self._value)
            return

        if style.shape == "ellipse":
            painter.drawEllipse(body)
        elif style.shape == "round":
            painter.drawRoundedRect(body, 10, 10)
        else:
            painter.drawRect(body)

        text_rect = QRectF(body)
        cell = style.height * 0.6
        if style.null_right:
            self._draw_null_cell(painter, QRectF(body.right() - cell, body.top(), cell, body.height()))
            text_rect.setRight(body.right() - cell)
        if style.null_left:
            self._draw_null_cell(painter, QRectF(body.left(), body.top(), cell, body.height()))
            text_rect.setLeft(body.left() + cell)
        painter.setPen(QColor(style.text))
        painter.drawText(text_rect, Qt.AlignCenter, self._value)

    def _draw_null_cell(self, painter, cell):
        painter.drawLine(cell.topLeft(), cell.bottomLeft())
        painter.drawLine(cell.topLeft(), cell.bottomRight())


class EdgeItem(QGraphicsObject):
    """Directed edge between two ``NodeItem``s, routed according to an ``EdgeStyle``."""

    HEAD_LENGTH = 12
    HEAD_ANGLE = 26

    def __init__(self, start_item: NodeItem, end_item: NodeItem, style: EdgeStyle):
        super().__init__()
        self.start_item = start_item
        self.end_item = end_item
        self.style = style
        self._path = QPainterPath()
        self._head = QPainterPath()
        self.setZValue(5)
        self.update_path()

    def pen(self):
        pen = QPen(QColor(self.style.color), self.style.width)
        pen.setCapStyle(Qt.RoundCap)
        pen.setJoinStyle(Qt.RoundJoin)
        if self.style.dashed:
            pen.setStyle(Qt.DashLine)
        return pen

    def boundingRect(self):
        pad = self.HEAD_LENGTH + self.style.width
        return self._path.boundingRect().united(self._head.boundingRect()).adjusted(-pad, -pad, pad, pad)

    @staticmethod
    def _boundary(item: NodeItem, toward: QPointF) -> QPointF:
        """Point where the segment from the item's centre to ``toward`` leaves its box."""
        center = item.pos()
        dx = toward.x() - center.x()
        dy = toward.y() - center.y()
        if abs(dx) < 1e-6 and abs(dy) < 1e-6:
            return QPointF(center)
        w, h = item.half_size()
        if item.style.shape == "ellipse":
            scale = 1.0 / math.sqrt((dx / w) ** 2 + (dy / h) ** 2)
        else:
            scale = min(w / abs(dx) if dx else math.inf, h / abs(dy) if dy else math.inf)
        return QPointF(center.x() + dx * scale, center.y() + dy * scale)

    def update_path(self):
        self.prepareGeometryChange()
        start = self.start_item.pos()
        end = self.end_item.pos()
        route = self.style.route
        path = QPainterPath()

        if route == "loop" or self.start_item is self.end_item:
            w, h = self.start_item.half_size()
            origin = QPointF(start.x() + w, start.y() - h / 3)
            back = QPointF(start.x() + w, start.y() + h / 3)
            path.moveTo(origin)
            path.cubicTo(
                QPointF(origin.x() + self.style.bend, origin.y() - self.style.bend),
                QPointF(back.x() + self.style.bend, back.y() + self.style.bend),
                back,
            )
        elif route == "under":
            _, start_h = self.start_item.half_size()
            _, end_h = self.end_item.half_size()
            origin = QPointF(start.x(), start.y() + start_h)
            target = QPointF(end.x(), end.y() + end_h)
            low = max(origin.y(), target.y()) + self.style.bend
            path.moveTo(origin)
            path.cubicTo(QPointF(origin.x(), low), QPointF(target.x(), low), target)
        elif route == "curve":
            dx = end.x() - start.x()
            dy = end.y() - start.y()
            length = math.hypot(dx, dy) or 1.0
            mid = QPointF((start.x() + end.x()) / 2.0, (start.y() + end.y()) / 2.0)
            ctrl = QPointF(mid.x() + dy / length * self.style.bend, mid.y() - dx / length * self.style.bend)
            origin = self._boundary(self.start_item, ctrl)
            target = self._boundary(self.end_item, ctrl)
            path.moveTo(origin)
            path.quadTo(ctrl, target)
        else:
            path.moveTo(self._boundary(self.start_item, end))
            path.lineTo(self._boundary(self.end_item, start))

        self._path = path
        self._head = self._build_arrow_head(path)
        self.update()

    def _build_arrow_head(self, path: QPainterPath) -> QPainterPath:
        end_point = path.pointAtPercent(1.0)
        tangent = path.angleAtPercent(1.0)
        angle1 = math.radians(tangent + 180 - self.HEAD_ANGLE)
        angle2 = math.radians(tangent + 180 + self.HEAD_ANGLE)

        p1 = QPointF(
            end_point.x() + self.HEAD_LENGTH * math.cos(angle1),
            end_point.y() - self.HEAD_LENGTH * math.sin(angle1),
        )
        p2 = QPointF(
            end_point.x() + self.HEAD_LENGTH * math.cos(angle2),
            end_point.y() - self.HEAD_LENGTH * math.sin(angle2),
        )

        arrow = QPainterPath()
        arrow.moveTo(end_point)
        arrow.lineTo(p1)
        arrow.moveTo(end_point)
        arrow.lineTo(p2)
        return arrow

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing, True)
        painter.setPen(self.pen())
        painter.drawPath(self._path)
        solid = self.pen()
        solid.setStyle(Qt.SolidLine)
        painter.setPen(solid)
        painter.drawPath(self._head)


class GraphSceneView(QObject):
    """
    Qt side of a structure: draws the node / edge lists it is handed into a
    shared QGraphicsScene, runs fades, moves the bound QGraphicsView when
    asked to centre, and forwards output and status text as signals.
    """

    interactionLocked = pyqtSignal(bool)
    statusTextChanged = pyqtSignal(str)
    messageReported = pyqtSignal(str)
    lastMessageUpdated = pyqtSignal(str)

    def __init__(self, global_ctrl):
        super().__init__()
        self.scene = QGraphicsScene()
        self.scene.setSceneRect(-200, -200, 1200, 800)
        self.anim = AnimationToolkit(global_ctrl)
        self._canvas = None
        self._view_anim = None
        self._node_styles = {}
        self._edge_styles = {}
        self._node_items = {}
        self._edge_items = {}
        self._fades = []

    def bind_canvas(self, view):
        self._cancel_view_anim()
        self._canvas = view
        if view:
            view.setScene(self.scene)

    # ---------- Renderer ----------

    def set_styles(self, node_styles, edge_styles):
        self._node_styles = dict(node_styles)
        self._edge_styles = dict(edge_styles)

    def clear(self):
        self._stop_fades()
        self.scene.clear()
        self._node_items = {}
        self._edge_items = {}

    def render(self, nodes, edges):
        self.clear()
        for node in nodes:
            item = NodeItem(node.id, node.value, self._node_styles.get(node.cls, NodeStyle()))
            item.setPos(node.x, node.y)
            item.setOpacity(node.opacity)
            self.scene.addItem(item)
            self._node_items[node.id] = item
        for edge in edges:
            start = self._node_items.get(edge.source)
            end = self._node_items.get(edge.target)
            if start is None or end is None:
                continue
            item = EdgeItem(start, end, self._edge_styles.get(edge.cls, EdgeStyle()))
            item.setOpacity(edge.opacity)
            self.scene.addItem(item)
            self._edge_items.setdefault((edge.source, edge.target), item)

        rect = self.scene.itemsBoundingRect()
        if not rect.isNull():
            self.scene.setSceneRect(rect.adjusted(-SCENE_MARGIN, -SCENE_MARGIN, SCENE_MARGIN, SCENE_MARGIN))

    def query_node(self, node_id):
        return self._node_items.get(node_id)

    def query_edge(self, source, target):
        return self._edge_items.get((source, target))

    def animate_element_opacity(self, element, target, duration_ms):
        fade = self.anim.opacity(element, element.opacity(), target, duration_ms)

        def _cleanup():
            if fade in self._fades:
                self._fades.remove(fade)

        fade.finished.connect(_cleanup)
        self._fades.append(fade)
        fade.start()

    def _stop_fades(self):
        fades, self._fades = self._fades, []
        for fade in fades:
            fade.stop()

    def bounding_box(self):
        items = [item for item in self._node_items.values() if item.opacity() > 0]
        if not items:
            return None
        rect = QRectF()
        for item in items:
            rect = rect.united(item.sceneBoundingRect())
        return rect.left(), rect.top(), rect.right(), rect.bottom()

    def canvas_size(self):
        if not self._canvas:
            return DEFAULT_CANVAS
        viewport = self._canvas.viewport().rect()
        if viewport.isNull():
            return DEFAULT_CANVAS
        return float(viewport.width()), float(viewport.height())

    def set_zoom_and_pan(self, zoom, pan_x, pan_y):
        canvas_w, canvas_h = self.canvas_size()
        center = QPointF((canvas_w / 2.0 - pan_x) / zoom, (canvas_h / 2.0 - pan_y) / zoom)
        self._animate_view_to(zoom, center)

    def _animate_view_to(self, zoom, center, duration=360):
        """Glide the bound canvas from its current zoom / centre to the given ones."""
        if not self._canvas:
            return
        viewport = self._canvas.viewport().rect()
        if viewport.isNull():
            self._apply_view_state(zoom, center)
            return

        origin = self._canvas.mapToScene(viewport.center())
        scale = self._canvas.transform().m11()
        if not math.isfinite(scale) or abs(scale) < 1e-4:
            scale = 1.0
        if (center - origin).manhattanLength() < 1e-6 and abs(zoom - scale) < 1e-6:
            return

        self._cancel_view_anim()
        anim = self.anim.progress(duration, self)

        def lerp(a, b, t):
            return a + (b - a) * t

        def on_value(t):
            point = QPointF(lerp(origin.x(), center.x(), t), lerp(origin.y(), center.y(), t))
            self._apply_view_state(lerp(scale, zoom, t), point)

        def on_finished():
            self._apply_view_state(zoom, center)
            self._view_anim = None

        anim.valueChanged.connect(on_value)
        anim.finished.connect(on_finished)
        self._view_anim = anim
        anim.start()

    def _apply_view_state(self, zoom, center):
        if not self._canvas:
            return
        self._canvas.resetTransform()
        self._canvas.scale(zoom, zoom)
        self._canvas.centerOn(center)

    def _cancel_view_anim(self):
        if self._view_anim:
            self._view_anim.stop()
            self._view_anim = None

    # ---------- Logger ----------

    def report(self, key, params=None):
        self.messageReported.emit(format_message(key, params))

    def update_last(self, text):
        self.lastMessageUpdated.emit(text)

    # ---------- StatusReporter ----------

    def report_animating(self, flag):
        self.interactionLocked.emit(bool(flag))

    def report_status_text(self, text):
        self.statusTextChanged.emit(format_message(text) if text else "")
