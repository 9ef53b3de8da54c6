import logging
import random
from typing import Iterator, Optional, Tuple

from core.clock import QtClock
from core.global_ctrl import GlobalController
from core.graph_model import Edge, GraphModel
from core.interfaces import Clock, Logger, Renderer, StatusReporter

logger = logging.getLogger(__name__)

MAX_ZOOM = 2.0


def fit_zoom_and_pan(box, canvas, padding) -> Tuple[float, float, float]:
    """
    Zoom / pan that fit ``box`` (x1, y1, x2, y2) plus ``padding`` on every
    side into a canvas of ``canvas`` (width, height) pixels.
    """
    x1, y1, x2, y2 = box
    canvas_w, canvas_h = canvas
    width = max(x2 - x1, 1.0)
    height = max(y2 - y1, 1.0)
    zoom = min(canvas_w / (width + 2 * padding), canvas_h / (height + 2 * padding))
    zoom = min(zoom, MAX_ZOOM)
    center_x = (x1 + x2) / 2
    center_y = (y1 + y2) / 2
    pan_x = canvas_w / 2 - zoom * center_x
    pan_y = canvas_h / 2 - zoom * center_y
    return zoom, pan_x, pan_y


class Operation:
    """Handle returned by every public operation; done once the sequence ends."""

    def __init__(self, name="", accepted=True):
        self.name = name
        self.accepted = accepted
        self.done = not accepted
        self.error: Optional[BaseException] = None

    def __repr__(self):
        state = "done" if self.done else "running"
        if self.error is not None:
            state = "failed"
        elif not self.accepted:
            state = "rejected"
        return f"<Operation {self.name} {state}>"


class BaseStructure:
    """
    Shared lifecycle of every animated structure.

    Operations are generators yielding wait durations (ms). ``start`` runs the
    entry guard synchronously and then drives the generator through the
    injected clock, so a structure never blocks the UI thread and tests can
    replay a whole choreography instantly.
    """

    BASE_SPEED_MS = 400
    CENTER_PADDING = 100
    NODE_STYLES: dict = {}
    EDGE_STYLES: dict = {}

    def __init__(
        self,
        global_ctrl=None,
        renderer: Optional[Renderer] = None,
        output: Optional[Logger] = None,
        status: Optional[StatusReporter] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ):
        self.global_ctrl = global_ctrl or GlobalController()
        self.renderer = renderer
        self.output = output
        self.status = status
        self.clock = clock or QtClock()
        self.rng = rng or random.Random()

        self.graph = GraphModel()
        self.is_init = False
        self.animating = False
        self._attached = False

    # ---------- lifecycle ----------

    def init_structure(self, *args, **kwargs):
        """Attach to the renderer and create the empty structure; idempotent."""
        if self.is_init or self.animating:
            logger.debug("%s: init ignored (already initialized or busy)", type(self).__name__)
            return
        self._attach()
        self._create_initial(*args, **kwargs)
        self.is_init = True
        self.refresh()
        self.center_canvas(force=True)

    def reset_structure(self):
        if self.animating:
            logger.debug("%s: reset ignored while animating", type(self).__name__)
            return
        self.is_init = False
        self._attached = False
        self.graph.clear()
        self._reset_state()
        if self.renderer is not None:
            self.renderer.clear()

    def random_structure(self):
        if self.animating:
            return
        self.reset_structure()
        self._populate_random()
        self.refresh()
        self.center_canvas(force=True)

    def _attach(self):
        self._attached = True
        if self.renderer is not None:
            self.renderer.set_styles(self.NODE_STYLES, self.EDGE_STYLES)

    def _create_initial(self, *args, **kwargs):
        raise NotImplementedError

    def _reset_state(self):
        pass

    def _populate_random(self):
        raise NotImplementedError

    # ---------- operation driver ----------

    def start(self, steps: Iterator[int], allowed=True) -> Operation:
        name = getattr(steps, "__name__", "operation").lstrip("_")
        if not self.is_init or self.animating or not allowed:
            steps.close()
            logger.debug(
                "%s.%s rejected (init=%s, animating=%s, allowed=%s)",
                type(self).__name__, name, self.is_init, self.animating, allowed,
            )
            return Operation(name, accepted=False)

        operation = Operation(name)

        def advance():
            try:
                delay = next(steps)
            except StopIteration:
                operation.done = True
                return
            except Exception as exc:
                # the model may be half-mutated
                logger.exception("%s.%s failed, resetting", type(self).__name__, name)
                operation.error = exc
                operation.done = True
                self.animating = False
                self.reset_structure()
                self.after_animation_without_change()
                raise
            self.clock.call_later(delay, advance)

        advance()
        return operation

    def wait(self, multiplier=1.0):
        yield self.global_ctrl.scale_duration(self.BASE_SPEED_MS * multiplier)

    def fade(self, items, target):
        """Fade nodes / edges to ``target`` over one wait, then store the opacity."""
        items = [item for item in items if item is not None]
        if self.renderer is not None and self._attached:
            duration = self.global_ctrl.scale_duration(self.BASE_SPEED_MS)
            for item in items:
                element = self._element_for(item)
                if element is not None:
                    self.renderer.animate_element_opacity(element, target, duration)
        yield from self.wait()
        for item in items:
            item.opacity = target

    def _element_for(self, item):
        if isinstance(item, Edge):
            return self.renderer.query_edge(item.source, item.target)
        return self.renderer.query_node(item.id)

    # ---------- phases ----------

    @property
    def centering_enabled(self) -> bool:
        return self.global_ctrl.centering_enabled

    def before_animation_starts(self):
        self.animating = True
        self._report_animating(True)
        if self.centering_enabled:
            self._report_status("status.centering")
            self.center_canvas()
            yield from self.wait(1.5)
        self._report_status("status.animation")
        yield from self.wait()

    def after_animation_ends(self):
        if self.centering_enabled:
            self._report_status("status.centering")
            yield from self.wait()
            self.center_canvas()
            yield from self.wait(1.5)
        self.after_animation_without_change()

    def after_animation_without_change(self):
        self.animating = False
        self._report_animating(False)
        self._report_status("")

    def finish(self, changed=True):
        if changed:
            yield from self.after_animation_ends()
        else:
            self.after_animation_without_change()

    # ---------- rendering ----------

    def refresh(self):
        if self._attached and self.renderer is not None:
            self.renderer.render(self.graph.nodes, self.graph.edges)

    def center_canvas(self, force=False):
        if not self._attached or self.renderer is None:
            return
        if not (force or self.centering_enabled):
            return
        box = self.renderer.bounding_box()
        if box is None:
            return
        zoom, pan_x, pan_y = fit_zoom_and_pan(box, self.renderer.canvas_size(), self.CENTER_PADDING)
        self.renderer.set_zoom_and_pan(zoom, pan_x, pan_y)

    # ---------- collaborators ----------

    def report(self, key, params=None):
        if self.output is not None:
            self.output.report(key, params)

    def _report_animating(self, flag):
        if self.status is not None:
            self.status.report_animating(flag)

    def _report_status(self, text):
        if self.status is not None:
            self.status.report_status_text(text)

    @staticmethod
    def require(value, what):
        if value is None:
            raise LookupError(f"{what} not found")
        return value
