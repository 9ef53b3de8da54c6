import random

import pytest

from core.clock import ImmediateClock
from core.global_ctrl import GlobalController


class RecordingRenderer:
    """Headless renderer keeping the last rendered lists and every call it saw."""

    def __init__(self, canvas=(1000.0, 700.0)):
        self.canvas = canvas
        self.node_styles = {}
        self.edge_styles = {}
        self.nodes = []
        self.edges = []
        self.render_count = 0
        self.clear_count = 0
        self.fades = []
        self.zoom_calls = []

    def set_styles(self, node_styles, edge_styles):
        self.node_styles = dict(node_styles)
        self.edge_styles = dict(edge_styles)

    def render(self, nodes, edges):
        self.nodes = [node.as_tuple() for node in nodes]
        self.edges = [edge.as_tuple() for edge in edges]
        self.render_count += 1

    def clear(self):
        self.nodes = []
        self.edges = []
        self.clear_count += 1

    def animate_element_opacity(self, element, target, duration_ms):
        self.fades.append((element, target, duration_ms))

    def query_node(self, node_id):
        for node in self.nodes:
            if node[0] == node_id:
                return ("node", node_id)
        return None

    def query_edge(self, source, target):
        for edge in self.edges:
            if edge[0] == source and edge[1] == target:
                return ("edge", source, target)
        return None

    def bounding_box(self):
        visible = [node for node in self.nodes if node[5] > 0]
        if not visible:
            return None
        xs = [node[2] for node in visible]
        ys = [node[3] for node in visible]
        return min(xs), min(ys), max(xs), max(ys)

    def canvas_size(self):
        return self.canvas

    def set_zoom_and_pan(self, zoom, pan_x, pan_y):
        self.zoom_calls.append((zoom, pan_x, pan_y))


class CapturingLogger:
    def __init__(self):
        self.entries = []
        self.lines = []

    def report(self, key, params=None):
        self.entries.append((key, params))
        self.lines.append(key)

    def update_last(self, text):
        if self.lines:
            self.lines[-1] = text
        else:
            self.lines.append(text)

    @property
    def keys(self):
        return [key for key, _ in self.entries]


class StatusRecorder:
    def __init__(self):
        self.animating = []
        self.texts = []

    def report_animating(self, flag):
        self.animating.append(flag)

    def report_status_text(self, text):
        self.texts.append(text)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def output():
    return CapturingLogger()


@pytest.fixture
def status():
    return StatusRecorder()


@pytest.fixture
def clock():
    return ImmediateClock()


@pytest.fixture
def global_ctrl():
    return GlobalController()


@pytest.fixture
def make(global_ctrl, renderer, output, status, clock):
    """Build a structure wired to the recording collaborators."""

    def _make(cls, seed=7, **overrides):
        kwargs = dict(
            global_ctrl=global_ctrl,
            renderer=renderer,
            output=output,
            status=status,
            clock=clock,
            rng=random.Random(seed),
        )
        kwargs.update(overrides)
        return cls(**kwargs)

    return _make
