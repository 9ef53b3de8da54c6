"""
Collaborator contracts used by the structure core.

Structures only talk to the outside world through these protocols so the
same choreography drives the Qt scene in the application and the recording
doubles in the test-suite.
"""

from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Optional, Protocol, Tuple, runtime_checkable

from core.graph_model import Edge, Node

BoundingBox = Tuple[float, float, float, float]


class Renderer(Protocol):
    def set_styles(self, node_styles: Mapping[str, Any], edge_styles: Mapping[str, Any]) -> None:
        ...

    def render(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Full resync of drawn elements with the given model lists."""

    def clear(self) -> None:
        ...

    def animate_element_opacity(self, element: Any, target: float, duration_ms: int) -> None:
        ...

    def query_node(self, node_id) -> Optional[Any]:
        ...

    def query_edge(self, source, target) -> Optional[Any]:
        ...

    def bounding_box(self) -> Optional[BoundingBox]:
        ...

    def canvas_size(self) -> Tuple[float, float]:
        ...

    def set_zoom_and_pan(self, zoom: float, pan_x: float, pan_y: float) -> None:
        ...


class Logger(Protocol):
    def report(self, key: str, params: Optional[Dict[str, Any]] = None) -> None:
        ...

    def update_last(self, text: str) -> None:
        """Replace the most recent output line."""


class StatusReporter(Protocol):
    def report_animating(self, flag: bool) -> None:
        ...

    def report_status_text(self, text: str) -> None:
        ...


class Clock(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        ...



# capability traits of the structure variants

@runtime_checkable
class Normalizable(Protocol):
    def normalize(self) -> None:
        """Re-key nodes to their array index and rewrite edge endpoints."""


@runtime_checkable
class Classifiable(Protocol):
    def classify(self) -> None:
        """Recompute every data node's visual class from the current topology."""


@runtime_checkable
class AnimatablePhase(Protocol):
    def before_animation_starts(self) -> Iterator[int]:
        ...

    def after_animation_ends(self) -> Iterator[int]:
        ...

    def after_animation_without_change(self) -> None:
        ...
