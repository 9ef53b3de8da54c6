from dataclasses import dataclass

FILL = "#e9e9ef"
STROKE = "#4a4a52"
TEXT = "#1f1f24"
ACTIVE_FILL = "#ffd966"
ARROW = "#ff8c00"
HIGHLIGHT = "#ff1744"
MUTED = "#9e9e9e"


@dataclass(frozen=True)
class NodeStyle:
    """
    How the renderer draws one node class.

    shape: "box", "round", "ellipse", "pointer" (label below a small marker),
    "label" (text only) or "marker" (filled triangle, used by cursors).
    """

    shape: str = "box"
    width: float = 100
    height: float = 45
    fill: str = FILL
    stroke: str = STROKE
    text: str = TEXT
    border: float = 2.0
    null_left: bool = False
    null_right: bool = False
    bold: bool = False


@dataclass(frozen=True)
class EdgeStyle:
    """
    route: "straight", "curve" (quadratic bend of ``bend`` px to the left of
    the travel direction), "under" (drops below both ends, used for
    wrap-around edges) or "loop" (self loop).
    """

    color: str = ARROW
    width: float = 3.0
    route: str = "straight"
    bend: float = 0.0
    dashed: bool = False


POINTER = NodeStyle(shape="pointer", width=26, height=26, fill=STROKE, bold=True)
