from graphview.canvas import Canvas
from graphview.cursor import CursorMode
from graphview.errors import GraphViewError, InvalidStateError, MissingBackupState, SeriesDataError
from graphview.events import PointerEvent
from graphview.gestures import GestureTracker, TapDetector
from graphview.graph_view import GraphView, OnGraphViewListener
from graphview.grid_label_renderer import GridLabelRenderer
from graphview.label_formatter import NEG_INFINITY_LABEL, DefaultLabelFormatter, LabelFormatter, LogLabelFormatter
from graphview.raster import RasterCanvas
from graphview.scales import DataBounds, PixelRect
from graphview.second_scale import SecondScale
from graphview.series import BarGraphSeries, DataPoint, LineGraphSeries, Series
from graphview.styles import CursorStyles, GraphStyles, GridLabelStyles, ViewportStyles
from graphview.viewport import Viewport

__all__ = [
    "BarGraphSeries",
    "Canvas",
    "CursorMode",
    "CursorStyles",
    "DataBounds",
    "DataPoint",
    "DefaultLabelFormatter",
    "GestureTracker",
    "GraphStyles",
    "GraphView",
    "GraphViewError",
    "GridLabelRenderer",
    "GridLabelStyles",
    "InvalidStateError",
    "LabelFormatter",
    "LineGraphSeries",
    "LogLabelFormatter",
    "MissingBackupState",
    "NEG_INFINITY_LABEL",
    "OnGraphViewListener",
    "PixelRect",
    "PointerEvent",
    "RasterCanvas",
    "SecondScale",
    "Series",
    "SeriesDataError",
    "TapDetector",
    "Viewport",
    "ViewportStyles",
]
