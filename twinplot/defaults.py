from __future__ import annotations

DEFAULT_CHART_WIDTH = 1024
DEFAULT_CHART_HEIGHT = 400
DEFAULT_DPI = 92.0

DEFAULT_BACKGROUND_PADDING = 5
DEFAULT_BACKGROUND_STROKE_WIDTH = 0.0
DEFAULT_CANVAS_STROKE_WIDTH = 0.0
DEFAULT_FONT_SIZE = 10.0
DEFAULT_AXIS_FONT_SIZE = 10.0
DEFAULT_TITLE_FONT_SIZE = 18.0
DEFAULT_TITLE_TOP = 10

DEFAULT_SERIES_LINE_WIDTH = 1.0
DEFAULT_AXIS_LINE_WIDTH = 1.0
DEFAULT_GRID_LINE_WIDTH = 1.0

DEFAULT_X_AXIS_MARGIN = 10
DEFAULT_Y_AXIS_MARGIN = 10
DEFAULT_VERTICAL_TICK_HEIGHT = DEFAULT_X_AXIS_MARGIN >> 1
DEFAULT_HORIZONTAL_TICK_WIDTH = DEFAULT_Y_AXIS_MARGIN >> 1
DEFAULT_MINIMUM_TICK_HORIZONTAL_SPACING = 20
DEFAULT_MINIMUM_TICK_VERTICAL_SPACING = 20
DEFAULT_TICK_COUNT_SANITY_CHECK = 1 << 10

DEFAULT_ANNOTATION_FONT_SIZE = 10.0
DEFAULT_ANNOTATION_PADDING = 5
DEFAULT_ANNOTATION_DELTA_WIDTH = 10

DEFAULT_LEGEND_FONT_SIZE = 8.0
DEFAULT_LEGEND_PADDING = 5
DEFAULT_LEGEND_SWATCH_WIDTH = 16

# RGBA
DEFAULT_BACKGROUND_COLOR = (12, 16, 23, 255)
DEFAULT_BACKGROUND_STROKE_COLOR = (60, 67, 78, 255)
DEFAULT_CANVAS_COLOR = (20, 26, 36, 255)
DEFAULT_CANVAS_STROKE_COLOR = (20, 26, 36, 255)
DEFAULT_TEXT_COLOR = (208, 218, 232, 255)
DEFAULT_AXIS_COLOR = (124, 138, 156, 255)
DEFAULT_GRID_MAJOR_COLOR = (44, 53, 66, 255)
DEFAULT_GRID_MINOR_COLOR = (32, 39, 50, 255)
DEFAULT_ANNOTATION_FILL_COLOR = (30, 38, 52, 235)
DEFAULT_LEGEND_FILL_COLOR = (10, 14, 20, 170)

DEFAULT_SERIES_COLORS = (
    (62, 149, 255, 255),
    (255, 165, 0, 255),
    (10, 200, 120, 255),
    (240, 80, 110, 255),
    (180, 120, 255, 255),
    (230, 210, 60, 255),
    (90, 210, 230, 255),
)
