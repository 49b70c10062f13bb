"""Window and icon layout derived from the background image size.

Finder window bounds are expressed as (left, top, right, bottom). The
``WindowBounds`` fields keep the names ``width`` and ``height`` for the
right and bottom edges because that is how the AppleScript template
consumes them.
"""

from typing import NamedTuple

WINDOW_LEFT = 400
WINDOW_TOP = 100
TITLE_BAR_HEIGHT = 22
ICON_VERTICAL_OFFSET = 10


class WindowBounds(NamedTuple):
    """Finder window bounding box (right/bottom stored as width/height)."""

    x: int
    y: int
    width: int
    height: int


class Position(NamedTuple):
    """Icon center in points from the window's top-left corner."""

    x: int
    y: int


def calculate_window_bounds(image_width: int, image_height: int) -> WindowBounds:
    """Window sized to show the whole background below the title bar."""
    right = WINDOW_LEFT + image_width
    bottom = WINDOW_TOP + image_height + TITLE_BAR_HEIGHT
    return WindowBounds(WINDOW_LEFT, WINDOW_TOP, right, bottom)


def calculate_app_position(image_width: int, image_height: int) -> Position:
    """App icon one quarter from the left, vertically centered."""
    return Position(image_width // 4, image_height // 2 - ICON_VERTICAL_OFFSET)


def calculate_applications_position(image_width: int, image_height: int) -> Position:
    """Applications shortcut three quarters from the left, vertically centered."""
    return Position(image_width * 3 // 4, image_height // 2 - ICON_VERTICAL_OFFSET)
