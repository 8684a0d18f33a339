from typing import Optional, Tuple

from jewels.constants import (
    BOTTOM_MARGIN,
    MIN_TILE_SIZE,
    NEW_GAME_BUTTON_HEIGHT,
    NEW_GAME_BUTTON_WIDTH,
    TILE_SIZE,
)

Rect = Tuple[float, float, float, float]  # left, bottom, width, height


def window_size_for(rows: int, cols: int) -> Tuple[int, int]:
    """Initial window size: one TILE_SIZE square per cell plus the button bar."""
    return cols * TILE_SIZE, rows * TILE_SIZE + BOTTOM_MARGIN


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int):
    """Return (tile_size, start_x, start_y) shared by rendering and input mapping.

    start_x/start_y is the bottom-left corner of the board; the board sits on top
    of the button bar and is centred horizontally.
    """
    tile_by_w = window_width / cols
    tile_by_h = (window_height - BOTTOM_MARGIN) / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_rect(row: int, col: int, rows: int, tile_size: int, start_x: float, start_y: float) -> Rect:
    # Row 0 is drawn at the top of the board.
    left = start_x + col * tile_size
    bottom = start_y + (rows - 1 - row) * tile_size
    return left, bottom, tile_size, tile_size


def cell_at_point(
    x: float,
    y: float,
    rows: int,
    cols: int,
    tile_size: int,
    start_x: float,
    start_y: float,
) -> Optional[Tuple[int, int]]:
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row = rows - 1 - int((y - start_y) // tile_size)
    if 0 <= row < rows and 0 <= col < cols:
        return row, col
    return None


def new_game_button_rect(window_width: int) -> Rect:
    width = min(NEW_GAME_BUTTON_WIDTH, window_width - 16)
    bottom = (BOTTOM_MARGIN - NEW_GAME_BUTTON_HEIGHT) / 2
    return 8, bottom, width, NEW_GAME_BUTTON_HEIGHT


def point_in_rect(x: float, y: float, rect: Rect) -> bool:
    left, bottom, width, height = rect
    return left <= x <= left + width and bottom <= y <= bottom + height
