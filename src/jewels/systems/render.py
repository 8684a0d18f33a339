from typing import Any, Dict, List, Tuple

from esper import World

from jewels.components.cell_status import CellStatus
from jewels.components.jewel import Jewel
from jewels.constants import (
    CLEARED_TILE_COLOR,
    JEWEL_COLORS,
    JEWEL_INSET,
    JEWEL_OUTLINE_COLOR,
    NEW_GAME_LABEL,
    SELECTED_BACKGROUND,
    SELECTED_INSET,
    TILE_COLOR,
)
from jewels.events.bus import (
    EventBus,
    EVENT_BOARD_RESET,
    EVENT_GAME_WON,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from jewels.systems.board_ops import get_board
from jewels.ui.layout import cell_rect, compute_board_geometry, new_game_button_rect
from jewels.utils.game_state import get_or_create_game_state

BoardPos = Tuple[int, int]


def diamond_points(left: float, bottom: float, size: float, inset: float) -> List[Tuple[float, float]]:
    """Corners of the jewel diamond inside a tile, clockwise from the top."""
    cx = left + size / 2
    cy = bottom + size / 2
    return [
        (cx, bottom + size - inset),
        (left + size - inset, cy),
        (cx, bottom + inset),
        (left + inset, cy),
    ]


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_reset)
        self.event_bus.subscribe(EVENT_GAME_WON, self.on_game_won)
        self.selected = None
        self.win_message: str | None = None
        self._last_tile_layout: Dict[BoardPos, Dict[str, Any]] = {}

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def on_swap_request(self, sender, **kwargs):
        # Clear selection immediately when a swap begins
        self.selected = None

    def on_board_reset(self, sender, **kwargs):
        self.selected = None
        self.win_message = None

    def on_game_won(self, sender, **kwargs):
        self.win_message = f"You won in {kwargs.get('move_count', 0)} moves!"

    def tile_layout(self) -> Dict[BoardPos, Dict[str, Any]]:
        return dict(self._last_tile_layout)

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        # Headless safeguard: without an active window skip draw calls but still build the layout cache.
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        board = get_board(self.world)
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, board.rows, board.cols
        )
        self._last_tile_layout = {}
        for index, entity in enumerate(board.cells):
            row, col = board.position_of(index)
            left, bottom, size, _ = cell_rect(row, col, board.rows, tile_size, start_x, start_y)
            jewel: Jewel = self.world.component_for_entity(entity, Jewel)
            status: CellStatus = self.world.component_for_entity(entity, CellStatus)
            selected = self.selected == (row, col)
            self._last_tile_layout[(row, col)] = {
                "entity": entity,
                "rect": (left, bottom, size, size),
                "color": jewel.color,
                "cleared": status.was_cleared,
                "selected": selected,
            }
            if headless:
                continue
            background = CLEARED_TILE_COLOR if status.was_cleared else TILE_COLOR
            if selected:
                arcade.draw_lbwh_rectangle_filled(left, bottom, size, size, SELECTED_BACKGROUND)
                inner = size - 2 * SELECTED_INSET
                arcade.draw_lbwh_rectangle_filled(left + SELECTED_INSET, bottom + SELECTED_INSET, inner, inner, background)
            else:
                arcade.draw_lbwh_rectangle_filled(left, bottom, size, size, background)
            arcade.draw_lbwh_rectangle_outline(left, bottom, size, size, SELECTED_BACKGROUND, border_width=1)
            inset = min(JEWEL_INSET, size / 5)
            points = diamond_points(left, bottom, size, inset)
            arcade.draw_polygon_filled(points, JEWEL_COLORS[jewel.color])
            arcade.draw_polygon_outline(points, JEWEL_OUTLINE_COLOR, 1)
        if headless:
            return
        self._render_bar(arcade)
        if self.win_message:
            self._render_win_banner(arcade, start_y)

    def _render_bar(self, arcade) -> None:
        left, bottom, width, height = new_game_button_rect(self.window.width)
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, arcade.color.DARK_SLATE_BLUE)
        arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, arcade.color.WHITE, border_width=2)
        arcade.draw_text(
            NEW_GAME_LABEL,
            left + width / 2,
            bottom + height / 2,
            arcade.color.WHITE,
            14,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        state = get_or_create_game_state(self.world)
        arcade.draw_text(
            f"Moves: {state.move_count}",
            self.window.width - 8,
            bottom + height / 2,
            arcade.color.WHITE,
            12,
            anchor_x="right",
            anchor_y="center",
        )

    def _render_win_banner(self, arcade, board_bottom: float) -> None:
        center_y = board_bottom + (self.window.height - board_bottom) / 2
        arcade.draw_lbwh_rectangle_filled(0, center_y - 24, self.window.width, 48, (20, 20, 30, 220))
        arcade.draw_text(
            self.win_message,
            self.window.width / 2,
            center_y,
            arcade.color.YELLOW,
            16,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
