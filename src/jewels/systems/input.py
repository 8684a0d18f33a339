from jewels.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_NEW_GAME_REQUEST,
    EVENT_TILE_CLICK,
)
from jewels.systems.board_ops import board_dimensions
from jewels.ui.layout import cell_at_point, compute_board_geometry, new_game_button_rect, point_in_rect

# arcade.MOUSE_BUTTON_LEFT
LEFT_BUTTON = 1


class InputSystem:
    """Translates left clicks into New Game requests or tile clicks."""

    def __init__(self, event_bus: EventBus, window, world=None):
        self.event_bus = event_bus
        self.window = window
        self.world = world  # board dimensions are read from the world when available
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Other buttons fall through so BoardSystem can handle right-click deselect.
        if button != LEFT_BUTTON:
            return
        if point_in_rect(x, y, new_game_button_rect(self.window.width)):
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST, reason='button')
            return
        dims = board_dimensions(self.world) if self.world is not None else None
        if dims is None:
            return
        rows, cols = dims
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        cell = cell_at_point(x, y, rows, cols, tile_size, start_x, start_y)
        if cell is None:
            return
        row, col = cell
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
