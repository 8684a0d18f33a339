from jewels.events.bus import (
    EventBus,
    EVENT_BOARD_RESET,
    EVENT_GAME_WON,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from jewels.systems.board_ops import color_at, get_board, status_at
from jewels.systems.render import RenderSystem, diamond_points
from jewels.ui.layout import cell_rect
from tests.helpers import new_engine


class DummyWindow:
    def __init__(self, width=250, height=300):
        self.width = width
        self.height = height


def test_render_tracks_selection_events():
    bus = EventBus()
    engine = new_engine(bus=bus)
    render = RenderSystem(engine.world, bus, DummyWindow())
    bus.emit(EVENT_TILE_SELECTED, row=2, col=3)
    assert render.selected == (2, 3)
    bus.emit(EVENT_TILE_DESELECTED, reason='right_click', prev_row=2, prev_col=3)
    assert render.selected is None
    bus.emit(EVENT_TILE_SELECTED, row=1, col=1)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(1, 1), dst=(1, 2))
    assert render.selected is None


def test_selection_via_engine_reaches_renderer():
    bus = EventBus()
    engine = new_engine(bus=bus)
    render = RenderSystem(engine.world, bus, DummyWindow())
    engine.click(0, 4)
    assert render.selected == (0, 4)


def test_win_message_shown_until_reset():
    bus = EventBus()
    engine = new_engine(bus=bus)
    render = RenderSystem(engine.world, bus, DummyWindow())
    bus.emit(EVENT_GAME_WON, move_count=7)
    assert render.win_message == "You won in 7 moves!"
    bus.emit(EVENT_BOARD_RESET, rows=5, cols=5, num_colors=3)
    assert render.win_message is None


def test_diamond_points_inside_tile():
    assert diamond_points(0, 0, 50, 10) == [(25, 40), (40, 25), (25, 10), (10, 25)]


def test_row_zero_drawn_at_top():
    top = cell_rect(0, 0, 5, 50, 0, 50)
    bottom = cell_rect(4, 0, 5, 50, 0, 50)
    assert top == (0, 250, 50, 50)
    assert bottom == (0, 50, 50, 50)


def test_headless_process_builds_tile_layout():
    bus = EventBus()
    engine = new_engine(bus=bus)
    render = RenderSystem(engine.world, bus, DummyWindow())
    engine.click(1, 1)
    status_at(engine.world, 3, 2).was_cleared = True
    render.process()
    layout = render.tile_layout()
    assert len(layout) == 25
    board = get_board(engine.world)
    assert layout[(0, 0)]['rect'] == (0, 250, 50, 50)
    assert layout[(4, 4)]['rect'] == (200, 50, 50, 50)
    assert layout[(2, 3)]['entity'] == board.entity_at(2, 3)
    assert layout[(0, 0)]['color'] == color_at(engine.world, 0, 0)
    assert layout[(1, 1)]['selected']
    assert not layout[(1, 2)]['selected']
    assert layout[(3, 2)]['cleared']
    assert not layout[(0, 0)]['cleared']
