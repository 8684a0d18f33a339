import logging
from typing import Optional, Tuple

from esper import World

from jewels.components.board import Board
from jewels.components.board_position import BoardPosition
from jewels.components.cell_status import CellStatus
from jewels.components.game_state import GamePhase
from jewels.components.jewel import Jewel
from jewels.constants import DEFAULT_COLS, DEFAULT_NUM_COLORS, DEFAULT_ROWS, PALETTE
from jewels.events.bus import (
    EventBus,
    EVENT_BOARD_RESET,
    EVENT_MOUSE_PRESS,
    EVENT_NEW_GAME_REQUEST,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from jewels.systems.board_ops import is_adjacent, randomize_colors
from jewels.utils.game_state import get_or_create_game_state, set_phase
from jewels.world import world_rng

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# arcade.MOUSE_BUTTON_RIGHT
RIGHT_BUTTON = 4


class BoardSystem:
    """Owns the board entity, its cells, and the click selection protocol."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        num_colors: int = DEFAULT_NUM_COLORS,
    ):
        self.world = world
        self.event_bus = event_bus
        cells = []
        for r in range(rows):
            for c in range(cols):
                cells.append(
                    self.world.create_entity(BoardPosition(row=r, col=c), Jewel(color=PALETTE[0]), CellStatus())
                )
        # Board validates the cell count; a mismatch fails here before any system runs.
        self.board_entity = self.world.create_entity(Board(rows=rows, cols=cols, num_colors=num_colors, cells=cells))
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game_request)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.reset()

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def selected(self) -> Optional[Position]:
        state = get_or_create_game_state(self.world)
        if state.selected is None:
            return None
        return self.board.position_of(state.selected)

    def reset(self):
        """Re-roll every cell and return the game to its opening state."""
        board = self.board
        randomize_colors(self.world, world_rng(self.world))
        state = get_or_create_game_state(self.world)
        state.move_count = 0
        state.won = False
        state.selected = None
        state.cascade_depth = 0
        set_phase(self.world, GamePhase.IDLE)
        logger.info("new %dx%d board with %d colors", board.rows, board.cols, board.num_colors)
        self.event_bus.emit(EVENT_BOARD_RESET, rows=board.rows, cols=board.cols, num_colors=board.num_colors)

    def on_new_game_request(self, sender, **kwargs):
        self.reset()

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        pair = self.handle_click(row, col)
        if pair is not None:
            src, dst = pair
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)

    def handle_click(self, row: int, col: int) -> Optional[Tuple[Position, Position]]:
        """Advance the selection protocol; returns (src, dst) when a swap should be attempted."""
        board = self.board
        if not board.in_bounds(row, col):
            return None
        state = get_or_create_game_state(self.world)
        if state.phase == GamePhase.CASCADE_RUNNING or state.won:
            logger.debug("click at %s ignored during %s", (row, col), "won game" if state.won else "cascade")
            return None
        if state.selected is None:
            state.selected = board.index(row, col)
            set_phase(self.world, GamePhase.ONE_SELECTED)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
            return None
        src = board.position_of(state.selected)
        dst = (row, col)
        if self.is_adjacent(src, dst):
            # Selection is cleared by the swap attempt itself.
            return src, dst
        self._clear_selection(reason='not_adjacent')
        return None

    @staticmethod
    def is_adjacent(a: Position, b: Position) -> bool:
        return is_adjacent(a, b)

    def on_mouse_press(self, sender, **kwargs):
        # Right-click clears the current selection.
        if kwargs.get('button') != RIGHT_BUTTON:
            return
        self._clear_selection(reason='right_click')

    def _clear_selection(self, reason: str) -> None:
        state = get_or_create_game_state(self.world)
        prev = state.selected
        if prev is None:
            return
        state.selected = None
        if state.phase == GamePhase.ONE_SELECTED:
            set_phase(self.world, GamePhase.IDLE)
        prev_row, prev_col = self.board.position_of(prev)
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev_row, prev_col=prev_col)
