import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from jewels.components.game_state import GamePhase, GameState
from jewels.events.bus import (
    EventBus,
    EVENT_MOVE_COUNTED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from jewels.systems.board_ops import get_board, is_adjacent, mark_runs_through, swap_colors
from jewels.utils.game_state import get_or_create_game_state, set_phase

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class SwapResult:
    accepted: bool
    move_count: int


class MatchSystem:
    """Applies swap requests, keeping them only when they complete a run."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.attempt_swap(src, dst)

    def attempt_swap(self, src: Position, dst: Position) -> SwapResult:
        src = (int(src[0]), int(src[1]))
        dst = (int(dst[0]), int(dst[1]))
        state = get_or_create_game_state(self.world)
        reason = self._rejection_reason(state, src, dst)
        if reason is not None:
            if reason not in ('cascade_running', 'game_won'):
                self._drop_selection(reason)
            return self._reject(state, src, dst, reason)
        self._drop_selection('swap')
        swap_colors(self.world, src, dst)
        src_marked = mark_runs_through(self.world, src)
        dst_marked = mark_runs_through(self.world, dst)
        if not (src_marked or dst_marked):
            swap_colors(self.world, src, dst)
            return self._reject(state, src, dst, 'no_match')
        state.move_count += 1
        logger.debug("swap %s <-> %s accepted, move %d", src, dst, state.move_count)
        set_phase(self.world, GamePhase.CASCADE_RUNNING)
        self.event_bus.emit(EVENT_MOVE_COUNTED, move_count=state.move_count)
        # Cascade resolution starts from this event and runs the first removal pass.
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst, move_count=state.move_count)
        return SwapResult(accepted=True, move_count=state.move_count)

    def _rejection_reason(self, state: GameState, src: Position, dst: Position) -> Optional[str]:
        if state.phase == GamePhase.CASCADE_RUNNING:
            return 'cascade_running'
        if state.won:
            return 'game_won'
        board = get_board(self.world)
        if not (board.in_bounds(*src) and board.in_bounds(*dst)):
            return 'out_of_bounds'
        if not is_adjacent(src, dst):
            return 'not_adjacent'
        return None

    def _reject(self, state: GameState, src: Position, dst: Position, reason: str) -> SwapResult:
        logger.debug("swap %s <-> %s rejected: %s", src, dst, reason)
        self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=reason)
        return SwapResult(accepted=False, move_count=state.move_count)

    def _drop_selection(self, reason: str) -> None:
        state = get_or_create_game_state(self.world)
        if state.phase == GamePhase.ONE_SELECTED:
            set_phase(self.world, GamePhase.IDLE)
        prev = state.selected
        if prev is None:
            return
        state.selected = None
        prev_row, prev_col = get_board(self.world).position_of(prev)
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev_row, prev_col=prev_col)
