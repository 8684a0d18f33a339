import logging
from dataclasses import dataclass
from typing import List, Tuple

from esper import World

from jewels.components.game_state import GamePhase
from jewels.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_CASCADE_TICK,
    EVENT_GAME_WON,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_TILE_SWAP_VALID,
)
from jewels.systems.board_ops import all_cleared, pending_positions, remove_marked, scan_and_mark
from jewels.utils.game_state import get_or_create_game_state, set_phase

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class TickResult:
    changed_cells: Tuple[Position, ...] = ()
    won: bool = False
    cascading: bool = False


class MatchResolutionSystem:
    """Runs removal passes: the first one right after an accepted swap, then one per cascade tick.

    The system never looks at a clock. Whoever drives the game decides when the
    next cascade step happens, either by emitting EVENT_CASCADE_TICK or by
    calling step() directly.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self.on_swap_valid)
        self.event_bus.subscribe(EVENT_CASCADE_TICK, self.on_cascade_tick)

    def on_swap_valid(self, sender, **kwargs):
        self.begin_cascade()

    def on_cascade_tick(self, sender, **kwargs):
        self.step()

    def begin_cascade(self) -> List[Position]:
        """Remove the runs marked by the swap and check for a win."""
        state = get_or_create_game_state(self.world)
        state.cascade_depth = 0
        marked = pending_positions(self.world)
        changed = self._remove_pass(marked, reason='swap') if marked else []
        self._check_win()
        return changed

    def step(self) -> TickResult:
        """Advance the cascade by one tick."""
        state = get_or_create_game_state(self.world)
        if state.phase != GamePhase.CASCADE_RUNNING:
            return TickResult(won=state.won)
        marked = scan_and_mark(self.world)
        changed: List[Position] = []
        if marked:
            changed = self._remove_pass(marked, reason='cascade')
        else:
            set_phase(self.world, GamePhase.IDLE)
            logger.debug("cascade settled after %d passes", state.cascade_depth)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.cascade_depth)
        won = self._check_win()
        return TickResult(
            changed_cells=tuple(changed),
            won=won,
            cascading=state.phase == GamePhase.CASCADE_RUNNING,
        )

    def _remove_pass(self, positions: List[Position], reason: str) -> List[Position]:
        state = get_or_create_game_state(self.world)
        state.cascade_depth += 1
        positions = sorted(positions)
        logger.debug("cascade depth %d removing %d cells", state.cascade_depth, len(positions))
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=state.cascade_depth, positions=positions, reason=reason)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, size=len(positions))
        changed = remove_marked(self.world)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions)
        # Fresh colors only ever enter at the top row.
        new_tiles = [pos for pos in changed if pos[0] == 0]
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason=reason, positions=changed)
        return changed

    def _check_win(self) -> bool:
        state = get_or_create_game_state(self.world)
        if state.won:
            return True
        if not all_cleared(self.world):
            return False
        state.won = True
        if state.phase == GamePhase.CASCADE_RUNNING:
            set_phase(self.world, GamePhase.IDLE)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.cascade_depth)
        logger.info("board cleared in %d moves", state.move_count)
        self.event_bus.emit(EVENT_GAME_WON, move_count=state.move_count)
        return True
