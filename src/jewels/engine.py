"""Synchronous entry point to the board state machine.

``BoardEngine`` wires the world, the event bus and the board systems together
and returns explicit results for each operation, so the game can be driven from
tests or tools without a window or a clock. The arcade window drives the very
same systems through events.
"""
from __future__ import annotations

import random
from typing import Optional, Sequence

from jewels.components.game_state import GamePhase, GameState
from jewels.constants import DEFAULT_COLS, DEFAULT_NUM_COLORS, DEFAULT_ROWS
from jewels.events.bus import EventBus
from jewels.snapshot import BoardSnapshot, take_snapshot
from jewels.systems.board import BoardSystem
from jewels.systems.board_ops import all_cleared
from jewels.systems.match import MatchSystem, SwapResult
from jewels.systems.match_resolution import MatchResolutionSystem, TickResult
from jewels.utils.game_state import get_or_create_game_state
from jewels.world import create_world


class BoardEngine:
    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        num_colors: int = DEFAULT_NUM_COLORS,
        *,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus, rng=rng)
        self.board_system = BoardSystem(self.world, self.event_bus, rows=rows, cols=cols, num_colors=num_colors)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)

    @property
    def state(self) -> GameState:
        return get_or_create_game_state(self.world)

    @property
    def is_cascading(self) -> bool:
        return self.state.phase == GamePhase.CASCADE_RUNNING

    @property
    def won(self) -> bool:
        return self.state.won

    @property
    def move_count(self) -> int:
        return self.state.move_count

    def click(self, row: int, col: int) -> Optional[SwapResult]:
        """Feed one click through the selection protocol.

        Returns the swap outcome when the click completed an adjacent pair,
        otherwise None.
        """
        pair = self.board_system.handle_click(row, col)
        if pair is None:
            return None
        return self.match_system.attempt_swap(*pair)

    def attempt_swap(self, pos_a: Sequence[int], pos_b: Sequence[int]) -> SwapResult:
        return self.match_system.attempt_swap((pos_a[0], pos_a[1]), (pos_b[0], pos_b[1]))

    def tick(self) -> TickResult:
        return self.match_resolution_system.step()

    def reset(self) -> None:
        self.board_system.reset()

    def check_win(self) -> bool:
        return all_cleared(self.world)

    def snapshot(self) -> BoardSnapshot:
        return take_snapshot(self.world)


def initialize(
    rows: int,
    cols: int,
    num_colors: int,
    *,
    rng: random.Random | None = None,
    event_bus: EventBus | None = None,
) -> BoardEngine:
    """Build an engine for pre-clamped dimensions (see GameConfig)."""
    return BoardEngine(rows, cols, num_colors, rng=rng, event_bus=event_bus)
