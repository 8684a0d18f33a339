from __future__ import annotations

from typing import Any

from esper import World

from jewels.components.game_state import GamePhase
from jewels.constants import CASCADE_TICK_INTERVAL
from jewels.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_CASCADE_TICK,
    EVENT_TICK,
    EVENT_TILE_SWAP_VALID,
    EventBus,
)
from jewels.utils.game_state import get_or_create_game_state


class CascadeClockSystem:
    """Turns per-frame ticks into evenly spaced cascade ticks.

    Time only accumulates while a cascade is running; the accumulator restarts
    when a new cascade begins or the board resets.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        interval: float = CASCADE_TICK_INTERVAL,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.interval = max(0.001, float(interval))
        self._elapsed = 0.0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self._restart)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self._restart)

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def on_tick(self, sender: Any, **payload: Any) -> None:
        try:
            dt = float(payload.get("dt", 0.0))
        except (TypeError, ValueError):
            return
        if dt <= 0.0:
            return
        if not self._cascading():
            self._elapsed = 0.0
            return
        self._elapsed += dt
        while self._elapsed >= self.interval and self._cascading():
            self._elapsed -= self.interval
            self.event_bus.emit(EVENT_CASCADE_TICK)

    def _restart(self, sender: Any, **payload: Any) -> None:
        self._elapsed = 0.0

    def _cascading(self) -> bool:
        return get_or_create_game_state(self.world).phase == GamePhase.CASCADE_RUNNING
