from __future__ import annotations

import logging

from esper import World

from jewels.components.game_state import GamePhase, GameState

logger = logging.getLogger(__name__)


def get_or_create_game_state(world: World) -> GameState:
    """Return the shared GameState component, creating it if absent."""
    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.create_entity(state)
    return state


def set_phase(world: World, phase: GamePhase) -> GameState:
    """Move the swap protocol to ``phase`` and return the state."""
    state = get_or_create_game_state(world)
    if state.phase != phase:
        logger.debug("phase %s -> %s", state.phase.name, phase.name)
        state.phase = phase
    return state
