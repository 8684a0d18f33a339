import random

from esper import World

from jewels.components.game_state import GameState
from jewels.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create the ECS world holding the shared game state resource.

    The board itself is spawned by BoardSystem so the world can be reused by
    systems that are constructed in any order.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource.
    state_entity = world.create_entity()
    world.add_component(state_entity, GameState())
    return world


def world_rng(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    rng = random.Random()
    setattr(world, "random", rng)
    return rng
