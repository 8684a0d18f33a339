import random

import pytest

from jewels.components.cell_status import CellStatus
from jewels.components.game_state import GamePhase
from jewels.constants import PALETTE
from jewels.events.bus import EventBus
from jewels.systems.board import BoardSystem
from jewels.systems.board_ops import color_grid, generate_layout, get_board
from jewels.utils.game_state import get_or_create_game_state
from jewels.world import create_world


def has_match(colors, rows, cols):
    # horizontal
    for r in range(rows):
        run = 0; last = None
        for c in range(cols):
            tval = colors[r * cols + c]
            run = run + 1 if tval == last else 1
            last = tval
            if run >= 3:
                return True
    # vertical
    for c in range(cols):
        run = 0; last = None
        for r in range(rows):
            tval = colors[r * cols + c]
            run = run + 1 if tval == last else 1
            last = tval
            if run >= 3:
                return True
    return False


@pytest.mark.parametrize("rows,cols,num_colors", [
    (10, 10, 4),
    (5, 5, 2),
    (16, 16, 2),
    (5, 16, 3),
    (16, 5, 8),
])
@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_initial_board_has_no_matches(rows, cols, num_colors, seed):
    bus = EventBus(); world = create_world(bus, rng=random.Random(seed))
    BoardSystem(world, bus, rows, cols, num_colors)
    colors = color_grid(world)
    assert not has_match(colors, rows, cols), 'Initial board should not contain any matches'
    assert set(colors) <= set(PALETTE[:num_colors])


def test_initial_board_flags_and_state_are_clear():
    bus = EventBus(); world = create_world(bus, rng=random.Random(5))
    BoardSystem(world, bus, 8, 8, 4)
    board = get_board(world)
    for entity in board.cells:
        status = world.component_for_entity(entity, CellStatus)
        assert not status.was_cleared
        assert not status.pending_removal
    state = get_or_create_game_state(world)
    assert state.phase == GamePhase.IDLE
    assert state.move_count == 0
    assert state.selected is None
    assert not state.won


def test_two_color_layouts_always_complete():
    palette = PALETTE[:2]
    for seed in range(25):
        colors = generate_layout(16, 16, palette, random.Random(seed))
        assert len(colors) == 256
        assert not has_match(colors, 16, 16)


def test_layout_uses_every_palette_color_eventually():
    palette = PALETTE[:8]
    colors = generate_layout(16, 16, palette, random.Random(11))
    assert set(colors) == set(palette)
