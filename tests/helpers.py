from __future__ import annotations

import random
from typing import List, Sequence

from esper import World

from jewels.components.cell_status import CellStatus
from jewels.constants import PALETTE
from jewels.engine import BoardEngine
from jewels.events.bus import EventBus
from jewels.systems.board_ops import color_grid, get_board, set_color

# 5x5, three colors, no runs. Swapping (1,2) and (2,2) completes a run in both rows 1 and 2.
GRID_DOUBLE_SWAP = [
    "2 1 2 0 1",
    "0 0 1 2 0",
    "1 1 0 2 1",
    "2 0 2 1 2",
    "0 2 1 0 0",
]


def new_engine(rows: int = 5, cols: int = 5, num_colors: int = 3, *, seed: int = 0,
               bus: EventBus | None = None) -> BoardEngine:
    return BoardEngine(rows, cols, num_colors, rng=random.Random(seed), event_bus=bus)


def paint(world: World, rows_text: Sequence[str]) -> None:
    """Overwrite board colors from rows of palette indices, e.g. "0 1 2 0 1"."""
    board = get_board(world)
    assert len(rows_text) == board.rows
    for r, line in enumerate(rows_text):
        digits = line.split()
        assert len(digits) == board.cols
        for c, digit in enumerate(digits):
            set_color(world, r, c, PALETTE[int(digit)])


def grid_digits(world: World) -> List[str]:
    board = get_board(world)
    colors = color_grid(world)
    return [
        " ".join(str(PALETTE.index(colors[board.index(r, c)])) for c in range(board.cols))
        for r in range(board.rows)
    ]


def mark_all_cleared(world: World, *, except_positions: Sequence[tuple[int, int]] = ()) -> None:
    board = get_board(world)
    skip = set(except_positions)
    for index, entity in enumerate(board.cells):
        status = world.component_for_entity(entity, CellStatus)
        status.was_cleared = board.position_of(index) not in skip
