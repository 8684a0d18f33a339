from __future__ import annotations

import random
from typing import List, Optional, Sequence, Set, Tuple

from esper import World

from jewels.components.board import Board
from jewels.components.cell_status import CellStatus
from jewels.components.jewel import Jewel
from jewels.constants import MIN_RUN_LENGTH
from jewels.world import world_rng

Position = Tuple[int, int]

# Scan directions: along a row (left to right) and down a column (top to bottom).
ROW_AXIS: Position = (0, 1)
COL_AXIS: Position = (1, 0)


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def color_at(world: World, row: int, col: int) -> str:
    board = get_board(world)
    return world.component_for_entity(board.entity_at(row, col), Jewel).color


def set_color(world: World, row: int, col: int, color: str) -> None:
    board = get_board(world)
    world.component_for_entity(board.entity_at(row, col), Jewel).color = color


def status_at(world: World, row: int, col: int) -> CellStatus:
    board = get_board(world)
    return world.component_for_entity(board.entity_at(row, col), CellStatus)


def color_grid(world: World) -> List[str]:
    """Row-major list of every cell color."""
    board = get_board(world)
    return [world.component_for_entity(entity, Jewel).color for entity in board.cells]


def pending_positions(world: World) -> List[Position]:
    board = get_board(world)
    positions: List[Position] = []
    for index, entity in enumerate(board.cells):
        if world.component_for_entity(entity, CellStatus).pending_removal:
            positions.append(board.position_of(index))
    return positions


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def swap_colors(world: World, a: Position, b: Position) -> None:
    board = get_board(world)
    jewel_a: Jewel = world.component_for_entity(board.entity_at(*a), Jewel)
    jewel_b: Jewel = world.component_for_entity(board.entity_at(*b), Jewel)
    jewel_a.color, jewel_b.color = jewel_b.color, jewel_a.color


# ----------------------------------------------------------------------------
# Match detection
# ----------------------------------------------------------------------------

def _run_start(world: World, pos: Position, axis: Position) -> Optional[Position]:
    board = get_board(world)
    row, col = pos
    dr, dc = axis
    color = color_at(world, row, col)
    length = 1
    # Forward sweep
    r, c = row + dr, col + dc
    while board.in_bounds(r, c) and color_at(world, r, c) == color:
        length += 1
        r, c = r + dr, c + dc
    # Backward sweep; the last matching cell is the start of the run.
    r, c = row - dr, col - dc
    while board.in_bounds(r, c) and color_at(world, r, c) == color:
        length += 1
        r, c = r - dr, c - dc
    if length >= MIN_RUN_LENGTH:
        return (r + dr, c + dc)
    return None


def run_start_in_row(world: World, pos: Position) -> Optional[Position]:
    """Leftmost cell of the horizontal run of >= 3 through pos, or None."""
    return _run_start(world, pos, ROW_AXIS)


def run_start_in_col(world: World, pos: Position) -> Optional[Position]:
    """Topmost cell of the vertical run of >= 3 through pos, or None."""
    return _run_start(world, pos, COL_AXIS)


def _mark_run(world: World, start: Optional[Position], axis: Position) -> List[Position]:
    if start is None:
        return []
    board = get_board(world)
    dr, dc = axis
    row, col = start
    color = color_at(world, row, col)
    marked: List[Position] = []
    while board.in_bounds(row, col) and color_at(world, row, col) == color:
        status = status_at(world, row, col)
        status.pending_removal = True
        status.was_cleared = True
        marked.append((row, col))
        row, col = row + dr, col + dc
    return marked


def mark_row(world: World, start: Optional[Position]) -> List[Position]:
    """Flag the horizontal run beginning at start for removal."""
    return _mark_run(world, start, ROW_AXIS)


def mark_col(world: World, start: Optional[Position]) -> List[Position]:
    """Flag the vertical run beginning at start for removal."""
    return _mark_run(world, start, COL_AXIS)


def mark_runs_through(world: World, pos: Position) -> bool:
    """Mark the row and column runs through pos; True if pos is now pending removal."""
    mark_row(world, run_start_in_row(world, pos))
    mark_col(world, run_start_in_col(world, pos))
    return status_at(world, *pos).pending_removal


def scan_and_mark(world: World) -> List[Position]:
    """Mark every run on the board, returning the marked positions in row-major order."""
    board = get_board(world)
    marked: Set[Position] = set()
    for index, entity in enumerate(board.cells):
        status: CellStatus = world.component_for_entity(entity, CellStatus)
        if status.pending_removal:
            continue
        pos = board.position_of(index)
        marked.update(mark_row(world, run_start_in_row(world, pos)))
        marked.update(mark_col(world, run_start_in_col(world, pos)))
    return sorted(marked)


def find_runs(world: World) -> List[List[Position]]:
    """Detect all maximal horizontal or vertical runs of length >= 3 without marking them."""
    board = get_board(world)
    colors = color_grid(world)
    runs: List[List[Position]] = []
    lines: List[List[Position]] = [
        [(r, c) for c in range(board.cols)] for r in range(board.rows)
    ] + [
        [(r, c) for r in range(board.rows)] for c in range(board.cols)
    ]
    for line in lines:
        run: List[Position] = []
        last = None
        for pos in line:
            color = colors[board.index(*pos)]
            if color == last:
                run.append(pos)
                continue
            if len(run) >= MIN_RUN_LENGTH:
                runs.append(run)
            run = [pos]
            last = color
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(run)
    return runs


# ----------------------------------------------------------------------------
# Removal & refill
# ----------------------------------------------------------------------------

def remove_marked(world: World, rng: random.Random | None = None) -> List[Position]:
    """Remove every flagged cell, shifting its column down and refilling the top.

    Flags are read once up front so a shift never causes a cell to be processed
    twice. Returns the sorted positions whose color was rewritten.
    """
    board = get_board(world)
    rng = rng or world_rng(world)
    flagged = [
        index
        for index, entity in enumerate(board.cells)
        if world.component_for_entity(entity, CellStatus).pending_removal
    ]
    changed: Set[Position] = set()
    for index in flagged:
        row, col = board.position_of(index)
        for r in range(row, 0, -1):
            set_color(world, r, col, color_at(world, r - 1, col))
            changed.add((r, col))
        set_color(world, 0, col, rng.choice(board.palette))
        changed.add((0, col))
        world.component_for_entity(board.cells[index], CellStatus).pending_removal = False
    return sorted(changed)


def all_cleared(world: World) -> bool:
    board = get_board(world)
    return all(
        world.component_for_entity(entity, CellStatus).was_cleared for entity in board.cells
    )


# ----------------------------------------------------------------------------
# Initial layout
# ----------------------------------------------------------------------------

def _blocked_colors(colors: Sequence[str], cols: int, index: int) -> Set[str]:
    """Colors that would complete a run with the two cells to the left or above."""
    row, col = divmod(index, cols)
    blocked: Set[str] = set()
    if col >= 2 and colors[index - 1] == colors[index - 2]:
        blocked.add(colors[index - 1])
    if row >= 2 and colors[index - cols] == colors[index - 2 * cols]:
        blocked.add(colors[index - cols])
    return blocked


def generate_layout(rows: int, cols: int, palette: Sequence[str], rng: random.Random) -> List[str]:
    """Row-major colors with no run of three along either axis.

    Each cell draws uniformly from the palette colors that do not complete a run.
    A two-color palette can leave a cell with no legal color; the fill then steps
    back and tries the previous cell's next option.
    """
    colors: List[str] = []
    options: List[List[str]] = []
    total = rows * cols
    while len(colors) < total:
        index = len(colors)
        if len(options) == index:
            blocked = _blocked_colors(colors, cols, index)
            candidates = [color for color in palette if color not in blocked]
            rng.shuffle(candidates)
            options.append(candidates)
        if options[index]:
            colors.append(options[index].pop())
            continue
        options.pop()
        if not colors:
            raise RuntimeError("Unable to fill board without runs")
        colors.pop()
    return colors


def randomize_colors(world: World, rng: random.Random | None = None) -> None:
    """Give every cell a fresh run-free color and clear its removal flags."""
    board = get_board(world)
    rng = rng or world_rng(world)
    layout = generate_layout(board.rows, board.cols, board.palette, rng)
    for entity, color in zip(board.cells, layout):
        world.component_for_entity(entity, Jewel).color = color
        status: CellStatus = world.component_for_entity(entity, CellStatus)
        status.pending_removal = False
        status.was_cleared = False
