from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from esper import World

from jewels.components.cell_status import CellStatus
from jewels.components.game_state import GamePhase
from jewels.components.jewel import Jewel
from jewels.systems.board_ops import get_board
from jewels.utils.game_state import get_or_create_game_state

Position = Tuple[int, int]


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only copy of the board and game state for rendering and inspection."""
    rows: int
    cols: int
    palette: Tuple[str, ...]
    colors: Tuple[str, ...]  # row-major, length == rows * cols
    was_cleared: Tuple[bool, ...]
    pending_removal: Tuple[bool, ...]
    selected: Optional[Position]
    move_count: int
    won: bool
    phase: GamePhase

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def at(self, row: int, col: int) -> str:
        return self.colors[self.index(row, col)]

    def cleared_at(self, row: int, col: int) -> bool:
        return self.was_cleared[self.index(row, col)]

    def cleared_count(self) -> int:
        return sum(1 for flag in self.was_cleared if flag)

    def pretty(self) -> str:
        """Text grid: one digit per palette color, '*' suffix on cleared cells, brackets on the selection."""
        lines: List[str] = []
        for r in range(self.rows):
            row: List[str] = []
            for c in range(self.cols):
                token = str(self.palette.index(self.at(r, c)))
                token += "*" if self.cleared_at(r, c) else " "
                if self.selected == (r, c):
                    token = f"[{token}]"
                else:
                    token = f" {token} "
                row.append(token)
            lines.append("".join(row).rstrip())
        return "\n".join(lines)


def take_snapshot(world: World) -> BoardSnapshot:
    board = get_board(world)
    state = get_or_create_game_state(world)
    colors: List[str] = []
    cleared: List[bool] = []
    pending: List[bool] = []
    for entity in board.cells:
        colors.append(world.component_for_entity(entity, Jewel).color)
        status = world.component_for_entity(entity, CellStatus)
        cleared.append(status.was_cleared)
        pending.append(status.pending_removal)
    selected = board.position_of(state.selected) if state.selected is not None else None
    return BoardSnapshot(
        rows=board.rows,
        cols=board.cols,
        palette=tuple(board.palette),
        colors=tuple(colors),
        was_cleared=tuple(cleared),
        pending_removal=tuple(pending),
        selected=selected,
        move_count=state.move_count,
        won=state.won,
        phase=state.phase,
    )
