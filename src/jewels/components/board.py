from dataclasses import dataclass, field
from typing import List, Tuple

from jewels.constants import PALETTE


@dataclass(slots=True)
class Board:
    """Board dimensions plus the row-major list of cell entities.

    Cells never hold references to their neighbours; adjacency and run scans use
    row/col arithmetic over ``cells``.
    """
    rows: int
    cols: int
    num_colors: int
    cells: List[int] = field(default_factory=list)
    palette: List[str] = field(init=False)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if len(self.cells) != self.rows * self.cols:
            raise ValueError(
                f"Board {self.rows}x{self.cols} needs {self.rows * self.cols} cells, got {len(self.cells)}"
            )
        if not 2 <= self.num_colors <= len(PALETTE):
            raise ValueError(f"num_colors must be between 2 and {len(PALETTE)}, got {self.num_colors}")
        self.palette = PALETTE[: self.num_colors]

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def position_of(self, index: int) -> Tuple[int, int]:
        return divmod(index, self.cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def entity_at(self, row: int, col: int) -> int:
        return self.cells[self.index(row, col)]
