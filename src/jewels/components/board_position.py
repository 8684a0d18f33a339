from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class BoardPosition:
    """Fixed grid coordinate of a cell entity; row 0 is the top row."""
    row: int
    col: int
