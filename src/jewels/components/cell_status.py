from dataclasses import dataclass

@dataclass(slots=True)
class CellStatus:
    """Removal bookkeeping for a single cell.

    was_cleared: True once the cell has been part of a removed run this game.
    pending_removal: True between marking and the next removal pass.
    """
    was_cleared: bool = False
    pending_removal: bool = False
