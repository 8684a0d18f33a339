"""Game state resource describing the swap protocol phase and progress."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GamePhase(Enum):
    """Phases of the swap protocol."""
    IDLE = auto()
    ONE_SELECTED = auto()
    CASCADE_RUNNING = auto()


@dataclass
class GameState:
    """Singleton component storing the phase, selection and move bookkeeping."""
    phase: GamePhase = GamePhase.IDLE
    move_count: int = 0
    won: bool = False
    # Flat board index of the selected cell.
    selected: Optional[int] = None
    cascade_depth: int = 0
