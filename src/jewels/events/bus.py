from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds since last frame)
EVENT_CASCADE_TICK = "cascade_tick"                # payload: none; one cascade step is due


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: reason=str


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c), move_count=int
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=[(r,c),...]
EVENT_BOARD_RESET = "board_reset"                  # payload: rows, cols, num_colors
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...], reason=str
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_MOVE_COUNTED = "move_counted"                # payload: move_count=int
EVENT_GAME_WON = "game_won"                        # payload: move_count=int
