import dataclasses

import pytest

from jewels.components.game_state import GamePhase
from jewels.constants import PALETTE
from jewels.systems.board_ops import status_at
from tests.helpers import GRID_DOUBLE_SWAP, new_engine, paint


def test_snapshot_copies_board_and_state():
    engine = new_engine()
    paint(engine.world, GRID_DOUBLE_SWAP)
    engine.click(3, 3)
    snap = engine.snapshot()
    assert (snap.rows, snap.cols) == (5, 5)
    assert snap.palette == tuple(PALETTE[:3])
    assert snap.at(0, 0) == PALETTE[2]
    assert snap.at(4, 3) == PALETTE[0]
    assert snap.selected == (3, 3)
    assert snap.phase == GamePhase.ONE_SELECTED
    assert snap.move_count == 0
    assert not snap.won
    assert snap.cleared_count() == 0
    assert not any(snap.pending_removal)


def test_snapshot_is_detached_from_world():
    engine = new_engine()
    snap = engine.snapshot()
    status_at(engine.world, 0, 0).was_cleared = True
    assert not snap.cleared_at(0, 0)
    assert engine.snapshot().cleared_at(0, 0)


def test_snapshot_is_frozen():
    snap = new_engine().snapshot()
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.won = True  # type: ignore[misc]


def test_pretty_marks_cleared_and_selected_cells():
    engine = new_engine()
    paint(engine.world, GRID_DOUBLE_SWAP)
    status_at(engine.world, 1, 0).was_cleared = True
    engine.click(0, 0)
    lines = engine.snapshot().pretty().splitlines()
    assert len(lines) == 5
    assert lines[0] == "[2 ] 1   2   0   1"
    assert lines[1] == " 0*  0   1   2   0"
    assert lines[4] == " 0   2   1   0   0"
