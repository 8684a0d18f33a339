import pytest

from jewels.components.board import Board
from jewels.components.board_position import BoardPosition
from jewels.constants import PALETTE
from jewels.events.bus import EventBus
from jewels.systems.board import BoardSystem
from jewels.world import create_world


def test_board_component_exists():
    bus = EventBus(); world = create_world(bus)
    BoardSystem(world, bus, 6, 7, 4)
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.rows == 6 and comp.cols == 7
    assert comp.num_colors == 4
    assert comp.palette == PALETTE[:4]
    assert len(comp.cells) == 42


def test_cells_are_row_major_with_fixed_positions():
    bus = EventBus(); world = create_world(bus)
    board = BoardSystem(world, bus, 5, 8, 3).board
    for index, entity in enumerate(board.cells):
        pos = world.component_for_entity(entity, BoardPosition)
        assert (pos.row, pos.col) == board.position_of(index)
        assert board.index(pos.row, pos.col) == index
    assert board.entity_at(4, 7) == board.cells[-1]


def test_board_position_is_immutable():
    pos = BoardPosition(row=1, col=2)
    with pytest.raises(AttributeError):
        pos.row = 3  # type: ignore[misc]


def test_in_bounds():
    board = Board(rows=5, cols=6, num_colors=2, cells=list(range(30)))
    assert board.in_bounds(0, 0)
    assert board.in_bounds(4, 5)
    assert not board.in_bounds(5, 0)
    assert not board.in_bounds(0, 6)
    assert not board.in_bounds(-1, 0)


def test_mismatched_cell_count_rejected():
    with pytest.raises(ValueError):
        Board(rows=5, cols=5, num_colors=3, cells=list(range(24)))


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 5)])
def test_non_positive_dimensions_rejected(rows, cols):
    with pytest.raises(ValueError):
        Board(rows=rows, cols=cols, num_colors=3, cells=[])


@pytest.mark.parametrize("num_colors", [1, len(PALETTE) + 1])
def test_palette_size_out_of_range_rejected(num_colors):
    with pytest.raises(ValueError):
        Board(rows=5, cols=5, num_colors=num_colors, cells=list(range(25)))
