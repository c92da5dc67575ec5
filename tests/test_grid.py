# tests/test_grid.py
import pytest

from gridpath.core.errors import GridError, InvalidDimensions, OutOfBounds, StartEqualsEnd
from gridpath.core.types import CellKind, Grid


@pytest.fixture
def grid():
    return Grid.create(5, 6)


@pytest.mark.parametrize("rows,cols", [(2, 5), (5, 2), (0, 0), (-1, 4)])
def test_create_rejects_thin_grids(rows, cols):
    with pytest.raises(InvalidDimensions):
        Grid.create(rows, cols)


def test_create_is_all_free(grid):
    assert grid.rows == 5 and grid.cols == 6
    assert grid.count(CellKind.FREE) == 30
    assert grid.start is None and grid.end is None


def test_set_start_moves_marker(grid):
    grid.set_start((1, 1))
    grid.set_start((2, 3))
    assert grid.start == (2, 3)
    assert grid[(2, 3)] is CellKind.START
    assert grid[(1, 1)] is CellKind.FREE
    assert grid.count(CellKind.START) == 1


def test_set_end_moves_marker(grid):
    grid.set_end((0, 0))
    grid.set_end((4, 5))
    assert grid.end == (4, 5)
    assert grid[(0, 0)] is CellKind.FREE
    assert grid.count(CellKind.END) == 1


def test_endpoint_collision_leaves_grid_untouched(grid):
    grid.set_start((1, 1))
    grid.set_end((3, 3))
    before = grid.to_codes()
    with pytest.raises(StartEqualsEnd):
        grid.set_start((3, 3))
    with pytest.raises(StartEqualsEnd):
        grid.set_end((1, 1))
    assert grid.to_codes() == before
    assert grid.start == (1, 1) and grid.end == (3, 3)


@pytest.mark.parametrize("cell", [(-1, 0), (5, 0), (0, 6), (2, -3)])
def test_out_of_bounds_edits(grid, cell):
    for op in (grid.set_start, grid.set_end, grid.toggle_wall, grid.paint_wall, grid.neighbors):
        with pytest.raises(OutOfBounds):
            op(cell)


def test_out_of_bounds_is_a_grid_error_and_index_error(grid):
    with pytest.raises(GridError):
        grid.kind((9, 9))
    with pytest.raises(IndexError):
        grid.kind((9, 9))


def test_start_replaces_wall(grid):
    grid.toggle_wall((2, 2))
    grid.set_start((2, 2))
    assert grid[(2, 2)] is CellKind.START


def test_toggle_wall_flips(grid):
    grid.toggle_wall((2, 2))
    assert grid[(2, 2)] is CellKind.WALL
    grid.toggle_wall((2, 2))
    assert grid[(2, 2)] is CellKind.FREE


def test_walls_never_overwrite_endpoints(grid):
    grid.set_start((1, 1))
    grid.set_end((3, 4))
    for c in ((1, 1), (3, 4)):
        grid.toggle_wall(c)
        grid.paint_wall(c)
    assert grid[(1, 1)] is CellKind.START
    assert grid[(3, 4)] is CellKind.END


def test_paint_wall_only_adds(grid):
    grid.paint_wall((0, 1))
    grid.paint_wall((0, 1))
    assert grid[(0, 1)] is CellKind.WALL


def test_mark_respects_fixed_kinds(grid):
    grid.set_start((0, 0))
    grid.toggle_wall((1, 1))
    grid.mark((0, 0), CellKind.VISITED)
    grid.mark((1, 1), CellKind.VISITED)
    grid.mark((2, 2), CellKind.VISITED)
    grid.mark((2, 2), CellKind.PATH)
    assert grid[(0, 0)] is CellKind.START
    assert grid[(1, 1)] is CellKind.WALL
    assert grid[(2, 2)] is CellKind.PATH


def test_mark_rejects_fixed_kinds(grid):
    with pytest.raises(ValueError):
        grid.mark((2, 2), CellKind.WALL)


def test_reset_transient_is_idempotent(grid):
    grid.set_start((0, 0))
    grid.set_end((4, 5))
    grid.toggle_wall((1, 1))
    grid.mark((2, 2), CellKind.VISITED)
    grid.mark((3, 3), CellKind.PATH)
    grid.reset_transient()
    once = grid.to_codes()
    grid.reset_transient()
    assert grid.to_codes() == once
    assert grid.count(CellKind.VISITED) == grid.count(CellKind.PATH) == 0
    assert grid[(1, 1)] is CellKind.WALL
    assert grid[(0, 0)] is CellKind.START and grid[(4, 5)] is CellKind.END


def test_neighbors_order_and_bounds(grid):
    assert grid.neighbors((2, 2)) == [(1, 2), (3, 2), (2, 3), (2, 1)]
    assert grid.neighbors((0, 0)) == [(1, 0), (0, 1)]
    assert grid.neighbors((4, 5)) == [(3, 5), (4, 4)]


def test_neighbors_include_walls(grid):
    grid.toggle_wall((1, 2))
    assert (1, 2) in grid.neighbors((2, 2))
    assert not grid.is_enterable((1, 2))


def test_copy_is_independent(grid):
    grid.set_start((0, 0))
    other = grid.copy()
    other.toggle_wall((3, 3))
    other.set_start((1, 1))
    assert grid[(3, 3)] is CellKind.FREE
    assert grid.start == (0, 0)


def test_clear_and_clear_endpoints(grid):
    grid.set_start((0, 0))
    grid.set_end((1, 0))
    grid.toggle_wall((2, 2))
    grid.clear_endpoints()
    assert grid.start is None and grid.end is None
    assert grid[(0, 0)] is CellKind.FREE and grid[(2, 2)] is CellKind.WALL
    grid.clear()
    assert grid.count(CellKind.FREE) == 30


def test_from_codes_roundtrip_with_endpoints():
    codes = [[0, 1, 0], [0, 0, 0], [1, 0, 0]]
    grid = Grid.from_codes(codes, start=(0, 0), end=(2, 2))
    assert grid[(0, 1)] is CellKind.WALL
    assert grid.to_codes() == [[2, 1, 0], [0, 0, 0], [1, 0, 3]]


def test_from_codes_rejects_ragged_rows():
    with pytest.raises(InvalidDimensions):
        Grid.from_codes([[0, 0, 0], [0, 0], [0, 0, 0]])
