# tests/test_viewer.py
import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from gridpath.app.settings import Settings  # noqa: E402
from gridpath.app.viewer import Viewer, initial_grid  # noqa: E402
from gridpath.core.search import Algorithm  # noqa: E402
from gridpath.core.types import CellKind, Grid  # noqa: E402


@pytest.fixture
def viewer():
    grid = Grid.create(6, 8)
    grid.set_start((1, 1))
    grid.set_end((4, 6))
    v = Viewer(grid, Settings(rows=6, cols=8, seed=3))
    yield v
    pygame.quit()


def _drain(v, limit=1000):
    for _ in range(limit):
        v._single_step()
        if v.state in ("Done", "No path found"):
            return


def test_single_steps_replay_search(viewer):
    _drain(viewer)
    assert viewer.state == "Done"
    result = viewer.sequencer.result
    assert result.steps == 8
    assert viewer.grid.count(CellKind.PATH) == 7
    assert viewer.grid.to_codes() == result.grid.to_codes()
    assert viewer.metrics()["path_len"] == 8


def test_tick_paces_frames(viewer):
    viewer._toggle_run()
    assert viewer.running
    viewer._tick(now=1000.0)
    assert viewer.sequencer.position == 1
    viewer._tick(now=1000.0 + 3600)
    assert viewer.state == "Done"
    assert not viewer.running


def test_edits_blocked_during_replay(viewer):
    viewer._single_step()
    assert viewer.state == "Paused"
    viewer._edit((0, 0), "wall")
    viewer._edit((3, 3), "start")
    assert viewer.grid[(0, 0)] is not CellKind.WALL
    assert viewer.grid.start == (1, 1)


def test_edits_after_replay(viewer):
    _drain(viewer)
    viewer._edit((0, 0), "wall")
    viewer._edit((1, 1), "end")  # collides with start: ignored
    viewer._edit((2, 2), "toggle")
    assert viewer.grid[(0, 0)] is CellKind.WALL
    assert viewer.grid[(2, 2)] is CellKind.WALL
    assert viewer.grid.end == (4, 6)
    assert viewer.sequencer is None


def test_missing_endpoint_reported(viewer):
    viewer._clear()
    viewer._toggle_run()
    assert not viewer.running
    assert "start and end" in viewer.state


def test_switch_algo_resets(viewer):
    _drain(viewer)
    viewer._switch_algo(Algorithm.DFS)
    assert viewer.sequencer is None
    assert viewer.grid.count(CellKind.VISITED) == viewer.grid.count(CellKind.PATH) == 0
    _drain(viewer)
    assert viewer.sequencer.result.algorithm == "DFS"


def test_generate_and_draw(viewer):
    viewer._generate()
    assert viewer.state == "Maze generated"
    assert viewer.grid.start is None
    assert viewer.grid[(0, 0)] is CellKind.WALL
    viewer._draw()


def test_cell_at(viewer):
    cs = viewer.cell_size
    ox, oy = viewer._grid_origin
    assert viewer.cell_at((ox + 2 * cs + 1, oy + 3 * cs + 1)) == (3, 2)
    assert viewer.cell_at((ox - 1, oy)) is None
    assert viewer.cell_at((ox + 100 * cs, oy)) is None


def test_bump_speed(viewer):
    viewer._bump_speed(+1)
    assert viewer.speed == 2.0
    for _ in range(10):
        viewer._bump_speed(-1)
    assert viewer.speed == 0.25


def test_initial_grid_from_settings():
    assert initial_grid(Settings(rows=5, cols=7)).cols == 7
    assert initial_grid(Settings(map="02_detour")).start == (1, 1)
