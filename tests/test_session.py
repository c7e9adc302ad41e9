import pytest

import astar_maze
from astar_maze import (
    InvalidDimensions,
    InvalidEndpoint,
    MazeError,
    PathRequestedBeforeSolved,
    Session,
    SessionState,
    cell_view,
    initialize,
    reconstruct_path,
    run_to_completion,
    step,
)

from .conftest import bfs_distances, wall_snapshot


def test_initialize_returns_ready_session():
    session = initialize(5, 7, seed=1)

    assert session.state is SessionState.READY
    assert session.start.pos == (0, 0)
    assert session.target.pos == (4, 6)
    assert session.metrics["walls_removed"] == 34
    assert [c.pos for c in session.search.open_set] == [(0, 0)]


def test_new_session_is_building_until_first_step():
    session = Session(3, 3, seed=0)

    assert session.state is SessionState.BUILDING
    assert session.search is None
    assert all(c.is_fully_closed() for c in session.grid)

    assert session.step() is SessionState.READY
    assert len(session.grid.open_connections()) == 8


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 3), (3, -2), (2.5, 3), ("4", 4), (True, 3)])
def test_invalid_dimensions_are_rejected(rows, cols):
    with pytest.raises(InvalidDimensions):
        initialize(rows, cols)


def test_invalid_dimensions_is_a_value_error():
    with pytest.raises(ValueError):
        initialize(0, 0)


@pytest.mark.parametrize("kwargs", [
    {"start": (5, 0)},
    {"target": (0, -1)},
    {"target": (1, 2, 3)},
    {"start": (0.5, 0)},
    {"target": (1, 2.0)},
    {"start": (True, 0)},
    {"start": 5},
    {"target": "ab"},
])
def test_endpoints_outside_grid_are_rejected(kwargs):
    with pytest.raises(InvalidEndpoint):
        initialize(5, 5, **kwargs)


def test_step_advances_one_expansion():
    session = initialize(6, 6, seed=4)

    assert step(session) is SessionState.SOLVING
    assert session.metrics["nodes_expanded"] == 1
    assert session.cell_view(0, 0).in_closed_set


def test_run_to_completion_solves_generated_maze():
    session = initialize(20, 20, seed=42)

    assert run_to_completion(session) is SessionState.SOLVED
    path = reconstruct_path(session)
    assert path[0] == (0, 0)
    assert path[-1] == (19, 19)
    assert session.metrics["path_length"] == len(path)
    assert len(path) - 1 == bfs_distances(session.grid, (0, 0))[(19, 19)]


def test_run_to_completion_respects_tick_budget():
    session = initialize(20, 20, seed=42)

    assert run_to_completion(session, max_ticks=3) is SessionState.SOLVING
    assert session.metrics["nodes_expanded"] == 3


def test_custom_endpoints():
    session = initialize(8, 8, seed=2, start=(7, 0), target=(3, 4))
    session.run_to_completion()

    path = session.reconstruct_path()
    assert path[0] == (7, 0)
    assert path[-1] == (3, 4)
    assert len(path) - 1 == bfs_distances(session.grid, (7, 0))[(3, 4)]


def test_one_by_one_grid(first_choice):
    session = initialize(1, 1, rng=first_choice)

    assert session.metrics["walls_removed"] == 0
    assert session.start is session.target
    assert step(session) is SessionState.SOLVED
    assert reconstruct_path(session) == [(0, 0)]
    assert session.metrics["path_length"] == 1


def test_three_by_three_first_choice_scenario(first_choice):
    session = initialize(3, 3, rng=first_choice)
    session.run_to_completion()

    assert session.state is SessionState.SOLVED
    assert session.reconstruct_path() == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]


def test_reconstruct_path_before_solved_raises():
    session = initialize(4, 4, seed=0)
    with pytest.raises(PathRequestedBeforeSolved):
        reconstruct_path(session)

    session.step()
    with pytest.raises(PathRequestedBeforeSolved) as excinfo:
        session.reconstruct_path()
    assert isinstance(excinfo.value, MazeError)
    assert session.state is SessionState.SOLVING


def test_terminal_stepping_is_idempotent():
    session = initialize(10, 10, seed=9)
    session.run_to_completion()
    path = session.reconstruct_path()
    metrics = dict(session.metrics)
    walls = wall_snapshot(session.grid)

    for _ in range(10):
        assert step(session) is SessionState.SOLVED

    assert session.reconstruct_path() == path
    assert session.metrics == metrics
    assert wall_snapshot(session.grid) == walls


def test_exhausted_session_when_maze_is_left_uncarved():
    session = Session(2, 2, seed=0)
    session.carver.run = lambda: 0

    assert session.step() is SessionState.READY
    assert session.step() is SessionState.SOLVING
    assert session.step() is SessionState.EXHAUSTED
    assert session.solved
    assert session.reconstruct_path() == []
    assert session.step() is SessionState.EXHAUSTED


def test_cell_view_snapshot():
    session = initialize(3, 3, seed=5)
    view = cell_view(session, 0, 0)

    assert (view.x, view.y) == (0, 0)
    assert view.walls == tuple(session.grid.cell(0, 0).walls)
    assert view.in_open_set and not view.in_closed_set
    assert view.visited

    session.step()
    view = cell_view(session, 0, 0)
    assert view.in_closed_set and not view.in_open_set


def test_cell_view_out_of_bounds_is_none():
    session = initialize(3, 3, seed=5)

    assert cell_view(session, 3, 0) is None
    assert cell_view(session, 0, -1) is None


@pytest.mark.parametrize("x,y", [(1.5, 0), (0, 1.0), (True, 0), ("1", 1), (None, 0)])
def test_cell_view_non_integer_coordinates_is_none(x, y):
    session = initialize(3, 3, seed=5)
    assert cell_view(session, x, y) is None


def test_cell_view_is_read_only():
    session = initialize(3, 3, seed=5)
    view = cell_view(session, 1, 1)

    with pytest.raises(AttributeError):
        view.visited = False
    with pytest.raises(TypeError):
        view.walls[0] = True
    assert session.grid.is_symmetric()


def test_sessions_do_not_share_state():
    a = initialize(6, 6, seed=1)
    b = initialize(6, 6, seed=1)
    a.run_to_completion()

    assert b.state is SessionState.READY
    assert b.grid is not a.grid
    assert wall_snapshot(a.grid) == wall_snapshot(b.grid)


def test_solving_is_deterministic_for_a_fixed_maze():
    paths = []
    for _ in range(2):
        session = initialize(14, 9, seed=77)
        session.run_to_completion()
        paths.append((session.reconstruct_path(), session.metrics["nodes_expanded"]))
    assert paths[0] == paths[1]


def test_success_is_logged(caplog):
    session = initialize(4, 4, seed=3)
    with caplog.at_level("INFO", logger="astar_maze.session"):
        session.run_to_completion()
    assert f"Shortest path length: {session.metrics['path_length']}" in caplog.text


def test_package_exports_defaults():
    assert astar_maze.DEFAULT_ROWS == 25
    assert astar_maze.DEFAULT_COLS == 25
    session = Session()
    assert (session.rows, session.cols) == (25, 25)
