"""Perfect maze generation with incremental, tick-driven A* solving.

    from astar_maze import initialize, step, reconstruct_path

    session = initialize(25, 25, seed=42)
    while not session.state.is_terminal:
        step(session)
    path = reconstruct_path(session)
"""
from .astar import IncrementalAStar, SearchStatus, heuristic
from .errors import InvalidDimensions, InvalidEndpoint, MazeError, PathRequestedBeforeSolved
from .generator import DepthFirstCarver, generate_maze
from .maze import EAST, NORTH, SOUTH, WEST, Cell, Grid
from .session import (
    DEFAULT_COLS,
    DEFAULT_MAX_TICKS,
    DEFAULT_ROWS,
    CellView,
    Session,
    SessionState,
    cell_view,
    initialize,
    reconstruct_path,
    run_to_completion,
    step,
)

__version__ = "0.1.0"
