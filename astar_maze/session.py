import collections
import enum
import logging

from .astar import IncrementalAStar, SearchStatus
from .errors import InvalidDimensions, InvalidEndpoint, PathRequestedBeforeSolved
from .generator import DepthFirstCarver
from .maze import Grid, is_index

logger = logging.getLogger(__name__)

# --- Configuration ---
DEFAULT_ROWS = 25
DEFAULT_COLS = 25
DEFAULT_MAX_TICKS = 20000


class SessionState(enum.Enum):
    BUILDING = 'building'
    READY = 'ready'
    SOLVING = 'solving'
    SOLVED = 'solved'
    EXHAUSTED = 'exhausted'

    @property
    def is_terminal(self):
        return self in (SessionState.SOLVED, SessionState.EXHAUSTED)


# Read-only snapshot of one cell for renderers.
CellView = collections.namedtuple(
    'CellView', ['x', 'y', 'walls', 'in_open_set', 'in_closed_set', 'visited'])


class Session:
    """
    Owns one maze and its search, and advances them one tick at a time.

    Lifecycle:
      BUILDING  -> READY      first step(): carve the whole maze, seed A*
      READY     -> SOLVING    one A* expansion per step()
      SOLVING   -> SOLVING    ... until the target is selected
      SOLVING   -> SOLVED     target reached, path available
      SOLVING   -> EXHAUSTED  open set ran dry, no path

    SOLVED and EXHAUSTED are terminal: further step() calls return the state
    without mutating anything. A session never shares state with another one;
    the caller owns the scheduling loop and simply drops the session to
    abandon it.

    Parameters:
      rows, cols (int): Grid size, both > 0.
      seed (int | None): Seed for the generator's random.Random.
      rng: Any object with choice(sequence); overrides `seed`.
      start, target ((x, y) | None): Search endpoints. Default to the origin
                                     and the far corner (rows - 1, cols - 1).

    Metrics:
      ticks, walls_removed, nodes_expanded, frontier_max, path_length
    """
    def __init__(self, rows=DEFAULT_ROWS, cols=DEFAULT_COLS, seed=None, rng=None, start=None, target=None):
        if not _is_positive_int(rows) or not _is_positive_int(cols):
            raise InvalidDimensions(rows, cols)

        self.rows = rows
        self.cols = cols
        self.grid = Grid(rows, cols)
        start = self._endpoint('start', (0, 0) if start is None else start)
        target = self._endpoint('target', (rows - 1, cols - 1) if target is None else target)
        self.start = self.grid.at(start)
        self.target = self.grid.at(target)
        self.carver = DepthFirstCarver(self.grid, rng=rng, seed=seed)
        self.search = None
        self.state = SessionState.BUILDING

        self.metrics = {
            'ticks': 0,
            'walls_removed': 0,
            'nodes_expanded': 0,
            'frontier_max': 0,
            'path_length': 0,
        }

    def _endpoint(self, name, pos):
        try:
            pos = tuple(pos)
        except TypeError:
            raise InvalidEndpoint(name, pos, self.rows, self.cols) from None
        if len(pos) != 2 or not self.grid.in_bounds(*pos):
            raise InvalidEndpoint(name, pos, self.rows, self.cols)
        return pos

    @property
    def solved(self):
        return self.state.is_terminal

    def step(self):
        """Advances exactly one unit of work and returns the resulting SessionState."""
        if self.state.is_terminal:
            return self.state

        self.metrics['ticks'] += 1
        if self.state is SessionState.BUILDING:
            self._build()
        else:
            self._solve_step()
        return self.state

    def _build(self):
        self.metrics['walls_removed'] = self.carver.run()
        self.search = IncrementalAStar(self.grid, self.start, self.target)
        self.metrics['frontier_max'] = self.search.frontier_max
        self.state = SessionState.READY

    def _solve_step(self):
        status = self.search.step()
        self.metrics['nodes_expanded'] = self.search.nodes_expanded
        self.metrics['frontier_max'] = self.search.frontier_max

        if status is SearchStatus.FOUND:
            self.state = SessionState.SOLVED
            self.metrics['path_length'] = len(self.search.path())
            logger.info("Shortest path length: %d", self.metrics['path_length'])
        elif status is SearchStatus.EXHAUSTED:
            self.state = SessionState.EXHAUSTED
            logger.info("No solution found")
        else:
            self.state = SessionState.SOLVING

    def cell_view(self, x, y):
        """Returns a CellView snapshot of (x, y), or None if the position is outside the grid."""
        cell = self.grid.cell(x, y)
        if cell is None:
            return None
        in_open = self.search is not None and self.search.in_open_set(cell)
        in_closed = self.search is not None and self.search.in_closed_set(cell)
        return CellView(cell.x, cell.y, tuple(cell.walls), in_open, in_closed, cell.visited)

    def reconstruct_path(self):
        """
        Returns the shortest path as (x, y) positions from start to target.

        Returns an empty list once the session is EXHAUSTED.

        Raises:
          PathRequestedBeforeSolved: if the session has not reached a terminal state.
        """
        if not self.state.is_terminal:
            raise PathRequestedBeforeSolved(self.state)
        return self.search.path()

    def run_to_completion(self, max_ticks=None):
        """
        Steps until the session is terminal or `max_ticks` steps have been taken.

        This is the headless driver; interactive drivers call step() once per
        frame instead. Returns the resulting SessionState.
        """
        taken = 0
        while not self.state.is_terminal and (max_ticks is None or taken < max_ticks):
            self.step()
            taken += 1
        return self.state


def _is_positive_int(value):
    return is_index(value) and value > 0


def initialize(rows, cols, *, seed=None, rng=None, start=None, target=None):
    """Creates a session, carves its maze and seeds the search. The returned session is READY."""
    session = Session(rows, cols, seed=seed, rng=rng, start=start, target=target)
    session.step()
    return session


def step(session):
    return session.step()


def cell_view(session, x, y):
    return session.cell_view(x, y)


def reconstruct_path(session):
    return session.reconstruct_path()


def run_to_completion(session, max_ticks=None):
    return session.run_to_completion(max_ticks)
