class MazeError(Exception):
    """Base class for every error raised by astar_maze."""


class InvalidDimensions(MazeError, ValueError):
    """rows or cols is not a positive integer. No session is created."""

    def __init__(self, rows, cols):
        super().__init__(f"Grid dimensions must be positive integers, got rows={rows!r}, cols={cols!r}")
        self.rows = rows
        self.cols = cols


class InvalidEndpoint(MazeError, ValueError):
    """A start or target position lies outside the grid."""

    def __init__(self, name, pos, rows, cols):
        super().__init__(f"{name} {pos!r} is outside the {rows}x{cols} grid")
        self.name = name
        self.pos = pos


class PathRequestedBeforeSolved(MazeError, RuntimeError):
    """reconstruct_path was called while the search was still running."""

    def __init__(self, state):
        super().__init__(f"No path available yet: session is {state.value}")
        self.state = state
