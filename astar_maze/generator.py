import logging
import random

logger = logging.getLogger(__name__)


class DepthFirstCarver:
    """
    Carves a perfect maze into a Grid using randomized iterative Depth-First Search.

    High-level overview:
      - The grid starts with every wall present and every cell unvisited.
      - Carving starts at the origin (0, 0), which is marked visited and pushed
        on the backtracking stack.
      - While the stack is not empty, the current cell's unvisited neighbors
        are collected in N, E, S, W order. If there are any, one is chosen at
        random, the wall between them is removed on both sides, and the
        neighbor becomes current. Otherwise the stack is popped and the popped
        cell becomes current (backtrack).
      - Each cell is connected exactly once, to a cell that was already
        visited, so the open connections form a spanning tree: exactly one
        path between any two cells, rows * cols - 1 connections.

    Randomness:
      - `rng` is any object with a `choice(sequence)` method. A seeded
        random.Random gives reproducible mazes; a stub that always returns the
        first element gives a fully deterministic "N, E, S, W first" maze.

    Generation is not incremental: run() carves the whole maze in one call.
    """
    def __init__(self, grid, rng=None, seed=None):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random(seed)
        self.stack = []
        self.current = None
        self.walls_removed = 0

    def run(self):
        """Carves the full maze. Returns the number of walls removed."""
        grid = self.grid
        self.current = grid.cell(0, 0)
        self.current.visited = True
        self.stack = [self.current]

        while self.stack:
            unvisited = grid.unvisited_neighbors(self.current)
            if unvisited:
                # Pick a random neighbor to maintain maze randomness
                nxt = self.rng.choice(unvisited)
                grid.remove_wall(self.current, nxt)
                self.walls_removed += 1
                self.stack.append(nxt)
                nxt.visited = True
                self.current = nxt
            else:
                # Dead end: backtrack to the most recently visited cell
                self.current = self.stack.pop()

        logger.debug("Carved %dx%d maze: %d walls removed", grid.rows, grid.cols, self.walls_removed)
        return self.walls_removed


def generate_maze(grid, rng=None, seed=None):
    """Carves `grid` in place and returns it."""
    DepthFirstCarver(grid, rng=rng, seed=seed).run()
    return grid
