import enum


class SearchStatus(enum.Enum):
    RUNNING = 'running'
    FOUND = 'found'
    EXHAUSTED = 'exhausted'


def heuristic(a, b):
    """
    Manhattan distance between two cells.

    h(a, b) = |a.x - b.x| + |a.y - b.y|

    Admissible and consistent on a 4-connected grid with unit edge costs, so
    A* with this heuristic returns a shortest path and never needs to reopen a
    closed cell.
    """
    return abs(a.x - b.x) + abs(a.y - b.y)


class IncrementalAStar:
    """
    A* search over a carved Grid that advances one expansion per step() call.

    Search State:
      - open_set: list of frontier cells in insertion order. Selection scans
        it and only replaces the best candidate on a strictly smaller f, so
        ties go to the earliest-inserted cell.
      - closed_set: set of (x, y) positions whose cost is final. A position
        never leaves the closed set.
      - Cost fields (g, h, f, previous) live on the Cells themselves;
        `previous` holds a coordinate handle.

    Metrics:
      - nodes_expanded: cells moved from the open set to the closed set.
      - frontier_max: largest open set size seen.
    """
    def __init__(self, grid, start, target):
        self.grid = grid
        self.start = start
        self.target = target
        self.open_set = []
        self._open_positions = set()
        self.closed_set = set()
        self.status = SearchStatus.RUNNING
        self.nodes_expanded = 0
        self.frontier_max = 0

        start.g = 0
        start.h = heuristic(start, target)
        start.f = start.g + start.h
        start.previous = None
        self._push(start)

    def _push(self, cell):
        self.open_set.append(cell)
        self._open_positions.add(cell.pos)
        self.frontier_max = max(self.frontier_max, len(self.open_set))

    def in_open_set(self, cell):
        return cell.pos in self._open_positions

    def in_closed_set(self, cell):
        return cell.pos in self.closed_set

    def _select(self):
        # First strictly smaller f wins; equal f keeps the earlier candidate.
        winner = 0
        for i, cell in enumerate(self.open_set):
            if cell.f < self.open_set[winner].f:
                winner = i
        return winner

    def step(self):
        """
        Performs exactly one A* expansion and returns the resulting SearchStatus.

        Execution order:
          1) Empty open set: the search is exhausted.
          2) Select the open cell with the lowest f.
          3) Selected cell is the target: the search succeeded. The target
             stays where it is; path() walks the `previous` handles.
          4) Otherwise close the selected cell and relax each traversable
             neighbor that is not closed, with tentative g = g + 1.

        Calling step() after the search finished returns the final status
        without touching any state.
        """
        if self.status is not SearchStatus.RUNNING:
            return self.status

        if not self.open_set:
            self.status = SearchStatus.EXHAUSTED
            return self.status

        current = self.open_set[self._select()]
        if current is self.target:
            self.status = SearchStatus.FOUND
            return self.status

        self.open_set.remove(current)
        self._open_positions.discard(current.pos)
        self.closed_set.add(current.pos)
        self.nodes_expanded += 1

        for neighbor in self.grid.open_neighbors(current):
            if neighbor.pos in self.closed_set:
                continue
            tentative_g = current.g + 1
            if not self.in_open_set(neighbor):
                self._relax(neighbor, current, tentative_g)
                self._push(neighbor)
            elif tentative_g < neighbor.g:
                # Better path found; membership is unchanged
                self._relax(neighbor, current, tentative_g)

        return self.status

    def _relax(self, cell, parent, g):
        cell.g = g
        cell.h = heuristic(cell, self.target)
        cell.f = cell.g + cell.h
        cell.previous = parent.pos

    def path(self):
        """
        Returns the reconstructed path as (x, y) positions from start to target.

        Empty unless the target was found. Reconstruction follows the
        `previous` handles from the target back to the start and reverses the
        result; no cells are created.
        """
        if self.status is not SearchStatus.FOUND:
            return []
        out = []
        pos = self.target.pos
        while pos is not None:
            out.append(pos)
            pos = self.grid.at(pos).previous
        out.reverse()
        return out
