# --- Directions ---
# Wall flags are indexed by compass side. The order N, E, S, W is also the
# order in which neighbors are scanned.
NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3
DIRECTIONS = (NORTH, EAST, SOUTH, WEST)
DIRECTION_NAMES = ('N', 'E', 'S', 'W')

# (dx, dy) offset for each direction. North is y - 1, matching screen coordinates.
OFFSETS = {
    NORTH: (0, -1),
    EAST: (1, 0),
    SOUTH: (0, 1),
    WEST: (-1, 0),
}
OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}


class Cell:
    """
    A single maze cell.

    Attributes:
      x, y (int): Position in the grid; x in [0, rows), y in [0, cols).
      walls (list[bool]): Wall flags indexed by NORTH/EAST/SOUTH/WEST.
                          True means the wall is present. All start True.
      visited (bool): Set once by the generator, never reset.
      g, h, f: A* costs. None until the cell first enters the open set.
      previous (tuple | None): Coordinate handle (x, y) of the predecessor on
                               the best known path. A handle, not a Cell, so
                               the grid never holds cyclic references.

    Walls must only be cleared through Grid.remove_wall, which keeps both
    sides of a shared wall in sync.
    """
    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.walls = [True, True, True, True]
        self.visited = False
        self.g = None
        self.h = None
        self.f = None
        self.previous = None

    @property
    def pos(self):
        return (self.x, self.y)

    def is_fully_closed(self):
        return all(self.walls)

    def __repr__(self):
        walls = ''.join(name for name, w in zip(DIRECTION_NAMES, self.walls) if w)
        return f"Cell({self.x}, {self.y}, walls={walls or '-'})"


class Grid:
    """
    Fixed-size rows x cols array of cells, indexed by (x, y).

    Grid Representation:
      - self.cells[x][y] is the Cell at (x, y).
      - x ranges over rows, y over cols. The origin (0, 0) is where the
        generator starts carving.
      - The grid is allocated once and never resized.

    Neighbor Queries:
      - neighbor(cell, direction) is the bounds-checked lookup; it returns None
        outside the grid instead of raising.
      - neighbors(cell, predicate) is the single scan shared by generation and
        solving. The predicate receives (cell, direction, neighbor) and decides
        whether the neighbor is included. unvisited_neighbors and
        open_neighbors are the two predicates the rest of the package uses.
    """
    def __init__(self, rows, cols):
        self.rows = rows
        self.cols = cols
        self.cells = [[Cell(x, y) for y in range(cols)] for x in range(rows)]

    def __len__(self):
        return self.rows * self.cols

    def __iter__(self):
        for column in self.cells:
            yield from column

    def in_bounds(self, x, y):
        if not is_index(x) or not is_index(y):
            return False
        return 0 <= x < self.rows and 0 <= y < self.cols

    def cell(self, x, y):
        """Returns the cell at (x, y), or None if the position is outside the grid."""
        if not self.in_bounds(x, y):
            return None
        return self.cells[x][y]

    def at(self, pos):
        return self.cell(pos[0], pos[1])

    def neighbor(self, cell, direction):
        dx, dy = OFFSETS[direction]
        return self.cell(cell.x + dx, cell.y + dy)

    def neighbors(self, cell, predicate=None):
        """
        Returns the grid-adjacent neighbors of `cell` accepted by `predicate`.

        Neighbors are scanned in N, E, S, W order and positions outside the
        grid are skipped. With no predicate every in-bounds neighbor is
        returned.

        Parameters:
          cell (Cell): The cell whose neighbors are queried.
          predicate (callable | None): predicate(cell, direction, neighbor) -> bool

        Returns:
          list[Cell]: Accepted neighbors in scan order.
        """
        found = []
        for direction in DIRECTIONS:
            nb = self.neighbor(cell, direction)
            if nb is None:
                continue
            if predicate is None or predicate(cell, direction, nb):
                found.append(nb)
        return found

    def unvisited_neighbors(self, cell):
        # Generation only: wall state is ignored.
        return self.neighbors(cell, _is_unvisited)

    def open_neighbors(self, cell):
        # Solving: traversable when the shared wall is absent on `cell`'s side.
        return self.neighbors(cell, _is_open)

    def direction_between(self, a, b):
        """Returns the direction from cell `a` to cell `b`, or None if they are not adjacent."""
        delta = (b.x - a.x, b.y - a.y)
        for direction, offset in OFFSETS.items():
            if offset == delta:
                return direction
        return None

    def remove_wall(self, a, b):
        """
        Carves a passage between two adjacent cells.

        Clears exactly two flags: `a`'s wall facing `b` and `b`'s wall facing
        `a`. This is the only place walls are removed, which is what keeps wall
        state symmetric.

        Raises:
          ValueError: if `a` and `b` are not grid-adjacent.
        """
        direction = self.direction_between(a, b)
        if direction is None:
            raise ValueError(f"Cells {a.pos} and {b.pos} are not adjacent")
        a.walls[direction] = False
        b.walls[OPPOSITE[direction]] = False

    def open_connections(self):
        """
        Returns every wall-free connection exactly once, as ((x1, y1), (x2, y2)) pairs.

        Only the east and south sides are inspected, so each shared wall is
        seen from one side only. After generation this is the edge set of the
        maze's spanning tree.
        """
        edges = []
        for cell in self:
            for direction in (EAST, SOUTH):
                nb = self.neighbor(cell, direction)
                if nb is not None and not cell.walls[direction]:
                    edges.append((cell.pos, nb.pos))
        return edges

    def is_symmetric(self):
        """True if every shared wall has the same flag on both sides."""
        for cell in self:
            for direction in (EAST, SOUTH):
                nb = self.neighbor(cell, direction)
                if nb is not None and cell.walls[direction] != nb.walls[OPPOSITE[direction]]:
                    return False
        return True


def is_index(value):
    # bool is an int subclass but never a coordinate
    return isinstance(value, int) and not isinstance(value, bool)


def _is_unvisited(cell, direction, neighbor):
    return not neighbor.visited


def _is_open(cell, direction, neighbor):
    return not cell.walls[direction]
