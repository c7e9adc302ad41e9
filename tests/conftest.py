import collections
import random

import pytest


class FirstChoice:
    """Random source that always picks the first candidate (N, E, S, W order)."""

    def choice(self, seq):
        return seq[0]


class RecordingRng:
    """Wraps random.Random and remembers the index of every choice made."""

    def __init__(self, seed):
        self._rng = random.Random(seed)
        self.picks = []

    def choice(self, seq):
        i = self._rng.randrange(len(seq))
        self.picks.append(i)
        return seq[i]


class ReplayRng:
    def __init__(self, picks):
        self._picks = iter(picks)

    def choice(self, seq):
        return seq[next(self._picks)]


def bfs_distances(grid, start_pos):
    """Shortest distance (in edges) from start_pos to every reachable cell, over wall-free connections."""
    dist = {start_pos: 0}
    queue = collections.deque([start_pos])
    while queue:
        pos = queue.popleft()
        for nb in grid.open_neighbors(grid.at(pos)):
            if nb.pos not in dist:
                dist[nb.pos] = dist[pos] + 1
                queue.append(nb.pos)
    return dist


def wall_snapshot(grid):
    return [[tuple(c.walls) for c in column] for column in grid.cells]


@pytest.fixture
def first_choice():
    return FirstChoice()
