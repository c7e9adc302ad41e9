"""Graphviz exports of a session's maze and search trees.

The graphs are plain `graphviz.Digraph` objects; `.source` gives the DOT text
and `render()` needs the Graphviz binaries installed.
"""
from graphviz import Digraph

PATH_COLOR = "#f39c12"
CLOSED_COLOR = "#e74c3c"
OPEN_COLOR = "#1abc9c"


def _node_id(pos):
    return f"{pos[0]},{pos[1]}"


def maze_tree_graph(session):
    """The carved spanning tree: one edge per wall-free connection."""
    dot = Digraph(name="maze", graph_attr={"rankdir": "TB"})
    for cell in session.grid:
        dot.node(_node_id(cell.pos), label=str(cell.pos))
    for a, b in session.grid.open_connections():
        dot.edge(_node_id(a), _node_id(b), dir="none")
    return dot


def search_tree_graph(session):
    """
    The A* predecessor tree: an edge previous -> cell for every cell the
    search has reached. Closed and open cells are colored; once solved, the
    reconstructed path is highlighted.
    """
    dot = Digraph(name="search")
    if session.search is None:
        return dot

    path = set()
    if session.state.is_terminal:
        path = set(session.reconstruct_path())

    search = session.search
    for cell in session.grid:
        if cell.g is None:
            continue
        attrs = {"label": f"{cell.pos}\\nf={cell.f}"}
        if cell.pos in path:
            attrs.update(style="filled", fillcolor=PATH_COLOR)
        elif search.in_closed_set(cell):
            attrs.update(style="filled", fillcolor=CLOSED_COLOR)
        elif search.in_open_set(cell):
            attrs.update(style="filled", fillcolor=OPEN_COLOR)
        dot.node(_node_id(cell.pos), **attrs)
        if cell.previous is not None:
            dot.edge(_node_id(cell.previous), _node_id(cell.pos))
    return dot


def render(graph, filename, view=False):
    return graph.render(filename, view=view)
