# gridpath/core/search.py
#!/usr/bin/env python3
"""
Run one of the step-wise algorithms to completion and collect its trace.

search() never touches the caller's grid: it validates the endpoints, takes a
copy, clears stale VISITED/PATH marks on the copy and lets the algorithm
annotate that copy. The returned trace lists every annotation in the order it
happened, VISITED marks first and PATH marks (start side first) last.
"""

import logging
from enum import Enum
from typing import List, Optional, Union

from gridpath.core.astar import AStarAlgo
from gridpath.core.bfs import BFSAlgo
from gridpath.core.dfs import DFSAlgo
from gridpath.core.errors import MissingEndpoints, OutOfBounds, StartEqualsEnd
from gridpath.core.types import Cell, CellKind, Grid, SearchResult, Trace, Transition

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    BFS = "bfs"
    DFS = "dfs"
    ASTAR = "astar"

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("a*", "a-star", "a_star"):
            key = "astar"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown algorithm {value!r}; expected one of bfs, dfs, astar") from None

    @property
    def label(self) -> str:
        return {"bfs": "BFS", "dfs": "DFS", "astar": "A*"}[self.value]


def make_algo(algorithm: Union[Algorithm, str]):
    algo = Algorithm.parse(algorithm)
    if algo is Algorithm.BFS:
        return BFSAlgo(name=algo.label)
    if algo is Algorithm.DFS:
        return DFSAlgo(name=algo.label)
    return AStarAlgo(name=algo.label)


def prepare(grid: Grid, start: Optional[Cell] = None, end: Optional[Cell] = None) -> Grid:
    """Validated working copy with endpoints placed and transient marks cleared."""
    start = grid.start if start is None else tuple(start)
    end = grid.end if end is None else tuple(end)
    if start is None or end is None:
        raise MissingEndpoints("start and end must both be set before searching")
    for c in (start, end):
        if not grid.in_bounds(c):
            raise OutOfBounds(f"{c} outside {grid.rows}x{grid.cols} grid")
    if start == end:
        raise StartEqualsEnd(f"start and end are both {start}")

    work = grid.copy()
    work.reset_transient()
    work.clear_endpoints()
    work.set_start(start)
    work.set_end(end)
    return work


def search(grid: Grid, start: Optional[Cell] = None, end: Optional[Cell] = None,
           algorithm: Union[Algorithm, str] = Algorithm.BFS) -> SearchResult:
    work = prepare(grid, start, end)
    algo = make_algo(algorithm)
    algo.init(work)

    transitions: List[Transition] = []
    while True:
        res = algo.step()
        for c in res.visited:
            transitions.append(Transition(c, CellKind.VISITED))
        if res.status in ("done", "no_path"):
            break

    found = res.status == "done"
    visited_count = len(transitions)
    path = res.path if found else None
    if found:
        for c in path[1:-1]:
            work.mark(c, CellKind.PATH)
            transitions.append(Transition(c, CellKind.PATH))

    logger.debug("%s %s->%s: %s after %d pops, %d visited, path_len=%s",
                 algo.name, work.start, work.end, "found" if found else "no path",
                 res.metrics.get("popped", 0), visited_count, len(path) if path else 0)

    return SearchResult(
        algorithm=algo.name,
        found=found,
        trace=Trace(tuple(transitions)),
        grid=work,
        path=path,
        metrics=res.metrics,
    )
