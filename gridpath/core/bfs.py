# gridpath/core/bfs.py
#!/usr/bin/env python3
"""
Breadth-first search — one frontier pop per step() for animation.

Implements the algorithm API used by search() and the viewer:
- init(grid) - reset() - step() -> StepResult

The frontier holds (cell, predecessor) entries. A cell is settled the first
time it is popped; its predecessor is recorded then and never revised, so the
path is the chain of settling predecessors. With a FIFO frontier that chain
is a shortest path in edge count.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Set, Tuple

from gridpath.core.types import Cell, CellKind, Grid, StepResult

Entry = Tuple[Cell, Optional[Cell]]  # (cell, predecessor)


@dataclass
class BFSAlgo:
    name: str = "BFS"

    grid: Optional[Grid] = None
    frontier: Deque[Entry] = field(default_factory=deque)
    visited: Set[Cell] = field(default_factory=set)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    path: Optional[List[Cell]] = None

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.frontier.clear()
        self.visited.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.path = None
        self.frontier.append((self.grid.start, None))

    # -------------------- frontier discipline --------------------

    def _pop(self) -> Entry:
        return self.frontier.popleft()

    def _push(self, entry: Entry) -> None:
        self.frontier.append(entry)

    # -------------------- helpers --------------------

    def _neighbors4(self, c: Cell) -> List[Cell]:
        return [n for n in self.grid.neighbors(c)
                if n not in self.visited and not self.grid.is_block(n)]

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = [end]
        cur = end
        while cur in self.parent:
            cur = self.parent[cur]
            path.append(cur)
        path.reverse()
        return path

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=self.path,
                              metrics=self._metrics(path_len=len(self.path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.frontier:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        u, pred = self._pop()
        if u in self.visited:
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.visited.add(u)
        if pred is not None:
            self.parent[u] = pred

        annotated: List[Cell] = []
        if not self.grid.is_endpoint(u) and not self.grid.is_block(u):
            self.grid.mark(u, CellKind.VISITED)
            annotated.append(u)

        if u == self.grid.end:
            self.done = True
            self.path = self._reconstruct_path(u)
            return StepResult(status="done", visited=annotated, current=u, path=self.path,
                              metrics=self._metrics(path_len=len(self.path)))

        for v in self._neighbors4(u):
            self._push((v, u))

        return StepResult(status="running", visited=annotated, current=u,
                          metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.frontier),
            "closed_count": len(self.visited),
            "path_len": path_len,
            "total_cost": path_len - 1 if path_len else None,
        }
