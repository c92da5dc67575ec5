# gridpath/core/astar.py
#!/usr/bin/env python3
"""
A* — one heap pop per step() for animation.

Heuristic:
- Manhattan distance, admissible and consistent for 4-connected unit-cost
  moves, so the first time the end cell is popped its g is optimal.

Tie-breaking in the PQ:
- (f, h, -g, seq, cell): lower f, then lower h, then deeper g, then FIFO by
  seq. Equal-f ties can therefore produce different (equally short) routes
  than another A* would.

Relaxation may push a cell that is already queued with a better score; the
older entry becomes stale and is skipped when it surfaces.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional
import heapq
from math import inf

from gridpath.core.types import Cell, CellKind, Grid, StepResult


@dataclass
class AStarAlgo:
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    open_pq: List[Tuple[int, int, int, int, Cell]] = field(default_factory=list)  # (f, h, -g, seq, cell)
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    g: Dict[Cell, int] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_cell: Optional[Cell] = None
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Initialize on a given grid."""
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.goal_cell = self.grid.end
        self.seq = 0

        s = self.grid.start
        self.g[s] = 0
        h0 = self._h(s)
        heapq.heappush(self.open_pq, (h0, h0, 0, self._bump(), s))
        self.open_set.add(s)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _neighbors4(self, c: Cell) -> List[Cell]:
        """Enterable 4-connected neighbours that are not closed yet."""
        return [n for n in self.grid.neighbors(c)
                if n not in self.closed_set and not self.grid.is_block(n)]

    def _h(self, c: Cell) -> int:
        (r, col) = c
        (gr, gc) = self.goal_cell
        return abs(gr - r) + abs(gc - col)

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = []
        cur = end
        while True:
            path.append(cur)
            if cur == self.grid.start:
                break
            cur = self.parent[cur]
        path.reverse()
        return path

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f node.
          - If goal, reconstruct and finish.
          - Else close it and relax neighbours with unit edge cost.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_cell)
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        f_u, h_u, neg_g_u, _, u = heapq.heappop(self.open_pq)
        g_u = -neg_g_u

        # Ignore stale pops
        if u in self.closed_set or g_u != self.g.get(u, inf):
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.open_set.discard(u)

        if u == self.goal_cell:
            self.done = True
            path = self._reconstruct_path(u)
            return StepResult(status="done", current=u, path=path,
                              metrics=self._metrics(path_len=len(path)))

        self.closed_set.add(u)
        annotated: List[Cell] = []
        if not self.grid.is_endpoint(u):
            self.grid.mark(u, CellKind.VISITED)
            annotated.append(u)

        for v in self._neighbors4(u):
            alt = self.g[u] + 1
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                h_v = self._h(v)
                heapq.heappush(self.open_pq, (alt + h_v, h_v, -alt, self._bump(), v))
                self.open_set.add(v)

        return StepResult(status="running", visited=annotated, current=u,
                          metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.g.get(self.goal_cell) if self.done else None,
        }
