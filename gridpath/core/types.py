# gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, NamedTuple

from gridpath.core.errors import InvalidDimensions, OutOfBounds, StartEqualsEnd

Cell = Tuple[int, int]  # (row, col)

# N, S, E, W; a depth-first search pops the last pushed, so it heads west first
DIRECTIONS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, 1), (0, -1))


class CellKind(Enum):
    FREE = 0
    WALL = 1
    START = 2
    END = 3
    VISITED = 4
    PATH = 5

    @property
    def is_transient(self) -> bool:
        return self in (CellKind.VISITED, CellKind.PATH)


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[CellKind]]        # [row][col]
    start: Optional[Cell] = None
    end: Optional[Cell] = None

    @classmethod
    def create(cls, rows: int, cols: int) -> "Grid":
        """All-free grid without endpoints. Needs room for an interior."""
        if rows <= 2 or cols <= 2:
            raise InvalidDimensions(f"grid must be at least 3x3, got {rows}x{cols}")
        cells = [[CellKind.FREE for _ in range(cols)] for _ in range(rows)]
        return cls(rows, cols, cells)

    @classmethod
    def from_codes(cls, codes: List[List[int]],
                   start: Optional[Cell] = None, end: Optional[Cell] = None) -> "Grid":
        rows = len(codes)
        cols = len(codes[0]) if rows else 0
        grid = cls.create(rows, cols)
        for r, line in enumerate(codes):
            if len(line) != cols:
                raise InvalidDimensions(f"row {r} has {len(line)} cells, expected {cols}")
            for c, v in enumerate(line):
                kind = CellKind(v)
                # endpoints only come from start/end
                grid.cells[r][c] = CellKind.FREE if kind in (CellKind.START, CellKind.END) else kind
        if start is not None:
            grid.set_start(start)
        if end is not None:
            grid.set_end(end)
        return grid

    def to_codes(self) -> List[List[int]]:
        return [[k.value for k in row] for row in self.cells]

    def copy(self) -> "Grid":
        return Grid(self.rows, self.cols, [list(row) for row in self.cells], self.start, self.end)

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def _check(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise OutOfBounds(f"{c} outside {self.rows}x{self.cols} grid")

    def kind(self, c: Cell) -> CellKind:
        self._check(c)
        r, col = c
        return self.cells[r][col]

    __getitem__ = kind

    def is_block(self, c: Cell) -> bool:
        return self.kind(c) is CellKind.WALL

    def is_enterable(self, c: Cell) -> bool:
        return self.in_bounds(c) and not self.is_block(c)

    def is_endpoint(self, c: Cell) -> bool:
        return c == self.start or c == self.end

    def neighbors(self, c: Cell) -> List[Cell]:
        """In-bounds 4-connected neighbours in N, S, E, W order."""
        self._check(c)
        r, col = c
        out: List[Cell] = []
        for dr, dc in DIRECTIONS:
            n = (r + dr, col + dc)
            if self.in_bounds(n):
                out.append(n)
        return out

    def count(self, kind: CellKind) -> int:
        return sum(row.count(kind) for row in self.cells)

    # -------------------- edits --------------------

    def _write(self, c: Cell, kind: CellKind) -> None:
        r, col = c
        self.cells[r][col] = kind

    def set_start(self, c: Cell) -> None:
        self._check(c)
        if c == self.end:
            raise StartEqualsEnd(f"start {c} would overlap end")
        if self.start is not None:
            self._write(self.start, CellKind.FREE)
        self.start = c
        self._write(c, CellKind.START)

    def set_end(self, c: Cell) -> None:
        self._check(c)
        if c == self.start:
            raise StartEqualsEnd(f"end {c} would overlap start")
        if self.end is not None:
            self._write(self.end, CellKind.FREE)
        self.end = c
        self._write(c, CellKind.END)

    def clear_endpoints(self) -> None:
        for c in (self.start, self.end):
            if c is not None:
                self._write(c, CellKind.FREE)
        self.start = None
        self.end = None

    def toggle_wall(self, c: Cell) -> None:
        k = self.kind(c)
        if k in (CellKind.START, CellKind.END):
            return
        self._write(c, CellKind.FREE if k is CellKind.WALL else CellKind.WALL)

    def paint_wall(self, c: Cell) -> None:
        """Drag painting: only ever adds walls."""
        if self.kind(c) in (CellKind.START, CellKind.END):
            return
        self._write(c, CellKind.WALL)

    def mark(self, c: Cell, kind: CellKind) -> None:
        """Apply a VISITED/PATH annotation; walls and endpoints keep their kind."""
        if not kind.is_transient:
            raise ValueError(f"mark() only writes transient kinds, got {kind}")
        if self.kind(c) in (CellKind.FREE, CellKind.VISITED, CellKind.PATH):
            self._write(c, kind)

    def reset_transient(self) -> None:
        for row in self.cells:
            for i, k in enumerate(row):
                if k.is_transient:
                    row[i] = CellKind.FREE

    def clear(self) -> None:
        for row in self.cells:
            for i in range(self.cols):
                row[i] = CellKind.FREE
        self.start = None
        self.end = None


class Transition(NamedTuple):
    cell: Cell
    kind: CellKind


@dataclass(frozen=True)
class Trace:
    transitions: Tuple[Transition, ...] = ()

    def __len__(self) -> int:
        return len(self.transitions)

    def __iter__(self):
        return iter(self.transitions)

    @property
    def visited(self) -> List[Cell]:
        return [t.cell for t in self.transitions if t.kind is CellKind.VISITED]

    @property
    def path_marks(self) -> List[Cell]:
        return [t.cell for t in self.transitions if t.kind is CellKind.PATH]


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    visited: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    algorithm: str
    found: bool
    trace: Trace
    grid: Grid                    # annotated working copy
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def visited(self) -> List[Cell]:
        return self.trace.visited

    @property
    def steps(self) -> Optional[int]:
        """Edge count of the path, None when nothing was found."""
        return len(self.path) - 1 if self.path else None

    @property
    def highlight(self) -> List[Cell]:
        """Path cells minus the two endpoints, for the path animation pass."""
        return list(self.path[1:-1]) if self.path else []
