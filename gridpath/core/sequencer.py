# gridpath/core/sequencer.py
#!/usr/bin/env python3
"""
Replay feed for a SearchResult.

A Sequencer hands out one Frame at a time: first every VISITED cell in the
order the search settled them, then every PATH cell between the endpoints.
Each frame carries an advisory delay. The sequencer never touches a grid;
whoever drains it applies frames with Grid.mark(), which is idempotent, so a
replay can be dropped between any two frames.
"""

import time
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from gridpath.core.types import Cell, CellKind, SearchResult

# ms per frame
VISIT_DELAY_MS = {"BFS": 10, "DFS": 5, "A*": 10}
DEFAULT_VISIT_DELAY_MS = 10
PATH_DELAY_MS = 20


@dataclass(frozen=True)
class Frame:
    cell: Cell
    kind: CellKind
    delay_ms: int


class Sequencer:
    def __init__(self, result: SearchResult, visit_delay_ms: Optional[int] = None,
                 path_delay_ms: int = PATH_DELAY_MS):
        self.result = result
        if visit_delay_ms is None:
            visit_delay_ms = VISIT_DELAY_MS.get(result.algorithm, DEFAULT_VISIT_DELAY_MS)
        self.frames: List[Frame] = [Frame(c, CellKind.VISITED, visit_delay_ms) for c in result.visited]
        self.frames += [Frame(c, CellKind.PATH, path_delay_ms) for c in result.highlight]
        self.position = 0
        self.cancelled = False

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        while True:
            frame = self.step()
            if frame is None:
                return
            yield frame

    @property
    def remaining(self) -> int:
        return 0 if self.cancelled else len(self.frames) - self.position

    @property
    def status(self) -> str:
        """running until drained, then done or no_path; cancelled once dropped."""
        if self.cancelled:
            return "cancelled"
        if self.position < len(self.frames):
            return "running"
        return "done" if self.result.found else "no_path"

    def step(self) -> Optional[Frame]:
        if self.remaining <= 0:
            return None
        frame = self.frames[self.position]
        self.position += 1
        return frame

    def cancel(self) -> None:
        self.cancelled = True


def play(sequencer: Sequencer, apply: Callable[[Frame], None],
         sleep: Callable[[float], None] = time.sleep,
         should_stop: Optional[Callable[[], bool]] = None,
         speed: float = 1.0) -> str:
    """Drain the sequencer through apply(), pacing each frame. Returns the final status."""
    if speed <= 0:
        raise ValueError(f"speed must be positive, got {speed}")
    while True:
        if should_stop is not None and should_stop():
            sequencer.cancel()
            break
        frame = sequencer.step()
        if frame is None:
            break
        apply(frame)
        sleep(frame.delay_ms / 1000.0 / speed)
    return sequencer.status
