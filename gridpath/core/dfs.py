# gridpath/core/dfs.py
#!/usr/bin/env python3
"""
Depth-first search: BFS with a LIFO frontier.

The last neighbour pushed is explored first, so the route found follows
whatever the stack reaches first. It is a valid path, not a shortest one.
"""

from dataclasses import dataclass

from gridpath.core.bfs import BFSAlgo, Entry


@dataclass
class DFSAlgo(BFSAlgo):
    name: str = "DFS"

    def _pop(self) -> Entry:
        return self.frontier.pop()
