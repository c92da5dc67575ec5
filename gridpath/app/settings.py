# gridpath/app/settings.py
#!/usr/bin/env python3
"""
Viewer configuration.

- ENV: GRIDPATH_ROWS, GRIDPATH_COLS, GRIDPATH_ALGO, GRIDPATH_SEED,
       GRIDPATH_MAP, GRIDPATH_SPEED, GRIDPATH_LOG_LEVEL
- CLI: --rows=40 --cols=80 --algo=astar --seed=7 --map=02_detour ...
  (command line wins over the environment)
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from gridpath.core.search import Algorithm

DEFAULT_ROWS = 40
DEFAULT_COLS = 80


@dataclass
class Settings:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    algo: Algorithm = Algorithm.BFS
    seed: Optional[int] = None
    map: Optional[str] = None
    speed: float = 1.0
    log_level: str = "INFO"


def _dimension(v: str) -> int:
    n = int(v)
    if n <= 2:
        raise ValueError(f"must be greater than 2, got {n}")
    return n


def _speed(v: str) -> float:
    s = float(v)
    if s <= 0:
        raise ValueError(f"must be positive, got {s}")
    return s


def _log_level(v: str) -> str:
    level = v.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level {v!r}")
    return level


_PARSERS: Dict[str, Callable[[str], object]] = {
    "rows": _dimension,
    "cols": _dimension,
    "algo": Algorithm.parse,
    "seed": int,
    "map": str,
    "speed": _speed,
    "log_level": _log_level,
}


def _raw_values(argv: List[str], env: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for key in _PARSERS:
        v = env.get(f"GRIDPATH_{key.upper()}")
        if v:
            raw[key] = v
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, v = arg[2:].split("=", 1)
        key = key.replace("-", "_").lower()
        if key in _PARSERS:
            raw[key] = v
    return raw


def resolve_settings(argv: Optional[List[str]] = None,
                     env: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env
    values = {}
    for key, v in _raw_values(argv, env).items():
        try:
            values[key] = _PARSERS[key](v)
        except ValueError as ex:
            raise ValueError(f"invalid {key}={v!r}: {ex}") from ex
    return Settings(**values)
