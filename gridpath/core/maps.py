# gridpath/core/maps.py
#!/usr/bin/env python3
"""Preset grid loader. Map files are read-only fixtures; nothing is saved."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from gridpath.core.errors import GridError, MapFormatError
from gridpath.core.types import Cell, CellKind, Grid

logger = logging.getLogger(__name__)

MAP_DIR = Path(__file__).resolve().parents[2] / "maps"
_CODES = {CellKind.FREE.value, CellKind.WALL.value}


def _endpoint(value) -> Optional[Cell]:
    if value is None:
        return None
    cell = tuple(int(v) for v in value)
    if len(cell) != 2:
        raise ValueError(f"expected [row, col], got {value!r}")
    return cell


def load_map(path: Union[str, Path]) -> Grid:
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as ex:
        raise MapFormatError(f"{path}: {ex}") from ex

    try:
        rows = int(data["rows"])
        cols = int(data["cols"])
        cells = data["cells"]
        start = _endpoint(data.get("start"))
        end = _endpoint(data.get("end"))
    except (AttributeError, KeyError, TypeError, ValueError) as ex:
        raise MapFormatError(f"{path}: missing or malformed field ({ex})") from ex

    if not isinstance(cells, list) or not all(isinstance(r, list) for r in cells):
        raise MapFormatError(f"{path}: cells must be a list of rows")
    if len(cells) != rows or any(len(r) != cols for r in cells):
        raise MapFormatError(f"{path}: cells size mismatch, expected {rows}x{cols}")
    bad = [v for r in cells for v in r if not isinstance(v, int) or v not in _CODES]
    if bad:
        raise MapFormatError(f"{path}: unsupported cell codes {bad[:5]}")

    try:
        grid = Grid.from_codes(cells, start, end)
    except GridError as ex:
        raise MapFormatError(f"{path}: {ex}") from ex
    logger.debug("loaded map %s (%dx%d)", path, rows, cols)
    return grid


def list_maps(map_dir: Path = MAP_DIR) -> Dict[str, Path]:
    """Bundled presets keyed by file stem."""
    if not map_dir.is_dir():
        return {}
    return {p.stem: p for p in sorted(map_dir.glob("*.json"))}


def resolve_map(name_or_path: str, map_dir: Path = MAP_DIR) -> Grid:
    presets = list_maps(map_dir)
    if name_or_path in presets:
        return load_map(presets[name_or_path])
    return load_map(name_or_path)
