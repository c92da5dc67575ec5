# tests/test_maps.py
import json

import pytest

from gridpath.core.errors import MapFormatError
from gridpath.core.maps import list_maps, load_map, resolve_map
from gridpath.core.types import CellKind


def _write(tmp_path, data, name="m.json"):
    p = tmp_path / name
    p.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return p


def _valid():
    return {
        "rows": 3, "cols": 4, "start": [0, 0], "end": [2, 3],
        "cells": [[0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 0, 0]],
    }


def test_bundled_presets_load():
    presets = list_maps()
    assert {"01_open_field", "02_detour"} <= set(presets)
    for path in presets.values():
        grid = load_map(path)
        assert grid.start is not None and grid.end is not None


def test_resolve_by_name_and_path(tmp_path):
    assert resolve_map("01_open_field").rows == 8
    grid = resolve_map(str(_write(tmp_path, _valid())))
    assert grid.cols == 4
    assert grid[(1, 2)] is CellKind.WALL
    assert grid[(0, 0)] is CellKind.START and grid[(2, 3)] is CellKind.END


def test_list_maps_missing_dir(tmp_path):
    assert list_maps(tmp_path / "nope") == {}


def test_endpoints_optional(tmp_path):
    data = _valid()
    del data["start"], data["end"]
    grid = load_map(_write(tmp_path, data))
    assert grid.start is None and grid.end is None


@pytest.mark.parametrize("mutate", [
    lambda d: d.pop("cells"),
    lambda d: d.update(rows=4),
    lambda d: d["cells"][1].append(0),
    lambda d: d["cells"][0].__setitem__(0, 7),
    lambda d: d["cells"][0].__setitem__(0, 2),
    lambda d: d.update(start=[5, 5]),
    lambda d: d.update(end=[0, 0]),
    lambda d: d.update(start="x"),
    lambda d: d.update(cells=5),
    lambda d: d.update(cells=[0, 0, 0]),
    lambda d: d.update(cells=None),
    lambda d: d["cells"][0].__setitem__(0, [0]),
    lambda d: d["cells"][0].__setitem__(0, "0"),
    lambda d: d.update(start=[1]),
    lambda d: d.update(end=[1, 2, 3]),
    lambda d: d.update(end=5),
])
def test_rejects_malformed(tmp_path, mutate):
    data = _valid()
    mutate(data)
    with pytest.raises(MapFormatError):
        load_map(_write(tmp_path, data))


def test_rejects_tiny_grid(tmp_path):
    data = {"rows": 2, "cols": 2, "cells": [[0, 0], [0, 0]]}
    with pytest.raises(MapFormatError):
        load_map(_write(tmp_path, data))


def test_rejects_non_object_document(tmp_path):
    with pytest.raises(MapFormatError):
        load_map(_write(tmp_path, [1, 2, 3]))


def test_rejects_bad_json_and_missing_file(tmp_path):
    with pytest.raises(MapFormatError):
        load_map(_write(tmp_path, "{not json"))
    with pytest.raises(MapFormatError):
        load_map(tmp_path / "missing.json")
