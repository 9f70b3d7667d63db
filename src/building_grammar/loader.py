"""Parameter files: `Key = value` lines resolved into a ParameterSet.

A value is either a single number or a `min, max` range drawn from a
seeded random generator. Lines starting with `//` are comments, and a
key that is absent falls back to its default range. Two list keys take
bracketed triples instead of numbers:

    Remove Window = (column,row,side),(column,row,side)
    Railings = (scale,row,side)

`-1` in a triple matches every value on that axis. Columns and rows
count from 0, sides from 1 (side 1 is the first facade). The loaded
ParameterSet numbers sides from 0.
`format_parameters` writes a resolved set back in the same format, so
any generated building can be reproduced from its echo.
"""

from __future__ import annotations

import logging
import random
import re
from pathlib import Path
from typing import Any

from building_grammar.config import (
    MAX_SIDES,
    BandGrid,
    DoorSpec,
    OverhangParams,
    ParameterSet,
    RailingSpec,
    RemovalSpec,
    Topology,
    WindowBand,
)
from building_grammar.errors import InvalidParamsError

logger = logging.getLogger(__name__)

Range = tuple[float, float]

SHAPE_CODES = {1: Topology.RECTANGLE, 2: Topology.POLYGON, 3: Topology.L_SHAPE}
SHAPE_NUMBERS = {topology: code for code, topology in SHAPE_CODES.items()}

# Band labels as they appear in keys, in bottom/center/top order
BAND_LABELS = {"bottom": "Bottom", "center": "Centre", "top": "Top"}
GRID_SIDE_LABELS = ("Width", "Length", "Side 3", "Side 4", "Side 5", "Side 6")

REMOVE_KEY = "Remove Window"
RAILINGS_KEY = "Railings"
LIST_KEYS = (REMOVE_KEY, RAILINGS_KEY)

# Spellings written by older echo files
KEY_ALIASES = {
    "Window Center Design": "Window Centre Design",
    "Window Center Width Scale": "Window Centre Width Scale",
    "Window Center Height Scale": "Window Centre Height Scale",
    "Grid Bottom Tile Height": "Bottom Tile Height",
}

DEFAULT_RANGES: dict[str, Range] = {
    "Shape Type": (1, 3),
    "Sides": (3, 6),
    "Building Width 1": (200, 1000),
    "Building Length 1": (200, 1000),
    "Building Width 2": (200, 1000),
    "Building Length 2": (200, 1000),
    "Building Height": (200, 1000),
    "Grid Height": (2, 5),
    "Door Location": (1, 1),
    "Door Width Scale": (2, 2),
    "Door Height Scale": (2, 2),
}
for _band, _label in BAND_LABELS.items():
    DEFAULT_RANGES[f"Window {_label} Width Scale"] = (2, 2)
    DEFAULT_RANGES[f"Window {_label} Height Scale"] = (2, 2)
    DEFAULT_RANGES[f"Window {_label} Design"] = (1, 5)
    for _side in GRID_SIDE_LABELS:
        DEFAULT_RANGES[f"Grid {_label} {_side}"] = (3, 5) if _band == "bottom" else (2, 4)

# Keys whose defaults depend on already resolved values
DERIVED_KEYS = (
    "Overhang Width",
    "Overhang Thickness",
    "Overhang Height",
    "Bottom Tile Height",
    "Vertical Offset",
)
KNOWN_KEYS = frozenset(DEFAULT_RANGES) | frozenset(DERIVED_KEYS)

_TRIPLE = re.compile(r"\(([^)]*)\)")


def _parse_number(key: str, text: str) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise InvalidParamsError(f"{key}: expected a number, got {text!r}") from exc


def _parse_value(key: str, text: str) -> float | Range:
    """A single number, or a `min, max` range."""
    fields = [f.strip() for f in text.split(",")]
    if len(fields) == 1:
        return _parse_number(key, fields[0])
    if len(fields) == 2:
        low, high = (_parse_number(key, f) for f in fields)
        if low > high:
            raise InvalidParamsError(f"{key}: range minimum {low} exceeds maximum {high}")
        return (low, high)
    raise InvalidParamsError(f"{key}: expected a number or 'min, max', got {text!r}")


def _parse_triples(key: str, text: str) -> list[tuple[float, float, float]]:
    groups = _TRIPLE.findall(text)
    if not groups and text:
        raise InvalidParamsError(f"{key}: expected '(a,b,c)' entries, got {text!r}")
    triples = []
    for group in groups:
        fields = [f.strip() for f in group.split(",")]
        if len(fields) != 3:
            raise InvalidParamsError(f"{key}: each entry needs 3 values, got ({group})")
        triples.append(tuple(_parse_number(key, f) for f in fields))
    return triples


def _core_side(key: str, side: float) -> int:
    """File sides count from 1; any negative side is the wildcard."""
    side = int(side)
    if side < 0:
        return -1
    if side == 0:
        raise InvalidParamsError(f"{key}: sides count from 1, got side 0")
    return side - 1


def _file_side(side: int) -> int:
    return side + 1 if side >= 0 else side


def parse_parameter_text(text: str) -> dict[str, Any]:
    """Parse parameter file text into raw entries.

    Values are floats, `(min, max)` tuples, or lists of triples for the
    list keys. Unknown keys are logged and ignored.
    """
    entries: dict[str, Any] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise InvalidParamsError(f"line {lineno}: expected 'Key = value', got {raw!r}")
        key = key.strip()
        key = KEY_ALIASES.get(key, key)
        value = value.strip()
        if key in LIST_KEYS:
            entries[key] = _parse_triples(key, value)
        elif key in KNOWN_KEYS:
            entries[key] = _parse_value(key, value)
        else:
            logger.warning("Ignoring unknown parameter %r on line %d", key, lineno)
    return entries


class _Resolver:
    """Draws values for entries, falling back to default ranges."""

    def __init__(self, entries: dict[str, Any], rng: random.Random) -> None:
        self.entries = entries
        self.rng = rng

    def value(self, key: str, default: Range | None = None, integer: bool = False):
        if key in self.entries:
            entry = self.entries[key]
        elif default is not None:
            entry = default
        else:
            entry = DEFAULT_RANGES[key]
        if isinstance(entry, tuple):
            low, high = entry
            if integer:
                return self.rng.randint(int(low), int(high))
            return self.rng.uniform(low, high)
        return int(entry) if integer else float(entry)


def resolve_parameters(entries: dict[str, Any], seed: int | None = None) -> ParameterSet:
    """Resolve raw entries (and default ranges) into a ParameterSet.

    The same entries and seed always resolve to the same set.
    """
    rng = random.Random(seed)
    r = _Resolver(entries, rng)

    shape_code = r.value("Shape Type", integer=True)
    if shape_code not in SHAPE_CODES:
        raise InvalidParamsError(
            f"Shape Type must be one of {sorted(SHAPE_CODES)}, got {shape_code}"
        )
    shape = SHAPE_CODES[shape_code]

    if "Sides" in entries:
        sides = r.value("Sides", integer=True)
    else:
        # A square polygon would duplicate the rectangle
        sides = 4
        while sides == 4:
            sides = r.value("Sides", integer=True)

    height = r.value("Building Height")
    overhang_range = (height / 30, height / 20)
    overhang = OverhangParams(
        width=r.value("Overhang Width", overhang_range),
        thickness=r.value("Overhang Thickness", overhang_range),
        height=r.value("Overhang Height", overhang_range),
    )

    grid_height = r.value("Grid Height", integer=True)
    # Keep the bottom allowance below half the height
    bottom_high = min(250.0, height / 4)
    bottom_tile_height = r.value("Bottom Tile Height", (min(100.0, bottom_high), bottom_high))

    grids = {}
    windows = {}
    for band, label in BAND_LABELS.items():
        columns = tuple(
            r.value(f"Grid {label} {side}", integer=True) for side in GRID_SIDE_LABELS
        )
        if shape == Topology.POLYGON:
            columns = (columns[0],) * MAX_SIDES
        grids[band] = BandGrid(columns=columns)
        windows[band] = WindowBand(
            width_scale=r.value(f"Window {label} Width Scale"),
            height_scale=r.value(f"Window {label} Height Scale"),
            design=r.value(f"Window {label} Design", integer=True),
        )

    door = DoorSpec(
        column=r.value("Door Location", integer=True),
        width_scale=r.value("Door Width Scale"),
        height_scale=r.value("Door Height Scale"),
    )

    vertical_offset = None
    if "Vertical Offset" in entries:
        vertical_offset = r.value("Vertical Offset")

    removals = tuple(
        RemovalSpec(column=int(column), row=int(row), side=_core_side(REMOVE_KEY, side))
        for column, row, side in entries.get(REMOVE_KEY, [])
    )
    railings = tuple(
        RailingSpec(scale=scale, row=int(row), side=_core_side(RAILINGS_KEY, side))
        for scale, row, side in entries.get(RAILINGS_KEY, [])
    )

    params = ParameterSet(
        shape=shape,
        sides=sides,
        width_1=r.value("Building Width 1"),
        length_1=r.value("Building Length 1"),
        width_2=r.value("Building Width 2"),
        length_2=r.value("Building Length 2"),
        height=height,
        overhang=overhang,
        grid_height=grid_height,
        bottom_tile_height=bottom_tile_height,
        grid_bottom=grids["bottom"],
        grid_center=grids["center"],
        grid_top=grids["top"],
        window_bottom=windows["bottom"],
        window_center=windows["center"],
        window_top=windows["top"],
        door=door,
        vertical_offset=vertical_offset,
        removals=removals,
        railings=railings,
    )
    logger.info(
        "Resolved %s parameters (seed=%s, %d explicit entries)",
        shape.value, seed, len(entries),
    )
    return params


def load_parameters(path: str | Path | None = None, seed: int | None = None) -> ParameterSet:
    """Load and resolve a parameter file; no path uses the default ranges."""
    if path is None:
        return resolve_parameters({}, seed=seed)
    source = Path(path)
    if not source.is_file():
        raise InvalidParamsError(f"Parameter file not found: {source}")
    return resolve_parameters(parse_parameter_text(source.read_text()), seed=seed)


def _format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _format_triples(triples) -> str:
    return ",".join(
        "(" + ",".join(_format_number(v) for v in triple) + ")" for triple in triples
    )


def format_parameters(params: ParameterSet) -> str:
    """Write a resolved ParameterSet in parameter file format."""
    lines = [
        f"Shape Type = {SHAPE_NUMBERS[params.shape]}",
        f"Sides = {params.sides}",
        f"Building Width 1 = {_format_number(params.width_1)}",
        f"Building Length 1 = {_format_number(params.length_1)}",
        f"Building Width 2 = {_format_number(params.width_2)}",
        f"Building Length 2 = {_format_number(params.length_2)}",
        f"Building Height = {_format_number(params.height)}",
        f"Overhang Width = {_format_number(params.overhang.width)}",
        f"Overhang Thickness = {_format_number(params.overhang.thickness)}",
        f"Overhang Height = {_format_number(params.overhang.height)}",
    ]

    bands = {
        "bottom": (params.grid_bottom, params.window_bottom),
        "center": (params.grid_center, params.window_center),
        "top": (params.grid_top, params.window_top),
    }
    for band, label in BAND_LABELS.items():
        _, window = bands[band]
        lines.append(f"Window {label} Width Scale = {_format_number(window.width_scale)}")
        lines.append(f"Window {label} Height Scale = {_format_number(window.height_scale)}")
    for band, label in BAND_LABELS.items():
        grid, _ = bands[band]
        for side, count in zip(GRID_SIDE_LABELS, grid.columns):
            lines.append(f"Grid {label} {side} = {count}")
        if band == "bottom":
            lines.append(f"Bottom Tile Height = {_format_number(params.bottom_tile_height)}")
    lines.append(f"Grid Height = {params.grid_height}")
    lines.append(f"Vertical Offset = {_format_number(params.effective_vertical_offset)}")
    for band, label in BAND_LABELS.items():
        _, window = bands[band]
        lines.append(f"Window {label} Design = {window.design}")

    lines.append(f"Door Location = {params.door.column}")
    lines.append(f"Door Width Scale = {_format_number(params.door.width_scale)}")
    lines.append(f"Door Height Scale = {_format_number(params.door.height_scale)}")

    if params.removals:
        triples = [(r.column, r.row, _file_side(r.side)) for r in params.removals]
        lines.append(f"{REMOVE_KEY} = {_format_triples(triples)}")
    if params.railings:
        triples = [(r.scale, r.row, _file_side(r.side)) for r in params.railings]
        lines.append(f"{RAILINGS_KEY} = {_format_triples(triples)}")
    return "\n".join(lines) + "\n"


def write_parameters(params: ParameterSet, path: str | Path) -> Path:
    """Write the echo of a resolved ParameterSet to a file."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(format_parameters(params))
    return out
