"""Pydantic models for the resolved building parameters and API responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, field_validator, model_validator

from building_grammar.errors import InvalidParamsError, MissingParameterError

# Side entries a band grid can hold (the L-shape has the most facades)
MAX_SIDES = 6


class Topology(str, Enum):
    """Footprint topologies the grammar can build."""

    RECTANGLE = "rectangle"
    POLYGON = "polygon"
    L_SHAPE = "l_shape"


class OverhangParams(BaseModel):
    """Roof overhang band around the top of the building."""

    model_config = {"frozen": True}

    width: float = 20.0
    thickness: float = 15.0
    height: float = 20.0

    @model_validator(mode="after")
    def check_positive(self):
        for name in ("width", "thickness", "height"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidParamsError(f"overhang {name} must be positive, got {value}")
        return self


class BandGrid(BaseModel):
    """Column counts of one facade band, indexed by facade side."""

    model_config = {"frozen": True}

    columns: tuple[int, ...] = (3,) * MAX_SIDES

    @field_validator("columns")
    @classmethod
    def check_columns(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if len(v) > MAX_SIDES:
            raise InvalidParamsError(
                f"a band grid holds at most {MAX_SIDES} sides, got {len(v)}"
            )
        for count in v:
            if count < 1:
                raise InvalidParamsError(
                    f"grid column counts must be >= 1, got {count}"
                )
        return v

    def columns_for(self, side: int, band: str = "band") -> int:
        """Column count for a facade side.

        Raises MissingParameterError when the side has no entry.
        """
        if side >= len(self.columns):
            raise MissingParameterError(
                f"{band} grid has no column count for side {side} "
                f"(only {len(self.columns)} given)"
            )
        return self.columns[side]


class WindowBand(BaseModel):
    """Opening size divisors and design id of one facade band.

    The opening is the tile size divided by the scale, so a scale of 1
    fills the whole tile.
    """

    model_config = {"frozen": True}

    width_scale: float = 2.0
    height_scale: float = 2.0
    design: int = 1

    @model_validator(mode="after")
    def check_scales(self):
        if self.width_scale < 1 or self.height_scale < 1:
            raise InvalidParamsError(
                "window scales must be >= 1 (opening larger than its tile), got "
                f"width_scale={self.width_scale}, height_scale={self.height_scale}"
            )
        return self


class DoorSpec(BaseModel):
    """Ground-row door on the first facade."""

    model_config = {"frozen": True}

    column: int = 1
    width_scale: float = 2.0
    height_scale: float = 2.0

    @model_validator(mode="after")
    def check_scales(self):
        if self.width_scale < 1 or self.height_scale < 1:
            raise InvalidParamsError(
                "door scales must be >= 1 (door larger than its tile), got "
                f"width_scale={self.width_scale}, height_scale={self.height_scale}"
            )
        return self


def _axis_matches(rule: int, value: int) -> bool:
    """A negative rule value matches anything."""
    return rule < 0 or rule == value


class RemovalSpec(BaseModel):
    """Removes the opening at (column, row, side). -1 matches any value."""

    model_config = {"frozen": True}

    column: int = -1
    row: int = -1
    side: int = -1

    def matches(self, column: int, row: int, side: int) -> bool:
        return (
            _axis_matches(self.column, column)
            and _axis_matches(self.row, row)
            and _axis_matches(self.side, side)
        )


class RailingSpec(BaseModel):
    """Adds a railing of depth `scale` to a row. -1 matches any value."""

    model_config = {"frozen": True}

    scale: float = 50.0
    row: int = -1
    side: int = -1

    @field_validator("scale")
    @classmethod
    def check_scale(cls, v: float) -> float:
        if v <= 0:
            raise InvalidParamsError(f"railing scale must be positive, got {v}")
        return v

    def matches(self, row: int, side: int) -> bool:
        return _axis_matches(self.row, row) and _axis_matches(self.side, side)


class ParameterSet(BaseModel):
    """Fully resolved parameters for one building.

    Lobe 2 (width_2, length_2) is only used by the L-shape. For a polygon
    footprint width_1 is the side length.
    """

    model_config = {"frozen": True}

    shape: Topology = Topology.RECTANGLE
    sides: int = 4

    width_1: float = 400.0
    length_1: float = 400.0
    width_2: float = 300.0
    length_2: float = 300.0
    height: float = 500.0

    overhang: OverhangParams = OverhangParams()

    grid_height: int = 3
    bottom_tile_height: float = 100.0
    grid_bottom: BandGrid = BandGrid(columns=(4,) * MAX_SIDES)
    grid_center: BandGrid = BandGrid()
    grid_top: BandGrid = BandGrid()

    window_bottom: WindowBand = WindowBand()
    window_center: WindowBand = WindowBand(design=2)
    window_top: WindowBand = WindowBand(design=3)

    door: DoorSpec = DoorSpec()
    vertical_offset: float | None = None

    removals: tuple[RemovalSpec, ...] = ()
    railings: tuple[RailingSpec, ...] = ()

    @model_validator(mode="after")
    def check_dimensions(self):
        """Reject non-positive footprint and height values."""
        for name in ("width_1", "length_1", "width_2", "length_2", "height"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidParamsError(f"{name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def check_grid(self):
        """Reject grids that would produce non-positive tiles."""
        if self.grid_height < 2:
            raise InvalidParamsError(
                f"grid_height must be >= 2, got {self.grid_height}"
            )
        if self.bottom_tile_height < 0:
            raise InvalidParamsError(
                f"bottom_tile_height must be >= 0, got {self.bottom_tile_height}"
            )
        if self.height - 2 * self.bottom_tile_height <= 0:
            raise InvalidParamsError(
                f"height {self.height} leaves no room for rows above a bottom "
                f"allowance of {2 * self.bottom_tile_height}"
            )
        return self

    @model_validator(mode="after")
    def check_sides(self):
        if self.shape == Topology.POLYGON and self.sides < 3:
            raise InvalidParamsError(
                f"a polygon footprint needs sides >= 3, got {self.sides}"
            )
        return self

    @property
    def effective_vertical_offset(self) -> float:
        """Vertical offset of rows above the bottom row."""
        if self.vertical_offset is None:
            return -self.bottom_tile_height / 2
        return self.vertical_offset


class GenerateResponse(BaseModel):
    """Metadata returned in X-Build-Metadata header."""

    triangle_count: int
    bounding_box: tuple
    is_watertight: bool
    facade_count: int
    opening_count: int
    door_count: int
    railing_count: int
    warnings: list[str] = []


class ErrorResponse(BaseModel):
    """Error response body."""

    error_type: str
    message: str
    detail: str | None = None
