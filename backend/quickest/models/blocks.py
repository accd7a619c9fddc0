"""Input blocks for openings, accessories and the optional building sub-systems.

Every block carries the QuickEst input-sheet defaults so that a partially
filled draft still validates field by field instead of failing on load.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from quickest.dimensions import parse
from quickest.exceptions import FormatError
from quickest.models.enums import LinerType, PartitionDirection

# Members one dimension list may expand to; larger counts are typing mistakes.
MAX_DIMENSION_COUNT = 1000


class FieldError(BaseModel):
    """A single field-level validation problem."""

    field: str
    message: str


def dimension_errors(field: str, text: str, *, required: bool = True) -> list[FieldError]:
    """Check that a dimension list parses and adds up to a positive length."""
    try:
        parsed = parse(text)
    except FormatError as exc:
        return [FieldError(field=field, message=str(exc))]
    if not parsed:
        if required:
            return [FieldError(field=field, message="must contain at least one dimension")]
        return []
    if parsed.total_count > MAX_DIMENSION_COUNT:
        msg = f"too many members ({parsed.total_count}), at most {MAX_DIMENSION_COUNT}"
        return [FieldError(field=field, message=msg)]
    if parsed.total_sum <= 0:
        return [FieldError(field=field, message="total length must be greater than 0")]
    return []


def dimension_text(value: Any) -> Any:
    """Accept a bare number such as ``24`` where a dimension list is expected."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def has_skin(code: str) -> bool:
    """False for the blank, ``-`` and ``None`` entries of the sheeting dropdowns."""
    return code.strip() not in ("", "-", "None")


def _positive(field: str, value: float) -> list[FieldError]:
    if value <= 0:
        return [FieldError(field=field, message="must be greater than 0")]
    return []


class Opening(BaseModel):
    """A framed wall opening, e.g. ``size="4x4"`` or ``size="Full"``."""

    location: str = "Front Sidewall"
    size: str = ""
    purlin_support: int = 0
    bracing: int = 0


class AccessoryLine(BaseModel):
    """A pre-coded accessory row added to the main building BOM."""

    code: str = ""
    description: str = ""
    size: float = 1.0
    quantity: float = 0.0


class AccessoryItem(BaseModel):
    """A description-driven accessory (skylight, door, louver, ventilator)."""

    description: str = ""
    quantity: int = 0


class SubsystemBlock(BaseModel):
    """Fields shared by every sub-system input block."""

    description: str = ""
    sales_code: int = 1

    @field_validator(
        "col_spacing",
        "beam_spacing",
        "joist_spacing",
        "crane_run",
        "bay_spacing",
        mode="before",
        check_fields=False,
    )
    @classmethod
    def number_as_dimension_list(cls, v: Any) -> Any:
        return dimension_text(v)

    def validate_block(self, prefix: str) -> list[FieldError]:
        return []


class MezzanineBlock(SubsystemBlock):
    description: str = "Mezzanine"
    sales_code: int = 2
    col_spacing: str = ""
    beam_spacing: str = ""
    joist_spacing: str = "1@1.5"
    clear_height: float = 3.0
    double_welded: str = "No"
    deck_type: str = "Deck-0.75"
    n_stairs: int = Field(default=0, ge=0)
    dead_load: float = 0.5
    live_load: float = 5.0
    additional_load: float = 0.0
    min_thickness: float = 6.0

    def validate_block(self, prefix: str) -> list[FieldError]:
        errors = dimension_errors(f"{prefix}.col_spacing", self.col_spacing)
        errors += dimension_errors(f"{prefix}.beam_spacing", self.beam_spacing)
        errors += dimension_errors(f"{prefix}.joist_spacing", self.joist_spacing, required=False)
        errors += _positive(f"{prefix}.clear_height", self.clear_height)
        return errors


class CraneBlock(SubsystemBlock):
    """EOT crane runway; capacity in MT, rail centres in m."""

    description: str = "EOT Crane"
    sales_code: int = 4
    capacity: float = 5.0
    duty: str = "M"
    rail_centers: float = 18.0
    crane_run: str = "6@6"

    def validate_block(self, prefix: str) -> list[FieldError]:
        errors = dimension_errors(f"{prefix}.crane_run", self.crane_run)
        errors += _positive(f"{prefix}.capacity", self.capacity)
        errors += _positive(f"{prefix}.rail_centers", self.rail_centers)
        return errors


class AccessoryBlock(SubsystemBlock):
    description: str = "Accessories"
    sales_code: int = 12
    items: list[AccessoryItem] = Field(default_factory=list)
    wall_top_skin: str = "S5OW"
    wall_core: str = "-"
    wall_bot_skin: str = "-"


class PartitionBlock(SubsystemBlock):
    """Internal partition wall.

    Taken from a building payload without ``col_spacing``, the columns follow
    the host building: spaced across its width or along its bays.
    """

    description: str = "Partition Wall"
    sales_code: int = 11
    direction: str = "Across"
    col_spacing: str = "4@6"
    height: float = 6.0
    open_height: float = 0.0
    front_sheeting: str = "S5OW"
    back_sheeting: str = "S5OW"
    insulation: str = "None"
    wind_speed: float = 130.0

    def validate_block(self, prefix: str) -> list[FieldError]:
        errors = dimension_errors(f"{prefix}.col_spacing", self.col_spacing)
        errors += _positive(f"{prefix}.height", self.height)
        if not 0 <= self.open_height < self.height:
            errors.append(
                FieldError(
                    field=f"{prefix}.open_height",
                    message="must be at least 0 and below the partition height",
                )
            )
        if self.direction.strip() not in {d.value for d in PartitionDirection}:
            errors.append(
                FieldError(field=f"{prefix}.direction", message="must be Across or Along")
            )
        return errors


class CanopyBlock(SubsystemBlock):
    """Canopy, roof extension or fascia along one wall."""

    description: str = "Canopy"
    sales_code: int = 3
    type: str = "Canopy"
    location: str = "Front Sidewall"
    height: float = 3.0
    width: float = 3.0
    col_spacing: str = "6@6"
    roof_sheeting: str = "S5OW"
    drainage: str = "Gutter+Dwnspts"
    soffit: str = "None"
    wall_sheeting: str = "S5OW"
    live_load: float = 0.57
    wind_speed: float = 130.0

    def validate_block(self, prefix: str) -> list[FieldError]:
        errors = dimension_errors(f"{prefix}.col_spacing", self.col_spacing)
        errors += _positive(f"{prefix}.width", self.width)
        errors += _positive(f"{prefix}.height", self.height)
        return errors


class MonitorBlock(SubsystemBlock):
    """Roof monitor; ``opening_width`` and ``monitor_frame_length`` are in mm."""

    description: str = "Roof Monitor"
    sales_code: int = 6
    monitor_type: str = "Curve-CF"
    bay_spacing: str = "6@6"
    opening_width: float = 1000.0
    monitor_length: float = 36.0
    roof_sheeting: str = "S5OW"
    wall_sheeting: str = "S5OW"
    profile_width: float = 1.0
    monitor_frame_length: float | None = None

    def validate_block(self, prefix: str) -> list[FieldError]:
        errors = dimension_errors(f"{prefix}.bay_spacing", self.bay_spacing)
        errors += _positive(f"{prefix}.monitor_length", self.monitor_length)
        errors += _positive(f"{prefix}.profile_width", self.profile_width)
        return errors


class LinerBlock(SubsystemBlock):
    """Roof and/or wall liner panels.

    Building dimensions default to the host building when the block is
    taken from a full building payload; areas of 0 are derived from them.
    """

    description: str = "Liner"
    sales_code: int = 18
    type: str = "Both"
    roof_liner_type: str = "S5OW"
    wall_liner_type: str = "S5OW"
    building_width: float = 24.0
    building_length: float = 36.0
    back_eave_height: float = 8.0
    front_eave_height: float = 8.0
    rafter_length: float = 0.0
    endwall_area: float = 0.0
    roof_area: float = 0.0
    wall_area: float = 0.0
    roof_openings: float = 0.0
    wall_openings: float = 0.0

    def validate_block(self, prefix: str) -> list[FieldError]:
        errors = _positive(f"{prefix}.building_width", self.building_width)
        errors += _positive(f"{prefix}.building_length", self.building_length)
        if self.type.strip() not in {t.value for t in LinerType}:
            choices = ", ".join(t.value for t in LinerType)
            errors.append(FieldError(field=f"{prefix}.type", message=f"must be one of {choices}"))
        return errors
