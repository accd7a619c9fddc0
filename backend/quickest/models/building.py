"""Building domain models for the QuickEst estimation engine."""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic import ValidationError as PydanticValidationError

from quickest.dimensions import DimensionList, parse, parse_slopes
from quickest.exceptions import FormatError
from quickest.models.blocks import (
    AccessoryBlock,
    AccessoryItem,
    AccessoryLine,
    CanopyBlock,
    CraneBlock,
    FieldError,
    LinerBlock,
    MezzanineBlock,
    MonitorBlock,
    Opening,
    PartitionBlock,
    SubsystemBlock,
    dimension_errors,
    dimension_text,
)
from quickest.models.enums import BaseType, EndwallType, PartitionDirection, SubsystemKind

if TYPE_CHECKING:
    from collections.abc import Mapping

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Roof slope used when the input leaves slopes blank (1:10).
DEFAULT_SLOPE = 0.1

# Purlin depths in mm offered on the input sheet.
PURLIN_SIZES = (200, 250, 360)

# Bay spacing for partition columns laid across the building width.
PARTITION_COLUMN_SPACING = 6.0


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _snake_keys(value: Any) -> Any:
    """Recursively convert camelCase payload keys to snake_case."""
    if isinstance(value, dict):
        return {_snake(str(k)): _snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_snake_keys(v) for v in value]
    return value


class Dimensions(BaseModel):
    """Derived building geometry (metres and square metres)."""

    model_config = ConfigDict(frozen=True)

    width: float
    length: float
    back_eave_height: float
    front_eave_height: float
    peak_height: float
    rafter_length: float
    slope: float
    n_spans: int
    n_bays: int
    n_frames: int
    avg_span: float
    avg_bay: float
    roof_area: float
    back_wall_area: float
    front_wall_area: float
    endwall_area: float

    @property
    def avg_eave_height(self) -> float:
        return (self.back_eave_height + self.front_eave_height) / 2


class Loads(BaseModel):
    """Design loads in kN/m2; wind speed in km/h."""

    model_config = ConfigDict(frozen=True)

    dead_load: float
    live_load_purlin: float
    live_load_frame: float
    additional_load: float
    wind_speed: float
    wind_load: float
    total_purlin_load: float
    total_frame_load: float


class BuildingModel(BaseModel):
    """Design inputs for one pre-engineered building.

    Built from the flat input-sheet payload with :meth:`from_input`, which
    never raises: unusable values fall back to their defaults and are
    reported by :meth:`validate` instead. Nothing is calculated until
    ``validate()`` returns an empty list.
    """

    # Identification
    project_name: str = ""
    building_name: str = ""

    # Geometry
    spans: str = ""
    bays: str = ""
    slopes: str = ""
    back_eave_height: float = 0.0
    front_eave_height: float = 0.0
    frame_type: str = "Clear Span"
    min_thickness: float = 6.0
    base_type: str = BaseType.PINNED.value
    double_welded: str = "No"
    left_endwall_type: str = EndwallType.BEARING_FRAME.value
    right_endwall_type: str = EndwallType.BEARING_FRAME.value
    bracing_type: str = "Cables"

    # Finishes and eaves
    bu_finish: str = "Red Oxide Primer"
    cf_finish: str = "Galvanized"
    paint_system: str = "Primer Only"
    back_eave_condition: str = "Gutter+Dwnspts"
    front_eave_condition: str = "Gutter+Dwnspts"

    # Loads
    dead_load: float = 0.1
    live_load_purlin: float = 0.57
    live_load_frame: float = 0.57
    additional_load: float = 0.0
    wind_speed: float = 130.0

    # Secondary members and sheeting
    purlin_size: int = 200
    roof_top_skin: str = "S5OW"
    roof_core: str = "-"
    roof_bot_skin: str = "-"
    roof_panel_profile: str = "M45-250"
    wall_top_skin: str = "S5OW"
    wall_core: str = "-"
    wall_bot_skin: str = "-"
    trim_sizes: str = "0.5 AZ"

    # Sub-blocks
    openings: list[Opening] = Field(default_factory=list)
    accessories: list[AccessoryLine] = Field(default_factory=list)
    accessory_items: list[AccessoryItem] = Field(default_factory=list)
    mezzanines: list[MezzanineBlock] = Field(default_factory=list)
    cranes: list[CraneBlock] = Field(default_factory=list)
    partitions: list[PartitionBlock] = Field(default_factory=list)
    canopies: list[CanopyBlock] = Field(default_factory=list)
    monitors: list[MonitorBlock] = Field(default_factory=list)
    liners: list[LinerBlock] = Field(default_factory=list)

    _input_errors: list[FieldError] = PrivateAttr(default_factory=list)

    @field_validator("spans", "bays", "slopes", mode="before")
    @classmethod
    def number_as_dimension_list(cls, v: Any) -> Any:
        return dimension_text(v)

    @classmethod
    def from_input(cls, payload: Mapping[str, Any] | None) -> BuildingModel:
        """Build a model from a raw payload (camelCase or snake_case keys).

        Unknown keys are ignored. A value that cannot be coerced to its
        field type is dropped so the default applies, and the problem is
        kept for :meth:`validate`.
        """
        data: dict[str, Any] = _snake_keys(dict(payload or {}))
        rejected: list[FieldError] = []

        while True:
            try:
                model = cls.model_validate(data)
            except PydanticValidationError as exc:
                dropped = False
                for err in exc.errors():
                    name = str(err["loc"][0]) if err["loc"] else ""
                    if name in data:
                        data.pop(name)
                        rejected.append(FieldError(field=name, message=err["msg"]))
                        dropped = True
                if not dropped:
                    model = cls()
                    rejected.append(FieldError(field="payload", message=str(exc)))
                    break
                continue
            break

        model._input_errors = rejected
        return model

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> list[FieldError]:  # type: ignore[override]
        """Return every field-level problem; an empty list means valid."""
        errors = list(self._input_errors)
        errors += dimension_errors("spans", self.spans)
        errors += dimension_errors("bays", self.bays)
        try:
            parse(self.slopes)
        except FormatError as exc:
            errors.append(FieldError(field="slopes", message=str(exc)))

        if self.back_eave_height <= 0:
            errors.append(FieldError(field="back_eave_height", message="must be greater than 0"))
        if self.front_eave_height <= 0:
            errors.append(FieldError(field="front_eave_height", message="must be greater than 0"))
        if self.wind_speed < 0:
            errors.append(FieldError(field="wind_speed", message="must not be negative"))
        if not self.frame_type.strip():
            errors.append(FieldError(field="frame_type", message="is required"))
        if not self.base_type.strip():
            errors.append(FieldError(field="base_type", message="is required"))
        if self.purlin_size not in PURLIN_SIZES:
            sizes = ", ".join(str(size) for size in PURLIN_SIZES)
            errors.append(FieldError(field="purlin_size", message=f"must be one of {sizes}"))

        for name, blocks in self._block_lists():
            for i, block in enumerate(blocks):
                errors += block.validate_block(f"{name}[{i}]")
        return errors

    def is_valid(self) -> bool:
        return not self.validate()

    # ------------------------------------------------------------------
    # Loads
    # ------------------------------------------------------------------

    def wind_load(self) -> float:
        """Wind pressure in kN/m2 from the design wind speed (V^2 / 20000)."""
        return self.wind_speed**2 / 20000

    def total_purlin_load(self) -> float:
        return self.dead_load + self.live_load_purlin + self.additional_load

    def total_frame_load(self) -> float:
        return self.dead_load + self.live_load_frame + self.additional_load

    def loads(self) -> Loads:
        return Loads(
            dead_load=self.dead_load,
            live_load_purlin=self.live_load_purlin,
            live_load_frame=self.live_load_frame,
            additional_load=self.additional_load,
            wind_speed=self.wind_speed,
            wind_load=self.wind_load(),
            total_purlin_load=self.total_purlin_load(),
            total_frame_load=self.total_frame_load(),
        )

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def span_list(self) -> DimensionList:
        return parse(self.spans)

    def bay_list(self) -> DimensionList:
        return parse(self.bays)

    def roof_slope(self) -> float:
        """Smallest entered slope, or 1:10 when none is given.

        Per-span overrides (``2@12@0.05``) win over the ``slopes`` list.
        """
        try:
            overrides = [e.slope for e in parse_slopes(self.spans) if e.slope > 0]
            slopes = parse(self.slopes)
        except FormatError:
            return DEFAULT_SLOPE
        if overrides:
            return min(overrides)
        return slopes.min_value(default=DEFAULT_SLOPE)

    def dimensions(self) -> Dimensions:
        """Derive the building geometry.

        Raises:
            FormatError: If spans or bays cannot be parsed.
        """
        spans = self.span_list()
        bays = self.bay_list()
        n_spans = spans.total_count
        n_bays = bays.total_count
        width = spans.total_sum
        length = bays.total_sum
        slope = self.roof_slope()

        half_width = width / 2
        rafter_length = half_width * math.sqrt(1 + slope**2)
        peak_height = max(self.back_eave_height, self.front_eave_height) + half_width * slope
        endwall_height = max(1.0, (self.back_eave_height + peak_height) / 2)

        return Dimensions(
            width=width,
            length=length,
            back_eave_height=self.back_eave_height,
            front_eave_height=self.front_eave_height,
            peak_height=peak_height,
            rafter_length=rafter_length,
            slope=slope,
            n_spans=n_spans,
            n_bays=n_bays,
            n_frames=n_bays + 1,
            avg_span=width / max(1, n_spans),
            avg_bay=length / max(1, n_bays),
            roof_area=2 * rafter_length * length,
            back_wall_area=self.back_eave_height * length,
            front_wall_area=self.front_eave_height * length,
            endwall_area=endwall_height * max(1.0, width),
        )

    # ------------------------------------------------------------------
    # Sub-systems
    # ------------------------------------------------------------------

    def _block_lists(self) -> list[tuple[str, list[Any]]]:
        return [
            ("mezzanines", self.mezzanines),
            ("cranes", self.cranes),
            ("partitions", self.partitions),
            ("canopies", self.canopies),
            ("monitors", self.monitors),
            ("liners", self.liners),
        ]

    def accessory_block(self) -> AccessoryBlock | None:
        """Description-driven accessories as a block, using the wall skins."""
        if not self.accessory_items:
            return None
        return AccessoryBlock(
            items=self.accessory_items,
            wall_top_skin=self.wall_top_skin,
            wall_core=self.wall_core,
            wall_bot_skin=self.wall_bot_skin,
        )

    def _with_building_dimensions(self, liner: LinerBlock) -> LinerBlock:
        dims = self.dimensions()
        inherited = {
            "building_width": dims.width,
            "building_length": dims.length,
            "back_eave_height": dims.back_eave_height,
            "front_eave_height": dims.front_eave_height,
            "rafter_length": 2 * dims.rafter_length,
            "endwall_area": dims.endwall_area,
        }
        update = {k: v for k, v in inherited.items() if k not in liner.model_fields_set}
        return liner.model_copy(update=update)

    def _with_building_spacing(self, partition: PartitionBlock) -> PartitionBlock:
        if "col_spacing" in partition.model_fields_set:
            return partition
        if partition.direction.strip() == PartitionDirection.ALONG:
            spacing = self.bays
        else:
            width = self.dimensions().width
            n_bays = max(1, math.ceil(width / PARTITION_COLUMN_SPACING))
            spacing = f"{n_bays}@{width / n_bays:g}"
        return partition.model_copy(update={"col_spacing": spacing})

    def subsystem_blocks(self) -> list[tuple[SubsystemKind, SubsystemBlock]]:
        """Active sub-system blocks in estimate order.

        Liner blocks inherit any building dimension they do not set, and
        partitions without a column spacing follow the building.
        """
        active: list[tuple[SubsystemKind, SubsystemBlock]] = []
        active += [(SubsystemKind.MEZZANINE, b) for b in self.mezzanines]
        active += [(SubsystemKind.CRANE, b) for b in self.cranes]
        accessory = self.accessory_block()
        if accessory is not None:
            active.append((SubsystemKind.ACCESSORY, accessory))
        active += [
            (SubsystemKind.PARTITION, self._with_building_spacing(b)) for b in self.partitions
        ]
        active += [(SubsystemKind.CANOPY, b) for b in self.canopies]
        active += [(SubsystemKind.MONITOR, b) for b in self.monitors]
        active += [
            (SubsystemKind.LINER, self._with_building_dimensions(b)) for b in self.liners
        ]
        return active
