"""Primary calculation engine for the QuickEst estimation library.

The CalculationEngine turns a validated BuildingModel into the main
building bill of materials:

1. **Dimensions**: width, length, rafter length and peak height from the
   span, bay and slope lists.
2. **Loads**: wind pressure plus the purlin and frame design loads.
3. **Member selection**: each secondary member gets a design index from
   load x span geometry, resolved to a code through the store's bands.
4. **BOM**: every section is priced row by row from the reference store,
   grouped under section headers.
5. **Painting**: blasting and paint rows for the painted surface of the
   built-up and hot-rolled steel, by paint system.

Any code the store cannot resolve raises ``MissingReferenceError`` and no
BOM is returned.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from quickest.bom_builder import BomBuilder
from quickest.exceptions import ValidationError
from quickest.models.blocks import has_skin
from quickest.models.enums import BaseType, BracingType, EndwallType, OpeningLocation
from quickest.openings import OpeningAreas
from quickest.paint import add_paint_rows, paint_system, painted_area

if TYPE_CHECKING:
    from quickest.data.store import ReferenceStore
    from quickest.models.bom import BillOfMaterials
    from quickest.models.building import BuildingModel, Dimensions, Loads

logger = logging.getLogger(__name__)

PURLIN_SPACING = 1.5
GIRT_SPACING = 1.8
# Roof sheeting allowance for laps and waste.
ROOF_WASTE = 1.02
WALL_COVERAGE = 0.9
BUILDING_SALES_CODE = 1

# Cold-formed finishes that stay galvanized; anything else is painted.
GALVANIZED_CF_FINISHES = ("Galvanized", "Alu/Zinc")

# Purlin depth in mm: (end bay code, interior bay code, clip code). 200 mm
# purlins are sized from the purlin band instead.
PURLIN_DEPTH_CODES: dict[int, tuple[str, str, str]] = {
    250: ("25Z25G", "250Z20G", "CFClip1"),
    360: ("M20G", "M18G", "CFClip2"),
}

TRIM_SIZE_SUFFIXES: dict[str, str] = {"0.5 AZ": "", "0.7 AZ": "1"}
ALUMINIUM_PREFIXES = ("A", "PUA")

# Fixed base connection by building width: (max width, connection type, bolts, bolt dia)
_FIXED_BASES: tuple[tuple[float, int, int, int], ...] = (
    (15, 2, 8, 20),
    (25, 3, 8, 24),
    (35, 3, 16, 24),
    (45, 4, 16, 30),
    (50, 5, 16, 36),
    (60, 4, 32, 30),
    (math.inf, 5, 32, 36),
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pinned_bolt_size(frame_weight_per_frame: float) -> int:
    if frame_weight_per_frame <= 20:
        return 16
    if frame_weight_per_frame < 40:
        return 20
    if frame_weight_per_frame < 80:
        return 24
    if frame_weight_per_frame < 120:
        return 30
    return 36


def is_galvanized(cf_finish: str) -> bool:
    return cf_finish.strip() in GALVANIZED_CF_FINISHES


def trim_suffixes(trim_size: str, roof_skin: str) -> tuple[str, str]:
    """Code suffixes for (flashing trims, gutters and downspouts).

    0.5 AZ trims use the plain codes and 0.7 AZ trims add ``1``. Aluminium
    roof sheeting takes aluminium trims and gutters whatever the trim size.
    """
    if roof_skin.strip().upper().startswith(ALUMINIUM_PREFIXES):
        return "A", "A"
    return TRIM_SIZE_SUFFIXES.get(trim_size.strip(), ""), ""


def _fixed_base(width: float) -> tuple[int, int, int]:
    for max_width, conn_type, n_bolts, bolt_dia in _FIXED_BASES:
        if width <= max_width:
            return conn_type, n_bolts, bolt_dia
    return _FIXED_BASES[-1][1:]


@dataclass(frozen=True)
class PrimaryCalculation:
    """Everything one primary calculation produced."""

    bom: BillOfMaterials
    dimensions: Dimensions
    loads: Loads
    openings: OpeningAreas
    frame_weight: float


@dataclass
class _Run:
    """Per-call working state, so one engine can serve concurrent callers."""

    building: BuildingModel
    dims: Dimensions
    loads: Loads
    openings: OpeningAreas
    spans: list[float]
    bays: list[float]
    out: BomBuilder
    frame_weight: float = 0.0
    roof_area: float = 0.0
    endwall_area: float = 0.0


class CalculationEngine:
    """Builds the main building BOM from a validated BuildingModel.

    Args:
        store: Reference data used for member selection and pricing.

    Example::

        engine = CalculationEngine(store)
        bom = engine.calculate(building)
        engine.dimensions.width
    """

    def __init__(self, store: ReferenceStore) -> None:
        self._store = store
        self._last: PrimaryCalculation | None = None

    @property
    def store(self) -> ReferenceStore:
        return self._store

    @property
    def dimensions(self) -> Dimensions | None:
        """Dimensions of the last completed calculation."""
        return self._last.dimensions if self._last else None

    @property
    def loads(self) -> Loads | None:
        """Loads of the last completed calculation."""
        return self._last.loads if self._last else None

    def calculate(self, building: BuildingModel) -> BillOfMaterials:
        """Calculate the main building BOM.

        Raises:
            ValidationError: If ``building.validate()`` reports problems.
            MissingReferenceError: If a selected code is not in the store.
        """
        return self.run(building).bom

    def run(self, building: BuildingModel) -> PrimaryCalculation:
        """Calculate and return the BOM together with the derived state."""
        errors = building.validate()
        if errors:
            raise ValidationError(errors)

        dims = building.dimensions()
        run = _Run(
            building=building,
            dims=dims,
            loads=building.loads(),
            openings=OpeningAreas.from_openings(building.openings, dims),
            spans=building.span_list().expand(),
            bays=building.bay_list().expand(),
            out=BomBuilder(self._store, BUILDING_SALES_CODE),
        )

        self._main_frames(run)
        self._purlins(run)
        self._girts(run)
        self._bracing(run)
        self._roof_sheeting(run)
        self._wall_sheeting(run)
        self._endwall(run, "Left", building.left_endwall_type, OpeningLocation.LEFT_ENDWALL)
        self._endwall(run, "Right", building.right_endwall_type, OpeningLocation.RIGHT_ENDWALL)
        self._trims(run)
        self._fasteners(run)
        self._accessories(run)
        self._painting(run)
        self._handling(run)

        result = PrimaryCalculation(
            bom=run.out.build(),
            dimensions=dims,
            loads=run.loads,
            openings=run.openings,
            frame_weight=run.frame_weight,
        )
        logger.debug(
            "Main building %.0fm x %.0fm: %d items, %.0f kg",
            dims.width,
            dims.length,
            result.bom.item_count,
            result.bom.total_weight,
        )
        self._last = result
        return result

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def _main_frames(self, run: _Run) -> None:
        dims, b = run.dims, run.building
        min_weight_per_m = math.sqrt(b.min_thickness / 3.5) * 18.5
        n_bays = dims.n_bays

        frame_weight = 0.0
        for span in run.spans:
            for j in range(n_bays + 1):
                tributary = 0.0
                if j > 0:
                    tributary += run.bays[j - 1] / 2
                if j < n_bays:
                    tributary += run.bays[j] / 2
                if j in (0, n_bays):
                    tributary *= 0.6
                weight_per_m = (0.1 * run.loads.total_frame_load * tributary + 0.3) * (
                    2 * span - 9
                )
                frame_weight += span * max(weight_per_m, min_weight_per_m)
        run.frame_weight = frame_weight

        out = run.out
        with out.section(f"Main Frames ({dims.n_frames} Nos)"):
            if b.double_welded == "Yes":
                out.add("BU", 1, frame_weight, header="Rafters & Columns (Double Welded)")
                out.add("DSW", 1, frame_weight)
            else:
                out.add("BU", 1, frame_weight, header="Rafters & Columns")
            out.add("ConPlates", 1, frame_weight * 0.12)

            n_columns = dims.n_frames * (dims.n_spans + 1)
            if b.base_type == BaseType.FIXED:
                conn_type, n_bolts, bolt_dia = _fixed_base(dims.width)
                out.add(f"FC{conn_type}", 1, n_columns)
                out.add(f"AB{bolt_dia}", 1, n_bolts * n_columns)
            else:
                bolt = _pinned_bolt_size(frame_weight / dims.n_frames)
                out.add("PC1", 1, n_columns)
                out.add(f"AB{bolt}", 1, 4 * n_columns)

            out.add("HRB30", 1, dims.n_frames * dims.n_spans * 12)

    def _purlins(self, run: _Run) -> None:
        dims, out = run.dims, run.out
        lines = sum(
            (math.ceil(entry.value / PURLIN_SPACING) + 1) * entry.count
            for entry in run.building.span_list()
        )
        depth = PURLIN_DEPTH_CODES.get(run.building.purlin_size)
        if depth is None:
            clip = "CFClip"
            rows = [
                (
                    self._store.purlin_code(1.25 * run.loads.total_purlin_load * bay.value**2),
                    bay.value,
                    lines * bay.count,
                )
                for bay in run.building.bay_list()
            ]
        else:
            end_code, interior_code, clip = depth
            rows = self._deep_purlins(run.bays, lines, end_code, interior_code)

        clips = 0
        with out.section("Roof Purlins"):
            for code, size, quantity in rows:
                out.add(code, size, quantity)
                clips += quantity * 2
            out.add(clip, 1, clips)
            out.add("HSB12", 1, clips * 3)
            if dims.avg_bay > 7.5:
                out.add("SR12", 1, math.ceil(dims.length / 3) * 2)

    @staticmethod
    def _deep_purlins(
        bays: list[float], lines: int, end_code: str, interior_code: str
    ) -> list[tuple[str, float, int]]:
        """Heavier purlins over the two end bays, lighter ones inside."""
        groups: dict[tuple[str, float], int] = {}
        last = len(bays) - 1
        for i, bay in enumerate(bays):
            key = (end_code if i in (0, last) else interior_code, bay)
            groups[key] = groups.get(key, 0) + lines
        return [(code, bay, quantity) for (code, bay), quantity in groups.items()]

    def _girts(self, run: _Run) -> None:
        dims, out, openings = run.dims, run.out, run.openings
        lines = math.ceil(dims.avg_eave_height / GIRT_SPACING)
        quantity = round_half_up(lines * dims.n_bays * openings.girt_factor(dims))
        code = self._store.girt_code(2 * run.loads.wind_load * dims.avg_bay**2)
        clips = 0
        with out.section("Wall Girts"):
            out.add(code, dims.avg_bay, quantity, header="Back Wall Girts")
            clips += quantity * 2
            out.add(code, dims.avg_bay, quantity, header="Front Wall Girts")
            clips += quantity * 2
            out.add("CFClip", 1, clips)
            out.add("HSB12", 1, clips * 3)
            base_angle = 2 * dims.length - openings.width_on(
                OpeningLocation.FRONT_SIDEWALL, OpeningLocation.BACK_SIDEWALL
            )
            if base_angle > 0:
                out.add("Bang", 1, base_angle)

    def _bracing(self, run: _Run) -> None:
        dims, out = run.dims, run.out
        roof_diagonal = math.hypot(dims.avg_bay, dims.rafter_length)
        wall_diagonal = math.hypot(dims.avg_bay, dims.back_eave_height)
        # Two braced bays, four members each on roof and walls.
        members = 2 * 4
        bracing = run.building.bracing_type
        with out.section("Bracing"):
            if bracing == BracingType.CABLES:
                out.add("CBC", roof_diagonal, members, header="Roof Bracing Cables")
                out.add("CBC", wall_diagonal, members, header="Wall Bracing Cables")
                out.add("TBCon", 1, 2 * members * 2)
            elif bracing == BracingType.RODS:
                out.add("BR12", roof_diagonal, members, header="Roof Bracing Rods")
                out.add("BR12", wall_diagonal, members, header="Wall Bracing Rods")
            else:
                out.add("BA", roof_diagonal, members, header="Roof Bracing Angles")
                out.add("BA", wall_diagonal, members, header="Wall Bracing Angles")
            out.add("FB", 1, dims.n_frames * dims.n_spans * 4)

    # ------------------------------------------------------------------
    # Sheeting
    # ------------------------------------------------------------------

    def _roof_sheeting(self, run: _Run) -> None:
        b, dims, out = run.building, run.dims, run.out
        run.roof_area = ROOF_WASTE * dims.roof_area
        coverage = 1.0 if b.roof_panel_profile == "M45-250" else 0.9
        area = run.roof_area / coverage
        with out.section("Roof Sheeting"):
            if has_skin(b.roof_top_skin):
                out.add(self._store.resolve_code(b.roof_top_skin), 1, area, header="Roof Top Skin")
            if has_skin(b.roof_core):
                out.add(
                    self._store.resolve_code(b.roof_core), 1, area, header="Roof Insulation Core"
                )
            if has_skin(b.roof_bot_skin):
                out.add(
                    self._store.resolve_code(b.roof_bot_skin), 1, area, header="Roof Bottom Skin"
                )
            out.add("RC", 1, dims.length)

    def _wall_sheeting(self, run: _Run) -> None:
        b, dims, out = run.building, run.dims, run.out
        net = dims.back_wall_area + dims.front_wall_area - run.openings.sidewalls
        area = max(net, 0.0) / WALL_COVERAGE
        with out.section("Wall Sheeting"):
            if has_skin(b.wall_top_skin):
                out.add(
                    self._store.resolve_code(b.wall_top_skin), 1, area, header="Sidewall Sheeting"
                )
            if has_skin(b.wall_core):
                out.add(
                    self._store.resolve_code(b.wall_core), 1, area, header="Wall Insulation Core"
                )
            if has_skin(b.wall_bot_skin):
                out.add(
                    self._store.resolve_code(b.wall_bot_skin), 1, area, header="Wall Inner Liner"
                )

    def _endwall(self, run: _Run, side: str, endwall_type: str, location: str) -> None:
        b, dims, out = run.building, run.dims, run.out
        height = max(1.0, (dims.back_eave_height + dims.peak_height) / 2)
        girt_lines = math.ceil(height / GIRT_SPACING)
        run.endwall_area += dims.endwall_area

        with out.section(f"{side} Endwall ({endwall_type})"):
            if endwall_type in (EndwallType.MAIN_FRAME, EndwallType.MF_HALF_LOADED):
                half_span = dims.avg_span / 2
                code = self._store.girt_code(2 * run.loads.wind_load * half_span**2)
                out.add(code, half_span, girt_lines * (dims.n_spans + 1), header="Endwall Girts")
            else:
                col_spacing = max(1.0, dims.avg_span / 4)
                n_columns = math.ceil(dims.width / col_spacing) + 1
                design_index = run.loads.wind_load**2 / 20000 * height**3 * col_spacing / 3
                galvanized = is_galvanized(b.cf_finish)
                out.add(
                    self._store.endwall_column_code(design_index, galvanized=galvanized),
                    height,
                    n_columns,
                    header="Endwall Columns",
                )
                if endwall_type == EndwallType.FALSE_RAFTER:
                    strut = "Z25G" if galvanized else "Z25P"
                    out.add(strut, dims.avg_span / 2, n_columns, header="False Rafters")
                girts = girt_lines * (n_columns - 1)
                out.add("Z20G", col_spacing, girts, header="Endwall Girts")
                out.add("CFClip", 1, (n_columns + girts) * 2)
                out.add("HSB12", 1, (n_columns + girts) * 6)

            if has_skin(b.wall_top_skin):
                opening = (
                    run.openings.left_endwall
                    if location == OpeningLocation.LEFT_ENDWALL
                    else run.openings.right_endwall
                )
                area = max(dims.endwall_area - opening, 0.0) / WALL_COVERAGE
                out.add(
                    self._store.resolve_code(b.wall_top_skin), 1, area, header="Endwall Sheeting"
                )
            out.add("Gang", 1, dims.rafter_length * 2)
            base_angle = dims.width - run.openings.width_on(location)
            if base_angle > 0:
                out.add("Bang", 1, base_angle)

    # ------------------------------------------------------------------
    # Trims, fasteners and extras
    # ------------------------------------------------------------------

    def _trims(self, run: _Run) -> None:
        b, dims, out = run.building, run.dims, run.out
        roof_skin = self._store.resolve_code(b.roof_top_skin) if has_skin(b.roof_top_skin) else ""
        tr, ds = trim_suffixes(b.trim_sizes, roof_skin)
        with out.section("Trims & Flashings"):
            out.add(f"TTE{tr}", 1, 2 * dims.length, header="Eave Trim")
            out.add(f"TTG{tr}", 1, 4 * dims.rafter_length, header="Gable Trim")
            out.add(f"TTC{tr}", 1, 4 * dims.avg_eave_height, header="Corner Trim")
            out.add(f"TTB{tr}", 1, 2 * (dims.length + dims.width), header="Base Trim")
            for condition in (b.back_eave_condition, b.front_eave_condition):
                if "Gutter" in condition:
                    out.add(f"GUT{ds}", 1, dims.length, header="Gutters")
                    out.add(f"DWSP{ds}", 1, math.ceil(dims.length / 12), header="Downspouts")

    def _fasteners(self, run: _Run) -> None:
        b, dims, out = run.building, run.dims, run.out
        screw = "SS2" if "A" in b.roof_top_skin else "CS2"
        wall_area = dims.back_wall_area + dims.front_wall_area + run.endwall_area
        with out.section("Fasteners & Sealants"):
            out.add(screw, 1, run.roof_area * 4, header="Roof Screws")
            out.add(screw, 1, wall_area * 3, header="Wall Screws")
            out.add("BM", 1, dims.rafter_length * 2 * dims.length / 1.5, header="Bead Mastic")
            out.add("BT", 1, dims.rafter_length * 2 * dims.n_frames, header="Butyl Tape")

    def _accessories(self, run: _Run) -> None:
        lines = [a for a in run.building.accessories if a.code.strip() and a.quantity > 0]
        if not lines:
            return
        with run.out.section("Accessories"):
            for line in lines:
                run.out.add(line.code, line.size, line.quantity, header=line.description)

    def _painting(self, run: _Run) -> None:
        b, out = run.building, run.out
        system = paint_system(b.paint_system, b.bu_finish)
        area = painted_area(out.data_rows)
        if area <= 0 or not system.is_painted:
            return
        with out.section("Blasting & Painting"):
            add_paint_rows(out, area, system)

    def _handling(self, run: _Run) -> None:
        dims, out = run.dims, run.out
        bom_weight = out.running_weight
        with out.section("Handling, Packing & Loading"):
            out.add("PPLBu", 1, run.frame_weight, header="Primary Steel Packing")
            out.add("PPLCF", 1, bom_weight * 0.3, header="Secondary Steel Packing")
            out.add(
                "PPLSS",
                1,
                run.roof_area + dims.back_wall_area + dims.front_wall_area,
                header="Sheeting Packing",
            )
