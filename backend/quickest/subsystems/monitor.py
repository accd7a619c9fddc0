"""Roof monitors: curved or straight eave, cold-formed or hot-rolled framing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quickest.dimensions import DimensionList, parse
from quickest.models.blocks import MonitorBlock
from quickest.models.enums import MonitorType, SubsystemKind
from quickest.subsystems.base import SubsystemCalculator, cold_formed_length

if TYPE_CHECKING:
    from quickest.bom_builder import BomBuilder

# Cold-formed frames only span openings up to this width (mm).
MAX_COLD_FORMED_OPENING = 1000
# Default hot-rolled frame lengths, mm
CURVE_HR_FRAME = 8000
STRAIGHT_HR_FRAME = 6000
MONITOR_PURLIN_LOAD = 0.67

_TITLES = {
    MonitorType.CURVE_CF: "Roof Monitor - Curved Eave/Cold Formed",
    MonitorType.STRAIGHT_CF: "Roof Monitor - Straight Eave/Cold Formed",
    MonitorType.CURVE_HR: "Roof Monitor - Curved Eave/Hot Rolled",
    MonitorType.STRAIGHT_HR: "Roof Monitor - Straight Eave/Hot Rolled",
}

_HOT_ROLLED = {
    MonitorType.CURVE_CF: MonitorType.CURVE_HR,
    MonitorType.STRAIGHT_CF: MonitorType.STRAIGHT_HR,
}


def monitor_variant(monitor_type: str, opening_width: float) -> MonitorType:
    """Monitor variant to build; wide cold-formed monitors switch to hot-rolled."""
    try:
        variant = MonitorType(monitor_type.strip())
    except ValueError:
        variant = MonitorType.CURVE_CF
    if opening_width > MAX_COLD_FORMED_OPENING:
        variant = _HOT_ROLLED.get(variant, variant)
    return variant


class MonitorCalculator(SubsystemCalculator[MonitorBlock]):
    kind = SubsystemKind.MONITOR
    block_type = MonitorBlock

    def _build(self, block: MonitorBlock, out: BomBuilder) -> None:
        bays = parse(block.bay_spacing)
        # Frame spacing across the opening, mm
        frame_span = block.opening_width + 800
        variant = monitor_variant(block.monitor_type, block.opening_width)
        with out.section(_TITLES[variant]):
            if variant is MonitorType.CURVE_CF:
                self._curve_cold_formed(block, bays, frame_span, out)
            elif variant is MonitorType.STRAIGHT_CF:
                self._straight_cold_formed(block, bays, frame_span, out)
            elif variant is MonitorType.CURVE_HR:
                self._curve_hot_rolled(block, bays, frame_span, out)
            else:
                self._straight_hot_rolled(block, bays, frame_span, out)

    # ------------------------------------------------------------------
    # Shared pieces
    # ------------------------------------------------------------------

    def _purlins(self, bays: DimensionList, quantity: float, out: BomBuilder) -> None:
        bay = bays[0].value
        code = self._store.purlin_code(1.25 * MONITOR_PURLIN_LOAD * bay**2)
        out.add(code, cold_formed_length(bay), quantity, header="Purlins")

    @staticmethod
    def _purlin_lines(frame_span: float, offset: float) -> int:
        return 8 if round(0.5 * (frame_span - offset)) > 1550 else 6

    def _roof_panels(
        self, block: MonitorBlock, frame_span: float, offset: float, out: BomBuilder
    ) -> None:
        area = round(2 * (frame_span - offset) * block.monitor_length / 1000, 2)
        out.add(self.resolve(block.roof_sheeting), 1, area, header="Roof Panels")

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    def _curve_cold_formed(
        self, block: MonitorBlock, bays: DimensionList, frame_span: float, out: BomBuilder
    ) -> None:
        length = block.monitor_length
        n_bays = bays.total_count
        n_frames = n_bays + 1
        lines = self._purlin_lines(frame_span, 900)
        roof = self.resolve(block.roof_sheeting)

        out.add("C20G", 1, n_frames * 5.99, header="Monitor Frame")
        out.add("RMClip1", 1, (lines + 2) * n_frames)
        out.add("HSB12", 1, n_frames * 68)
        out.add("LA", 1, length * 4)
        self._purlins(bays, 8 * n_bays, out)
        out.add("WRM", 1, 1.7 * length)
        out.add("FCM45", 1, 2 * length)
        out.add("BM2", 1, 2 * length)
        out.add("CS2", 1, 18 * length / 0.25)
        out.add(roof, 1, length / block.profile_width, header="Ridge Panel")
        out.add(roof, 1, 2 * length / block.profile_width, header="Curved Panel")
        out.add("DTS1", 1, 2 * length)
        self._roof_panels(block, frame_span, 750, out)
        wall = self.resolve(block.wall_sheeting)
        out.add(wall, 1, 1.3 * length, header="Sidewall Panels")
        out.add(wall, 1, 7, header="Endwall Panels")
        out.add("GTS1", 1, 7)
        out.add("CTS1", 1, 4)
        out.add("PeakBox", 1, 2)
        out.add("PRVS", 1, 80)
        out.add("SS2", 1, 80)
        out.add("FLM", 1, 2)
        out.add("FBA", 1, 13)
        out.add("ClT", 1, 1.8)
        out.add("Gang", 1, 3)

    def _straight_cold_formed(
        self, block: MonitorBlock, bays: DimensionList, frame_span: float, out: BomBuilder
    ) -> None:
        length = block.monitor_length
        n_bays = bays.total_count
        n_frames = n_bays + 1
        lines = self._purlin_lines(frame_span, 375)

        out.add("C20G", 1, n_frames * 4.22, header="Monitor Frame")
        out.add("RMClip2", 1, lines * n_frames)
        out.add("HSB12", 1, n_frames * 44)
        out.add("LA", 1, 4 * length)
        self._purlins(bays, 4 * n_bays, out)
        out.add("WRM", 1, 2.1 * length)
        out.add("FCM45", 1, 2 * length)
        out.add("BM2", 1, 2 * length)
        out.add("CS2", 1, 12 * length / 0.25)
        roof = self.resolve(block.roof_sheeting)
        out.add(roof, 1, length / block.profile_width, header="Ridge Panel")
        self._roof_panels(block, frame_span, 80, out)
        out.add(self.resolve(block.wall_sheeting), 1, 4.5, header="Endwall Panels")
        out.add("GTS1", 1, 8.6)
        out.add("PeakBox", 1, 2)
        out.add("PRVS", 1, 80)
        out.add("SS2", 1, 80)
        out.add("FBA", 1, 13)
        out.add("ClT", 1, 1.8)
        out.add("Gang", 1, 3)

    def _curve_hot_rolled(
        self, block: MonitorBlock, bays: DimensionList, frame_span: float, out: BomBuilder
    ) -> None:
        length = block.monitor_length
        n_frames = bays.total_count + 1
        lines = self._purlin_lines(frame_span, 900)
        frame = block.monitor_frame_length or CURVE_HR_FRAME

        out.add("IPEa", 1, frame * n_frames / 1000, header="Monitor Frame (IPE)")
        purlins = (lines + 2) * 2
        if n_frames - 3 > 0:
            purlins += (lines + 2) * (n_frames - 3)
        self._purlins(bays, purlins, out)
        out.add("RMClip1", 1, (lines + 2) * n_frames)
        out.add("HSB12", 1, (6 * (lines + 2) + 24) * n_frames)
        out.add("LA", 1, 4 * length)
        out.add("WRM", 1, 1.7 * length)
        out.add("FCM45", 1, 2 * length)
        self._roof_panels(block, frame_span, 750, out)
        out.add(self.resolve(block.wall_sheeting), 1, 1.3 * length + 7, header="Wall Panels")
        out.add("GTS1", 1, 7)
        out.add("CTS1", 1, 4)
        out.add("DTS1", 1, 2 * length)
        out.add("CS2", 1, 18 * length / 0.25)

    def _straight_hot_rolled(
        self, block: MonitorBlock, bays: DimensionList, frame_span: float, out: BomBuilder
    ) -> None:
        length = block.monitor_length
        n_frames = bays.total_count + 1
        lines = self._purlin_lines(frame_span, 375)
        frame = block.monitor_frame_length or STRAIGHT_HR_FRAME

        out.add("IPEa", 1, frame * n_frames / 1000, header="Monitor Frame (IPE)")
        self._purlins(bays, lines * n_frames, out)
        out.add("RMClip2", 1, lines * n_frames)
        out.add("HSB12", 1, (6 * lines + 16) * n_frames)
        out.add("WRM", 1, 2.1 * length)
        out.add("FCM45", 1, 2 * length)
        self._roof_panels(block, frame_span, 80, out)
        out.add(self.resolve(block.wall_sheeting), 1, 4.5, header="Endwall Panels")
        out.add("GTS1", 1, 8.6)
        out.add("CS2", 1, 12 * length / 0.25)
