"""Framed wall openings and the sheeting area they remove."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from quickest.models.enums import OpeningLocation

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quickest.models.blocks import Opening
    from quickest.models.building import Dimensions

# The input sheet has nine opening rows; anything beyond is ignored.
MAX_OPENINGS = 9

_LEADING_FLOAT = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+))")


def _leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


def is_sized(size: str) -> bool:
    """Only sizes that mention ``x`` or ``Full`` describe an opening."""
    lowered = size.lower()
    return "ful" in lowered or "x" in lowered


def parse_opening_size(size: str) -> tuple[float, float]:
    """Read ``"WxH"`` (metres) into ``(width, height)``.

    Unsized text reads as ``(0, 0)``. A missing part is left at 0 for the
    caller to default.
    """
    lowered = size.lower()
    if not is_sized(size):
        return 0.0, 0.0
    width = _leading_float(size)
    x_pos = lowered.find("x")
    height = _leading_float(size[x_pos + 1 :]) if x_pos >= 0 else 0.0
    return width, height


@dataclass(frozen=True)
class OpeningDetail:
    location: str
    width: float
    height: float
    purlin_support: int = 0
    bracing: int = 0

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class OpeningAreas:
    """Opening areas per wall, each capped to the wall it sits in."""

    front_sidewall: float = 0.0
    back_sidewall: float = 0.0
    left_endwall: float = 0.0
    right_endwall: float = 0.0
    total_width: float = 0.0
    details: tuple[OpeningDetail, ...] = field(default_factory=tuple)

    @property
    def sidewalls(self) -> float:
        return self.front_sidewall + self.back_sidewall

    @property
    def total(self) -> float:
        return self.sidewalls + self.left_endwall + self.right_endwall

    def width_on(self, *locations: str) -> float:
        """Summed opening width on the given walls."""
        return sum(d.width for d in self.details if d.location in locations)

    def girt_factor(self, dims: Dimensions) -> float:
        """Share of sidewall girt runs left once openings are cut out."""
        gross = dims.back_wall_area + dims.front_wall_area
        return 1 - self.sidewalls / max(gross, 0.001)

    @classmethod
    def from_openings(cls, openings: Iterable[Opening], dims: Dimensions) -> OpeningAreas:
        areas = {location: 0.0 for location in OpeningLocation}
        total_width = 0.0
        details: list[OpeningDetail] = []

        for opening in list(openings)[:MAX_OPENINGS]:
            if not is_sized(opening.size):
                continue
            location = opening.location
            width, height = parse_opening_size(opening.size)
            if width == 0:
                width = {
                    OpeningLocation.FRONT_SIDEWALL: dims.length,
                    OpeningLocation.BACK_SIDEWALL: dims.length,
                    OpeningLocation.LEFT_ENDWALL: dims.width,
                    OpeningLocation.RIGHT_ENDWALL: dims.width,
                }.get(location, 0.0)
            if height == 0:
                height = {
                    OpeningLocation.FRONT_SIDEWALL: dims.front_eave_height,
                    OpeningLocation.BACK_SIDEWALL: dims.back_eave_height,
                    OpeningLocation.LEFT_ENDWALL: dims.peak_height,
                    OpeningLocation.RIGHT_ENDWALL: dims.peak_height,
                }.get(location, 0.0)

            if location in areas:
                areas[OpeningLocation(location)] += width * height
            total_width += width
            details.append(
                OpeningDetail(
                    location=location,
                    width=width,
                    height=height,
                    purlin_support=opening.purlin_support,
                    bracing=opening.bracing,
                )
            )

        return cls(
            front_sidewall=min(
                areas[OpeningLocation.FRONT_SIDEWALL], dims.length * dims.front_eave_height
            ),
            back_sidewall=min(
                areas[OpeningLocation.BACK_SIDEWALL], dims.length * dims.back_eave_height
            ),
            left_endwall=min(areas[OpeningLocation.LEFT_ENDWALL], dims.endwall_area),
            right_endwall=min(areas[OpeningLocation.RIGHT_ENDWALL], dims.endwall_area),
            total_width=min(total_width, 2 * (dims.length + dims.width)),
            details=tuple(details),
        )
