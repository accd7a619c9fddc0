"""Enums for the QuickEst domain models.

Values are the labels used on the QuickEst input sheet so that payloads
coming from the web form map onto them without translation.
"""

from enum import StrEnum


class BaseType(StrEnum):
    """Main frame column base condition."""

    PINNED = "Pinned Base"
    FIXED = "Fixed Base"


class BracingType(StrEnum):
    """Roof and wall X-bracing system."""

    CABLES = "Cables"
    RODS = "Rods"
    ANGLES = "Angles"


class EndwallType(StrEnum):
    """Framing used at the building endwalls."""

    BEARING_FRAME = "Bearing Frame"
    MAIN_FRAME = "Main Frame"
    FALSE_RAFTER = "False Rafter"
    MF_HALF_LOADED = "MF 1/2 Loaded"


class OpeningLocation(StrEnum):
    """Wall on which a framed opening sits."""

    FRONT_SIDEWALL = "Front Sidewall"
    BACK_SIDEWALL = "Back Sidewall"
    LEFT_ENDWALL = "Left Endwall"
    RIGHT_ENDWALL = "Right Endwall"


class CraneDuty(StrEnum):
    """EOT crane duty class."""

    LIGHT = "L"
    MEDIUM = "M"
    HEAVY = "H"


class CanopyType(StrEnum):
    CANOPY = "Canopy"
    ROOF_EXTENSION = "Roof Extension"
    FASCIA = "Fascia"


class MonitorType(StrEnum):
    """Roof monitor eave shape and framing material."""

    CURVE_CF = "Curve-CF"
    STRAIGHT_CF = "Straight-CF"
    CURVE_HR = "Curve-HR"
    STRAIGHT_HR = "Straight-HR"


class LinerType(StrEnum):
    ROOF = "Roof Liner"
    WALL = "Wall Liner"
    BOTH = "Both"


class PartitionDirection(StrEnum):
    """Which way a partition runs through the building."""

    ACROSS = "Across"
    ALONG = "Along"


class SubsystemKind(StrEnum):
    """Optional building sub-systems with their own calculators."""

    MEZZANINE = "mezzanine"
    CRANE = "crane"
    ACCESSORY = "accessory"
    PARTITION = "partition"
    CANOPY = "canopy"
    MONITOR = "monitor"
    LINER = "liner"


class Catalog(StrEnum):
    """Reference catalogs held by the reference store."""

    MBSDB = "MBSDB"
    SSDB = "SSDB"
    RAWMAT = "RAWMAT"


class CostCategory(StrEnum):
    """FCPBS cost categories a reference record is booked under."""

    MAIN_FRAMES = "A"
    PAINTING = "B"
    SECONDARY = "C"
    STEEL_BUYOUTS = "D"
    SINGLE_SKIN = "F"
    SANDWICH = "G"
    TRIMS = "H"
    PANEL_BUYOUTS = "I"
    PANEL_ACCESSORIES = "J"
    CONTAINER = "M"
    FREIGHT = "O"
    OTHER = "Q"
    ERECTION = "T"
