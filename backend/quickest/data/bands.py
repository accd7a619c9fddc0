"""Design-index selection bands for automatically sized members.

Thresholds follow the QuickEst member selection tables. The final
entry of each band is the built-up fallback used once cold-formed or
hot-rolled sections run out of capacity.
"""

from __future__ import annotations

from quickest.data.records import BandEntry, SelectionBand


def _band(name: str, rows: list[tuple[float, str]]) -> SelectionBand:
    return SelectionBand(
        name=name,
        entries=tuple(BandEntry(max_index=i, code=c) for i, c in rows),
    )


PURLIN_BAND = _band(
    "purlin",
    [
        (50, "Z15P"),
        (80, "Z20P"),
        (140, "Z25P"),
        (250, "Z30P"),
        (400, "Z35P"),
        (999_999, "BUB"),
    ],
)

GIRT_BAND = _band(
    "girt",
    [
        (50, "Z15G"),
        (80, "Z20G"),
        (140, "Z25G"),
        (250, "Z30G"),
        (400, "Z35G"),
        (999_999, "BUB"),
    ],
)

ENDWALL_COLUMN_BAND = _band(
    "endwall_column",
    [
        (3, "IPEA"),
        (8, "T150"),
        (15, "T200"),
        (999_999, "BUC"),
    ],
)

# Galvanized and alu-zinc cold-formed finishes keep endwall columns cold-formed
# until the built-up fallback.
ENDWALL_COLUMN_GALVANIZED_BAND = _band(
    "endwall_column_galvanized",
    [
        (1, "Z20G"),
        (3, "Z25G"),
        (8, "Z30G"),
        (15, "Z35G"),
        (999_999, "BUC"),
    ],
)

JOIST_BAND = _band(
    "joist",
    [
        (50, "Z15J"),
        (80, "Z20J"),
        (140, "Z25J"),
        (250, "BUB"),
        (999_999, "BUB"),
    ],
)

BANDS: dict[str, SelectionBand] = {
    band.name: band
    for band in (
        PURLIN_BAND,
        GIRT_BAND,
        ENDWALL_COLUMN_BAND,
        ENDWALL_COLUMN_GALVANIZED_BAND,
        JOIST_BAND,
    )
}
