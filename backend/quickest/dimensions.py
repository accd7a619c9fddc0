"""Dimension list parsing for span, bay and spacing notation.

Building dimensions are entered in a compact notation where each group is
``count@value`` and groups are comma separated, e.g. ``"2@24,3@18"`` is two
24 m spans followed by three 18 m spans. Users type these lists in many
styles, so the parser first normalises separators:

- group delimiters ``+ ; / \\ ' &`` become ``,``
- count/value delimiters ``x``, ``X`` and ``:`` become ``@``

A group without ``@`` is a single value (count 1).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from quickest.exceptions import FormatError

if TYPE_CHECKING:
    from collections.abc import Iterator

_GROUP_SEPARATORS = ("+", ";", "/", "\\", "'", "&")

# Leading decimal number; anything after it is ignored like a spreadsheet
# VAL() would.
_NUMBER_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


@dataclass(frozen=True)
class DimensionEntry:
    """One ``count@value`` group."""

    count: int
    value: float


@dataclass(frozen=True)
class SlopeEntry:
    """One ``count@value@slope`` group; slope is 0 when omitted."""

    count: int
    value: float
    slope: float = 0.0


@dataclass(frozen=True)
class DimensionList:
    """An immutable, ordered list of ``count@value`` groups."""

    entries: tuple[DimensionEntry, ...] = ()

    def __iter__(self) -> Iterator[DimensionEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __getitem__(self, index: int) -> DimensionEntry:
        return self.entries[index]

    @property
    def total_count(self) -> int:
        return sum(e.count for e in self.entries)

    @property
    def total_sum(self) -> float:
        return sum(e.count * e.value for e in self.entries)

    def expand(self) -> list[float]:
        """Materialise one value per unit: ``2@24`` -> ``[24.0, 24.0]``."""
        return [e.value for e in self.entries for _ in range(e.count)]

    def values(self) -> list[float]:
        """Distinct group values in input order (one per group)."""
        return [e.value for e in self.entries]

    def max_value(self) -> float:
        """Largest single value in the list, 0 when empty."""
        return max((e.value for e in self.entries), default=0.0)

    def min_value(self, default: float = 0.0) -> float:
        return min((e.value for e in self.entries), default=default)


@dataclass(frozen=True)
class SlopeList:
    """Slope-aware dimension list (``count@value@slope`` groups)."""

    entries: tuple[SlopeEntry, ...] = ()

    def __iter__(self) -> Iterator[SlopeEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dimension_list(self) -> DimensionList:
        return DimensionList(
            tuple(DimensionEntry(e.count, e.value) for e in self.entries)
        )


def normalize(text: str) -> str:
    """Rewrite every accepted separator into the canonical ``@`` / ``,`` form."""
    for sep in _GROUP_SEPARATORS:
        text = text.replace(sep, ",")
    return text.replace("x", "@").replace("X", "@").replace(":", "@")


def _number(token: str, text: str) -> float:
    match = _NUMBER_RE.match(token)
    if match is None:
        raise FormatError(text, token.strip())
    return float(match.group(1))


def _count(token: str, text: str) -> int:
    value = _number(token, text)
    if not math.isfinite(value):
        return 1
    return int(value)


def _groups(text: str) -> list[list[str]]:
    groups: list[list[str]] = []
    for part in normalize(text).split(","):
        part = part.strip()
        if not part:
            continue
        groups.append(part.split("@"))
    return groups


def parse(text: str | None) -> DimensionList:
    """Parse a dimension list such as ``"2@24,3@18"`` or ``"24+18x3"``.

    Raises:
        FormatError: If a group has no leading number at all.
    """
    if not text:
        return DimensionList()

    entries: list[DimensionEntry] = []
    for segments in _groups(text):
        if len(segments) >= 2:
            count = _count(segments[0], text)
            value = _number(segments[1], text)
        else:
            count = 1
            value = _number(segments[0], text)
        if count < 1:
            continue
        entries.append(DimensionEntry(count=count, value=value))
    return DimensionList(tuple(entries))


def parse_slopes(text: str | None) -> SlopeList:
    """Parse a slope-aware list where each group may carry ``@slope``."""
    if not text:
        return SlopeList()

    entries: list[SlopeEntry] = []
    for segments in _groups(text):
        if len(segments) >= 3:
            entry = SlopeEntry(
                count=_count(segments[0], text),
                value=_number(segments[1], text),
                slope=_number(segments[2], text),
            )
        elif len(segments) == 2:
            entry = SlopeEntry(
                count=_count(segments[0], text),
                value=_number(segments[1], text),
            )
        else:
            entry = SlopeEntry(count=1, value=_number(segments[0], text))
        if entry.count < 1:
            continue
        entries.append(entry)
    return SlopeList(tuple(entries))


def width_of(spans: str) -> float:
    """Building width from a span list."""
    return parse(spans).total_sum


def length_of(bays: str) -> float:
    """Building length from a bay list."""
    return parse(bays).total_sum
