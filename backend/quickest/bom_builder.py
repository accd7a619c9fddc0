"""Incremental construction of a bill of materials."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from quickest.models.bom import BillOfMaterials, DataRow, HeaderRow, SeparatorRow

if TYPE_CHECKING:
    from collections.abc import Iterator

    from quickest.data.store import ReferenceStore


class BomBuilder:
    """Appends rows in order and prices each data row from the store.

    Every code goes through :meth:`ReferenceStore.require`, so one unknown
    code aborts the whole BOM with ``MissingReferenceError``.

    Example::

        builder = BomBuilder(store, sales_code=1)
        with builder.section("Roof Purlins"):
            builder.add("Z20P", size=6.0, quantity=34)
        bom = builder.build()
    """

    def __init__(self, store: ReferenceStore, sales_code: int | str = 1) -> None:
        self._store = store
        self._sales_code = sales_code
        self._rows: list[DataRow | HeaderRow | SeparatorRow] = []
        self._line = 0

    @property
    def store(self) -> ReferenceStore:
        return self._store

    @property
    def sales_code(self) -> int | str:
        return self._sales_code

    def header(self, title: str) -> None:
        self._rows.append(HeaderRow(description=title, sales_code=self._sales_code))

    def separator(self) -> None:
        self._rows.append(SeparatorRow(sales_code=self._sales_code))

    @contextmanager
    def section(self, title: str) -> Iterator[BomBuilder]:
        """Emit a header, the rows added inside the block, then a separator."""
        self.header(title)
        yield self
        self.separator()

    def add(
        self,
        code: str,
        size: float = 1.0,
        quantity: float = 0.0,
        *,
        header: str = "",
        sales_code: int | str | None = None,
        description: str = "",
    ) -> DataRow:
        """Add one priced row.

        ``header`` starts a labelled sub-group just before the row, the way
        the QuickEst detail sheet titles "Back Wall Girts" and similar;
        ``description`` replaces the catalog description on the row.
        """
        record = self._store.require(code)
        if header:
            self.header(header)
        self._line += 1
        row = DataRow.from_record(
            record,
            size=size,
            quantity=quantity,
            sales_code=self._sales_code if sales_code is None else sales_code,
            description=description,
        ).model_copy(update={"line_number": self._line})
        self._rows.append(row)
        return row

    @property
    def data_rows(self) -> list[DataRow]:
        return [row for row in self._rows if isinstance(row, DataRow)]

    @property
    def running_weight(self) -> float:
        return sum(row.total_weight for row in self.data_rows)

    def build(self) -> BillOfMaterials:
        return BillOfMaterials(rows=tuple(self._rows))
