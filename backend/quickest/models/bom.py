"""Bill of materials models shared by the engine and every sub-system calculator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from quickest.models.enums import Catalog, CostCategory

if TYPE_CHECKING:
    from quickest.data.records import ReferenceRecord


def _per_unit_basis(unit: str, size: float, quantity: float) -> float:
    """How many catalog units a row consumes.

    ``M`` rows are priced per metre of ``size`` for every piece; ``KG`` and
    area rows carry the weight or area directly in ``quantity``.
    """
    if unit.upper() == "M":
        return size * quantity
    return quantity


class DataRow(BaseModel):
    """A BOM line that carries quantity, weight and price."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["data"] = "data"
    line_number: int = 0
    code: str
    description: str = ""
    sales_code: int | str = 1
    cost_code: str = ""
    size: float = 1.0
    unit: str = "EA"
    quantity: float = 0.0
    unit_weight: float = 0.0
    unit_price: float = 0.0
    unit_material_cost: float = 0.0
    unit_manufacturing_cost: float = 0.0
    unit_overhead_cost: float = 0.0
    unit_surface_area: float = 0.0
    total_weight: float = 0.0
    total_price: float = 0.0
    total_material_cost: float = 0.0
    category: CostCategory = CostCategory.SECONDARY
    catalog: Catalog = Catalog.MBSDB

    # Set during aggregation; 1.0 means the book price.
    markup_factor: float = 1.0

    @classmethod
    def from_record(
        cls,
        record: ReferenceRecord,
        *,
        size: float,
        quantity: float,
        sales_code: int | str = 1,
        description: str = "",
    ) -> DataRow:
        """Price ``quantity`` pieces of ``size`` against a catalog record.

        A ``KG`` record always weighs 1 kg per unit of quantity, whatever
        the catalog says per piece.
        """
        unit = record.unit.upper()
        basis = _per_unit_basis(unit, size, quantity)
        weight = quantity if unit == "KG" else record.weight_per_unit * basis
        return cls(
            code=record.code,
            description=description or record.description,
            sales_code=sales_code,
            cost_code=record.cost_code,
            size=size,
            unit=record.unit,
            quantity=quantity,
            unit_weight=record.weight_per_unit,
            unit_price=record.price,
            unit_material_cost=record.material_cost,
            unit_manufacturing_cost=record.manufacturing_cost,
            unit_overhead_cost=record.overhead_cost,
            unit_surface_area=record.surface_area,
            total_weight=weight,
            total_price=record.price * basis,
            total_material_cost=record.material_cost * basis,
            category=record.category,
            catalog=record.catalog,
        )

    @property
    def cost_basis(self) -> float:
        return _per_unit_basis(self.unit, self.size, self.quantity)

    @property
    def total_surface_area(self) -> float:
        """Paintable area of the whole row in m2."""
        return self.unit_surface_area * self.cost_basis

    @property
    def total_manufacturing_cost(self) -> float:
        return self.unit_manufacturing_cost * self.cost_basis

    @property
    def total_overhead_cost(self) -> float:
        return self.unit_overhead_cost * self.cost_basis

    @property
    def total_cost(self) -> float:
        return (
            self.total_material_cost + self.total_manufacturing_cost + self.total_overhead_cost
        )

    @property
    def selling_price(self) -> float:
        """Total price after any markup applied during aggregation."""
        return self.total_price * self.markup_factor

    def with_markup(self, factor: float) -> DataRow:
        return self.model_copy(update={"markup_factor": factor})


class HeaderRow(BaseModel):
    """Section title; carries no quantities."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["header"] = "header"
    line_number: int = 0
    description: str
    sales_code: int | str = 1


class SeparatorRow(BaseModel):
    """Closes a section in report layouts."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["separator"] = "separator"
    line_number: int = 0
    sales_code: int | str = 1


BomRow = Annotated[DataRow | HeaderRow | SeparatorRow, Field(discriminator="kind")]


class BillOfMaterials(BaseModel):
    """An ordered list of BOM rows.

    Totals only ever count :class:`DataRow` entries; headers and
    separators exist for report sectioning.
    """

    model_config = ConfigDict(frozen=True)

    rows: tuple[BomRow, ...] = ()

    @property
    def data_rows(self) -> list[DataRow]:
        return [row for row in self.rows if isinstance(row, DataRow)]

    @property
    def item_count(self) -> int:
        return len(self.data_rows)

    @property
    def total_weight(self) -> float:
        return sum(row.total_weight for row in self.data_rows)

    @property
    def total_price(self) -> float:
        return sum(row.total_price for row in self.data_rows)

    @property
    def total_selling_price(self) -> float:
        return sum(row.selling_price for row in self.data_rows)

    @property
    def total_material_cost(self) -> float:
        return sum(row.total_material_cost for row in self.data_rows)

    def weight_by_category(self) -> dict[CostCategory, float]:
        totals: dict[CostCategory, float] = {}
        for row in self.data_rows:
            totals[row.category] = totals.get(row.category, 0.0) + row.total_weight
        return totals

    def weight_by_sales_code(self) -> dict[int | str, float]:
        totals: dict[int | str, float] = {}
        for row in self.data_rows:
            totals[row.sales_code] = totals.get(row.sales_code, 0.0) + row.total_weight
        return totals

    def codes(self) -> list[str]:
        """Codes of the data rows, in order."""
        return [row.code for row in self.data_rows]

    def find(self, code: str) -> list[DataRow]:
        wanted = code.upper()
        return [row for row in self.data_rows if row.code.upper() == wanted]

    def renumbered(self) -> BillOfMaterials:
        """Copy with data rows numbered 1..n in order."""
        rows: list[DataRow | HeaderRow | SeparatorRow] = []
        number = 0
        for row in self.rows:
            if isinstance(row, DataRow):
                number += 1
                rows.append(row.model_copy(update={"line_number": number}))
            else:
                rows.append(row)
        return BillOfMaterials(rows=tuple(rows))

    @classmethod
    def concat(cls, boms: list[BillOfMaterials]) -> BillOfMaterials:
        """Join BOMs end to end, keeping each one's rows and headers intact."""
        rows: list[DataRow | HeaderRow | SeparatorRow] = []
        for bom in boms:
            rows.extend(bom.rows)
        return cls(rows=tuple(rows))
