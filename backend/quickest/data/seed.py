"""Seed reference catalogs for the QuickEst estimation engine.

Rates are AED book prices per unit and weights are kg per unit, taken from
the standard QuickEst product database for typical UAE supply. Manufacturing
and overhead costs follow the usual split of a product's book price once the
raw material is paid for.

Units decide how a BOM row is totalled:

- ``M``   weight and price are per metre of the row's size, per piece
- ``M2``  quantity is the area
- ``KG``  quantity is the weight
- anything else: per piece (``EA``), or per unit of a service quantity
"""

from __future__ import annotations

from quickest.data.records import ReferenceRecord
from quickest.models.enums import Catalog, CostCategory

_A = CostCategory.MAIN_FRAMES
_B = CostCategory.PAINTING
_C = CostCategory.SECONDARY
_D = CostCategory.STEEL_BUYOUTS
_F = CostCategory.SINGLE_SKIN
_G = CostCategory.SANDWICH
_H = CostCategory.TRIMS
_I = CostCategory.PANEL_BUYOUTS
_J = CostCategory.PANEL_ACCESSORIES
_M = CostCategory.CONTAINER

# Ledger cost codes for service rows booked outside the product cost split.
_COST_CODES: dict[str, str] = {
    "Blast": "10611",
    "PaintPO": "10711",
    "PaintPF": "10711",
    "PaintPIF": "10711",
    "PaintEP": "10711",
}

# Painted surface in m2 per unit: per kg for built-up steel, per metre for sections.
_SURFACE_AREAS: dict[str, float] = {
    "BU": 0.035,
    "ConPlates": 0.03,
    "BUB": 0.035,
    "BUC": 0.035,
    "BUCRB1": 1.2,
    "BUCRB2": 1.4,
    "BUCRB3": 1.6,
    "BUCRB4": 1.8,
    "CRC2": 1.0,
    "CRC3": 1.2,
    "CRC4": 1.4,
    "IPEa": 0.6,
    "T150": 0.8,
    "T200": 1.0,
    "UB2": 0.9,
    "UB3": 1.05,
    "UB4": 1.2,
}


def _record(
    code: str,
    description: str,
    unit: str,
    weight: float,
    material: float,
    price: float,
    category: CostCategory,
    catalog: Catalog = Catalog.MBSDB,
    grade: str | None = None,
) -> ReferenceRecord:
    value_added = max(price - material, 0.0)
    return ReferenceRecord(
        code=code,
        description=description,
        unit=unit,
        weight_per_unit=weight,
        material_cost=material,
        manufacturing_cost=round(value_added * 0.55, 4),
        overhead_cost=round(value_added * 0.25, 4),
        price=price,
        category=category,
        catalog=catalog,
        grade=grade,
        cost_code=_COST_CODES.get(code, ""),
        surface_area=_SURFACE_AREAS.get(code, 0.0),
    )


# (code, description, unit, kg/unit, material AED/unit, price AED/unit, category)
_PRODUCTS: list[tuple[str, str, str, float, float, float, CostCategory]] = [
    # --- Main frames ---
    ("BU", "Built-up rafters & columns", "KG", 1.0, 3.10, 5.60, _A),
    ("BuLeng", "Built-up member length (welding)", "SVC", 0.0, 0.0, 0.0, _A),
    ("DSW", "Double side welding", "SVC", 0.0, 0.05, 0.35, _B),
    # --- Blasting & painting, priced per m2 of painted surface ---
    ("Blast", "Blasting", "M2", 0.0, 0.05, 0.20, _B),
    ("PaintPO", "Paint system primer only", "M2", 0.0, 0.45, 1.00, _B),
    ("PaintPF", "Paint system primer + finish", "M2", 0.0, 1.60, 3.54, _B),
    ("PaintPIF", "Paint system primer + intermediate + finish", "M2", 0.0, 2.30, 5.00, _B),
    ("PaintEP", "Epoxy paint system", "M2", 0.0, 3.70, 8.00, _B),
    ("ConPlates", "Connection plates", "KG", 1.0, 3.20, 5.20, _A),
    ("PC1", "Pinned base plate assembly", "EA", 12.0, 38.0, 70.0, _A),
    ("FC2", "Fixed base connection type 2", "EA", 25.0, 80.0, 145.0, _A),
    ("FC3", "Fixed base connection type 3", "EA", 35.0, 112.0, 200.0, _A),
    ("FC4", "Fixed base connection type 4", "EA", 45.0, 144.0, 255.0, _A),
    ("FC5", "Fixed base connection type 5", "EA", 60.0, 192.0, 340.0, _A),
    ("BUB", "Built-up beam (size in kg per piece)", "M", 1.0, 3.10, 5.80, _A),
    ("BUC", "Built-up column (size in kg per piece)", "M", 1.0, 3.10, 5.80, _A),
    ("MFC1", "Mezzanine/frame connection small", "EA", 6.0, 19.0, 36.0, _A),
    ("MFC3", "Mezzanine/frame connection large", "EA", 12.0, 38.0, 70.0, _A),
    ("BUCRB1", "Crane runway beam type 1", "M", 40.0, 124.0, 230.0, _A),
    ("BUCRB2", "Crane runway beam type 2", "M", 55.0, 170.0, 315.0, _A),
    ("BUCRB3", "Crane runway beam type 3", "M", 75.0, 232.0, 430.0, _A),
    ("BUCRB4", "Crane runway beam type 4", "M", 95.0, 295.0, 545.0, _A),
    ("CRC2", "Crane corbel type 2", "M", 30.0, 93.0, 172.0, _A),
    ("CRC3", "Crane corbel type 3", "M", 45.0, 140.0, 258.0, _A),
    ("CRC4", "Crane corbel type 4", "M", 60.0, 186.0, 344.0, _A),
    ("BUCRBr3", "Crane beam bracket type 3", "EA", 15.0, 47.0, 86.0, _A),
    ("BUCRBr5", "Crane beam bracket type 5", "EA", 25.0, 78.0, 144.0, _A),
    ("BUCRBr6", "Crane beam bracket type 6", "EA", 35.0, 109.0, 201.0, _A),
    ("CRA", "Crane bracing angle", "EA", 12.0, 36.0, 66.0, _A),
    ("CRS", "Crane stopper", "EA", 20.0, 62.0, 115.0, _A),
    # --- Secondary members ---
    ("Z15P", "Purlin Z150 galvanized", "M", 3.20, 11.5, 19.0, _C),
    ("Z20P", "Purlin Z200 galvanized", "M", 4.10, 14.8, 24.5, _C),
    ("Z25P", "Purlin Z250 galvanized", "M", 5.00, 18.0, 29.8, _C),
    ("Z30P", "Purlin Z300 galvanized", "M", 6.20, 22.3, 37.0, _C),
    ("Z35P", "Purlin Z350 galvanized", "M", 7.50, 27.0, 44.8, _C),
    ("25Z25G", "Purlin Z250 2.5mm end bay", "M", 6.30, 22.7, 37.6, _C),
    ("250Z20G", "Purlin Z250 2.0mm interior bay", "M", 5.10, 18.4, 30.4, _C),
    ("M20G", "Purlin M360 2.0mm end bay", "M", 8.90, 32.0, 53.0, _C),
    ("M18G", "Purlin M360 1.8mm interior bay", "M", 8.00, 28.8, 47.7, _C),
    ("Z15G", "Girt Z150 galvanized", "M", 3.20, 11.5, 19.0, _C),
    ("Z20G", "Girt Z200 galvanized", "M", 4.10, 14.8, 24.5, _C),
    ("Z25G", "Girt Z250 galvanized", "M", 5.00, 18.0, 29.8, _C),
    ("Z30G", "Girt Z300 galvanized", "M", 6.20, 22.3, 37.0, _C),
    ("Z35G", "Girt Z350 galvanized", "M", 7.50, 27.0, 44.8, _C),
    ("Z15J", "Mezzanine joist Z150", "M", 3.60, 13.0, 21.5, _C),
    ("Z20J", "Mezzanine joist Z200", "M", 4.60, 16.6, 27.5, _C),
    ("Z25J", "Mezzanine joist Z250", "M", 5.60, 20.2, 33.4, _C),
    ("C15G", "Cold formed C150 post", "M", 3.40, 12.2, 20.2, _C),
    ("C20G", "Cold formed C200 post", "M", 4.30, 15.5, 25.6, _C),
    ("CFClip", "Purlin/girt clip", "EA", 0.60, 2.2, 4.5, _C),
    ("CFClip1", "Purlin/girt clip 250", "EA", 0.80, 2.9, 5.8, _C),
    ("CFClip2", "Purlin/girt clip 360", "EA", 1.10, 4.0, 7.9, _C),
    ("JCL", "Joist clip", "EA", 0.80, 2.9, 5.8, _C),
    ("Bang", "Base angle", "M", 1.40, 5.0, 8.4, _C),
    ("Gang", "Gable angle", "M", 1.40, 5.0, 8.4, _C),
    ("MEA", "Mezzanine edge angle", "M", 3.00, 10.8, 18.0, _C),
    ("BA", "Bracing angle", "M", 3.00, 10.8, 18.0, _C),
    ("FB", "Flange brace", "EA", 2.50, 9.0, 16.0, _C),
    ("LA", "Bent angle", "M", 1.20, 4.3, 7.6, _C),
    ("RMClip1", "Roof monitor clip (curved)", "EA", 0.90, 3.2, 6.4, _C),
    ("RMClip2", "Roof monitor clip (straight)", "EA", 0.70, 2.5, 5.0, _C),
    ("FBA", "Braced bay angle", "M", 2.20, 7.9, 13.5, _C),
    # --- Steel standard buyouts ---
    ("AB16", "Anchor bolt M16 x 400", "EA", 0.80, 4.0, 7.5, _D),
    ("AB20", "Anchor bolt M20 x 500", "EA", 1.30, 6.2, 11.0, _D),
    ("AB24", "Anchor bolt M24 x 600", "EA", 2.00, 9.0, 16.0, _D),
    ("AB30", "Anchor bolt M30 x 750", "EA", 3.50, 15.0, 27.0, _D),
    ("AB36", "Anchor bolt M36 x 900", "EA", 5.50, 23.0, 41.0, _D),
    ("HRB30", "High strength bolt M20 peak connection", "EA", 0.35, 2.1, 3.8, _D),
    ("HSB12", "Bolt M12 x 35 galvanized", "EA", 0.03, 0.35, 0.65, _D),
    ("HSB16", "Bolt M16 x 45 galvanized", "EA", 0.07, 0.70, 1.25, _D),
    ("HSB2060", "High strength bolt M20 x 60", "EA", 0.25, 1.90, 3.40, _D),
    ("SR12", "Sag rod 12mm", "EA", 1.20, 4.6, 8.2, _D),
    ("CBC", "Cable bracing 12mm", "M", 0.50, 3.5, 6.2, _D),
    ("TBCon", "Cable bracing connector", "EA", 0.30, 5.0, 9.0, _D),
    ("BR12", "Rod bracing 12mm", "M", 0.89, 3.6, 6.4, _D),
    ("Deck75", "Mezzanine deck 0.75mm", "M2", 9.0, 32.0, 52.0, _D),
    ("Deck100", "Mezzanine deck 1.00mm", "M2", 11.0, 39.0, 63.0, _D),
    ("Deck125", "Mezzanine deck 1.25mm", "M2", 13.0, 46.0, 75.0, _D),
    ("ChqPl", "Chequered plate 6mm", "M2", 50.0, 160.0, 255.0, _D),
    ("MDF", "Mezzanine deck fastener", "EA", 0.01, 0.20, 0.40, _D),
    ("DSP", "Mezzanine staircase with handrail", "EA", 450.0, 1900.0, 3400.0, _D),
    # --- Single skin panels ---
    ("S5OW", "0.5mm steel single skin panel off-white", "M2", 4.90, 17.5, 28.0, _F),
    ("S7OW", "0.7mm steel single skin panel off-white", "M2", 6.60, 23.0, 36.5, _F),
    ("A7OW", "0.7mm aluminium single skin panel off-white", "M2", 2.40, 31.0, 48.0, _F),
    ("S4OW", "0.4mm steel liner panel off-white", "M2", 3.90, 14.5, 23.5, _F),
    # --- Sandwich panels ---
    ("PU50", "Polyurethane core 50mm", "M2", 2.00, 24.0, 38.0, _G),
    ("PU75", "Polyurethane core 75mm", "M2", 3.00, 32.0, 50.0, _G),
    ("PUS50", "PU sandwich panel steel 50mm", "M2", 11.50, 58.0, 92.0, _G),
    ("PUA50", "PU sandwich panel aluminium 50mm", "M2", 6.80, 74.0, 115.0, _G),
    # --- Trims ---
    ("RC", "Ridge cap", "M", 1.80, 6.5, 12.0, _H),
    ("TTE", "Eave trim", "M", 1.50, 5.4, 10.0, _H),
    ("TTG", "Gable trim", "M", 1.50, 5.4, 10.0, _H),
    ("TTC", "Corner trim", "M", 1.50, 5.4, 10.0, _H),
    ("TTB", "Base trim", "M", 1.20, 4.3, 8.0, _H),
    ("TTE1", "Eave trim 0.7 AZ", "M", 2.10, 7.6, 13.5, _H),
    ("TTG1", "Gable trim 0.7 AZ", "M", 2.10, 7.6, 13.5, _H),
    ("TTC1", "Corner trim 0.7 AZ", "M", 2.10, 7.6, 13.5, _H),
    ("TTB1", "Base trim 0.7 AZ", "M", 1.70, 6.1, 10.8, _H),
    ("TTEA", "Eave trim aluminium", "M", 0.60, 9.8, 16.5, _H),
    ("TTGA", "Gable trim aluminium", "M", 0.60, 9.8, 16.5, _H),
    ("TTCA", "Corner trim aluminium", "M", 0.60, 9.8, 16.5, _H),
    ("TTBA", "Base trim aluminium", "M", 0.50, 7.9, 13.2, _H),
    ("TTS1", "Partition trim", "M", 1.20, 4.3, 8.0, _H),
    ("GUT", "Eave gutter", "M", 4.00, 14.4, 26.0, _H),
    ("DWSP", "Downspout 6m with fittings", "EA", 8.00, 29.0, 52.0, _H),
    ("GUTA", "Eave gutter aluminium", "M", 1.60, 26.0, 43.0, _H),
    ("DWSPA", "Downspout 6m aluminium with fittings", "EA", 3.20, 52.0, 86.0, _H),
    ("ETS1", "Canopy eave trim", "M", 1.50, 5.4, 10.0, _H),
    ("EGS1", "Canopy eave gutter", "M", 4.00, 14.4, 26.0, _H),
    ("DSS1", "Canopy downspout", "M", 1.30, 4.7, 8.6, _H),
    ("STS1", "Soffit sill trim", "M", 1.20, 4.3, 8.0, _H),
    ("DTS1", "Drip trim", "M", 1.10, 4.0, 7.4, _H),
    ("GTS1", "Monitor gable trim", "M", 1.50, 5.4, 10.0, _H),
    ("CTS1", "Monitor curve trim", "M", 1.80, 6.5, 12.0, _H),
    ("ClT", "Closure trim", "M", 1.00, 3.6, 6.6, _H),
    ("PeakBox", "Monitor peak box", "EA", 6.00, 22.0, 40.0, _H),
    # --- Panels standard buyouts ---
    ("CS2", "Carbon steel self drilling screw", "EA", 0.006, 0.12, 0.22, _I),
    ("SS2", "Stainless steel self drilling screw", "EA", 0.006, 0.35, 0.62, _I),
    ("CS1", "Carbon steel stitch screw", "EA", 0.004, 0.08, 0.15, _I),
    ("SS1", "Stainless steel stitch screw", "EA", 0.004, 0.25, 0.45, _I),
    ("CS4", "Carbon steel long screw (sandwich)", "EA", 0.012, 0.30, 0.55, _I),
    ("SS4", "Stainless steel long screw (sandwich)", "EA", 0.012, 0.80, 1.40, _I),
    ("PRVS", "Pop rivet", "EA", 0.002, 0.06, 0.12, _I),
    ("BM", "Bead mastic", "M", 0.05, 0.60, 1.10, _I),
    ("BM2", "Bead mastic double", "M", 0.08, 0.95, 1.70, _I),
    ("BT", "Butyl tape", "M", 0.04, 0.70, 1.25, _I),
    ("FCM45", "Foam closure M45", "M", 0.05, 1.20, 2.20, _I),
    ("FLM", "Flowable mastic tube", "EA", 0.35, 9.0, 16.0, _I),
    # --- Panels accessories & special buyouts ---
    ("SKY1S", "Skylight 3250mm GRP single skin", "EA", 8.0, 120.0, 210.0, _J),
    ("SKY2S35", "Skylight 3250mm GRP double skin 35mm", "EA", 14.0, 260.0, 450.0, _J),
    ("SKY2S50", "Skylight 3250mm GRP double skin 50mm", "EA", 15.0, 290.0, 500.0, _J),
    ("SKY2S75", "Skylight 3250mm GRP double skin 75mm", "EA", 16.0, 330.0, 570.0, _J),
    ("SKY2S100", "Skylight 3250mm GRP double skin 100mm", "EA", 17.0, 370.0, 640.0, _J),
    ("PD09", "Personnel door 900x2100", "EA", 55.0, 650.0, 1100.0, _J),
    ("PD12", "Personnel door 1200x2100", "EA", 70.0, 800.0, 1350.0, _J),
    ("PD18", "Personnel door double 1800x2100", "EA", 95.0, 1150.0, 1950.0, _J),
    ("SD3T", "Sliding door 3x3m top sliding", "EA", 180.0, 1800.0, 3100.0, _J),
    ("SD4T", "Sliding door 4x4m top sliding", "EA", 260.0, 2500.0, 4300.0, _J),
    ("SD5T", "Sliding door 5x5m top sliding", "EA", 360.0, 3400.0, 5800.0, _J),
    ("SD6T", "Sliding door 6x6m top sliding", "EA", 480.0, 4500.0, 7700.0, _J),
    ("SD3D", "Sliding door 3x3m dual sliding", "EA", 200.0, 2000.0, 3400.0, _J),
    ("SD4D", "Sliding door 4x4m dual sliding", "EA", 285.0, 2750.0, 4700.0, _J),
    ("SD5D", "Sliding door 5x5m dual sliding", "EA", 390.0, 3700.0, 6300.0, _J),
    ("SD6D", "Sliding door 6x6m dual sliding", "EA", 520.0, 4900.0, 8400.0, _J),
    ("LV66", "Louver 600x600", "EA", 9.0, 140.0, 240.0, _J),
    ("LV99", "Louver 900x900", "EA", 16.0, 210.0, 360.0, _J),
    ("LV129", "Louver 1200x900", "EA", 20.0, 260.0, 450.0, _J),
    ("RV", "Ridge ventilator", "EA", 25.0, 420.0, 720.0, _J),
    ("TV", "Turbo ventilator", "EA", 12.0, 260.0, 450.0, _J),
    ("WRM", "GI wire mesh", "M2", 0.70, 6.0, 10.5, _J),
    ("FG50", "Fiberglass insulation 50mm", "M2", 0.80, 9.5, 16.0, _J),
    # --- Handling & packing ---
    ("PPLBu", "Packing for built-up members", "SVC", 0.0, 0.0, 0.08, _M),
    ("PPLCF", "Packing for cold formed members", "SVC", 0.0, 0.0, 0.10, _M),
    ("PPLSS", "Packing for sheeting", "SVC", 0.0, 0.0, 0.45, _M),
]

# Hot-rolled sections (structural steel ledger)
_STRUCTURAL_STEEL: list[tuple[str, str, str, float, float, float, CostCategory]] = [
    ("IPEa", "IPE A hot rolled section", "M", 15.8, 52.0, 86.0, _A),
    ("T150", "Hot rolled column section 150", "M", 18.0, 59.0, 98.0, _A),
    ("T200", "Hot rolled column section 200", "M", 25.0, 82.0, 136.0, _A),
    ("UB2", "Universal beam 203x133", "M", 25.1, 83.0, 137.0, _A),
    ("UB3", "Universal beam 254x146", "M", 31.1, 103.0, 170.0, _A),
    ("UB4", "Universal beam 305x165", "M", 40.3, 133.0, 220.0, _A),
]

_RAW_MATERIALS: list[tuple[str, str, str, float, float, float, CostCategory]] = [
    ("HRP6", "Hot rolled plate 6mm S355", "KG", 1.0, 2.90, 2.90, _A),
    ("HRP10", "Hot rolled plate 10mm S355", "KG", 1.0, 2.85, 2.85, _A),
    ("GIC15", "Galvanized coil 1.5mm", "KG", 1.0, 3.40, 3.40, _C),
    ("PPGI5", "Pre-painted coil 0.5mm", "KG", 1.0, 3.90, 3.90, _F),
]

SEED_RECORDS: list[ReferenceRecord] = [
    *(_record(*row) for row in _PRODUCTS),
    *(_record(*row, catalog=Catalog.SSDB, grade="S275") for row in _STRUCTURAL_STEEL),
    *(_record(*row, catalog=Catalog.RAWMAT) for row in _RAW_MATERIALS),
]
