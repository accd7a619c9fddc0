"""Reference data layer for the QuickEst estimation engine."""

from quickest.data.bands import BANDS
from quickest.data.loader import catalog_loaders, load_catalog_csv
from quickest.data.records import BandEntry, ReferenceRecord, SelectionBand
from quickest.data.seed import SEED_RECORDS
from quickest.data.store import CodeMatch, ReferenceStore

__all__ = [
    "BANDS",
    "SEED_RECORDS",
    "BandEntry",
    "CodeMatch",
    "ReferenceRecord",
    "ReferenceStore",
    "SelectionBand",
    "catalog_loaders",
    "load_catalog_csv",
]
