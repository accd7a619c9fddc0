"""Reference data store: code-indexed product, steel and material catalogs."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from quickest.data.bands import BANDS
from quickest.exceptions import MissingReferenceError, ReferenceStoreUnavailable
from quickest.models.enums import Catalog

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from quickest.data.records import ReferenceRecord, SelectionBand

    CatalogLoader = Callable[[], Iterable[ReferenceRecord]]

logger = logging.getLogger(__name__)

# Lookup order for find(); products shadow steel sections with the same code.
_SEARCH_ORDER = (Catalog.MBSDB, Catalog.SSDB, Catalog.RAWMAT)


@dataclass(frozen=True)
class CodeMatch:
    """Result of resolving a free-text description to a product code.

    ``matched`` is False when nothing in the catalog matched and ``code``
    is simply the description passed through unchanged.
    """

    code: str
    matched: bool


def _normalize(code: str) -> str:
    return code.strip().upper()


class ReferenceStore:
    """Read-only, code-indexed access to the reference catalogs.

    Each catalog is supplied as a loader callable. Its index is built on
    first access, at most once until :meth:`invalidate` is called, with a
    per-catalog lock so concurrent first lookups do not build twice.

    Example::

        store = ReferenceStore.from_records(SEED_RECORDS)
        store.weight("Z20P")
        store.select_by_index("purlin", 72.0)   # -> "Z20P"
    """

    def __init__(
        self,
        loaders: Mapping[Catalog, CatalogLoader],
        bands: Mapping[str, SelectionBand] | None = None,
    ) -> None:
        self._loaders = dict(loaders)
        self._bands = dict(bands if bands is not None else BANDS)
        self._indexes: dict[Catalog, dict[str, ReferenceRecord]] = {}
        self._locks = {catalog: threading.Lock() for catalog in Catalog}

    @classmethod
    def from_records(
        cls,
        records: Iterable[ReferenceRecord],
        bands: Mapping[str, SelectionBand] | None = None,
    ) -> ReferenceStore:
        """Build a store over in-memory records, split by their catalog."""
        by_catalog: dict[Catalog, list[ReferenceRecord]] = {c: [] for c in Catalog}
        for record in records:
            by_catalog[record.catalog].append(record)
        loaders = {
            catalog: (lambda rows=rows: rows) for catalog, rows in by_catalog.items()
        }
        return cls(loaders, bands)

    # ------------------------------------------------------------------
    # Index lifecycle
    # ------------------------------------------------------------------

    def _index(self, catalog: Catalog) -> dict[str, ReferenceRecord]:
        index = self._indexes.get(catalog)
        if index is not None:
            return index
        with self._locks[catalog]:
            index = self._indexes.get(catalog)
            if index is None:
                index = self._build(catalog)
                self._indexes[catalog] = index
        return index

    def _build(self, catalog: Catalog) -> dict[str, ReferenceRecord]:
        loader = self._loaders.get(catalog)
        if loader is None:
            return {}
        try:
            records = list(loader())
        except Exception as exc:
            msg = f"Failed to load {catalog} catalog: {exc}"
            raise ReferenceStoreUnavailable(msg) from exc

        index: dict[str, ReferenceRecord] = {}
        for record in records:
            index[record.key] = record
        logger.debug("Built %s index with %d records", catalog, len(index))
        return index

    def invalidate(self, catalog: Catalog | None = None) -> None:
        """Drop one catalog index (or all) so the next lookup rebuilds it.

        Call after reference records are created, updated or deleted.
        """
        targets = [catalog] if catalog is not None else list(Catalog)
        for target in targets:
            with self._locks[target]:
                self._indexes.pop(target, None)

    def is_loaded(self, catalog: Catalog) -> bool:
        return catalog in self._indexes

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find(self, code: str) -> ReferenceRecord | None:
        """Look up a record by code (case-insensitive, trimmed).

        Returns None if no catalog holds the code.
        """
        key = _normalize(code)
        if not key:
            return None
        for catalog in _SEARCH_ORDER:
            record = self._index(catalog).get(key)
            if record is not None:
                return record
        return None

    def find_in(self, catalog: Catalog, code: str) -> ReferenceRecord | None:
        return self._index(catalog).get(_normalize(code))

    def require(self, code: str) -> ReferenceRecord:
        """Look up a record that must exist.

        Raises:
            MissingReferenceError: If the code is in no catalog.
        """
        record = self.find(code)
        if record is None:
            raise MissingReferenceError(code)
        return record

    def weight(self, code: str) -> float:
        record = self.find(code)
        return record.weight_per_unit if record else 0.0

    def price(self, code: str) -> float:
        record = self.find(code)
        return record.price if record else 0.0

    def material_cost(self, code: str) -> float:
        record = self.find(code)
        return record.material_cost if record else 0.0

    def description(self, code: str) -> str:
        record = self.find(code)
        return record.description if record else ""

    def unit(self, code: str) -> str:
        record = self.find(code)
        return record.unit if record else ""

    def code_of(self, description: str) -> CodeMatch:
        """Resolve a product description to its code.

        Lookup order:
        1. Exact description match (case-insensitive)
        2. Description contains the text (case-insensitive)
        3. ``"None"`` maps to ``"None"``
        4. The text itself, flagged as unmatched
        """
        products = self._index(Catalog.MBSDB)
        wanted = description.strip().lower()

        for key, record in products.items():
            if record.description.strip().lower() == wanted:
                return CodeMatch(code=key, matched=True)

        if wanted:
            for key, record in products.items():
                if wanted in record.description.lower():
                    return CodeMatch(code=key, matched=True)

        if wanted == "none":
            return CodeMatch(code="None", matched=True)

        logger.warning("No product matches description '%s'; using it as a code", description)
        return CodeMatch(code=description, matched=False)

    def resolve_code(self, text: str) -> str:
        """Code for a sheeting or product entry that may be a code or a description."""
        record = self.find(text)
        if record is not None:
            return record.code
        return self.code_of(text).code

    def search(self, pattern: str) -> list[ReferenceRecord]:
        """Products whose code or description contains ``pattern``."""
        needle = pattern.lower()
        return [
            record
            for key, record in self._index(Catalog.MBSDB).items()
            if needle in key.lower() or needle in record.description.lower()
        ]

    # ------------------------------------------------------------------
    # Selection bands
    # ------------------------------------------------------------------

    def band(self, name: str) -> SelectionBand:
        try:
            return self._bands[name]
        except KeyError:
            msg = f"No selection band named '{name}'"
            raise ValueError(msg) from None

    def select_by_index(self, band: str | SelectionBand, design_index: float) -> str:
        """Pick the component code for a design index from a selection band."""
        selection = self.band(band) if isinstance(band, str) else band
        code = selection.select(design_index)
        logger.debug("%s index %.2f -> %s", selection.name, design_index, code)
        return code

    def purlin_code(self, design_index: float) -> str:
        return self.select_by_index("purlin", design_index)

    def girt_code(self, design_index: float) -> str:
        return self.select_by_index("girt", design_index)

    def endwall_column_code(self, design_index: float, *, galvanized: bool = False) -> str:
        """Endwall column for a design index; galvanized finishes stay cold-formed."""
        band = "endwall_column_galvanized" if galvanized else "endwall_column"
        return self.select_by_index(band, design_index)

    def joist_code(self, design_index: float) -> str:
        return self.select_by_index("joist", design_index)
