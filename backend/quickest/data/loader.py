"""Catalog loading from CSV files.

Deployments that keep reference data outside the package point
``QUICKEST_CATALOG_PATH`` at either one CSV holding every catalog (with a
``catalog`` column) or a directory of ``MBSDB.csv``, ``SSDB.csv`` and
``RAWMAT.csv``. Columns are the :class:`ReferenceRecord` field names;
blank cells take the field defaults.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from quickest.data.records import ReferenceRecord
from quickest.models.enums import Catalog

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def load_catalog_csv(path: Path | str, catalog: Catalog | None = None) -> list[ReferenceRecord]:
    """Read reference records from a CSV file.

    Args:
        path: CSV file with a header row.
        catalog: Catalog for every row; when None each row's ``catalog``
            column decides, falling back to MBSDB.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If a row does not describe a valid record.
    """
    path = Path(path)
    records: list[ReferenceRecord] = []
    with path.open(newline="", encoding="utf-8-sig") as handle:
        for row in csv.DictReader(handle):
            values = {
                key.strip(): value.strip()
                for key, value in row.items()
                if key and value is not None and value.strip()
            }
            if not values.get("code"):
                continue
            if catalog is not None:
                values["catalog"] = catalog.value
            records.append(ReferenceRecord.model_validate(values))
    logger.info("Loaded %d reference records from %s", len(records), path)
    return records


def catalog_loaders(path: Path | str) -> dict[Catalog, Callable[[], list[ReferenceRecord]]]:
    """Lazy loaders for a ReferenceStore over a CSV file or directory.

    Nothing is read until the store first needs a catalog, so a missing
    or malformed file surfaces as ``ReferenceStoreUnavailable`` then.
    """
    path = Path(path)
    if path.is_dir():
        files = {catalog: path / f"{catalog.value}.csv" for catalog in Catalog}
        return {
            catalog: (lambda file=file, c=catalog: load_catalog_csv(file, c))
            for catalog, file in files.items()
            if file.exists()
        }

    def _rows_of(catalog: Catalog) -> list[ReferenceRecord]:
        return [record for record in load_catalog_csv(path) if record.catalog is catalog]

    return {catalog: (lambda c=catalog: _rows_of(c)) for catalog in Catalog}
