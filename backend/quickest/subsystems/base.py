"""Shared contract for the optional building sub-system calculators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from quickest.bom_builder import BomBuilder
from quickest.exceptions import ValidationError
from quickest.models.blocks import SubsystemBlock

if TYPE_CHECKING:
    from collections.abc import Mapping

    from quickest.data.store import ReferenceStore
    from quickest.models.bom import BillOfMaterials
    from quickest.models.enums import SubsystemKind

logger = logging.getLogger(__name__)

BlockT = TypeVar("BlockT", bound=SubsystemBlock)


def fmt(value: float) -> str:
    """Render a dimension the way the input sheet shows it (``24``, ``7.5``)."""
    return f"{value:g}"


def cold_formed_length(bay: float) -> float:
    """Cut length of a lapped purlin or girt over one bay."""
    size = bay + 0.107
    if bay > 6.5:
        size += 0.599
    if bay > 9:
        size += 0.706
    return size


def screw_code(*sheetings: str) -> str:
    """Stainless screws for aluminium sheeting, carbon steel otherwise."""
    return "SS2" if "a" in "".join(sheetings).lower() else "CS2"


class SubsystemCalculator(ABC, Generic[BlockT]):
    """One sub-system's BOM from its own input block.

    Subclasses set ``kind`` and ``block_type`` and implement :meth:`_build`.
    The block is validated first; any code missing from the store raises
    ``MissingReferenceError`` and no BOM is returned.

    Example::

        calculator = CraneCalculator(store)
        bom = calculator.calculate(CraneBlock(capacity=10, crane_run="6@6"))
    """

    kind: ClassVar[SubsystemKind]
    block_type: ClassVar[type[SubsystemBlock]]

    def __init__(self, store: ReferenceStore) -> None:
        self._store = store

    @property
    def store(self) -> ReferenceStore:
        return self._store

    def parse_block(self, payload: Mapping[str, Any]) -> BlockT:
        """Build this calculator's input block from a raw mapping."""
        return self.block_type.model_validate(dict(payload))  # type: ignore[return-value]

    def calculate(self, block: BlockT) -> BillOfMaterials:
        """Calculate the BOM for one sub-system block.

        Raises:
            TypeError: If the block is for a different sub-system.
            ValidationError: If the block fails its own checks.
            MissingReferenceError: If a selected code is not in the store.
        """
        if not isinstance(block, self.block_type):
            expected = self.block_type.__name__
            msg = f"{type(self).__name__} expects {expected}, got {type(block).__name__}"
            raise TypeError(msg)
        errors = block.validate_block(str(self.kind))
        if errors:
            raise ValidationError(errors)

        out = BomBuilder(self._store, block.sales_code)
        self._build(block, out)
        bom = out.build()
        logger.debug(
            "%s '%s': %d items, %.0f kg",
            self.kind,
            block.description,
            bom.item_count,
            bom.total_weight,
        )
        return bom

    def resolve(self, text: str) -> str:
        return self._store.resolve_code(text)

    @abstractmethod
    def _build(self, block: BlockT, out: BomBuilder) -> None:
        """Append this sub-system's rows to ``out``."""
