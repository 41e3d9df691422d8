"""Inventory movements: the append-only audit trail of stock changes.

Stock itself lives on the product row and is only ever changed through
the InventoryLedger; every change is paired with one movement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

SALE_NOTE = "sale generated from cart"
REVERSAL_NOTE = "reversal of cancelled order"


class MovementKind(Enum):
    SALE = "sale"
    ADJUSTMENT = "adjustment"
    PURCHASE = "purchase"

    def signed(self, quantity: int) -> int:
        """Return the stored delta: sales subtract, everything else adds."""
        if self is MovementKind.SALE:
            return -quantity
        return quantity


@dataclass(frozen=True)
class InventoryMovement:
    product_id: int
    quantity_change: int
    kind: MovementKind
    reference: str
    note: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def record(
        product_id: int,
        quantity: int,
        kind: MovementKind,
        reference: str,
        note: str | None = None,
    ) -> InventoryMovement:
        """Build the movement for ``quantity`` units, signed by ``kind``."""
        return InventoryMovement(
            product_id=product_id,
            quantity_change=kind.signed(quantity),
            kind=kind,
            reference=reference,
            note=note,
        )
