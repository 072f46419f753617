from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import update, case
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.db import stores
from app.db.models.common import utcnow
from app.db.models.storage import Rack, StockAllocation
from app.events.bus import publish
from services._crud import commit

logger = logging.getLogger(__name__)

UNKNOWN_SKU = "Unknown SKU"
UNKNOWN_RACK = "Unknown Rack"
NOT_AVAILABLE = "N/A"


@dataclass
class AllocationOutcome:
    allocation: StockAllocation
    rack_load: int
    rack_capacity: int

    @property
    def over_capacity(self) -> bool:
        return self.rack_load > self.rack_capacity


def allocate_stock(
    db: Session,
    *,
    sku_id: int,
    rack_id: int,
    quantity: int,
    reserved_qty: int = 0,
    value: int = 0,
    now: datetime | None = None,
) -> AllocationOutcome:
    """Put ``quantity`` units of a SKU on a rack and grow the rack's load.

    Over-capacity is flagged on the outcome and logged, never rejected.
    """
    if quantity is None or int(quantity) <= 0:
        raise ValidationError("Quantity must be a positive integer", field="quantity")
    if reserved_qty is None or int(reserved_qty) < 0:
        raise ValidationError("Reserved quantity must be a non-negative integer", field="reservedQty")
    if int(reserved_qty) > int(quantity):
        raise ValidationError("Reserved quantity cannot exceed quantity", field="reservedQty")
    if value is None or int(value) < 0:
        raise ValidationError("Value must be a non-negative integer", field="value")

    sku = stores.skus.get_or_404(db, sku_id)
    rack = stores.racks.get_or_404(db, rack_id)

    alloc = stores.allocations.create(
        db,
        sku_id=sku.id,
        rack_id=rack.id,
        quantity=int(quantity),
        reserved_qty=int(reserved_qty),
        value=int(value),
        inbound_date=now or utcnow(),
    )

    # single UPDATE so concurrent allocations to one rack cannot lose increments
    db.execute(
        update(Rack)
        .where(Rack.id == rack.id)
        .values(current_load=Rack.current_load + int(quantity))
        .execution_options(synchronize_session=False)
    )
    db.refresh(rack)

    outcome = AllocationOutcome(allocation=alloc, rack_load=rack.current_load, rack_capacity=rack.capacity)
    publish(db, "stock.allocated", {
        "allocation_id": alloc.id,
        "sku_id": sku.id,
        "rack_id": rack.id,
        "quantity": alloc.quantity,
        "rack_load": outcome.rack_load,
        "over_capacity": outcome.over_capacity,
    })
    commit(db)

    if outcome.over_capacity:
        logger.warning(
            "rack %s over capacity after allocation %s: load %s > capacity %s",
            rack.name, alloc.id, outcome.rack_load, outcome.rack_capacity,
        )
    logger.info("allocated %s x %s to rack %s (allocation %s)", alloc.quantity, sku.code, rack.name, alloc.id)
    return outcome


def release_allocation(db: Session, allocation_id: int) -> None:
    """Remove an allocation and give its quantity back to the rack (load floors at 0)."""
    alloc = stores.allocations.get_or_404(db, allocation_id)
    qty = alloc.quantity
    rack_id = alloc.rack_id

    if stores.racks.get(db, rack_id) is not None:
        db.execute(
            update(Rack)
            .where(Rack.id == rack_id)
            .values(current_load=case((Rack.current_load > qty, Rack.current_load - qty), else_=0))
            .execution_options(synchronize_session=False)
        )
    stores.allocations.delete(db, allocation_id)
    publish(db, "stock.released", {"allocation_id": allocation_id, "rack_id": rack_id, "quantity": qty})
    commit(db)
    # the UPDATE bypassed the identity map
    rack = stores.racks.get(db, rack_id)
    if rack is not None:
        db.refresh(rack)
    logger.info("released allocation %s (%s units from rack %s)", allocation_id, qty, rack_id)


def list_allocations(db: Session) -> list[dict]:
    """Every allocation with resolved SKU and rack names; dangling ids read as placeholders."""
    skus = {s.id: s for s in stores.skus.list(db)}
    racks = {r.id: r for r in stores.racks.list(db)}
    rows = []
    for a in stores.allocations.list(db):
        sku = skus.get(a.sku_id)
        rack = racks.get(a.rack_id)
        rows.append({
            "allocation": a,
            "skuName": sku.name if sku else UNKNOWN_SKU,
            "skuCode": sku.code if sku else NOT_AVAILABLE,
            "rackName": rack.name if rack else UNKNOWN_RACK,
        })
    return rows
