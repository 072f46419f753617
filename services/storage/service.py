from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.db import stores
from app.db.models.storage import Rack
from app.events.bus import publish
from services._crud import commit

logger = logging.getLogger(__name__)


def list_racks(db: Session) -> list[Rack]:
    return stores.racks.list(db)


def get_rack(db: Session, rack_id: int) -> Rack:
    return stores.racks.get_or_404(db, rack_id)


def create_rack(db: Session, *, name: str, location_code: str, capacity: int, warehouse: str = "Main") -> Rack:
    if capacity is None or int(capacity) <= 0:
        raise ValidationError("Capacity must be a positive integer", field="capacity")
    # current load always starts empty, callers cannot seed it
    rack = stores.racks.create(
        db,
        name=name,
        location_code=location_code,
        warehouse=warehouse or "Main",
        capacity=int(capacity),
        current_load=0,
    )
    publish(db, "rack.created", {"id": rack.id, "name": rack.name, "capacity": rack.capacity})
    commit(db)
    logger.info("created rack %s (%s) capacity=%s", rack.name, rack.id, rack.capacity)
    return rack


def utilization(rack: Rack) -> float:
    """Percent of capacity in use, one decimal. Can exceed 100."""
    if not rack.capacity:
        return 0.0
    return round(rack.current_load * 100.0 / rack.capacity, 1)
