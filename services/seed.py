from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.db import stores
from app.db.models.common import utcnow
from app.db.models.integrations import ConnectorStatus
from services._crud import commit
from services.inventory.service import create_sku
from services.orders.service import create_order
from services.picking.service import create_picklist
from services.storage.allocation_service import allocate_stock
from services.storage.service import create_rack
from services.users.service import create_user

logger = logging.getLogger(__name__)


# -------- Users --------
def seed_users(db: Session):
    return create_user(
        db,
        username="admin",
        password="password",
        name="Admin User",
        role="admin",
        permissions={"orderEdit": True, "inventoryEdit": True, "userCreation": True},
    )


# -------- SKUs --------
def seed_skus(db: Session):
    skus = [
        # code, name, category, qty, dimensions, weight, location
        ("SKU-001", "Wireless Mouse", "Electronics", 150, "10x5x2", "0.2kg", "A1-01"),
        ("SKU-002", "Mechanical Keyboard", "Electronics", 50, "40x15x5", "1.2kg", "A1-02"),
        ("SKU-003", "Office Chair", "Furniture", 10, "100x50x50", "15kg", "B2-01"),
    ]
    return [
        create_sku(db, code=code, name=name, category=cat, quantity=qty, dimensions=dims, weight=wt, location=loc)
        for code, name, cat, qty, dims, wt, loc in skus
    ]


def seed_connectors(db: Session) -> None:
    stores.connectors.create(db, name="Shopify", status=ConnectorStatus.ACTIVE.value, last_sync=utcnow())
    commit(db)


def seed_demo_data(db: Session) -> bool:
    """Load the demo warehouse. Does nothing once any user exists."""
    if stores.users.list(db):
        return False

    seed_users(db)
    mouse, keyboard, _chair = seed_skus(db)
    order = create_order(
        db,
        order_id="ORD-001",
        customer="John Doe",
        type="Manual",
        status="pending",
        total_quantity=2,
        items=[{"sku_id": mouse.id, "quantity": 1}, {"sku_id": keyboard.id, "quantity": 1}],
    )
    rack = create_rack(db, name="Rack A", location_code="Zone 1", capacity=1000, warehouse="Main")
    allocate_stock(db, sku_id=mouse.id, rack_id=rack.id, quantity=100, reserved_qty=0, value=10000)
    create_picklist(
        db,
        order_ids=[order.id],
        priority="High",
        warehouse="Main",
        status="Not Started",
        items=[{"sku_id": mouse.id, "rack_id": rack.id, "required_qty": 5, "picked_qty": 0, "pick_sequence": 1}],
    )
    seed_connectors(db)
    logger.info("demo data seeded")
    return True
