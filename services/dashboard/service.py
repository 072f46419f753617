from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.inventory import Sku
from app.db.models.orders import Order, OrderStatus


def dashboard_stats(db: Session) -> dict:
    """Order counts by status plus SKU totals, recomputed from the tables on each call."""
    by_status = dict(db.query(Order.status, func.count(Order.id)).group_by(Order.status).all())
    total_skus, total_qty = db.query(func.count(Sku.id), func.coalesce(func.sum(Sku.quantity), 0)).one()
    return {
        "orders": {
            "pending": by_status.get(OrderStatus.PENDING.value, 0),
            "inProcess": by_status.get(OrderStatus.IN_PROCESS.value, 0),
            "breached": by_status.get(OrderStatus.BREACHED.value, 0),
        },
        "inventory": {
            "totalSkus": int(total_skus or 0),
            "totalQuantity": int(total_qty or 0),
        },
    }
