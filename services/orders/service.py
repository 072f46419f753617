from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.errors import ValidationError, ensure_member
from app.db import stores
from app.db.models.common import utcnow
from app.db.models.orders import Order, OrderStatus, OrderType
from app.events.bus import publish
from services._crud import commit
from services.orders import state
from services.storage.allocation_service import NOT_AVAILABLE, UNKNOWN_SKU

logger = logging.getLogger(__name__)


def list_orders(db: Session) -> list[Order]:
    return stores.orders.list(db)


def get_order(db: Session, order_pk: int) -> Order:
    return stores.orders.get_or_404(db, order_pk)


def order_items(db: Session, order_pk: int) -> list[dict]:
    stores.orders.get_or_404(db, order_pk)
    rows = []
    for it in stores.order_items.find_by(db, order_id=order_pk):
        sku = stores.skus.get(db, it.sku_id)
        rows.append({
            "id": it.id,
            "orderId": it.order_id,
            "skuId": it.sku_id,
            "quantity": it.quantity,
            "skuCode": sku.code if sku else NOT_AVAILABLE,
            "skuName": sku.name if sku else UNKNOWN_SKU,
        })
    return rows


def create_order(
    db: Session,
    *,
    order_id: str,
    customer: str,
    type: str,
    items: list[dict],
    status: str = OrderStatus.PENDING.value,
    total_quantity: int | None = None,
) -> Order:
    """Create an order and its items in one unit of work.

    ``items`` are dicts with ``sku_id`` and ``quantity``. Every item SKU must
    exist; nothing is written if any item is rejected.
    """
    type = ensure_member(OrderType, type, "type")
    status = ensure_member(OrderStatus, status, "status")
    if not items:
        raise ValidationError("Order needs at least one item", field="items")
    if stores.orders.find_by(db, order_id=order_id):
        raise ValidationError(f"Order ID '{order_id}' already exists", field="orderId")

    for i, it in enumerate(items):
        if int(it.get("quantity") or 0) <= 0:
            raise ValidationError("Quantity must be a positive integer", field=f"items.{i}.quantity")
        if stores.skus.get(db, it["sku_id"]) is None:
            raise ValidationError(f"SKU {it['sku_id']} does not exist", field=f"items.{i}.skuId")

    if total_quantity is None:
        total_quantity = sum(int(it["quantity"]) for it in items)

    try:
        order = stores.orders.create(
            db,
            order_id=order_id,
            customer=customer,
            type=type,
            status=status,
            total_quantity=int(total_quantity),
        )
        for it in items:
            stores.order_items.create(db, order_id=order.id, sku_id=int(it["sku_id"]), quantity=int(it["quantity"]))
        publish(db, "order.created", {"id": order.id, "order_id": order.order_id, "items": len(items)})
        commit(db)
    except Exception:
        db.rollback()
        raise
    logger.info("created order %s (%s) with %d items", order.order_id, order.id, len(items))
    return order


def update_order_status(db: Session, order_pk: int, new_status: str) -> Order:
    """Set the status directly. Only legal transitions are accepted; milestones are not stamped."""
    order = stores.orders.get_or_404(db, order_pk)
    old = order.status
    try:
        new = state.check_transition(old, new_status)
    except ValidationError:
        logger.info("rejected status change for order %s: %s -> %s", order.order_id, old, new_status)
        raise
    if new == old:
        return order
    order.status = new
    publish(db, "order.status_changed", {"id": order.id, "from": old, "to": new})
    commit(db)
    logger.info("order %s status %s -> %s", order.order_id, old, new)
    return order


def advance_order(db: Session, order_pk: int, now: datetime | None = None) -> Order:
    """Stamp the next fulfillment milestone (picked, packed, manifested, dispatched)."""
    order = stores.orders.get_or_404(db, order_pk)
    step = state.next_stage(order)
    if step is None:
        raise ValidationError(f"Order {order.order_id} is already dispatched", field="status")
    attr, stage = step

    old = order.status
    setattr(order, attr, now or utcnow())
    order.status = state.status_after_stage(old, stage)
    publish(db, "order.advanced", {"id": order.id, "stage": stage, "from": old, "to": order.status})
    commit(db)
    logger.info("order %s advanced to %s (status %s -> %s)", order.order_id, stage, old, order.status)
    return order
