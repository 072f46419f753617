from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.errors import ValidationError, ensure_member
from app.db import stores
from app.db.models.picking import Picklist, PicklistItem, PicklistItemStatus, PicklistPriority, PicklistStatus
from app.events.bus import publish
from services._crud import commit
from services.picking import state
from services.storage.allocation_service import NOT_AVAILABLE, UNKNOWN_RACK, UNKNOWN_SKU

logger = logging.getLogger(__name__)

UNKNOWN_ZONE = "Unknown Zone"
DEFAULT_UOM = "PCS"
DEFAULT_HANDLING = "Normal"


def list_picklists(db: Session) -> list[dict]:
    """Picklists with picker name, line count and total required quantity."""
    items_by_list: dict[int, list[PicklistItem]] = {}
    for it in stores.picklist_items.list(db):
        items_by_list.setdefault(it.picklist_id, []).append(it)

    rows = []
    for p in stores.picklists.list(db):
        items = items_by_list.get(p.id, [])
        picker = stores.users.get(db, p.assigned_picker_id) if p.assigned_picker_id else None
        rows.append({
            "picklist": p,
            "pickerName": picker.name if picker else None,
            "skuCount": len(items),
            "totalQty": sum(i.required_qty for i in items),
        })
    return rows


def get_picklist(db: Session, picklist_id: int) -> Picklist:
    return stores.picklists.get_or_404(db, picklist_id)


def picklist_items(db: Session, picklist_id: int) -> list[dict]:
    """Lines of one picklist in pick sequence, with SKU and rack names resolved."""
    stores.picklists.get_or_404(db, picklist_id)
    rows = []
    for it in stores.picklist_items.find_by(db, picklist_id=picklist_id):
        sku = stores.skus.get(db, it.sku_id)
        rack = stores.racks.get(db, it.rack_id)
        rows.append({
            "item": it,
            "skuName": sku.name if sku else UNKNOWN_SKU,
            "skuCode": sku.code if sku else NOT_AVAILABLE,
            "zone": rack.location_code if rack else UNKNOWN_ZONE,
            "rack": rack.name if rack else UNKNOWN_RACK,
            "bin": NOT_AVAILABLE,
            "uom": DEFAULT_UOM,
            "handling": DEFAULT_HANDLING,
        })
    rows.sort(key=lambda r: (r["item"].pick_sequence, r["item"].id))
    return rows


def _check_item(db: Session, i: int, it: dict) -> None:
    if int(it.get("required_qty") or 0) <= 0:
        raise ValidationError("Required quantity must be a positive integer", field=f"items.{i}.requiredQty")
    if int(it.get("picked_qty") or 0) < 0:
        raise ValidationError("Picked quantity must be a non-negative integer", field=f"items.{i}.pickedQty")
    if stores.skus.get(db, it["sku_id"]) is None:
        raise ValidationError(f"SKU {it['sku_id']} does not exist", field=f"items.{i}.skuId")
    if stores.racks.get(db, it["rack_id"]) is None:
        raise ValidationError(f"Rack {it['rack_id']} does not exist", field=f"items.{i}.rackId")


def create_picklist(
    db: Session,
    *,
    order_ids: list[int],
    priority: str,
    warehouse: str,
    items: list[dict],
    status: str = PicklistStatus.NOT_STARTED.value,
    assigned_picker_id: int | None = None,
) -> Picklist:
    """Create a picklist and its lines in one unit of work.

    Each item dict carries ``sku_id``, ``rack_id``, ``required_qty``,
    ``pick_sequence`` and optionally ``picked_qty``, ``status`` and
    ``short_pick_reason``.
    """
    priority = ensure_member(PicklistPriority, priority, "priority")
    status = ensure_member(PicklistStatus, status, "status")
    if not order_ids:
        raise ValidationError("Picklist needs at least one order", field="orderIds")
    for i, oid in enumerate(order_ids):
        if stores.orders.get(db, oid) is None:
            raise ValidationError(f"Order {oid} does not exist", field=f"orderIds.{i}")
    if assigned_picker_id is not None and stores.users.get(db, assigned_picker_id) is None:
        raise ValidationError(f"User {assigned_picker_id} does not exist", field="assignedPickerId")
    if not items:
        raise ValidationError("Picklist needs at least one item", field="items")

    lines = []
    for i, it in enumerate(items):
        _check_item(db, i, it)
        line = {
            "sku_id": int(it["sku_id"]),
            "rack_id": int(it["rack_id"]),
            "required_qty": int(it["required_qty"]),
            "picked_qty": int(it.get("picked_qty") or 0),
            "pick_sequence": int(it["pick_sequence"]),
            "status": PicklistItemStatus.PENDING.value,
            "short_pick_reason": None,
        }
        extra = {k: it[k] for k in ("status", "short_pick_reason") if it.get(k) is not None}
        try:
            line.update(state.resolve_item_update(None, extra))
        except ValidationError as e:
            raise ValidationError(e.message, field=f"items.{i}.{e.field}") from None
        lines.append(line)

    try:
        picklist = stores.picklists.create(
            db,
            order_ids=[int(o) for o in order_ids],
            priority=priority,
            warehouse=warehouse,
            status=status,
            assigned_picker_id=assigned_picker_id,
        )
        for line in lines:
            stores.picklist_items.create(db, picklist_id=picklist.id, **line)
        publish(db, "picklist.created", {"id": picklist.id, "order_ids": picklist.order_ids, "items": len(lines)})
        commit(db)
    except Exception:
        db.rollback()
        raise
    logger.info("created picklist %s for orders %s with %d lines", picklist.id, picklist.order_ids, len(lines))
    return picklist


def update_picklist_status(db: Session, picklist_id: int, new_status: str) -> Picklist:
    picklist = stores.picklists.get_or_404(db, picklist_id)
    old = picklist.status
    try:
        new = state.check_picklist_transition(old, new_status)
    except ValidationError:
        logger.info("rejected status change for picklist %s: %s -> %s", picklist.id, old, new_status)
        raise
    if new == old:
        return picklist
    picklist.status = new
    publish(db, "picklist.status_changed", {"id": picklist.id, "from": old, "to": new})
    commit(db)
    logger.info("picklist %s status %s -> %s", picklist.id, old, new)
    return picklist


def update_picklist_item(db: Session, item_id: int, changes: dict) -> PicklistItem:
    """Record pick progress on one line. The parent picklist's status is never touched."""
    item = stores.picklist_items.get_or_404(db, item_id)
    fields = state.resolve_item_update(item.short_pick_reason, changes)
    item = stores.picklist_items.update(db, item_id, **fields)
    publish(db, "picklist_item.updated", {
        "id": item.id,
        "picklist_id": item.picklist_id,
        "status": item.status,
        "picked_qty": item.picked_qty,
        "short_pick_reason": item.short_pick_reason,
    })
    commit(db)
    logger.info(
        "picklist %s item %s: picked %s/%s status %s%s",
        item.picklist_id, item.id, item.picked_qty, item.required_qty, item.status,
        f" ({item.short_pick_reason})" if item.short_pick_reason else "",
    )
    return item
