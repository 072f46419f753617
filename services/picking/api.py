from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.orm import Session

from app.core.schemas import CamelModel
from app.db.models.common import iso
from app.db.models.picking import (
    Picklist,
    PicklistItem,
    PicklistItemStatus,
    PicklistPriority,
    PicklistStatus,
    ShortPickReason,
)
from app.db.session import get_db
from services.picking import service

router = APIRouter(prefix="/api/picklists", tags=["picklists"])
items_router = APIRouter(prefix="/api/picklist-items", tags=["picklists"])


class PicklistItemIn(CamelModel):
    sku_id: int
    rack_id: int
    required_qty: int = Field(..., gt=0)
    picked_qty: int = Field(default=0, ge=0)
    pick_sequence: int
    status: PicklistItemStatus | None = None
    short_pick_reason: ShortPickReason | None = None


class PicklistIn(CamelModel):
    order_ids: list[int] = Field(..., min_length=1)
    priority: PicklistPriority
    warehouse: str = Field(..., min_length=1, max_length=128)
    status: PicklistStatus = PicklistStatus.NOT_STARTED
    assigned_picker_id: int | None = None
    items: list[PicklistItemIn] = Field(..., min_length=1)


class StatusIn(CamelModel):
    status: str


class PicklistItemPatch(CamelModel):
    picked_qty: int | None = None
    status: str | None = None
    short_pick_reason: str | None = None


def picklist_out(p: Picklist) -> dict:
    return {
        "id": p.id,
        "orderIds": list(p.order_ids or []),
        "priority": p.priority,
        "warehouse": p.warehouse,
        "status": p.status,
        "assignedPickerId": p.assigned_picker_id,
        "createdAt": iso(p.created_at),
    }


def picklist_item_out(i: PicklistItem) -> dict:
    return {
        "id": i.id,
        "picklistId": i.picklist_id,
        "skuId": i.sku_id,
        "rackId": i.rack_id,
        "requiredQty": i.required_qty,
        "pickedQty": i.picked_qty,
        "status": i.status,
        "pickSequence": i.pick_sequence,
        "shortPickReason": i.short_pick_reason,
    }


@router.get("")
def list_picklists(db: Session = Depends(get_db)):
    return [
        {**picklist_out(row["picklist"]), "pickerName": row["pickerName"], "skuCount": row["skuCount"], "totalQty": row["totalQty"]}
        for row in service.list_picklists(db)
    ]


@router.get("/{picklist_id}")
def get_picklist(picklist_id: int, db: Session = Depends(get_db)):
    return picklist_out(service.get_picklist(db, picklist_id))


@router.get("/{picklist_id}/items")
def get_picklist_items(picklist_id: int, db: Session = Depends(get_db)):
    return [
        {**picklist_item_out(row.pop("item")), **row}
        for row in service.picklist_items(db, picklist_id)
    ]


@router.post("", status_code=201)
def create_picklist(payload: PicklistIn, db: Session = Depends(get_db)):
    return picklist_out(service.create_picklist(db, **payload.model_dump(mode="json")))


@router.patch("/{picklist_id}/status")
def update_status(picklist_id: int, payload: StatusIn, db: Session = Depends(get_db)):
    return picklist_out(service.update_picklist_status(db, picklist_id, payload.status))


@items_router.patch("/{item_id}")
def update_item(item_id: int, payload: PicklistItemPatch, db: Session = Depends(get_db)):
    # exclude_unset keeps an explicit null reason distinct from an absent one
    changes = payload.model_dump(exclude_unset=True)
    return picklist_item_out(service.update_picklist_item(db, item_id, changes))
