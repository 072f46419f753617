from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import Field
from sqlalchemy.orm import Session

from app.core.schemas import CamelModel
from app.db.models.common import iso
from app.db.models.storage import Rack, StockAllocation
from app.db.session import get_db
from services.storage import ageing, allocation_service, service

router = APIRouter(prefix="/api/racks", tags=["racks"])
stock_router = APIRouter(prefix="/api/stock", tags=["stock"])


class RackIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=128)
    location_code: str = Field(..., min_length=1, max_length=64)
    capacity: int = Field(..., gt=0)
    warehouse: str = Field(default="Main", min_length=1, max_length=128)


class AllocateIn(CamelModel):
    sku_id: int
    rack_id: int
    quantity: int = Field(..., gt=0)
    reserved_qty: int = Field(default=0, ge=0)
    value: int = Field(default=0, ge=0)


def rack_out(r: Rack) -> dict:
    return {
        "id": r.id,
        "name": r.name,
        "locationCode": r.location_code,
        "warehouse": r.warehouse,
        "capacity": r.capacity,
        "currentLoad": r.current_load,
    }


def allocation_out(a: StockAllocation) -> dict:
    return {
        "id": a.id,
        "skuId": a.sku_id,
        "rackId": a.rack_id,
        "quantity": a.quantity,
        "reservedQty": a.reserved_qty,
        "value": a.value,
        "inboundDate": iso(a.inbound_date),
    }


@router.get("")
def list_racks(db: Session = Depends(get_db)):
    return [rack_out(r) for r in service.list_racks(db)]


@router.post("", status_code=201)
def create_rack(payload: RackIn, db: Session = Depends(get_db)):
    return rack_out(service.create_rack(db, **payload.model_dump()))


# static paths before /{rack_id}
@router.get("/allocations")
def list_allocations(db: Session = Depends(get_db)):
    return [
        {**allocation_out(row["allocation"]), "skuName": row["skuName"], "skuCode": row["skuCode"], "rackName": row["rackName"]}
        for row in allocation_service.list_allocations(db)
    ]


@router.post("/allocate", status_code=201)
def allocate(payload: AllocateIn, db: Session = Depends(get_db)):
    outcome = allocation_service.allocate_stock(db, **payload.model_dump())
    return {
        **allocation_out(outcome.allocation),
        "rackLoad": outcome.rack_load,
        "overCapacity": outcome.over_capacity,
    }


@router.delete("/allocations/{allocation_id}", status_code=204)
def release(allocation_id: int, db: Session = Depends(get_db)):
    allocation_service.release_allocation(db, allocation_id)
    return Response(status_code=204)


@router.get("/{rack_id}")
def get_rack(rack_id: int, db: Session = Depends(get_db)):
    rack = service.get_rack(db, rack_id)
    return {**rack_out(rack), "utilization": service.utilization(rack)}


@stock_router.get("/ageing")
def stock_ageing(db: Session = Depends(get_db)):
    return ageing.stock_ageing(db)
