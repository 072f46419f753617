"""Stock ageing report.

Age is whole days since an allocation's inbound date. Buckets and risk are
assigned by strict ``>`` comparisons, checked from the oldest threshold down:

    age > 90  -> "90+",   High
    age > 60  -> "61–90", Medium
    age > 30  -> "31–60", Low
    otherwise -> "0–30",  Low
"""
from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.db import stores
from app.db.models.common import as_utc, iso, utcnow
from services.storage.allocation_service import NOT_AVAILABLE, UNKNOWN_SKU

BUCKETS: list[tuple[int, str]] = [(90, "90+"), (60, "61–90"), (30, "31–60")]
FRESH_BUCKET = "0–30"

RISK_LEVELS: list[tuple[int, str]] = [(90, "High"), (60, "Medium")]
LOW_RISK = "Low"

DEFAULT_WAREHOUSE = "Main"


def age_in_days(inbound: datetime, now: datetime) -> int:
    return (as_utc(now) - as_utc(inbound)) // timedelta(days=1)


def ageing_bucket(age: int) -> str:
    for threshold, label in BUCKETS:
        if age > threshold:
            return label
    return FRESH_BUCKET


def risk_level(age: int) -> str:
    for threshold, label in RISK_LEVELS:
        if age > threshold:
            return label
    return LOW_RISK


def stock_ageing(db: Session, now: datetime | None = None) -> list[dict]:
    """One report row per allocation. Computed on every call, nothing stored."""
    now = now or utcnow()
    skus = {s.id: s for s in stores.skus.list(db)}
    racks = {r.id: r for r in stores.racks.list(db)}

    rows = []
    for a in stores.allocations.list(db):
        sku = skus.get(a.sku_id)
        rack = racks.get(a.rack_id)
        age = age_in_days(a.inbound_date, now) if a.inbound_date else 0
        rows.append({
            "allocationId": a.id,
            "skuCode": sku.code if sku else NOT_AVAILABLE,
            "skuName": sku.name if sku else UNKNOWN_SKU,
            "category": sku.category if sku else NOT_AVAILABLE,
            "warehouse": (rack.warehouse if rack else None) or DEFAULT_WAREHOUSE,
            "zone": rack.location_code if rack else NOT_AVAILABLE,
            "rack": rack.name if rack else NOT_AVAILABLE,
            "bin": NOT_AVAILABLE,
            "inboundDate": iso(a.inbound_date),
            "age": age,
            "ageingBucket": ageing_bucket(age),
            "availableQty": a.quantity,
            "reservedQty": a.reserved_qty,
            "inventoryValue": a.value,
            "riskLevel": risk_level(age),
        })
    return rows
