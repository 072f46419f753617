from datetime import datetime, timedelta, timezone

import pytest

from app.db import stores
from services.inventory.service import delete_sku
from services.storage.ageing import age_in_days, ageing_bucket, risk_level, stock_ageing
from services.storage.allocation_service import allocate_stock

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("age,bucket,risk", [
    (0, "0–30", "Low"),
    (30, "0–30", "Low"),
    (31, "31–60", "Low"),
    (60, "31–60", "Low"),
    (61, "61–90", "Medium"),
    (90, "61–90", "Medium"),
    (91, "90+", "High"),
    (400, "90+", "High"),
])
def test_bucket_and_risk_boundaries(age, bucket, risk):
    assert ageing_bucket(age) == bucket
    assert risk_level(age) == risk


def test_age_is_floored_to_whole_days():
    assert age_in_days(NOW - timedelta(days=30, hours=23), NOW) == 30
    assert age_in_days(NOW - timedelta(days=31), NOW) == 31
    assert age_in_days(NOW - timedelta(hours=1), NOW) == 0


def test_age_accepts_naive_timestamps_as_utc():
    naive = (NOW - timedelta(days=5)).replace(tzinfo=None)
    assert age_in_days(naive, NOW) == 5


class TestStockAgeingReport:
    def test_row_fields(self, db, sku, rack):
        allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=100, reserved_qty=10,
                       value=10000, now=NOW - timedelta(days=45))

        [row] = stock_ageing(db, now=NOW)

        assert row["skuCode"] == "SKU-100"
        assert row["skuName"] == "Pallet Wrap"
        assert row["category"] == "Packaging"
        assert row["warehouse"] == "Main"
        assert row["zone"] == "Zone 1"
        assert row["rack"] == "Rack A"
        assert row["bin"] == "N/A"
        assert row["age"] == 45
        assert row["ageingBucket"] == "31–60"
        assert row["riskLevel"] == "Low"
        assert row["availableQty"] == 100
        assert row["reservedQty"] == 10
        assert row["inventoryValue"] == 10000
        assert row["inboundDate"].startswith("2024-04-17")

    def test_one_row_per_allocation(self, db, sku, rack):
        for days in (5, 70, 120):
            allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=1, now=NOW - timedelta(days=days))

        rows = stock_ageing(db, now=NOW)
        assert [r["riskLevel"] for r in rows] == ["Low", "Medium", "High"]

    def test_missing_sku_and_rack_use_placeholders(self, db, sku, rack):
        allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=1, now=NOW)
        delete_sku(db, sku.id)
        stores.racks.delete(db, rack.id)
        db.commit()

        [row] = stock_ageing(db, now=NOW)
        assert row["skuCode"] == "N/A"
        assert row["skuName"] == "Unknown SKU"
        assert row["category"] == "N/A"
        assert row["zone"] == "N/A"
        assert row["rack"] == "N/A"
        assert row["warehouse"] == "Main"

    def test_empty(self, db):
        assert stock_ageing(db) == []


def test_ageing_endpoint(client):
    sku_id = client.post("/api/skus", json={"code": "SKU-9", "name": "Tape", "category": "Packaging"}).json()["id"]
    rack_id = client.post("/api/racks", json={"name": "Rack C", "locationCode": "Zone 3", "capacity": 50}).json()["id"]
    client.post("/api/racks/allocate", json={"skuId": sku_id, "rackId": rack_id, "quantity": 5})

    rows = client.get("/api/stock/ageing").json()
    assert len(rows) == 1
    assert rows[0]["age"] == 0
    assert rows[0]["ageingBucket"] == "0–30"
    assert rows[0]["zone"] == "Zone 3"
