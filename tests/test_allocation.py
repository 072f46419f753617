"""Allocation engine: rack load, capacity flagging, release, resolved listings."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.db import stores
from app.db.session import SessionLocal
from services.inventory.service import create_sku, delete_sku
from services.storage.allocation_service import allocate_stock, list_allocations, release_allocation
from services.storage.service import create_rack, utilization


class TestAllocateStock:
    def test_load_is_additive_and_may_exceed_capacity(self, db, sku, rack):
        assert rack.current_load == 0

        first = allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=80)
        second = allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=50)

        assert first.rack_load == 80
        assert second.rack_load == 130
        assert stores.racks.get(db, rack.id).current_load == 130
        assert not first.over_capacity
        assert second.over_capacity

    def test_allocation_is_stamped_and_recorded(self, db, sku, rack):
        outcome = allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=5, reserved_qty=2, value=1500)
        a = outcome.allocation

        assert a.id is not None
        assert a.inbound_date is not None
        assert (a.quantity, a.reserved_qty, a.value) == (5, 2, 1500)

    def test_over_capacity_is_logged(self, db, sku, rack, caplog):
        with caplog.at_level("WARNING"):
            allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=101)
        assert any("over capacity" in r.getMessage() for r in caplog.records)

    def test_missing_rack_is_not_found(self, db, sku):
        with pytest.raises(NotFoundError, match="Rack not found"):
            allocate_stock(db, sku_id=sku.id, rack_id=999, quantity=1)
        assert stores.allocations.list(db) == []

    def test_missing_sku_is_not_found(self, db, rack):
        with pytest.raises(NotFoundError, match="SKU not found"):
            allocate_stock(db, sku_id=999, rack_id=rack.id, quantity=1)

    @pytest.mark.parametrize("kwargs,field", [
        ({"quantity": 0}, "quantity"),
        ({"quantity": 5, "reserved_qty": -1}, "reservedQty"),
        ({"quantity": 5, "reserved_qty": 6}, "reservedQty"),
        ({"quantity": 5, "value": -10}, "value"),
    ])
    def test_bad_quantities(self, db, sku, rack, kwargs, field):
        with pytest.raises(ValidationError) as exc:
            allocate_stock(db, sku_id=sku.id, rack_id=rack.id, **kwargs)
        assert exc.value.field == field
        assert stores.racks.get(db, rack.id).current_load == 0

    def test_allocation_publishes_event(self, db, sku, rack):
        from app.events.bus import recent_events

        allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=3)
        evt = recent_events(db, topic="stock.allocated")[0]
        assert evt.payload["quantity"] == 3
        assert evt.payload["rack_load"] == 3


class TestReleaseAllocation:
    def test_release_gives_load_back(self, db, sku, rack):
        keep = allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=30).allocation
        gone = allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=20).allocation

        release_allocation(db, gone.id)

        assert stores.racks.get(db, rack.id).current_load == 30
        assert [a.id for a in stores.allocations.list(db)] == [keep.id]

    def test_release_floors_at_zero(self, db, sku, rack):
        a = allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=10).allocation
        stores.racks.update(db, rack.id, current_load=4)
        db.commit()

        release_allocation(db, a.id)
        assert stores.racks.get(db, rack.id).current_load == 0

    def test_release_missing_is_not_found(self, db):
        with pytest.raises(NotFoundError):
            release_allocation(db, 77)


class TestAllocationListing:
    def test_names_are_resolved(self, db, sku, rack):
        allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=4)
        row = list_allocations(db)[0]
        assert (row["skuName"], row["skuCode"], row["rackName"]) == ("Pallet Wrap", "SKU-100", "Rack A")

    def test_deleted_sku_reads_as_placeholder(self, db, sku, rack):
        allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=4)
        delete_sku(db, sku.id)

        rows = list_allocations(db)
        assert len(rows) == 1
        assert rows[0]["skuName"] == "Unknown SKU"
        assert rows[0]["skuCode"] == "N/A"
        assert rows[0]["rackName"] == "Rack A"


class TestConcurrentAllocation:
    def test_threads_do_not_lose_increments(self):
        with SessionLocal() as s:
            sku_id = create_sku(s, code="SKU-T", name="Tote", category="Storage").id
            rack_id = create_rack(s, name="Rack T", location_code="Zone 9", capacity=1000).id

        def allocate_one(_):
            with SessionLocal() as s:
                allocate_stock(s, sku_id=sku_id, rack_id=rack_id, quantity=1)

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(allocate_one, range(64)))

        with SessionLocal() as s:
            allocs = stores.allocations.find_by(s, rack_id=rack_id)
            assert len(allocs) == 64
            assert stores.racks.get(s, rack_id).current_load == sum(a.quantity for a in allocs) == 64

    def test_concurrent_release_keeps_load_in_step(self):
        with SessionLocal() as s:
            sku_id = create_sku(s, code="SKU-R", name="Bin", category="Storage").id
            rack_id = create_rack(s, name="Rack R", location_code="Zone 8", capacity=100).id
            ids = [allocate_stock(s, sku_id=sku_id, rack_id=rack_id, quantity=2).allocation.id for _ in range(20)]

        def release(allocation_id):
            with SessionLocal() as s:
                release_allocation(s, allocation_id)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(release, ids[:15]))

        with SessionLocal() as s:
            assert len(stores.allocations.list(s)) == 5
            assert stores.racks.get(s, rack_id).current_load == 10


class TestRacks:
    def test_capacity_must_be_positive(self, db):
        with pytest.raises(ValidationError) as exc:
            create_rack(db, name="Bad", location_code="Z", capacity=0)
        assert exc.value.field == "capacity"

    def test_utilization(self, db, sku, rack):
        allocate_stock(db, sku_id=sku.id, rack_id=rack.id, quantity=25)
        assert utilization(stores.racks.get(db, rack.id)) == 25.0


class TestAllocationApi:
    def _setup(self, client):
        sku_id = client.post("/api/skus", json={"code": "SKU-1", "name": "Mouse", "category": "Electronics", "quantity": 5}).json()["id"]
        rack = client.post("/api/racks", json={"name": "Rack B", "locationCode": "Zone 2", "capacity": 10}).json()
        return sku_id, rack

    def test_rack_create_ignores_current_load(self, client):
        res = client.post("/api/racks", json={"name": "R", "locationCode": "Z", "capacity": 5, "currentLoad": 99})
        assert res.status_code == 201
        body = res.json()
        assert body["currentLoad"] == 0
        assert body["warehouse"] == "Main"

    def test_allocate_endpoint(self, client):
        sku_id, rack = self._setup(client)
        res = client.post("/api/racks/allocate", json={"skuId": sku_id, "rackId": rack["id"], "quantity": 12, "reservedQty": 1, "value": 500})
        assert res.status_code == 201
        body = res.json()
        assert body["skuId"] == sku_id
        assert body["rackLoad"] == 12
        assert body["overCapacity"] is True
        assert body["inboundDate"]

        assert client.get(f"/api/racks/{rack['id']}").json()["currentLoad"] == 12

    def test_allocate_validation_error_shape(self, client):
        sku_id, rack = self._setup(client)
        res = client.post("/api/racks/allocate", json={"skuId": sku_id, "rackId": rack["id"], "quantity": 0})
        assert res.status_code == 400
        body = res.json()
        assert set(body) == {"message", "field"}
        assert body["field"] == "quantity"

    def test_allocate_to_missing_rack(self, client):
        sku_id, _ = self._setup(client)
        res = client.post("/api/racks/allocate", json={"skuId": sku_id, "rackId": 999, "quantity": 1})
        assert res.status_code == 404
        assert res.json() == {"message": "Rack not found"}

    def test_allocations_listing_and_release(self, client):
        sku_id, rack = self._setup(client)
        alloc_id = client.post("/api/racks/allocate", json={"skuId": sku_id, "rackId": rack["id"], "quantity": 3}).json()["id"]

        rows = client.get("/api/racks/allocations").json()
        assert rows[0]["skuCode"] == "SKU-1"
        assert rows[0]["rackName"] == "Rack B"

        assert client.delete(f"/api/racks/allocations/{alloc_id}").status_code == 204
        assert client.get("/api/racks/allocations").json() == []
        assert client.get(f"/api/racks/{rack['id']}").json()["currentLoad"] == 0
        assert client.delete(f"/api/racks/allocations/{alloc_id}").status_code == 404

    def test_list_racks(self, client):
        _, rack = self._setup(client)
        client.post("/api/racks", json={"name": "Rack Z", "locationCode": "Zone 5", "capacity": 40, "warehouse": "North"})

        racks = client.get("/api/racks").json()
        assert [r["name"] for r in racks] == ["Rack B", "Rack Z"]
        assert racks[0] == rack
        assert racks[1]["warehouse"] == "North"

    def test_get_rack_reports_utilization(self, client):
        _, rack = self._setup(client)
        body = client.get(f"/api/racks/{rack['id']}").json()
        assert body["utilization"] == 0.0
        assert client.get("/api/racks/555").status_code == 404
