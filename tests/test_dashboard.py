from services.dashboard.service import dashboard_stats
from services.inventory.service import create_sku
from services.orders.service import create_order


def test_empty_store(db):
    assert dashboard_stats(db) == {
        "orders": {"pending": 0, "inProcess": 0, "breached": 0},
        "inventory": {"totalSkus": 0, "totalQuantity": 0},
    }


def test_counts_by_status(db, sku):
    for i, status in enumerate(["pending", "pending", "in-process", "breached", "completed"]):
        create_order(db, order_id=f"ORD-{i}", customer="C", type="Manual", status=status,
                     items=[{"sku_id": sku.id, "quantity": 1}])

    stats = dashboard_stats(db)
    assert stats["orders"] == {"pending": 2, "inProcess": 1, "breached": 1}


def test_inventory_totals(db):
    create_sku(db, code="A", name="A", category="X", quantity=4)
    create_sku(db, code="B", name="B", category="X", quantity=6)
    create_sku(db, code="C", name="C", category="X")

    assert dashboard_stats(db)["inventory"] == {"totalSkus": 3, "totalQuantity": 10}


def test_endpoint(client):
    client.post("/api/skus", json={"code": "S", "name": "S", "category": "X", "quantity": 3})
    assert client.get("/api/dashboard/stats").json() == {
        "orders": {"pending": 0, "inProcess": 0, "breached": 0},
        "inventory": {"totalSkus": 1, "totalQuantity": 3},
    }
