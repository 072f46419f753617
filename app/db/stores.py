from __future__ import annotations

from app.db.models.auth import User
from app.db.models.integrations import ApiConnector
from app.db.models.inventory import Sku
from app.db.models.orders import Order, OrderItem
from app.db.models.picking import Picklist, PicklistItem
from app.db.models.storage import Rack, StockAllocation
from app.db.repository import Repository

users = Repository(User, "User")
skus = Repository(Sku, "SKU")
racks = Repository(Rack, "Rack")
allocations = Repository(StockAllocation, "Allocation")
orders = Repository(Order, "Order")
order_items = Repository(OrderItem, "Order item")
picklists = Repository(Picklist, "Picklist")
picklist_items = Repository(PicklistItem, "Picklist item")
connectors = Repository(ApiConnector, "Connector")
