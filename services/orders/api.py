from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.orm import Session

from app.core.schemas import CamelModel
from app.db.models.common import iso
from app.db.models.orders import Order, OrderStatus, OrderType
from app.db.session import get_db
from services.orders import service

router = APIRouter(prefix="/api/orders", tags=["orders"])


class OrderItemIn(CamelModel):
    sku_id: int
    quantity: int = Field(..., gt=0)


class OrderIn(CamelModel):
    order_id: str = Field(..., min_length=1, max_length=64)
    customer: str = Field(..., min_length=1, max_length=256)
    type: OrderType
    status: OrderStatus = OrderStatus.PENDING
    total_quantity: int | None = Field(default=None, ge=0)
    items: list[OrderItemIn] = Field(..., min_length=1)


class StatusIn(CamelModel):
    status: str


def order_out(o: Order) -> dict:
    return {
        "id": o.id,
        "orderId": o.order_id,
        "customer": o.customer,
        "type": o.type,
        "status": o.status,
        "totalQuantity": o.total_quantity,
        "createdAt": iso(o.created_at),
        "pickedAt": iso(o.picked_at),
        "packedAt": iso(o.packed_at),
        "manifestedAt": iso(o.manifested_at),
        "dispatchedAt": iso(o.dispatched_at),
    }


@router.get("")
def list_orders(db: Session = Depends(get_db)):
    return [order_out(o) for o in service.list_orders(db)]


@router.get("/{order_pk}")
def get_order(order_pk: int, db: Session = Depends(get_db)):
    return order_out(service.get_order(db, order_pk))


@router.get("/{order_pk}/items")
def get_order_items(order_pk: int, db: Session = Depends(get_db)):
    return service.order_items(db, order_pk)


@router.post("", status_code=201)
def create_order(payload: OrderIn, db: Session = Depends(get_db)):
    data = payload.model_dump(mode="json")
    order = service.create_order(db, **data)
    return order_out(order)


@router.patch("/{order_pk}/status")
def update_status(order_pk: int, payload: StatusIn, db: Session = Depends(get_db)):
    return order_out(service.update_order_status(db, order_pk, payload.status))


@router.post("/{order_pk}/advance")
def advance(order_pk: int, db: Session = Depends(get_db)):
    return order_out(service.advance_order(db, order_pk))
