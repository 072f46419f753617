from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.errors import ValidationError, ensure_member
from app.db import stores
from app.db.models.inventory import Sku, SkuStatus
from app.events.bus import publish
from services._crud import commit

logger = logging.getLogger(__name__)

# columns that must keep a value once set
_REQUIRED = ("code", "name", "category", "quantity", "status")


def _check_quantity(quantity) -> None:
    if quantity is None or int(quantity) < 0:
        raise ValidationError("Quantity must be a non-negative integer", field="quantity")


def _check_code_free(db: Session, code: str, *, exclude_id: int | None = None) -> None:
    for other in stores.skus.find_by(db, code=code):
        if other.id != exclude_id:
            raise ValidationError(f"SKU code '{code}' already exists", field="code")


def list_skus(db: Session) -> list[Sku]:
    return stores.skus.list(db)


def get_sku(db: Session, sku_id: int) -> Sku:
    return stores.skus.get_or_404(db, sku_id)


def create_sku(
    db: Session,
    *,
    code: str,
    name: str,
    category: str,
    quantity: int = 0,
    dimensions: str | None = None,
    weight: str | None = None,
    status: str = SkuStatus.ACTIVE.value,
    location: str | None = None,
) -> Sku:
    _check_quantity(quantity)
    status = ensure_member(SkuStatus, status, "status")
    _check_code_free(db, code)
    sku = stores.skus.create(
        db,
        code=code,
        name=name,
        category=category,
        quantity=int(quantity),
        dimensions=dimensions,
        weight=weight,
        status=status,
        location=location,
    )
    publish(db, "sku.created", {"id": sku.id, "code": sku.code, "quantity": sku.quantity})
    commit(db)
    logger.info("created SKU %s (%s) qty=%s", sku.code, sku.id, sku.quantity)
    return sku


def update_sku(db: Session, sku_id: int, changes: dict) -> Sku:
    """Partial update. Keys are model attribute names."""
    sku = stores.skus.get_or_404(db, sku_id)
    for field in _REQUIRED:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null", field=field)
    if "quantity" in changes:
        _check_quantity(changes["quantity"])
    if "status" in changes:
        changes["status"] = ensure_member(SkuStatus, changes["status"], "status")
    if "code" in changes and changes["code"] != sku.code:
        _check_code_free(db, changes["code"], exclude_id=sku.id)

    sku = stores.skus.update(db, sku_id, **changes)
    publish(db, "sku.updated", {"id": sku.id, "fields": sorted(changes)})
    commit(db)
    logger.info("updated SKU %s: %s", sku.id, ", ".join(sorted(changes)) or "no changes")
    return sku


def delete_sku(db: Session, sku_id: int) -> None:
    """Idempotent: deleting an absent SKU is a no-op.

    Allocations and order/picklist lines that point at the SKU are left alone
    and render as "Unknown SKU" afterwards.
    """
    if stores.skus.get(db, sku_id) is None:
        return
    stores.skus.delete(db, sku_id)
    publish(db, "sku.deleted", {"id": sku_id})
    commit(db)
    logger.info("deleted SKU %s", sku_id)
