from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import stores
from app.db.models.common import iso
from app.db.session import get_db

router = APIRouter(prefix="/api/connectors", tags=["connectors"])


@router.get("")
def list_connectors(db: Session = Depends(get_db)):
    return [
        {"id": c.id, "name": c.name, "status": c.status, "lastSync": iso(c.last_sync)}
        for c in stores.connectors.list(db)
    ]
