from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.models.common import iso
from app.db.session import get_db
from app.events import bus

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("")
def list_events(
    topic: str | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return [
        {"id": e.id, "topic": e.topic, "payload": e.payload or {}, "createdAt": iso(e.created_at)}
        for e in bus.recent_events(db, topic=topic, limit=limit)
    ]
