from __future__ import annotations

from sqlalchemy.orm import Session

from app.events.outbox import OutboxEvent


def publish(db: Session, topic: str, payload: dict) -> OutboxEvent:
    """Publish an event by writing to the transactional outbox.

    The row is only added to the session; the caller's commit makes it durable
    together with the change that produced it.
    """
    evt = OutboxEvent(topic=topic, payload=payload or {})
    db.add(evt)
    return evt


def recent_events(db: Session, *, topic: str | None = None, limit: int = 100) -> list[OutboxEvent]:
    q = db.query(OutboxEvent)
    if topic:
        q = q.filter(OutboxEvent.topic == topic)
    return q.order_by(OutboxEvent.id.desc()).limit(limit).all()
