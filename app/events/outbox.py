from __future__ import annotations

from sqlalchemy import String, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models.common import HasCreatedAt, HasId


class OutboxEvent(Base, HasId, HasCreatedAt):
    """Transactional outbox.

    Services publish domain events by inserting rows in the same session as
    the change they describe, so an event exists only if the change committed.
    """

    __tablename__ = "outbox_event"

    topic: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    payload: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)


Index("ix_outbox_topic_created", OutboxEvent.topic, OutboxEvent.created_at)
