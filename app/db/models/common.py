from __future__ import annotations
from datetime import datetime, timezone
from sqlalchemy import Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def iso(value: datetime | None) -> str | None:
    return as_utc(value).isoformat() if value else None


class HasId:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class HasCreatedAt:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
