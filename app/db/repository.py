from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.base import Base

T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    """Keyed store for one entity type.

    Methods flush so generated ids are visible, but never commit: the calling
    service owns the unit of work.
    """

    def __init__(self, model: type[T], label: str | None = None):
        self.model = model
        self.label = label or model.__name__

    def create(self, db: Session, **fields: Any) -> T:
        obj = self.model(**fields)
        db.add(obj)
        db.flush()
        return obj

    def get(self, db: Session, id: int) -> T | None:
        return db.get(self.model, id)

    def get_or_404(self, db: Session, id: int) -> T:
        obj = self.get(db, id)
        if obj is None:
            raise NotFoundError(f"{self.label} not found")
        return obj

    def list(self, db: Session) -> list[T]:
        return db.query(self.model).order_by(self.model.id.asc()).all()

    def find_by(self, db: Session, **criteria: Any) -> list[T]:
        return db.query(self.model).filter_by(**criteria).order_by(self.model.id.asc()).all()

    def update(self, db: Session, id: int, **fields: Any) -> T:
        obj = self.get_or_404(db, id)
        for k, v in fields.items():
            setattr(obj, k, v)
        db.flush()
        return obj

    def delete(self, db: Session, id: int) -> None:
        obj = self.get(db, id)
        if obj is None:
            return
        db.delete(obj)
        db.flush()
