"""Session ownership and commit helpers shared by the billing services."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, DatabaseError
from app.database import db as db_module

T = TypeVar("T")


class BaseService:
    """Base class for services that operate on a SQLAlchemy session.

    A service built without a session opens its own and closes it on exit;
    API handlers pass the request-scoped session instead.
    """

    def __init__(self, db: Session | None = None) -> None:
        self._owns_session = db is None
        self.db = db if db is not None else db_module.SessionLocal()

    def commit(self) -> None:
        """Commit the unit of work; roll back and translate driver errors on failure."""
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(f"Write rejected by a database constraint: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DatabaseError(str(exc)) from exc

    def save(self, instance: T) -> T:
        """Add, commit and reload one row."""
        self.db.add(instance)
        self.commit()
        self.db.refresh(instance)
        return instance

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.db.rollback()
        if self._owns_session:
            self.db.close()
