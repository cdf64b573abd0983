"""
SQLAlchemy implementation of the Base Repository.
"""

from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StorageError
from app.domain.repositories.base import BaseRepository
from app.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = structlog.get_logger(__name__)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def commit(self) -> None:
        """Commit the unit of work; roll back on any failure.

        IntegrityError propagates unchanged so services can translate the
        constraint they expect. Anything else becomes a StorageError.
        """
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Commit failed", model=self.model.__name__, detail=str(exc))
            raise StorageError() from exc

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run several statements as one transaction, committed on exit."""
        try:
            yield
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Transaction failed", model=self.model.__name__, detail=str(exc))
            raise StorageError() from exc
        except Exception:
            self.db.rollback()
            raise
        self.commit()

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def list(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return (
            self.db.query(self.model)
            .order_by(self.model.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create(self, obj_in: Any) -> ModelType:
        # obj_in is a dict or a pydantic model
        if hasattr(obj_in, "model_dump"):
            obj_data = obj_in.model_dump(exclude_unset=True)
        else:
            obj_data = obj_in

        db_obj = self.model(**obj_data)
        self.db.add(db_obj)
        self.commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        if hasattr(obj_in, "model_dump"):
            update_data = obj_in.model_dump(exclude_unset=True)
        else:
            update_data = obj_in

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.add(db_obj)
        self.commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: int) -> Optional[ModelType]:
        obj = self.db.get(self.model, id)
        if obj:
            self.db.delete(obj)
            self.commit()
        return obj
