# eshop/core/base_dao.py
"""Generic base DAO for single-entity database operations."""

from abc import ABC
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from eshop.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseDAO(Generic[ModelType], ABC):
    """Generic DAO for save / find / update / delete on one table."""

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def _filter_conditions(self, filters: dict) -> list:
        return [
            getattr(self.model, key) == value
            for key, value in filters.items()
            if hasattr(self.model, key) and value is not None
        ]

    def get_all(self, skip: int = 0, limit: int = 100, **filters) -> List[ModelType]:
        """Get all records with optional equality filtering."""
        query = select(self.model)

        conditions = self._filter_conditions(filters)
        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(self.model.id).offset(skip).limit(limit)
        result = self.db.execute(query)
        return list(result.scalars().all())

    def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get record by ID."""
        return self.db.get(self.model, id)

    def get_by_field(self, field_name: str, value: Any) -> Optional[ModelType]:
        """Get single record by field value."""
        if not hasattr(self.model, field_name):
            return None

        query = select(self.model).where(getattr(self.model, field_name) == value)
        result = self.db.execute(query)
        return result.scalars().first()

    def create(self, **data) -> ModelType:
        """Create new record."""
        db_obj = self.model(**data)
        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, **data) -> ModelType:
        """Update existing record."""
        for field, value in data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: int) -> bool:
        """Delete record by ID."""
        db_obj = self.get_by_id(id)
        if db_obj:
            self.db.delete(db_obj)
            self.db.commit()
            return True
        return False

    def count(self, **filters) -> int:
        """Count records with optional filtering."""
        query = select(func.count(self.model.id))

        conditions = self._filter_conditions(filters)
        if conditions:
            query = query.where(and_(*conditions))

        result = self.db.execute(query)
        return result.scalar()

    def exists(self, **filters) -> bool:
        """Check if record exists with given filters."""
        return self.count(**filters) > 0
