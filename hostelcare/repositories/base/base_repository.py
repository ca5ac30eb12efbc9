"""
Base repositories with standardized CRUD operations and error handling.

``BaseRepository`` is unscoped and only used for identity lookups by id.
``TenantRepository`` binds a hostel at construction time and applies it to
every read and write, so callers cannot forget the tenant filter.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from hostelcare.core.exceptions import (
    EntityAlreadyExistsError,
    RepositoryError,
    ValidationError,
)
from hostelcare.core.logging import get_logger
from hostelcare.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Repository with standardized operations for one model.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def query(self) -> Query:
        """Base query every read goes through."""
        return self.db.query(self.model)

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Persist a new entity.

        Raises:
            EntityAlreadyExistsError: If a unique constraint rejects the row
            RepositoryError: On any other database failure
        """
        try:
            self.db.add(entity)
            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Created {self.model.__name__} with id: {entity.id}")
            return entity

        except IntegrityError as e:
            self.db.rollback()
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} already exists"
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Create failed: {str(e)}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        try:
            return self.query().filter(self.model.id == id).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = None,
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs
            skip: Number of records to skip
            limit: Maximum number of records (``None`` for all)
            order_by: List of fields to order by (prefix with - for desc)

        Returns:
            List of matching entities
        """
        try:
            query = self.query()

            for key, value in criteria.items():
                if not hasattr(self.model, key):
                    raise ValidationError(f"Unknown filter field: {key}")
                column = getattr(self.model, key)
                if isinstance(value, (list, tuple, set)):
                    query = query.filter(column.in_(list(value)))
                else:
                    query = query.filter(column == value)

            if order_by:
                for field in order_by:
                    if field.startswith('-'):
                        query = query.order_by(getattr(self.model, field[1:]).desc())
                    else:
                        query = query.order_by(getattr(self.model, field))

            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by criteria failed: {str(e)}") from e

    def find_one_by_criteria(self, criteria: Dict[str, Any]) -> Optional[ModelType]:
        results = self.find_by_criteria(criteria, limit=1)
        return results[0] if results else None

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        try:
            query = self.query()
            for key, value in (criteria or {}).items():
                column = getattr(self.model, key)
                if isinstance(value, (list, tuple, set)):
                    query = query.filter(column.in_(list(value)))
                else:
                    query = query.filter(column == value)
            return query.count()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count failed: {str(e)}") from e

    # ==================== Update Operations ====================

    def update(self, id: str, data: Dict[str, Any], commit: bool = True) -> Optional[ModelType]:
        """
        Apply ``data`` to the entity with ``id``.

        Returns:
            Updated entity, or None when no visible entity has that id
        """
        try:
            entity = self.find_by_id(id)
            if entity is None:
                return None

            for key, value in data.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Updated {self.model.__name__} with id: {id}")
            return entity

        except IntegrityError as e:
            self.db.rollback()
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} already exists"
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Update failed: {str(e)}") from e


class TenantRepository(BaseRepository[ModelType]):
    """
    Repository bound to one hostel.

    Every query is filtered by ``hostel_name`` and every insert is stamped
    with it. The tenant column can never be changed through ``update``.
    """

    def __init__(self, model: Type[ModelType], db: Session, hostel_name: str):
        if not hostel_name:
            raise ValidationError("hostel_name is required")
        super().__init__(model, db)
        self.hostel_name = hostel_name

    def query(self) -> Query:
        return self.db.query(self.model).filter(self.model.hostel_name == self.hostel_name)

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        if entity.hostel_name is None:
            entity.hostel_name = self.hostel_name
        elif entity.hostel_name != self.hostel_name:
            raise ValidationError("Entity belongs to a different hostel")
        return super().create(entity, commit=commit)

    def update(self, id: str, data: Dict[str, Any], commit: bool = True) -> Optional[ModelType]:
        data = {k: v for k, v in data.items() if k not in ("id", "hostel_name")}
        return super().update(id, data, commit=commit)
