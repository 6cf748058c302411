"""
Base repository with standardized CRUD operations and error handling.

Provides the foundation for all domain repositories with type safety and
consistent mapping of SQLAlchemy failures onto application exceptions.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.config.logging import get_logger
from pmtracker.core.exceptions import (
    BaseAppException,
    DuplicateEntryError,
    RepositoryError,
    ResourceNotFoundError,
)
from pmtracker.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides CRUD operations and error handling for all domain repositories.
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

    def not_found(self, id: Any) -> BaseAppException:
        """Exception raised by ``get_by_id`` for a missing row."""
        return ResourceNotFoundError(self.model.__name__, id)

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Persist a new entity.

        Args:
            entity: Entity to create
            commit: Whether to commit immediately (otherwise flush only)

        Returns:
            Created entity

        Raises:
            DuplicateEntryError: If a unique constraint is violated
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
            raise DuplicateEntryError(
                f"{self.model.__name__} already exists",
                details={"reason": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Create failed: {str(e)}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: int) -> Optional[ModelType]:
        """Find entity by ID, or None."""
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def get_by_id(self, id: int) -> ModelType:
        """
        Get entity by ID or raise.

        Raises:
            ResourceNotFoundError: (or the repository's subclass) if missing
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise self.not_found(id)
        return entity

    def get_for_update(self, id: int) -> ModelType:
        """
        Load an entity with a row lock held until the transaction ends.

        Backends without ``SELECT ... FOR UPDATE`` (SQLite) serialize
        writers at the database level instead.
        """
        try:
            stmt = (
                select(self.model)
                .where(self.model.id == id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            entity = self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Locked read failed: {str(e)}") from e

        if entity is None:
            raise self.not_found(id)
        return entity

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs; list values use IN
            order_by: Fields to order by (prefix with - for desc)

        Returns:
            List of matching entities
        """
        try:
            stmt = select(self.model)

            for key, value in criteria.items():
                if hasattr(self.model, key):
                    column = getattr(self.model, key)
                    if isinstance(value, (list, tuple, set)):
                        stmt = stmt.where(column.in_(list(value)))
                    else:
                        stmt = stmt.where(column == value)

            for field in order_by or ["id"]:
                if field.startswith('-'):
                    stmt = stmt.order_by(getattr(self.model, field[1:]).desc())
                else:
                    stmt = stmt.order_by(getattr(self.model, field))

            return list(self.db.execute(stmt).scalars())

        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by criteria failed: {str(e)}") from e

    def find_all(self, order_by: Optional[List[str]] = None) -> List[ModelType]:
        return self.find_by_criteria({}, order_by=order_by)

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any], commit: bool = True) -> ModelType:
        """
        Apply ``data`` to an entity.

        Args:
            entity: Entity to update
            data: Attribute values to set
            commit: Whether to commit immediately (otherwise flush only)

        Returns:
            Updated entity
        """
        try:
            for key, value in data.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Updated {self.model.__name__} with id: {entity.id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Update failed: {str(e)}") from e

    # ==================== Delete Operations ====================

    def delete(self, id: int, commit: bool = True) -> None:
        """
        Delete entity by ID.

        Raises:
            ResourceNotFoundError: (or the repository's subclass) if missing
        """
        entity = self.get_by_id(id)
        try:
            self.db.delete(entity)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            logger.info(f"Deleted {self.model.__name__} with id: {id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Delete failed: {str(e)}") from e
