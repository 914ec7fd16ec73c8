"""
Category normalization: map a category name to its row id, creating the
row on first use.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog_service.adapters.secondary.database.orm import CategoryModel
from catalog_service.core.domain.errors import ConstraintViolation, PersistenceError
from catalog_service.core.ports.repository import CategoryRegistryPort

logger = logging.getLogger(__name__)


class SQLCategoryRegistry(CategoryRegistryPort):
    """
    Resolves category names inside the caller's transaction.

    The registry never commits or rolls back the outer transaction; a
    failed insert only unwinds its own savepoint.
    """

    def resolve_or_create(self, name: str, session: Session) -> int:
        """
        Return the id of the category called ``name``, inserting it if absent.

        If a concurrent writer inserted the same name between our lookup and
        our insert, the unique constraint rejects our row and the existing
        one is read back instead.

        Raises:
            PersistenceError: lookup or insert failed for any other reason.
        """
        try:
            category_id = self._find(name, session)
            if category_id is not None:
                return category_id

            try:
                return self._insert(name, session)
            except ConstraintViolation:
                logger.info(f"Category {name!r} was created concurrently, reading it back")
                category_id = self._find(name, session)
                if category_id is None:
                    raise PersistenceError(f"category {name!r} violated a constraint but does not exist")
                return category_id
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not resolve category {name!r}") from e

    def _find(self, name: str, session: Session) -> Optional[int]:
        return session.query(CategoryModel.id).filter(CategoryModel.name == name).scalar()

    def _insert(self, name: str, session: Session) -> int:
        category = CategoryModel(name=name)
        try:
            with session.begin_nested():
                session.add(category)
                session.flush()
        except IntegrityError as e:
            raise ConstraintViolation(f"category {name!r} already exists") from e

        logger.info(f"Created category {name!r} with id {category.id}")
        return category.id
