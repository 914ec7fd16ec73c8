import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from catalog_service.adapters.secondary.database.config import WRITE_TRANSACTION
from catalog_service.adapters.secondary.database.orm import CategoryModel, ItemModel
from catalog_service.core.domain.errors import NotFound, PersistenceError
from catalog_service.core.domain.models import Item, ItemSummary
from catalog_service.core.ports.repository import CategoryRegistryPort, ItemRepositoryPort

logger = logging.getLogger(__name__)


class SQLItemRepository(ItemRepositoryPort):
    """
    Item persistence over a SQLAlchemy session factory.

    Every call opens its own session; ``create`` is the only write and runs
    as a single transaction covering category resolution and the item insert.
    """

    def __init__(self, session_factory: sessionmaker, category_registry: CategoryRegistryPort):
        self.session_factory = session_factory
        self.categories = category_registry

    def create(self, name: str, category: str, image_name: Optional[str]) -> int:
        session = self.session_factory()
        try:
            session.connection(execution_options=WRITE_TRANSACTION)
            category_id = self.categories.resolve_or_create(category, session)
            db_item = ItemModel(name=name, image_name=image_name, category_id=category_id)
            session.add(db_item)
            session.flush()
            item_id = db_item.id
            session.commit()
        except PersistenceError:
            self._rollback(session)
            raise
        except SQLAlchemyError as e:
            self._rollback(session)
            raise PersistenceError(f"could not create item {name!r}") from e
        except Exception:
            self._rollback(session)
            raise
        finally:
            session.close()

        logger.info(f"Stored item {item_id}: {name!r} in category {category!r}")
        return item_id

    def get_by_id(self, item_id: int) -> Item:
        try:
            with self.session_factory() as session:
                row = self._item_query(session).filter(ItemModel.id == item_id).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not load item {item_id}") from e

        if row is None:
            raise NotFound(item_id)
        return Item(id=row.id, name=row.name, category=row.category, image_name=row.image_name)

    def list_all(self) -> List[ItemSummary]:
        try:
            with self.session_factory() as session:
                rows = self._summary_query(session).order_by(ItemModel.id).all()
        except SQLAlchemyError as e:
            raise PersistenceError("could not list items") from e
        return [ItemSummary(name=row.name, category=row.category) for row in rows]

    def search(self, keyword: str) -> List[ItemSummary]:
        """
        Items whose name contains ``keyword``, ignoring ASCII case.

        ``%`` and ``_`` in the keyword match literally.
        """
        try:
            with self.session_factory() as session:
                rows = (
                    self._summary_query(session)
                    .filter(ItemModel.name.icontains(keyword, autoescape=True))
                    .order_by(ItemModel.id)
                    .all()
                )
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not search items for {keyword!r}") from e
        return [ItemSummary(name=row.name, category=row.category) for row in rows]

    def _item_query(self, session: Session):
        return session.query(
            ItemModel.id,
            ItemModel.name,
            CategoryModel.name.label("category"),
            ItemModel.image_name,
        ).join(CategoryModel, ItemModel.category_id == CategoryModel.id)

    def _summary_query(self, session: Session):
        return session.query(
            ItemModel.name,
            CategoryModel.name.label("category"),
        ).join(CategoryModel, ItemModel.category_id == CategoryModel.id)

    def _rollback(self, session: Session) -> None:
        try:
            session.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed: {e}", exc_info=True)
