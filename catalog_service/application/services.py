import logging
from typing import List

from catalog_service.core.domain.errors import ValidationError
from catalog_service.core.domain.models import Item, ItemSummary
from catalog_service.core.ports.repository import ImageStorePort, ItemRepositoryPort

logger = logging.getLogger(__name__)


def parse_item_id(raw) -> int:
    """Item ids arrive as path text; anything but a plain integer is a client fault."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValidationError(f"invalid ID: {raw}") from None


class ItemQueryService:
    """Read paths over the item repository."""

    def __init__(self, repository: ItemRepositoryPort):
        self.repository = repository

    def get_item(self, item_id) -> Item:
        return self.repository.get_by_id(parse_item_id(item_id))

    def list_items(self) -> List[ItemSummary]:
        return self.repository.list_all()

    def search_items(self, keyword: str) -> List[ItemSummary]:
        return self.repository.search(keyword)


class ItemService(ItemQueryService):
    def __init__(self, repository: ItemRepositoryPort, image_store: ImageStorePort):
        super().__init__(repository)
        self.image_store = image_store

    def submit_item(self, name: str, category: str, image: bytes) -> int:
        """
        Store the image, then the item pointing at it.

        The image is written first; if the item transaction then fails the
        blob stays behind, which is harmless because it is content-addressed.
        """
        if not name or not name.strip():
            raise ValidationError("name is required")
        if not category or not category.strip():
            raise ValidationError("category is required")
        if not image:
            raise ValidationError("image is required")

        logger.info(f"Receive item: {name}, Category: {category}")

        image_name = self.image_store.put(image)
        return self.repository.create(name, category, image_name)

    def get_image(self, reference: str) -> bytes:
        return self.image_store.get(reference)
