from abc import ABC, abstractmethod
from typing import Any, List, Optional
from catalog_service.core.domain.models import Item, ItemSummary

# Whatever unit-of-work object the storage adapter passes around
TransactionHandle = Any


class CategoryRegistryPort(ABC):
    @abstractmethod
    def resolve_or_create(self, name: str, session: TransactionHandle) -> int:
        pass


class ItemRepositoryPort(ABC):
    @abstractmethod
    def create(self, name: str, category: str, image_name: Optional[str]) -> int:
        pass

    @abstractmethod
    def get_by_id(self, item_id: int) -> Item:
        pass

    @abstractmethod
    def list_all(self) -> List[ItemSummary]:
        pass

    @abstractmethod
    def search(self, keyword: str) -> List[ItemSummary]:
        pass


class ImageStorePort(ABC):
    @abstractmethod
    def put(self, data: bytes) -> str:
        pass

    @abstractmethod
    def get(self, reference: str) -> bytes:
        pass
