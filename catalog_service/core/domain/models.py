from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Item(BaseModel):
    """Full item view, including the stored image reference."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    image_name: Optional[str] = None


class ItemSummary(BaseModel):
    """List/search projection: the image reference is not exposed here."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    category: str


class Items(BaseModel):
    items: List[ItemSummary]


class Message(BaseModel):
    message: str


class ItemCreated(Message):
    id: int
