from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from catalog_service.adapters.secondary.database.config import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)

    items = relationship("ItemModel", back_populates="category")


class ItemModel(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    image_name = Column(String(255), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    category = relationship("CategoryModel", back_populates="items")
