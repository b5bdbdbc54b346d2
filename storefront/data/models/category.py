#storefront/data/models/category.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text)
    image = Column(String)
    parent_id = Column(Integer, ForeignKey("categories.id"), index=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    parent = relationship("CategoryModel", remote_side=[id], back_populates="subcategories")
    subcategories = relationship(
        "CategoryModel",
        back_populates="parent",
        order_by="CategoryModel.sort_order",
    )
    products = relationship("ProductModel", back_populates="category")
