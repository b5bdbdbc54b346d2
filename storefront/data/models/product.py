#storefront/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, ForeignKey, String, Text, Boolean, DateTime, Numeric, Float, CheckConstraint,
)
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    sku = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text)
    short_description = Column(String)

    price = Column(Numeric(10, 2), nullable=False, index=True)
    compare_at_price = Column(Numeric(10, 2))

    category_id = Column(Integer, ForeignKey("categories.id"), index=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), index=True)

    stock = Column(Integer, nullable=False, default=0)

    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    is_new = Column(Boolean, nullable=False, default=False)
    is_on_sale = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    #utrzymywane przez workflow recenzji, tu tylko odczyt
    avg_rating = Column(Float, nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)
    view_count = Column(Integer, nullable=False, default=0)
    sold_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock"),
        CheckConstraint("price > 0", name="ck_products_price"),
    )

    category = relationship("CategoryModel", back_populates="products")
    brand = relationship("BrandModel", back_populates="products")
    images = relationship(
        "ProductImageModel",
        back_populates="product",
        order_by="ProductImageModel.sort_order",
        cascade="all, delete-orphan",
    )
    variants = relationship(
        "ProductVariantModel",
        back_populates="product",
        cascade="all, delete-orphan",
    )
    reviews = relationship(
        "ReviewModel",
        back_populates="product",
        cascade="all, delete-orphan",
    )
    tags = relationship("TagModel", secondary="product_tags", back_populates="products")

    @property
    def primary_image(self):
        return next((img for img in self.images if img.is_primary), None)


class ProductImageModel(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    alt = Column(String)
    is_primary = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="images")


class ProductVariantModel(Base):
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    sku = Column(String, nullable=False, unique=True)
    price = Column(Numeric(10, 2))
    stock = Column(Integer, nullable=False, default=0)
    image = Column(String)
    is_active = Column(Boolean, nullable=False, default=True)

    product = relationship("ProductModel", back_populates="variants")
    attribute_values = relationship("AttributeValueModel", secondary="variant_attributes")
