from sqlalchemy import Column, Integer, ForeignKey, String, Boolean
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class AttributeModel(Base):
    __tablename__ = "attributes"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    type = Column(String, nullable=False, default="select")  # select, color, size
    is_filterable = Column(Boolean, nullable=False, default=True)
    is_required = Column(Boolean, nullable=False, default=False)

    values = relationship(
        "AttributeValueModel",
        back_populates="attribute",
        order_by="AttributeValueModel.sort_order",
        cascade="all, delete-orphan",
    )


class AttributeValueModel(Base):
    __tablename__ = "attribute_values"

    id = Column(Integer, primary_key=True)
    attribute_id = Column(Integer, ForeignKey("attributes.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    color_hex = Column(String)
    sort_order = Column(Integer, nullable=False, default=0)

    attribute = relationship("AttributeModel", back_populates="values")


class VariantAttributeModel(Base):
    __tablename__ = "variant_attributes"

    id = Column(Integer, primary_key=True)
    variant_id = Column(Integer, ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=False, index=True)
    attribute_value_id = Column(
        Integer, ForeignKey("attribute_values.id", ondelete="CASCADE"), nullable=False, index=True
    )
