#storefront/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)

    #wlasciciel: zalogowany user albo anonimowa sesja, nigdy oba puste
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True)
    session_id = Column(String(64), unique=True, index=True)

    coupon_id = Column(Integer, ForeignKey("coupons.id"))
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("user_id IS NOT NULL OR session_id IS NOT NULL", name="ck_carts_owner"),
    )

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        order_by="CartItemModel.id",
        cascade="all, delete-orphan",
    )
    coupon = relationship("CouponModel")
