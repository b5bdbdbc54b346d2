#storefront/data/models/coupon.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric

from storefront.data.database import Base


class CouponModel(Base):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True)
    code = Column(String, nullable=False, unique=True, index=True)  # zawsze UPPERCASE
    description = Column(String)

    type = Column(String, nullable=False, default="percentage")  # percentage, fixed, free_shipping
    value = Column(Numeric(10, 2), nullable=False)
    min_order_amount = Column(Numeric(10, 2))
    max_discount = Column(Numeric(10, 2))

    #licznik zwiekszany dopiero przy zamowieniu, nie przy dodaniu do koszyka
    usage_limit = Column(Integer)
    usage_count = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)
    starts_at = Column(DateTime(timezone=True))
    expires_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
