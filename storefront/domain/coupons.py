# storefront/domain/coupons.py
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.data.models.coupon import CouponModel
from storefront.domain.errors import (
    InvalidCouponError,
    CouponExpiredError,
    CouponLimitReachedError,
    MinimumOrderNotMetError,
)


class CouponType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_SHIPPING = "free_shipping"


def normalize_code(code: str) -> str:
    return code.strip().upper()


def _as_utc(value: datetime) -> datetime:
    #sqlite zwraca naive datetime, traktujemy jako UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_coupon(
    coupon: CouponModel | None,
    subtotal: Decimal,
    now: datetime | None = None,
) -> CouponModel:
    """
    Sprawdza czy kupon moze zostac przypiety do koszyka.

    Kolejnosc: istnienie + aktywnosc -> waznosc -> limit uzyc -> minimalna kwota.
    Pierwszy nieudany warunek przerywa walidacje. Brak efektow ubocznych.
    """
    now = now or datetime.now(timezone.utc)

    if coupon is None or not coupon.is_active:
        raise InvalidCouponError("Invalid coupon code")

    # kupon jeszcze nie wystartowal - z punktu widzenia klienta nie istnieje
    if coupon.starts_at is not None and _as_utc(coupon.starts_at) > now:
        raise InvalidCouponError("Invalid coupon code")

    if coupon.expires_at is not None and _as_utc(coupon.expires_at) < now:
        raise CouponExpiredError("Coupon has expired")

    if coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit:
        raise CouponLimitReachedError("Coupon usage limit reached")

    if coupon.min_order_amount is not None and subtotal < coupon.min_order_amount:
        raise MinimumOrderNotMetError(f"Minimum order amount is {coupon.min_order_amount}")

    return coupon


def coupon_discount(coupon: CouponModel | None, subtotal: Decimal) -> Decimal:
    if coupon is None:
        return Decimal("0")

    if coupon.type == CouponType.PERCENTAGE.value:
        discount = subtotal * Decimal(coupon.value) / Decimal("100")
        if coupon.max_discount is not None:
            discount = min(discount, Decimal(coupon.max_discount))
        return discount

    if coupon.type == CouponType.FIXED.value:
        # nie przycinamy do subtotal, total i tak ma podloge 0
        return Decimal(coupon.value)

    # free_shipping dziala na wysylke, nie na cene
    return Decimal("0")
