# storefront/domain/pricing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.coupon import CouponModel
from storefront.domain.coupons import CouponType, coupon_discount
from storefront.utils.settings import FREE_SHIPPING_THRESHOLD, FLAT_SHIPPING_RATE

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class ShippingPolicy(BaseModel):
    """Niemutowalna konfiguracja wysylki przekazywana do CartService."""

    free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD
    flat_rate: Decimal = FLAT_SHIPPING_RATE

    model_config = ConfigDict(frozen=True)


class CartTotals(BaseModel):
    subtotal: Decimal
    discount: Decimal
    shipping: Decimal
    total: Decimal

    model_config = ConfigDict(frozen=True)


def calculate_subtotal(items: Iterable[CartItemModel]) -> Decimal:
    # cena snapshotu z koszyka, nie aktualna cena produktu
    return to_money(sum((Decimal(i.price) * i.quantity for i in items), ZERO))


def calculate_totals(
    items: Iterable[CartItemModel],
    coupon: CouponModel | None,
    policy: ShippingPolicy | None = None,
) -> CartTotals:
    """Wylicza sumy koszyka, zawsze od nowa, nic nie jest zapisywane."""
    policy = policy or ShippingPolicy()
    items = list(items)
    subtotal = calculate_subtotal(items)

    discount = to_money(coupon_discount(coupon, subtotal)) if subtotal > 0 else ZERO

    if coupon is not None and coupon.type == CouponType.FREE_SHIPPING.value:
        shipping = ZERO
    elif subtotal >= policy.free_shipping_threshold:
        shipping = ZERO
    else:
        shipping = to_money(policy.flat_rate)

    total = max(ZERO, subtotal - discount + shipping)

    return CartTotals(
        subtotal=subtotal,
        discount=discount,
        shipping=shipping,
        total=to_money(total),
    )
