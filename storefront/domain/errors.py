# storefront/domain/errors.py


class StoreError(Exception):
    """Bazowy blad domeny sklepu, niesie rodzaj bledu i status HTTP."""

    kind = "StoreError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class NotFoundError(StoreError):
    kind = "NotFound"
    status_code = 404


class InsufficientStockError(StoreError):
    kind = "InsufficientStock"


class InvalidCouponError(StoreError):
    kind = "InvalidCoupon"


class CouponExpiredError(StoreError):
    kind = "CouponExpired"


class CouponLimitReachedError(StoreError):
    kind = "CouponLimitReached"


class MinimumOrderNotMetError(StoreError):
    kind = "MinimumOrderNotMet"
