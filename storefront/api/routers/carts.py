#storefront/api/routers/carts.py
import secrets

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import StoreError
from storefront.domain.schemas import (
    ItemIn,
    QuantityIn,
    CouponIn,
    CartOut,
    CartCountOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


def new_session_id() -> str:
    return secrets.token_urlsafe(16)


def get_cart_owner(
    user_id: int | None = Query(None, gt=0),
    session_id: str | None = Query(None, min_length=8, max_length=64),
) -> dict:
    #sesje nadaje warstwa sesji, jesli jej nie ma generujemy nowy token
    if user_id is None and not session_id:
        session_id = new_session_id()
    return {"user_id": user_id, "session_id": session_id}


def to_http_error(e: StoreError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get("", response_model=CartOut)
def get_cart(owner: dict = Depends(get_cart_owner), db: Session = Depends(get_db)):
    svc = get_service(db)
    return svc.get_or_create_cart(**owner)


@router.get("/count", response_model=CartCountOut)
def get_cart_count(owner: dict = Depends(get_cart_owner), db: Session = Depends(get_db)):
    svc = get_service(db)
    cart = svc.get_or_create_cart(**owner)
    return {"cart_id": cart["cart_id"], "item_count": cart["item_count"]}


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    owner: dict = Depends(get_cart_owner),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    cart = svc.get_or_create_cart(**owner)
    try:
        return svc.add_item(
            cart_id=cart["cart_id"],
            product_id=payload.product_id,
            quantity=payload.quantity,
            variant_id=payload.variant_id,
            options=payload.options,
        )
    except StoreError as e:
        raise to_http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/items/{item_id}", response_model=CartOut)
def update_item(
    item_id: int,
    payload: QuantityIn,
    owner: dict = Depends(get_cart_owner),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    cart = svc.get_or_create_cart(**owner)
    try:
        return svc.update_item_quantity(cart["cart_id"], item_id, payload.quantity)
    except StoreError as e:
        raise to_http_error(e)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    owner: dict = Depends(get_cart_owner),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    cart = svc.get_or_create_cart(**owner)
    try:
        return svc.remove_item(cart["cart_id"], item_id)
    except StoreError as e:
        raise to_http_error(e)


@router.delete("", response_model=CartOut)
def clear_cart(owner: dict = Depends(get_cart_owner), db: Session = Depends(get_db)):
    svc = get_service(db)
    cart = svc.get_or_create_cart(**owner)
    try:
        return svc.clear_cart(cart["cart_id"])
    except StoreError as e:
        raise to_http_error(e)


@router.post("/coupon", response_model=CartOut)
def apply_coupon(
    payload: CouponIn,
    owner: dict = Depends(get_cart_owner),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    cart = svc.get_or_create_cart(**owner)
    try:
        return svc.apply_coupon(cart["cart_id"], payload.code)
    except StoreError as e:
        raise to_http_error(e)


@router.delete("/coupon", response_model=CartOut)
def remove_coupon(owner: dict = Depends(get_cart_owner), db: Session = Depends(get_db)):
    svc = get_service(db)
    cart = svc.get_or_create_cart(**owner)
    try:
        return svc.remove_coupon(cart["cart_id"])
    except StoreError as e:
        raise to_http_error(e)
