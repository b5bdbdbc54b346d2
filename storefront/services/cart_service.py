# storefront/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.domain.coupons import normalize_code, validate_coupon
from storefront.domain.errors import NotFoundError, InsufficientStockError, StoreError
from storefront.domain.pricing import ShippingPolicy, calculate_totals, calculate_subtotal, to_money
from storefront.repos.cart_repo import CartRepo
from storefront.repos.coupon_repo import CouponRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y dla domeny cart
    commands (add, update, remove, clear, coupon) modyfikuja stan
    query (get) tylko odczyt, sumy liczone za kazdym razem od nowa
    """

    def __init__(self, db: Session, shipping_policy: ShippingPolicy | None = None):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.coupons = CouponRepo(db)
        self.shipping_policy = shipping_policy or ShippingPolicy()

    def _to_dict(self, cart: CartModel) -> Dict[str, Any]:
        totals = calculate_totals(cart.items, cart.coupon, self.shipping_policy)

        #dict przeksztalcany w jsona przez CartOut
        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "session_id": cart.session_id,
            "coupon": (
                {
                    "code": cart.coupon.code,
                    "type": cart.coupon.type,
                    "value": cart.coupon.value,
                    "description": cart.coupon.description,
                }
                if cart.coupon
                else None
            ),
            "items": [
                {
                    "id": i.id,
                    "product_id": i.product_id,
                    "variant_id": i.variant_id,
                    "name": i.product.name,
                    "slug": i.product.slug,
                    "image": i.product.primary_image.url if i.product.primary_image else None,
                    "quantity": i.quantity,
                    "price": to_money(i.price),
                    "line_total": to_money(Decimal(i.price) * i.quantity),
                    "options": i.options,
                }
                for i in cart.items
            ],
            "item_count": sum(i.quantity for i in cart.items),
            **totals.model_dump(),
            "updated_at": cart.updated_at,
        }

    def _require_cart(self, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)

        if not cart:
            raise NotFoundError("Cart not found")

        return cart

    #query - odczyt
    def get_cart(self, cart_id: int) -> Dict[str, Any]:
        return self._to_dict(self._require_cart(cart_id))

    def get_item_count(self, cart_id: int) -> int:
        self._require_cart(cart_id)
        return self.repo.get_item_count(cart_id)

    def _find_cart(self, user_id: int | None, session_id: str | None) -> CartModel | None:
        if user_id is not None:
            return self.repo.get_cart_by_user(user_id)
        return self.repo.get_cart_by_session(session_id)

    #commands
    def get_or_create_cart(
        self,
        user_id: int | None = None,
        session_id: str | None = None,
    ) -> Dict[str, Any]:
        if user_id is None and not session_id:
            raise ValueError("Koszyk musi miec wlasciciela (user_id albo session_id)")

        existing = self._find_cart(user_id, session_id)
        if existing:
            return self._to_dict(existing)

        #user ma pierwszenstwo, sesja tylko dla anonimowych
        new_cart = CartModel(
            user_id=user_id,
            session_id=session_id if user_id is None else None,
        )

        try:
            created = self.repo.create_cart(new_cart)
        except IntegrityError:
            # rownolegly request zdazyl utworzyc koszyk, unique na wlascicielu
            self.repo.rollback()
            existing = self._find_cart(user_id, session_id)
            if existing is None:
                raise
            return self._to_dict(existing)

        logger.info(f"Utworzono nowy koszyk {created.id} (user={user_id}, session={session_id})")

        return self.get_cart(created.id)

    def add_item(
        self,
        cart_id: int,
        product_id: int,
        quantity: int,
        variant_id: int | None = None,
        options: Dict[str, str] | None = None,
    ) -> Dict[str, Any]:

        # Walidacje
        if quantity <= 0:
            raise ValueError("Ilosc musi byc wieksza niz 0")

        self._require_cart(cart_id)

        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        if variant_id is not None:
            variant = self.products.get_variant(variant_id)
            if not variant or variant.product_id != product.id:
                raise NotFoundError("Product variant not found")

        # stan magazynu tylko sprawdzany, zmniejsza go dopiero zamowienie
        if product.stock < quantity:
            raise InsufficientStockError("Not enough stock")

        try:
            self.repo.upsert_cart_item(
                cart_id=cart_id,
                product_id=product_id,
                variant_id=variant_id,
                quantity=quantity,
                price=product.price,
                options=options,
            )
            self.repo.update_cart(cart_id, {})
            self.repo.commit()
        except Exception as e:
            logger.error(f"Blad podczas dodawania produktu {product_id} do koszyka {cart_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Produkt {product_id} (wariant {variant_id}) x{quantity} dodany do koszyka {cart_id}")

        return self.get_cart(cart_id)

    def update_item_quantity(self, cart_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        # ilosc <= 0 to to samo co usuniecie
        if quantity <= 0:
            return self.remove_item(cart_id, item_id)

        self._require_cart(cart_id)

        item = self.repo.get_cart_item(cart_id, item_id)
        if not item:
            raise NotFoundError("Cart item not found")

        try:
            item.quantity = quantity
            self.repo.update_cart(cart_id, {})
            self.repo.commit()
        except Exception as e:
            logger.error(f"Blad podczas zmiany ilosci pozycji {item_id} w koszyku {cart_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Pozycja {item_id} w koszyku {cart_id}: ilosc {quantity}")

        return self.get_cart(cart_id)

    def remove_item(self, cart_id: int, item_id: int) -> Dict[str, Any]:
        self._require_cart(cart_id)

        #idempotentne, brak pozycji to nie blad
        try:
            deleted = self.repo.delete_cart_item(cart_id, item_id)
            self.repo.update_cart(cart_id, {})
            self.repo.commit()
        except Exception as e:
            logger.error(f"Blad podczas usuwania pozycji {item_id} z koszyka {cart_id}: {e}")
            self.repo.rollback()
            raise

        if deleted:
            logger.info(f"Pozycja {item_id} usunieta z koszyka {cart_id}")

        return self.get_cart(cart_id)

    def clear_cart(self, cart_id: int) -> Dict[str, Any]:
        self._require_cart(cart_id)

        # wyczyszczenie koszyka odpina tez kupon
        try:
            self.repo.delete_cart_items(cart_id)
            self.repo.update_cart(cart_id, {"coupon_id": None})
            self.repo.commit()
        except Exception as e:
            logger.error(f"Blad podczas czyszczenia koszyka {cart_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Koszyk {cart_id} wyczyszczony")

        return self.get_cart(cart_id)

    def apply_coupon(self, cart_id: int, code: str) -> Dict[str, Any]:
        cart = self._require_cart(cart_id)

        normalized = normalize_code(code)
        coupon = self.coupons.get_by_code(normalized)
        subtotal = calculate_subtotal(cart.items)

        try:
            validate_coupon(coupon, subtotal)
        except StoreError as e:
            logger.info(f"Kupon {normalized} odrzucony dla koszyka {cart_id}: {e.kind}")
            raise

        # usage_count nie jest tu zwiekszany, to robi zamowienie
        try:
            self.repo.update_cart(cart_id, {"coupon_id": coupon.id})
            self.repo.commit()
        except Exception as e:
            logger.error(f"Blad podczas przypinania kuponu {normalized} do koszyka {cart_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Kupon {normalized} przypiety do koszyka {cart_id}")

        return self.get_cart(cart_id)

    def remove_coupon(self, cart_id: int) -> Dict[str, Any]:
        self._require_cart(cart_id)

        try:
            self.repo.update_cart(cart_id, {"coupon_id": None})
            self.repo.commit()
        except Exception as e:
            logger.error(f"Blad podczas odpinania kuponu z koszyka {cart_id}: {e}")
            self.repo.rollback()
            raise

        return self.get_cart(cart_id)
