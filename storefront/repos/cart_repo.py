# storefront/repos/cart_repo.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select, delete, update, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel

#dialekty z natywnym INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def _cart_query(self):
        return select(CartModel).options(
            selectinload(CartModel.items)
            .selectinload(CartItemModel.product)
            .selectinload(ProductModel.images),
            selectinload(CartModel.coupon),
        )

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.execute(
            self._cart_query().where(CartModel.id == cart_id)
        ).scalar_one_or_none()

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            self._cart_query().where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_cart_by_session(self, session_id: str) -> CartModel | None:
        return self.db.execute(
            self._cart_query().where(CartModel.session_id == session_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_cart_item(self, cart_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.cart_id == cart_id,
            )
        ).scalar_one_or_none()

    def upsert_cart_item(
        self,
        cart_id: int,
        product_id: int,
        variant_id: int | None,
        quantity: int,
        price: Decimal,
        options: dict | None = None,
    ) -> None:
        """
        Dodaje pozycje albo zwieksza ilosc istniejacej dla (koszyk, produkt, wariant).
        Jedno zapytanie, unique constraint pilnuje zeby nie bylo duplikatow.
        """
        values = {
            "cart_id": cart_id,
            "product_id": product_id,
            "variant_id": variant_id,
            "variant_key": variant_id or 0,
            "quantity": quantity,
            "price": price,
            "options": options,
            "created_at": datetime.now(timezone.utc),
        }
        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)

        if insert is None:
            # inne bazy: zwykly read-modify-write
            existing = self.db.execute(
                select(CartItemModel).where(
                    CartItemModel.cart_id == cart_id,
                    CartItemModel.product_id == product_id,
                    CartItemModel.variant_key == values["variant_key"],
                )
            ).scalar_one_or_none()
            if existing:
                existing.quantity += quantity
            else:
                self.db.add(CartItemModel(**values))
            self.db.flush()
            return

        stmt = insert(CartItemModel).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["cart_id", "product_id", "variant_key"],
            set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
        )
        self.db.execute(stmt)

    def delete_cart_item(self, cart_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.cart_id == cart_id,
            )
        )
        return result.rowcount

    def delete_cart_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.cart_id == cart_id)
        )
        return result.rowcount

    def update_cart(self, cart_id: int, new_data: dict) -> int:
        new_data = {**new_data, "updated_at": datetime.now(timezone.utc)}
        result = self.db.execute(
            update(CartModel).where(CartModel.id == cart_id).values(**new_data)
        )
        return result.rowcount

    def get_item_count(self, cart_id: int) -> int:
        count = self.db.execute(
            select(func.sum(CartItemModel.quantity)).where(CartItemModel.cart_id == cart_id)
        ).scalar()
        return count or 0

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
