# storefront/repos/product_repo.py
from sqlalchemy import select, func, update
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.product import ProductModel, ProductVariantModel
from storefront.data.models.review import ReviewModel


def _list_options():
    # kategoria, marka i zdjecia (zdjecie glowne wybiera property modelu)
    return (
        selectinload(ProductModel.category),
        selectinload(ProductModel.brand),
        selectinload(ProductModel.images),
    )


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def count_products(self, conditions: list) -> int:
        return self.db.execute(
            select(func.count()).select_from(ProductModel).where(*conditions)
        ).scalar_one()

    def find_products(
        self,
        conditions: list,
        order_by: list,
        limit: int,
        offset: int = 0,
    ) -> list[ProductModel]:
        stmt = (
            select(ProductModel)
            .where(*conditions)
            .options(*_list_options())
            .order_by(*order_by)
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_with_details(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .where(ProductModel.id == product_id)
            .options(*_list_options(), selectinload(ProductModel.variants))
        ).scalar_one_or_none()

    def get_active_product_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .where(ProductModel.slug == slug, ProductModel.is_active.is_(True))
            .options(
                *_list_options(),
                selectinload(ProductModel.variants).selectinload(ProductVariantModel.attribute_values),
                selectinload(ProductModel.tags),
            )
        ).scalar_one_or_none()

    def get_approved_reviews(self, product_id: int, limit: int = 10) -> list[ReviewModel]:
        return list(self.db.execute(
            select(ReviewModel)
            .where(ReviewModel.product_id == product_id, ReviewModel.is_approved.is_(True))
            .order_by(ReviewModel.created_at.desc())
            .limit(limit)
        ).scalars().all())

    def get_variant(self, variant_id: int) -> ProductVariantModel | None:
        return self.db.get(ProductVariantModel, variant_id)

    def increment_view_count(self, product_id: int) -> None:
        self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(view_count=ProductModel.view_count + 1)
        )
        self.db.commit()
