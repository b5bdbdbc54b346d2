# storefront/repos/brand_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.brand import BrandModel
from storefront.data.models.product import ProductModel


class BrandRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_slug(self, slug: str) -> BrandModel | None:
        return self.db.execute(
            select(BrandModel).where(BrandModel.slug == slug)
        ).scalar_one_or_none()

    def get_active(self) -> list[BrandModel]:
        return list(self.db.execute(
            select(BrandModel)
            .where(BrandModel.is_active.is_(True))
            .order_by(BrandModel.name)
        ).scalars().all())

    def get_active_with_product_count(self) -> list[dict]:
        rows = self.db.execute(
            select(
                BrandModel.id,
                BrandModel.name,
                BrandModel.slug,
                BrandModel.logo,
                func.count(ProductModel.id).label("product_count"),
            )
            .outerjoin(ProductModel, ProductModel.brand_id == BrandModel.id)
            .where(BrandModel.is_active.is_(True))
            .group_by(BrandModel.id)
            .order_by(BrandModel.name)
        ).all()
        return [dict(r._mapping) for r in rows]
