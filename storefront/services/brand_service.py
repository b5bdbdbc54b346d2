# storefront/services/brand_service.py
from sqlalchemy.orm import Session

from storefront.data.models.brand import BrandModel
from storefront.repos.brand_repo import BrandRepo


class BrandService:
    def __init__(self, db: Session):
        self.repo = BrandRepo(db)

    def get_all_brands(self) -> list[BrandModel]:
        return self.repo.get_active()

    def get_brand_by_slug(self, slug: str) -> BrandModel | None:
        return self.repo.get_by_slug(slug)

    def get_brands_with_product_count(self) -> list[dict]:
        return self.repo.get_active_with_product_count()
