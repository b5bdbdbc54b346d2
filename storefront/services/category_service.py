# storefront/services/category_service.py
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.repos.category_repo import CategoryRepo


class CategoryService:
    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    def get_all_categories(self) -> list[CategoryModel]:
        return self.repo.get_active()

    def get_parent_categories(self) -> list[CategoryModel]:
        """Aktywne kategorie glowne razem z aktywnymi podkategoriami."""
        return self.repo.get_active_roots()

    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.repo.get_by_slug(slug)

    def get_categories_with_product_count(self) -> list[dict]:
        return self.repo.get_active_with_product_count()
