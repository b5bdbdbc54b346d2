# storefront/repos/category_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload, with_loader_criteria

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_slug(self, slug: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel)
            .where(CategoryModel.slug == slug)
            .options(
                selectinload(CategoryModel.parent),
                selectinload(CategoryModel.subcategories.and_(CategoryModel.is_active.is_(True))),
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_active(self) -> list[CategoryModel]:
        return list(self.db.execute(
            select(CategoryModel)
            .where(CategoryModel.is_active.is_(True))
            .order_by(CategoryModel.sort_order, CategoryModel.name)
        ).scalars().all())

    def get_active_roots(self) -> list[CategoryModel]:
        # podkategorie tez tylko aktywne
        return list(self.db.execute(
            select(CategoryModel)
            .where(CategoryModel.is_active.is_(True), CategoryModel.parent_id.is_(None))
            .options(
                selectinload(CategoryModel.subcategories),
                with_loader_criteria(CategoryModel, CategoryModel.is_active.is_(True)),
            )
            .order_by(CategoryModel.sort_order)
            .execution_options(populate_existing=True)
        ).scalars().all())

    def get_active_with_product_count(self) -> list[dict]:
        rows = self.db.execute(
            select(
                CategoryModel.id,
                CategoryModel.name,
                CategoryModel.slug,
                CategoryModel.parent_id,
                func.count(ProductModel.id).label("product_count"),
            )
            .outerjoin(ProductModel, ProductModel.category_id == CategoryModel.id)
            .where(CategoryModel.is_active.is_(True))
            .group_by(CategoryModel.id)
            .order_by(CategoryModel.sort_order)
        ).all()
        return [dict(r._mapping) for r in rows]
