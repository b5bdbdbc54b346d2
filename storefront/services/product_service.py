# storefront/services/product_service.py
import math
from typing import Dict, Any

from sqlalchemy import false, or_
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import ProductFilters, PageRequest, ProductSort
from storefront.repos.product_repo import ProductRepo
from storefront.repos.category_repo import CategoryRepo
from storefront.repos.brand_repo import BrandRepo
from storefront.utils.settings import MAX_PER_PAGE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#sortowanie: klucz -> lista wyrazen ORDER BY
SORT_ORDER = {
    ProductSort.PRICE_ASC: [ProductModel.price.asc()],
    ProductSort.PRICE_DESC: [ProductModel.price.desc()],
    ProductSort.NEWEST: [ProductModel.created_at.desc()],
    ProductSort.RATING: [ProductModel.avg_rating.desc()],
    ProductSort.BESTSELLING: [ProductModel.sold_count.desc()],
    ProductSort.NAME_ASC: [ProductModel.name.asc()],
    ProductSort.NAME_DESC: [ProductModel.name.desc()],
    ProductSort.RELEVANCE: [ProductModel.is_featured.desc()],
}


class ProductService:
    """
    Zapytania o produkty (tylko odczyt, poza licznikiem wyswietlen).
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)
        self.brands = BrandRepo(db)

    def build_conditions(self, filters: ProductFilters) -> list:
        """Kazdy ustawiony filtr to jeden warunek WHERE, laczone przez AND."""
        conditions = [ProductModel.is_active.is_(True)]

        # nieznany slug kategorii/marki -> zero wynikow, nie brak filtra
        if filters.category:
            category = self.categories.get_by_slug(filters.category)
            conditions.append(ProductModel.category_id == category.id if category else false())

        if filters.brand:
            brand = self.brands.get_by_slug(filters.brand)
            conditions.append(ProductModel.brand_id == brand.id if brand else false())

        if filters.min_price is not None:
            conditions.append(ProductModel.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(ProductModel.price <= filters.max_price)

        if filters.in_stock:
            conditions.append(ProductModel.stock > 0)
        if filters.featured:
            conditions.append(ProductModel.is_featured.is_(True))
        if filters.on_sale:
            conditions.append(ProductModel.is_on_sale.is_(True))
        if filters.new:
            conditions.append(ProductModel.is_new.is_(True))

        if filters.min_rating is not None:
            conditions.append(ProductModel.avg_rating >= filters.min_rating)

        if filters.search:
            term = f"%{filters.search}%"
            conditions.append(
                or_(
                    ProductModel.name.ilike(term),
                    ProductModel.description.ilike(term),
                    ProductModel.sku.ilike(term),
                )
            )

        return conditions

    def get_products(
        self,
        filters: ProductFilters | None = None,
        page_request: PageRequest | None = None,
    ) -> Dict[str, Any]:
        filters = filters or ProductFilters()
        page_request = page_request or PageRequest()

        page = max(page_request.page, 1)
        per_page = min(max(page_request.per_page, 1), MAX_PER_PAGE)

        conditions = self.build_conditions(filters)

        #count liczony na tych samych warunkach co lista
        total = self.repo.count_products(conditions)
        total_pages = math.ceil(total / per_page)

        products = self.repo.find_products(
            conditions,
            order_by=SORT_ORDER[page_request.sort],
            limit=per_page,
            offset=(page - 1) * per_page,
        )

        logger.info(
            f"Lista produktow: {filters.model_dump(exclude_defaults=True)}, "
            f"sort={page_request.sort.value}, strona {page}/{total_pages}, total={total}"
        )

        return {
            "products": products,
            "pagination": {
                "page": page,
                "per_page": per_page,
                "total": total,
                "total_pages": total_pages,
            },
        }

    def get_product_by_slug(self, slug: str) -> ProductModel | None:
        product = self.repo.get_active_product_by_slug(slug)

        if product:
            self.repo.increment_view_count(product.id)

        return product

    def get_product_reviews(self, product_id: int, limit: int = 10):
        return self.repo.get_approved_reviews(product_id, limit)

    def get_product_by_id(self, product_id: int) -> ProductModel | None:
        return self.repo.get_product_with_details(product_id)

    def _flagged(self, flag, limit: int) -> list[ProductModel]:
        return self.repo.find_products(
            [flag.is_(True), ProductModel.is_active.is_(True)],
            order_by=[ProductModel.created_at.desc()],
            limit=limit,
        )

    def get_featured_products(self, limit: int = 8) -> list[ProductModel]:
        return self._flagged(ProductModel.is_featured, limit)

    def get_new_products(self, limit: int = 8) -> list[ProductModel]:
        return self._flagged(ProductModel.is_new, limit)

    def get_sale_products(self, limit: int = 8) -> list[ProductModel]:
        return self._flagged(ProductModel.is_on_sale, limit)

    def get_related_products(
        self,
        product_id: int,
        category_id: int | None,
        limit: int = 4,
    ) -> list[ProductModel]:
        conditions = [ProductModel.is_active.is_(True), ProductModel.id != product_id]

        if category_id:
            conditions.append(ProductModel.category_id == category_id)

        return self.repo.find_products(
            conditions,
            order_by=[ProductModel.avg_rating.desc()],
            limit=limit,
        )

    def search_products(self, query: str, limit: int = 10) -> list[ProductModel]:
        term = f"%{query}%"
        return self.repo.find_products(
            [
                ProductModel.is_active.is_(True),
                or_(ProductModel.name.ilike(term), ProductModel.description.ilike(term)),
            ],
            order_by=[],
            limit=limit,
        )
