# storefront/api/routers/products.py
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    ProductFilters,
    PageRequest,
    ProductSort,
    ProductPage,
    ProductListItem,
    ProductDetailOut,
    ProductDetailPage,
    SearchHit,
)
from storefront.services.product_service import ProductService
from storefront.utils.settings import DEFAULT_PER_PAGE

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


def product_filters(
    category: str | None = Query(None),
    brand: str | None = Query(None),
    price_min: Decimal | None = Query(None, ge=0),
    price_max: Decimal | None = Query(None, ge=0),
    in_stock: bool = Query(False),
    featured: bool = Query(False),
    sale: bool = Query(False),
    new: bool = Query(False),
    rating: float | None = Query(None, ge=0, le=5),
    q: str | None = Query(None, max_length=100),
) -> ProductFilters:
    return ProductFilters(
        category=category,
        brand=brand,
        min_price=price_min,
        max_price=price_max,
        in_stock=in_stock,
        featured=featured,
        on_sale=sale,
        new=new,
        min_rating=rating,
        search=q,
    )


def _parse_int(value: str | None, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def page_request(
    page: str | None = Query(None),
    per_page: str | None = Query(None),
    sort: str | None = Query(None),
) -> PageRequest:
    # nieparsowalne -> domyslne, nieznany sort -> relevance, strona < 1 przycinana w serwisie
    return PageRequest(
        page=_parse_int(page, 1),
        per_page=_parse_int(per_page, DEFAULT_PER_PAGE),
        sort=ProductSort.parse(sort),
    )


@router.get("", response_model=ProductPage)
def list_products(
    filters: ProductFilters = Depends(product_filters),
    paging: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_products(filters, paging)


@router.get("/featured", response_model=List[ProductListItem])
def featured_products(limit: int = Query(8, ge=1, le=48), db: Session = Depends(get_db)):
    return get_service(db).get_featured_products(limit)


@router.get("/new", response_model=List[ProductListItem])
def new_products(limit: int = Query(8, ge=1, le=48), db: Session = Depends(get_db)):
    return get_service(db).get_new_products(limit)


@router.get("/sale", response_model=List[ProductListItem])
def sale_products(limit: int = Query(8, ge=1, le=48), db: Session = Depends(get_db)):
    return get_service(db).get_sale_products(limit)


@router.get("/search", response_model=List[SearchHit])
def search_products(q: str = Query(""), db: Session = Depends(get_db)):
    #podpowiedzi dopiero od 2 znakow
    if len(q.strip()) < 2:
        return []

    products = get_service(db).search_products(q.strip(), 10)
    return [
        {
            "id": p.id,
            "name": p.name,
            "slug": p.slug,
            "price": p.price,
            "image": p.primary_image.url if p.primary_image else None,
        }
        for p in products
    ]


@router.get("/id/{product_id}", response_model=ProductDetailOut)
def get_product_by_id(product_id: int, db: Session = Depends(get_db)):
    product = get_service(db).get_product_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail={"kind": "NotFound", "message": "Product not found"})
    return product


@router.get("/{slug}", response_model=ProductDetailPage)
def get_product(slug: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    product = svc.get_product_by_slug(slug)
    if not product:
        raise HTTPException(status_code=404, detail={"kind": "NotFound", "message": "Product not found"})

    return {
        "product": product,
        "reviews": svc.get_product_reviews(product.id),
        "related_products": svc.get_related_products(product.id, product.category_id),
    }
