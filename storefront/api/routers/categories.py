# storefront/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.routers.products import product_filters, page_request
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CategoryOut,
    CategoryTreeOut,
    CategoryDetailOut,
    CategoryCountOut,
    ProductFilters,
    PageRequest,
    ProductPage,
)
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CategoryService(db).get_all_categories()


@router.get("/tree", response_model=List[CategoryTreeOut])
def category_tree(db: Session = Depends(get_db)):
    return CategoryService(db).get_parent_categories()


@router.get("/counts", response_model=List[CategoryCountOut])
def category_counts(db: Session = Depends(get_db)):
    return CategoryService(db).get_categories_with_product_count()


@router.get("/{slug}", response_model=CategoryDetailOut)
def get_category(slug: str, db: Session = Depends(get_db)):
    category = CategoryService(db).get_category_by_slug(slug)
    if not category:
        raise HTTPException(status_code=404, detail={"kind": "NotFound", "message": "Category not found"})
    return category


@router.get("/{slug}/products", response_model=ProductPage)
def category_products(
    slug: str,
    filters: ProductFilters = Depends(product_filters),
    paging: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    if not CategoryService(db).get_category_by_slug(slug):
        raise HTTPException(status_code=404, detail={"kind": "NotFound", "message": "Category not found"})

    filters = filters.model_copy(update={"category": slug})
    return ProductService(db).get_products(filters, paging)
