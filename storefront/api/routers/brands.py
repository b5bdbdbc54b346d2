# storefront/api/routers/brands.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.routers.products import product_filters, page_request
from storefront.data.database import get_db
from storefront.domain.schemas import BrandOut, BrandCountOut, ProductFilters, PageRequest, ProductPage
from storefront.services.brand_service import BrandService
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/brands", tags=["brands"])


@router.get("", response_model=List[BrandOut])
def list_brands(db: Session = Depends(get_db)):
    return BrandService(db).get_all_brands()


@router.get("/counts", response_model=List[BrandCountOut])
def brand_counts(db: Session = Depends(get_db)):
    return BrandService(db).get_brands_with_product_count()


@router.get("/{slug}/products", response_model=ProductPage)
def brand_products(
    slug: str,
    filters: ProductFilters = Depends(product_filters),
    paging: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    if not BrandService(db).get_brand_by_slug(slug):
        raise HTTPException(status_code=404, detail={"kind": "NotFound", "message": "Brand not found"})

    filters = filters.model_copy(update={"brand": slug})
    return ProductService(db).get_products(filters, paging)
