# storefront/api/__init__.py
from fastapi import APIRouter
from storefront.api.routers import health, products, categories, brands, carts

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(products.router)
api_router.include_router(categories.router)
api_router.include_router(brands.router)
api_router.include_router(carts.router)
