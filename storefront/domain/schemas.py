# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Dict
from decimal import Decimal
from datetime import datetime
from enum import Enum

from storefront.utils.settings import DEFAULT_PER_PAGE


# =====================================================
# INPUT
# =====================================================
class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(1, ge=1, description="Ilość produktu (min. 1)")
    variant_id: int | None = Field(None, gt=0, description="ID wariantu produktu")
    options: Dict[str, str] | None = Field(None, description="Dowolne opcje, zapisywane bez walidacji")


class QuantityIn(BaseModel):
    """Schema dla zmiany ilości; 0 lub mniej usuwa pozycję."""

    quantity: int


class CouponIn(BaseModel):
    """Schema dla kodu kuponu."""

    code: str = Field(..., min_length=1, max_length=50)

    @field_validator("code")
    @classmethod
    def strip_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Kod kuponu nie może być pusty")
        return value


class ProductSort(str, Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NEWEST = "newest"
    RATING = "rating"
    BESTSELLING = "bestselling"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"

    @classmethod
    def parse(cls, value: str | None) -> "ProductSort":
        try:
            return cls(value) if value else cls.RELEVANCE
        except ValueError:
            return cls.RELEVANCE


class ProductFilters(BaseModel):
    """Filtry listy produktow, kazde obecne pole to jeden warunek (AND)."""

    category: str | None = None
    brand: str | None = None
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)
    in_stock: bool = False
    featured: bool = False
    on_sale: bool = False
    new: bool = False
    min_rating: float | None = Field(None, ge=0, le=5)
    search: str | None = None


class PageRequest(BaseModel):
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE
    sort: ProductSort = ProductSort.RELEVANCE


# =====================================================
# OUTPUT
# =====================================================
class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str
    parent_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class CategoryTreeOut(CategoryOut):
    subcategories: List[CategoryOut] = []


class CategoryDetailOut(CategoryTreeOut):
    parent: CategoryOut | None = None


class CategoryCountOut(CategoryOut):
    product_count: int


class BrandOut(BaseModel):
    id: int
    name: str
    slug: str
    logo: str | None = None

    model_config = ConfigDict(from_attributes=True)


class BrandCountOut(BrandOut):
    product_count: int


class ImageOut(BaseModel):
    url: str
    alt: str | None = None
    is_primary: bool = False

    model_config = ConfigDict(from_attributes=True)


class ProductListItem(BaseModel):
    """Produkt na liscie: kategoria, marka i zdjecie glowne (jesli jest)."""

    id: int
    sku: str
    name: str
    slug: str
    short_description: str | None = None
    price: Decimal
    compare_at_price: Decimal | None = None
    stock: int
    is_featured: bool
    is_new: bool
    is_on_sale: bool
    avg_rating: float
    review_count: int
    category: CategoryOut | None = None
    brand: BrandOut | None = None
    primary_image: ImageOut | None = None

    model_config = ConfigDict(from_attributes=True)


class AttributeValueOut(BaseModel):
    value: str
    slug: str
    color_hex: str | None = None

    model_config = ConfigDict(from_attributes=True)


class VariantOut(BaseModel):
    id: int
    sku: str
    price: Decimal | None = None
    stock: int
    attribute_values: List[AttributeValueOut] = []

    model_config = ConfigDict(from_attributes=True)


class TagOut(BaseModel):
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class ReviewOut(BaseModel):
    id: int
    rating: int
    title: str | None = None
    content: str | None = None
    is_verified_purchase: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductDetailOut(ProductListItem):
    description: str | None = None
    images: List[ImageOut] = []
    variants: List[VariantOut] = []
    tags: List[TagOut] = []
    view_count: int


class ProductDetailPage(BaseModel):
    product: ProductDetailOut
    reviews: List[ReviewOut]
    related_products: List[ProductListItem]


class PaginationOut(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class ProductPage(BaseModel):
    products: List[ProductListItem]
    pagination: PaginationOut


class SearchHit(BaseModel):
    id: int
    name: str
    slug: str
    price: Decimal
    image: str | None = None


class CouponOut(BaseModel):
    code: str
    type: str
    value: Decimal
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CartItemOut(BaseModel):
    """Schema dla pozycji w koszyku (response)."""

    id: int
    product_id: int
    variant_id: int | None = None
    name: str
    slug: str
    image: str | None = None
    quantity: int
    price: Decimal
    line_total: Decimal
    options: Dict[str, str] | None = None


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int | None = None
    session_id: str | None = None
    coupon: CouponOut | None = None
    items: List[CartItemOut]
    item_count: int
    subtotal: Decimal
    discount: Decimal
    shipping: Decimal
    total: Decimal
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CartCountOut(BaseModel):
    cart_id: int
    item_count: int
