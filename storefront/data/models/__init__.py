#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.category import CategoryModel
from storefront.data.models.brand import BrandModel
from storefront.data.models.product import ProductModel, ProductImageModel, ProductVariantModel
from storefront.data.models.attribute import AttributeModel, AttributeValueModel, VariantAttributeModel
from storefront.data.models.tag import TagModel, ProductTagModel
from storefront.data.models.review import ReviewModel
from storefront.data.models.coupon import CouponModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "BrandModel",
    "ProductModel",
    "ProductImageModel",
    "ProductVariantModel",
    "AttributeModel",
    "AttributeValueModel",
    "VariantAttributeModel",
    "TagModel",
    "ProductTagModel",
    "ReviewModel",
    "CouponModel",
    "CartModel",
    "CartItemModel",
]
