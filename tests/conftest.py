# tests/conftest.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, get_db
from storefront.data.models import (
    UserModel,
    CategoryModel,
    BrandModel,
    ProductModel,
    ProductImageModel,
    ProductVariantModel,
    AttributeModel,
    AttributeValueModel,
    ReviewModel,
    CouponModel,
)
from storefront.main import create_app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# produkty z danych referencyjnych sklepu: (sku, name, slug, price, category, brand, stock, flagi, rating, sold)
REFERENCE_PRODUCTS = [
    ("IPHONE15-PRO", "iPhone 15 Pro", "iphone-15-pro", "1199.00", "smartphones", "apple", 50,
     {"is_featured": True, "is_new": True}, 4.8, 89),
    ("GALAXY-S24", "Samsung Galaxy S24 Ultra", "samsung-galaxy-s24-ultra", "1299.00", "smartphones", "samsung", 35,
     {"is_featured": True}, 4.7, 45),
    ("MACBOOK-PRO-16", 'MacBook Pro 16"', "macbook-pro-16", "2499.00", "laptops", "apple", 20,
     {"is_featured": True}, 4.9, 34),
    ("SONY-WH1000", "Sony WH-1000XM5", "sony-wh-1000xm5", "349.00", "audio", "sony", 100,
     {"is_on_sale": True}, 4.6, 456),
    ("AIRPODS-PRO", "AirPods Pro (2nd Gen)", "airpods-pro-2", "249.00", "audio", "apple", 150,
     {"is_featured": True, "is_new": True}, 4.7, 890),
    ("NIKE-AIRMAX", "Nike Air Max 90", "nike-air-max-90", "130.00", "men", "nike", 200,
     {}, 4.5, 1234),
    ("ADIDAS-ULTRA", "Adidas Ultraboost Light", "adidas-ultraboost-light", "190.00", "men", "adidas", 85,
     {"is_on_sale": True}, 4.4, 567),
    ("IKEA-MALM", "IKEA MALM Bed Frame", "ikea-malm-bed-frame", "299.00", "furniture", "ikea", 45,
     {}, 4.3, 123),
    ("IPAD-PRO", 'iPad Pro 12.9"', "ipad-pro-12-9", "1099.00", "smartphones", "apple", 30,
     {"is_featured": True}, 4.8, 156),
]

# dodatkowe produkty do przypadkow brzegowych
EXTRA_PRODUCTS = [
    ("CHARGER-MAG", "MagSafe Wireless Charger", "magsafe-wireless-charger", "100.00", "accessories", "apple", 25,
     {}, 4.1, 300),
    ("CABLE-USBC", "USB-C Cable", "usb-c-cable", "20.00", "accessories", "samsung", 10,
     {}, 3.9, 780),
    ("SONY-PS-VR", "Sony PlayStation VR", "sony-playstation-vr", "150.00", "audio", "sony", 0,
     {}, 4.0, 12),
    ("OLD-PHONE", "Discontinued Phone", "discontinued-phone", "499.00", "smartphones", "samsung", 5,
     {"is_active": False}, 3.0, 2),
]


@pytest.fixture
def catalog(db):
    now = datetime.now(timezone.utc)

    user = UserModel(email="demo@example.com", first_name="Demo", last_name="User")
    db.add(user)

    electronics = CategoryModel(name="Electronics", slug="electronics", sort_order=1)
    clothing = CategoryModel(name="Clothing", slug="clothing", sort_order=2)
    home = CategoryModel(name="Home & Garden", slug="home-garden", sort_order=3)
    categories = {
        "electronics": electronics,
        "clothing": clothing,
        "home-garden": home,
        "smartphones": CategoryModel(name="Smartphones", slug="smartphones", parent=electronics, sort_order=1),
        "laptops": CategoryModel(name="Laptops", slug="laptops", parent=electronics, sort_order=2),
        "audio": CategoryModel(name="Audio", slug="audio", parent=electronics, sort_order=3),
        "accessories": CategoryModel(name="Accessories", slug="accessories", parent=electronics, sort_order=4),
        "men": CategoryModel(name="Men", slug="men", parent=clothing, sort_order=1),
        "furniture": CategoryModel(name="Furniture", slug="furniture", parent=home, sort_order=1),
        "archive": CategoryModel(name="Archive", slug="archive", parent=electronics, sort_order=9, is_active=False),
    }
    db.add_all(categories.values())

    brands = {
        slug: BrandModel(name=name, slug=slug)
        for slug, name in [
            ("apple", "Apple"),
            ("samsung", "Samsung"),
            ("sony", "Sony"),
            ("nike", "Nike"),
            ("adidas", "Adidas"),
            ("ikea", "IKEA"),
        ]
    }
    db.add_all(brands.values())

    products = {}
    for sku, name, slug, price, category, brand, stock, flags, rating, sold in REFERENCE_PRODUCTS + EXTRA_PRODUCTS:
        product = ProductModel(
            sku=sku,
            name=name,
            slug=slug,
            description=f"{name} from the reference catalog.",
            price=Decimal(price),
            category=categories[category],
            brand=brands[brand],
            stock=stock,
            avg_rating=rating,
            sold_count=sold,
            **flags,
        )
        # zdjecie glowne tylko dla produktow z katalogu referencyjnego
        if sku != "CABLE-USBC":
            product.images = [
                ProductImageModel(url=f"/images/products/{slug}-side.svg", alt=name, is_primary=False, sort_order=2),
                ProductImageModel(url=f"/images/products/{slug}.svg", alt=name, is_primary=True, sort_order=1),
            ]
        products[sku] = product
    db.add_all(products.values())

    storage = AttributeModel(name="Storage", slug="storage", type="select")
    gb256 = AttributeValueModel(attribute=storage, value="256GB", slug="256gb", sort_order=1)
    variant = ProductVariantModel(product=products["IPHONE15-PRO"], sku="IPHONE15-PRO-256", price=Decimal("1299.00"), stock=10)
    variant.attribute_values = [gb256]
    db.add(variant)

    db.add_all([
        ReviewModel(product=products["IPHONE15-PRO"], user=user, rating=5, title="Great", is_approved=True),
        ReviewModel(product=products["IPHONE15-PRO"], user=user, rating=1, title="Spam", is_approved=False),
    ])

    coupons = {
        c.code: c
        for c in [
            CouponModel(code="WELCOME10", type="percentage", value=Decimal("10"), min_order_amount=Decimal("50")),
            CouponModel(code="SAVE20", type="percentage", value=Decimal("20"),
                        min_order_amount=Decimal("200"), max_discount=Decimal("100")),
            CouponModel(code="FLAT50", type="fixed", value=Decimal("50"), min_order_amount=Decimal("150")),
            CouponModel(code="FREESHIP", type="free_shipping", value=Decimal("0"), min_order_amount=Decimal("0")),
            CouponModel(code="EXPIRED", type="fixed", value=Decimal("10"), expires_at=now - timedelta(days=1)),
            CouponModel(code="MAXEDOUT", type="fixed", value=Decimal("10"), usage_limit=5, usage_count=5),
            CouponModel(code="DISABLED", type="fixed", value=Decimal("10"), is_active=False),
            CouponModel(code="SOON", type="fixed", value=Decimal("10"), starts_at=now + timedelta(days=1)),
        ]
    }
    db.add_all(coupons.values())

    db.commit()

    return {
        "user": user,
        "categories": categories,
        "brands": brands,
        "products": products,
        "variant": variant,
        "coupons": coupons,
    }


@pytest.fixture
def client(session_factory, catalog):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
