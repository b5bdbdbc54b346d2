from decimal import Decimal

import pytest

from storefront.domain.schemas import ProductFilters, PageRequest, ProductSort
from storefront.services.product_service import ProductService


@pytest.fixture
def svc(db, catalog):
    return ProductService(db)


def skus(result):
    return [p.sku for p in result["products"]]


def test_in_stock_min_price_sorted_by_price_desc(svc):
    result = svc.get_products(
        ProductFilters(in_stock=True, min_price=Decimal("100")),
        PageRequest(page=1, per_page=12, sort=ProductSort.PRICE_DESC),
    )

    prices = [p.price for p in result["products"]]
    assert result["pagination"] == {"page": 1, "per_page": 12, "total": 10, "total_pages": 1}
    assert prices == sorted(prices, reverse=True)
    assert len(set(prices)) == len(prices)
    assert all(p.stock > 0 and p.price >= 100 for p in result["products"])
    # dolna granica ceny jest wlacznie
    assert "CHARGER-MAG" in skus(result)
    assert "SONY-PS-VR" not in skus(result)


def test_inactive_products_are_never_listed(svc):
    result = svc.get_products(ProductFilters(category="smartphones"), PageRequest(per_page=50))

    assert "OLD-PHONE" not in skus(result)
    assert set(skus(result)) == {"IPHONE15-PRO", "GALAXY-S24", "IPAD-PRO"}


def test_unknown_category_returns_nothing(svc):
    result = svc.get_products(ProductFilters(category="does-not-exist"))

    assert result["products"] == []
    assert result["pagination"]["total"] == 0
    assert result["pagination"]["total_pages"] == 0


def test_unknown_brand_returns_nothing(svc):
    assert svc.get_products(ProductFilters(brand="acme"))["pagination"]["total"] == 0


def test_brand_and_price_filters_are_conjunctive(svc):
    result = svc.get_products(
        ProductFilters(brand="apple", max_price=Decimal("1199.00")),
        PageRequest(per_page=50, sort=ProductSort.PRICE_ASC),
    )

    assert skus(result) == ["CHARGER-MAG", "AIRPODS-PRO", "IPAD-PRO", "IPHONE15-PRO"]


def test_flag_filters(svc):
    assert set(skus(svc.get_products(ProductFilters(on_sale=True)))) == {"SONY-WH1000", "ADIDAS-ULTRA"}
    assert set(skus(svc.get_products(ProductFilters(new=True)))) == {"IPHONE15-PRO", "AIRPODS-PRO"}
    assert svc.get_products(ProductFilters(featured=True))["pagination"]["total"] == 5


def test_min_rating_is_inclusive(svc):
    result = svc.get_products(ProductFilters(min_rating=4.8))

    assert set(skus(result)) == {"IPHONE15-PRO", "MACBOOK-PRO-16", "IPAD-PRO"}


@pytest.mark.parametrize("term", ["airmax", "NIKE", "legacy product", "iphone15-pro"])
def test_search_is_case_insensitive_over_name_description_sku(svc, db, catalog, term):
    catalog["products"]["NIKE-AIRMAX"].description = "A legacy product."
    db.commit()

    result = svc.get_products(ProductFilters(search=term))

    assert result["pagination"]["total"] >= 1
    assert any(term.lower() in (p.name + (p.description or "") + p.sku).lower() for p in result["products"])


def test_pagination_counts_independently_of_page(svc):
    first = svc.get_products(page_request=PageRequest(page=1, per_page=5, sort=ProductSort.NAME_ASC))
    third = svc.get_products(page_request=PageRequest(page=3, per_page=5, sort=ProductSort.NAME_ASC))
    beyond = svc.get_products(page_request=PageRequest(page=9, per_page=5))

    assert first["pagination"]["total"] == 12
    assert first["pagination"]["total_pages"] == 3
    assert len(first["products"]) == 5
    assert len(third["products"]) == 2
    assert beyond["products"] == []
    assert beyond["pagination"]["total"] == 12


@pytest.mark.parametrize("page", [0, -3])
def test_non_positive_page_is_clamped(svc, page):
    result = svc.get_products(page_request=PageRequest(page=page, per_page=5, sort=ProductSort.NAME_ASC))
    first = svc.get_products(page_request=PageRequest(page=1, per_page=5, sort=ProductSort.NAME_ASC))

    assert result["pagination"]["page"] == 1
    assert skus(result) == skus(first)


def test_name_sorting(svc):
    asc = skus(svc.get_products(page_request=PageRequest(per_page=50, sort=ProductSort.NAME_ASC)))
    desc = skus(svc.get_products(page_request=PageRequest(per_page=50, sort=ProductSort.NAME_DESC)))

    assert asc == list(reversed(desc))
    assert asc[0] == "ADIDAS-ULTRA"


def test_bestselling_and_rating_sorting(svc):
    best = svc.get_products(page_request=PageRequest(per_page=3, sort=ProductSort.BESTSELLING))
    rated = svc.get_products(page_request=PageRequest(per_page=1, sort=ProductSort.RATING))

    assert skus(best) == ["NIKE-AIRMAX", "AIRPODS-PRO", "CABLE-USBC"]
    assert skus(rated) == ["MACBOOK-PRO-16"]


def test_relevance_puts_featured_first(svc):
    result = svc.get_products(page_request=PageRequest(per_page=50))
    flags = [p.is_featured for p in result["products"]]

    assert flags == sorted(flags, reverse=True)
    assert flags[:5] == [True] * 5


def test_unknown_sort_falls_back_to_relevance():
    assert ProductSort.parse("cheapest-first") is ProductSort.RELEVANCE
    assert ProductSort.parse(None) is ProductSort.RELEVANCE
    assert ProductSort.parse("price-asc") is ProductSort.PRICE_ASC


def test_rows_are_enriched(svc):
    result = svc.get_products(ProductFilters(search="USB-C"))
    cable = result["products"][0]
    sony = svc.get_products(ProductFilters(search="SONY-WH1000"))["products"][0]

    assert cable.category.slug == "accessories"
    assert cable.brand.slug == "samsung"
    assert cable.primary_image is None
    assert sony.primary_image.url == "/images/products/sony-wh-1000xm5.svg"


def test_product_by_slug_increments_view_count(svc):
    product = svc.get_product_by_slug("iphone-15-pro")
    assert product.view_count == 1

    product = svc.get_product_by_slug("iphone-15-pro")
    assert product.view_count == 2
    assert [v.sku for v in product.variants] == ["IPHONE15-PRO-256"]


def test_product_by_slug_skips_unknown_and_inactive(svc):
    assert svc.get_product_by_slug("nope") is None
    assert svc.get_product_by_slug("discontinued-phone") is None


def test_only_approved_reviews(svc, catalog):
    reviews = svc.get_product_reviews(catalog["products"]["IPHONE15-PRO"].id)

    assert [r.title for r in reviews] == ["Great"]


def test_product_by_id(svc, catalog):
    product = svc.get_product_by_id(catalog["products"]["OLD-PHONE"].id)

    assert product.sku == "OLD-PHONE"
    assert svc.get_product_by_id(9999) is None


def test_flagged_lists(svc):
    assert len(svc.get_featured_products()) == 5
    assert len(svc.get_featured_products(limit=2)) == 2
    assert {p.sku for p in svc.get_new_products()} == {"IPHONE15-PRO", "AIRPODS-PRO"}
    assert {p.sku for p in svc.get_sale_products()} == {"SONY-WH1000", "ADIDAS-ULTRA"}


def test_related_products_share_category_and_exclude_self(svc, catalog):
    iphone = catalog["products"]["IPHONE15-PRO"]

    related = svc.get_related_products(iphone.id, iphone.category_id)

    assert [p.sku for p in related] == ["IPAD-PRO", "GALAXY-S24"]


def test_search_products_matches_name_and_description(svc):
    assert {p.sku for p in svc.search_products("pro")} >= {"IPHONE15-PRO", "MACBOOK-PRO-16", "IPAD-PRO"}
    assert svc.search_products("zzz") == []
