import random

import pytest
from faker import Faker
from hamcrest import assert_that, has_length, is_, is_in

import data_catalog
import factories
import settings
from data_catalog import (
    INVALID_CATEGORIES,
    INVALID_PRODUCT_IDS,
    INVALID_SEARCH_TERMS,
    PAGINATION_CASES,
    PRICE_RANGES,
    SELECT_FIELDS,
    SORT_OPTIONS,
    TITLE_LENGTHS,
    VALID_SEARCH_TERMS,
    PageParams,
    SortOption,
)
from exceptions import InvalidArgument
from product_data import CATEGORIES, CATEGORY_SKU_CODES, sku_category_code


@pytest.fixture(autouse=True)
def seeded_random():
    random.seed(4242)
    Faker.seed(4242)


# -----------------------------
# fixed collections
# -----------------------------

def test_fixed_collections():
    assert INVALID_PRODUCT_IDS == (99999, -1, 0)
    assert "" in INVALID_CATEGORIES
    assert "phone" in VALID_SEARCH_TERMS
    assert INVALID_SEARCH_TERMS == ("xyzabc123", "")
    assert all(option.order in ("asc", "desc") for option in SORT_OPTIONS)
    assert all(0 < r["min"] <= r["max"] for r in PRICE_RANGES)
    assert max(TITLE_LENGTHS) <= 100


def test_pagination_cases_include_default_page_size():
    assert PageParams(limit=settings.DEFAULT_PAGE_SIZE, skip=0) in PAGINATION_CASES
    assert PageParams(limit=5, skip=10) in PAGINATION_CASES
    assert all(case.limit > 0 and case.skip >= 0 for case in PAGINATION_CASES)


def test_page_params_as_query():
    assert PageParams(limit=5, skip=10).as_params() == {"limit": 5, "skip": 10}


def test_select_fields_never_empty():
    assert all(len(fields) >= 1 for fields in SELECT_FIELDS)


# -----------------------------
# edge-case pagination
# -----------------------------

def test_edge_case_pagination_with_explicit_max():
    assert data_catalog.edge_case_pagination(100) == (
        PageParams(limit=0, skip=0),
        PageParams(limit=100, skip=0),
        PageParams(limit=10, skip=99),
    )


def test_edge_case_pagination_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "MAX_PRODUCT_ID", 250)
    assert data_catalog.max_product_id() == 250
    assert PageParams(limit=10, skip=249) in data_catalog.edge_case_pagination()


@pytest.mark.parametrize("max_id", [0, -5])
def test_edge_case_pagination_rejects_non_positive_max(max_id):
    with pytest.raises(InvalidArgument):
        data_catalog.edge_case_pagination(max_id)


def test_edge_case_pagination_single_product():
    assert PageParams(limit=10, skip=0) in data_catalog.edge_case_pagination(1)


# -----------------------------
# random pickers
# -----------------------------

def test_valid_product_id_within_known_range(monkeypatch):
    monkeypatch.setattr(settings, "MAX_PRODUCT_ID", 10)
    for _ in range(100):
        assert 1 <= data_catalog.get_valid_product_id() <= 10
    assert data_catalog.get_valid_product_id(1) == 1


def test_pickers_draw_from_their_collections():
    assert_that(data_catalog.get_invalid_product_id(), is_in(INVALID_PRODUCT_IDS))
    assert_that(data_catalog.get_valid_category(), is_in(CATEGORIES))
    assert_that(data_catalog.get_invalid_category(), is_in(INVALID_CATEGORIES))
    assert_that(data_catalog.get_valid_search_term(), is_in(VALID_SEARCH_TERMS))
    assert_that(data_catalog.get_invalid_search_term(), is_in(INVALID_SEARCH_TERMS))
    assert_that(data_catalog.get_random_pagination_params(), is_in(PAGINATION_CASES))
    assert_that(data_catalog.get_edge_case_pagination_params(50), is_in(data_catalog.edge_case_pagination(50)))
    assert_that(data_catalog.get_random_select_fields(), is_in(SELECT_FIELDS))
    assert isinstance(data_catalog.get_random_sort_option(), SortOption)


# -----------------------------
# suites / bundles
# -----------------------------

def test_dummyjson_test_suite_keys():
    suite = data_catalog.create_dummyjson_test_suite(194)
    assert set(suite) == {
        "invalid_product_ids", "invalid_categories", "valid_search_terms", "invalid_search_terms",
        "pagination_tests", "edge_case_pagination", "select_fields", "sort_options",
    }
    assert suite["edge_case_pagination"][1] == PageParams(limit=194, skip=0)


def test_post_test_data_sets_shape():
    data_sets = data_catalog.get_post_test_data_sets()
    assert_that(data_sets["valid_products"], has_length(5))
    assert_that(data_sets["invalid_products"], has_length(5))
    assert_that(data_sets["edge_case_products"], has_length(7))

    smartphones = data_sets["valid_products"][0]
    assert smartphones["category"] == "smartphones"
    assert sku_category_code(smartphones["sku"]) == CATEGORY_SKU_CODES["smartphones"]
    assert 100 <= data_sets["valid_products"][3]["price"] <= 500
    assert len(data_sets["valid_products"][4]["title"]) == 50

    edge_prices = [p["price"] for p in data_sets["edge_case_products"]]
    assert 0.01 in edge_prices and 99999.99 in edge_prices
    assert any(len(p["title"]) == 255 for p in data_sets["edge_case_products"])


def test_post_test_data_sets_are_fresh_per_call():
    first = data_catalog.get_post_test_data_sets()
    second = data_catalog.get_post_test_data_sets()
    first["valid_products"][0]["title"] = "mutated"
    assert second["valid_products"][0]["title"] != "mutated"
    assert first["valid_products"] is not second["valid_products"]


def test_smoke_bundle():
    smoke = data_catalog.create_smoke_test_data()
    assert smoke["product_id"] == 1
    assert smoke["category"] == "smartphones"
    assert smoke["search_term"] == "phone"
    assert smoke["pagination"] == PageParams(limit=10, skip=0)


def test_regression_bundle_uses_given_max():
    bundle = data_catalog.create_regression_test_data(max_id=20)
    assert 1 <= bundle["valid_product_id"] <= 20
    assert bundle["valid_category"] in CATEGORIES
    assert bundle["all_categories"] == CATEGORIES
    assert PageParams(limit=10, skip=19) in bundle["edge_case_pagination"]


@pytest.mark.parametrize("test_type", ["smoke", "regression"])
def test_create_test_suite(test_type):
    suite = data_catalog.create_test_suite(test_type)
    products = suite["products"]
    assert products["valid_product"]["category"] == "smartphones"
    assert products["out_of_stock_product"]["stock"] == 0
    assert products["out_of_stock_product"]["availabilityStatus"] == "Out of Stock"
    if test_type == "regression":
        assert_that(products["edge_case_products"], has_length(3))
    else:
        assert "edge_case_products" not in products


def test_create_test_suite_unknown_type_raises():
    with pytest.raises(InvalidArgument):
        data_catalog.create_test_suite("load")


# -----------------------------
# factories
# -----------------------------

def test_factory_pins_category_and_derived_fields():
    product = factories.product_factory.make({"category": "laptops"})
    assert product["category"] == "laptops"
    assert_that(sku_category_code(product["sku"]), is_("LAP"))


def test_factory_pins_id_into_images():
    product = factories.product_factory.make({"id": 77})
    assert product["id"] == 77
    assert all("test-product-77/" in image for image in product["images"])


def test_factory_overrides_plain_fields():
    product = factories.product_factory.make({"price": 0.01, "brand": "Apple"})
    assert product["price"] == 0.01
    assert product["brand"] == "Apple"


def test_factory_make_many():
    products = factories.product_factory.make_many(4, {"stock": 0})
    assert_that(products, has_length(4))
    assert all(p["stock"] == 0 for p in products)
    assert len({p["sku"] for p in products}) > 1


def test_merge_keeps_base_untouched():
    base = {"a": 1, "b": 2}
    assert factories.merge(base, {"b": 3}) == {"a": 1, "b": 3}
    assert base == {"a": 1, "b": 2}
    assert factories.merge(base) == base
