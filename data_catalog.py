"""
Shared test data for the product scenarios.

Fixed collections are tuples of immutable values. Everything built from
generated products is rebuilt on every call and never cached, so no two test
cases ever share a payload.

The "max known product id" is read from settings.MAX_PRODUCT_ID at call time.
It mirrors the size of the remote dataset and has to be kept in sync with the
service by hand (env MAX_PRODUCT_ID / --max-product-id).
"""
from typing import Any, NamedTuple, Optional

import factories
import settings
from exceptions import InvalidArgument
from product_data import (
    CATEGORIES,
    MAX_TITLE_LENGTH,
    generate_for_create,
    generate_invalid,
    random_category,
)
from random_data import random_choice, random_int


class PageParams(NamedTuple):
    limit: int
    skip: int

    def as_params(self) -> dict[str, int]:
        return {"limit": self.limit, "skip": self.skip}


class SortOption(NamedTuple):
    sort_by: str
    order: str


INVALID_PRODUCT_IDS = (99999, -1, 0)

INVALID_CATEGORIES = ("nonexistent", "fake-category", "")

VALID_SEARCH_TERMS = ("phone",)
INVALID_SEARCH_TERMS = ("xyzabc123", "")

PAGINATION_CASES = (
    PageParams(limit=10, skip=0),
    PageParams(limit=5, skip=10),
    PageParams(limit=1, skip=0),
    PageParams(limit=settings.DEFAULT_PAGE_SIZE, skip=0),
    PageParams(limit=50, skip=20),
)

SELECT_FIELDS = (
    ("id", "title", "price"),
    ("title", "description", "category"),
    ("id", "price", "discountPercentage", "rating"),
    ("title", "brand", "category", "stock"),
)

SORT_OPTIONS = (
    SortOption("title", "asc"),
    SortOption("title", "desc"),
    SortOption("price", "asc"),
    SortOption("price", "desc"),
    SortOption("rating", "desc"),
    SortOption("rating", "asc"),
)

PRICE_RANGES = (
    {"min": 1, "max": 50},
    {"min": 51, "max": 200},
    {"min": 201, "max": 1000},
)

TITLE_LENGTHS = (5, 10, 20, 50, 100)


def max_product_id() -> int:
    return settings.MAX_PRODUCT_ID


def edge_case_pagination(max_id: Optional[int] = None) -> tuple[PageParams, ...]:
    max_id = max_id if max_id is not None else max_product_id()
    if max_id < 1:
        raise InvalidArgument(f"max product id must be positive, got {max_id}")
    return (
        PageParams(limit=0, skip=0),
        PageParams(limit=max_id, skip=0),
        PageParams(limit=10, skip=max_id - 1),
    )


def create_dummyjson_test_suite(max_id: Optional[int] = None) -> dict[str, Any]:
    return {
        "invalid_product_ids": INVALID_PRODUCT_IDS,
        "invalid_categories": INVALID_CATEGORIES,
        "valid_search_terms": VALID_SEARCH_TERMS,
        "invalid_search_terms": INVALID_SEARCH_TERMS,
        "pagination_tests": PAGINATION_CASES,
        "edge_case_pagination": edge_case_pagination(max_id),
        "select_fields": SELECT_FIELDS,
        "sort_options": SORT_OPTIONS,
    }


def get_post_test_data_sets() -> dict[str, list[dict]]:
    """Fresh valid / invalid / edge-case request bodies for create and update."""
    return {
        "valid_products": [
            generate_for_create(category="smartphones"),
            generate_for_create(category="laptops"),
            generate_for_create(category="fragrances"),
            generate_for_create(price_range={"min": 100, "max": 500}),
            generate_for_create(title_length=50),
        ],
        "invalid_products": [
            generate_invalid(),
            generate_invalid(),
            generate_invalid(),
            {"title": "", "price": -1, "stock": -1},
            {"invalidField": "should not exist"},
        ],
        "edge_case_products": [
            {**generate_for_create(), "price": 0.01},
            {**generate_for_create(), "price": 99999.99},
            {**generate_for_create(), "stock": 0},
            {**generate_for_create(), "discountPercentage": 0},
            {**generate_for_create(), "discountPercentage": 99.99},
            {**generate_for_create(), "title": "A"},
            {**generate_for_create(), "title": "A" * MAX_TITLE_LENGTH},
        ],
    }


def create_test_suite(test_type: str) -> dict[str, Any]:
    if test_type == "smoke":
        return {"products": factories.create_smoke_test_data()}
    if test_type == "regression":
        return {"products": factories.create_regression_test_data()}
    raise InvalidArgument(f"test_type must be 'smoke' or 'regression', got {test_type!r}")


def get_valid_product_id(max_id: Optional[int] = None) -> int:
    return random_int(1, max_id if max_id is not None else max_product_id())


def get_invalid_product_id() -> int:
    return random_choice(INVALID_PRODUCT_IDS)


def get_valid_category() -> str:
    return random_category()


def get_invalid_category() -> str:
    return random_choice(INVALID_CATEGORIES)


def get_valid_search_term() -> str:
    return random_choice(VALID_SEARCH_TERMS)


def get_invalid_search_term() -> str:
    return random_choice(INVALID_SEARCH_TERMS)


def get_random_pagination_params() -> PageParams:
    return random_choice(PAGINATION_CASES)


def get_edge_case_pagination_params(max_id: Optional[int] = None) -> PageParams:
    return random_choice(edge_case_pagination(max_id))


def get_random_select_fields() -> tuple[str, ...]:
    return random_choice(SELECT_FIELDS)


def get_random_sort_option() -> SortOption:
    return random_choice(SORT_OPTIONS)


def create_smoke_test_data() -> dict[str, Any]:
    return {
        "product_id": 1,
        "category": "smartphones",
        "search_term": "phone",
        "pagination": PageParams(limit=10, skip=0),
        "select_fields": ("id", "title", "price"),
    }


def create_regression_test_data(max_id: Optional[int] = None) -> dict[str, Any]:
    suite = create_dummyjson_test_suite(max_id)
    return {
        "valid_product_id": get_valid_product_id(max_id),
        "invalid_product_ids": suite["invalid_product_ids"],
        "valid_category": get_valid_category(),
        "all_categories": CATEGORIES,
        "invalid_categories": suite["invalid_categories"],
        "pagination_tests": suite["pagination_tests"],
        "edge_case_pagination": suite["edge_case_pagination"],
        "search_terms": suite["valid_search_terms"],
        "invalid_search_terms": suite["invalid_search_terms"],
    }
