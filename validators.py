"""
Contract checks applied to product API responses.

Every validator either returns quietly or raises AssertionFailure with a
message naming the field that broke and the expected vs. actual value. Inside
a pytest test that is reported as an ordinary assertion failure.
"""
import math
import re
from datetime import datetime
from numbers import Number
from typing import Any, Iterable, Optional, Sequence

from jsonschema import Draft202012Validator

import schemas
from exceptions import AssertionFailure

ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")
CATEGORY_SLUG = re.compile(r"^[a-z][a-z0-9-]*[a-z0-9]$")
PAGINATION_FIELDS = ("total", "skip", "limit", "products")
SORT_ORDERS = ("asc", "desc")


def _fail(message: str):
    raise AssertionFailure(message)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def validate_schema(instance: Any, schema: dict, label: str) -> None:
    """
    Run a jsonschema check and report every violation, ordered by field path,
    together with the offending instance.
    """
    errors = sorted(
        Draft202012Validator(schema).iter_errors(instance),
        key=lambda e: [str(part) for part in e.absolute_path],
    )
    if not errors:
        return
    details = "\n".join(
        f"  - field '{'.'.join(str(p) for p in e.absolute_path) or '<root>'}': {e.message} "
        f"(validator: {e.validator})"
        for e in errors
    )
    _fail(f"Response does not match the '{label}' schema:\n{details}\nOffending instance: {instance}")


def validate_status_code(actual: int, expected: int) -> None:
    if actual != expected:
        _fail(f"Expected status {expected} but got {actual}")


def validate_status_in(actual: int, accepted: Iterable[int]) -> None:
    accepted = tuple(accepted)
    if actual not in accepted:
        _fail(f"Expected status to be one of {list(accepted)} but got {actual}")


def validate_response_structure(response: Any, required_props: Iterable[str]) -> None:
    if not isinstance(response, dict):
        _fail(f"Expected a JSON object, got {type(response).__name__}: {response!r}")
    for prop in required_props:
        if prop not in response:
            _fail(f"Expected property '{prop}' in response. Available: {', '.join(response) or '<none>'}")


def validate_array_response(response: Any, min_length: int = 0) -> None:
    if not isinstance(response, list):
        _fail(f"Expected a JSON array, got {type(response).__name__}: {response!r}")
    if len(response) < min_length:
        _fail(f"Expected at least {min_length} item(s), got {len(response)}")


def is_paginated_response(response: Any) -> bool:
    return isinstance(response, dict) and all(key in response for key in ("total", "skip", "limit"))


def validate_pagination_structure(response: Any, allow_empty: bool = False) -> None:
    """
    total/skip/limit/products present and typed; skip >= 0.
    total and limit must be > 0, or >= 0 when ``allow_empty`` is set.
    """
    validate_response_structure(response, PAGINATION_FIELDS)
    validate_schema(response, schemas.pagination(allow_empty), "pagination envelope")
    page_size = len(response["products"])
    if response["limit"] > 0 and page_size > response["limit"]:
        _fail(f"Expected at most {response['limit']} products (limit), got {page_size}")


def validate_product_structure(product: Any) -> None:
    validate_schema(product, schemas.product, "product")


def validate_products(products: Sequence[Any]) -> None:
    for index, product in enumerate(products):
        try:
            validate_product_structure(product)
        except AssertionFailure as exc:
            raise AssertionFailure(f"Product at index {index}: {exc}") from exc


def validate_error_response(response: Any, expected_message: Optional[str] = None) -> None:
    validate_schema(response, schemas.error, "error")
    if expected_message and expected_message not in response["message"]:
        _fail(f"Expected error message to include {expected_message!r}. Got: {response['message']!r}")


def validate_date_format(value: Any) -> None:
    if not isinstance(value, str) or not ISO_DATE_PREFIX.match(value):
        _fail(f"Expected an ISO-8601 date (YYYY-MM-DDTHH:MM:SS...), got {value!r}")
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        _fail(f"Date {value!r} looks like ISO-8601 but cannot be parsed")


def validate_numeric_range(value: Any, minimum: float, maximum: float) -> None:
    if not _is_number(value):
        _fail(f"Expected a number between {minimum} and {maximum}, got {value!r}")
    if isinstance(value, float) and math.isnan(value):
        _fail(f"Expected a number between {minimum} and {maximum}, got NaN")
    if value < minimum or value > maximum:
        _fail(f"Expected {value} to be within [{minimum}, {maximum}]")


def not_found_messages(item_id: Any, entity_type: str = "Product") -> list[str]:
    # the service is not consistent about quoting the id
    return [
        f"{entity_type} with id {item_id} not found",
        f"{entity_type} with id '{item_id}' not found",
        f'{entity_type} with id "{item_id}" not found',
        f"{entity_type} with {item_id} not found",
    ]


def matches_not_found_message(message: Any, item_id: Any, entity_type: str = "Product") -> bool:
    if not isinstance(message, str):
        return False
    return any(candidate in message for candidate in not_found_messages(item_id, entity_type))


def validate_not_found_message(response: Any, item_id: Any, entity_type: str = "Product") -> None:
    validate_response_structure(response, ["message"])
    actual = response["message"]
    if not matches_not_found_message(actual, item_id, entity_type):
        expected = " OR ".join(not_found_messages(item_id, entity_type))
        _fail(f"Expected message to match one of: {expected}. Got: {actual!r}")


def expected_selected_fields(selected_fields: Iterable[str]) -> list[str]:
    fields = [field.strip() for field in selected_fields if field.strip()]
    return fields if "id" in fields else ["id", *fields]


def validate_selected_fields(products: Sequence[dict], selected_fields: Iterable[str]) -> None:
    """Each product carries exactly {id} + the selected fields, all with a value."""
    expected = expected_selected_fields(selected_fields)
    expected_set = set(expected)
    for index, product in enumerate(products):
        keys = list(product)
        for field in expected:
            if field not in product:
                _fail(
                    f"Product {index} is missing required field '{field}'. "
                    f"Available fields: {', '.join(keys)}"
                )
            if product[field] is None:
                _fail(f"Field '{field}' in product {index} should have a value")
        for key in keys:
            if key not in expected_set:
                _fail(f"Product {index} has unexpected field '{key}'. Expected only: {', '.join(expected)}")
        if len(keys) != len(expected_set):
            _fail(
                f"Product {index} should have exactly {len(expected_set)} properties "
                f"({', '.join(expected)}), but got {len(keys)} ({', '.join(keys)})"
            )


def validate_page_window(
    response: dict,
    limit: Optional[int] = None,
    skip: Optional[int] = None,
    dense_ids: bool = True,
) -> None:
    """
    Page size and offset match what was asked for.

    limit=0 means "everything after skip". The envelope's ``limit`` is either
    the requested limit or, on a short last page, the number returned.
    With ``dense_ids`` (unsorted listing) ids are dense and 1-based, so a page
    requested with skip=N starts at id N + 1.
    """
    products = response["products"]
    skip_value = skip or 0
    if limit is not None:
        remaining = max(0, response["total"] - skip_value)
        expected_count = remaining if limit == 0 else min(limit, remaining)
        if len(products) != expected_count:
            _fail(
                f"Product count should equal limit ({limit}) or the remaining items "
                f"({expected_count}), got {len(products)}"
            )
        if response["limit"] not in (limit, len(products)):
            _fail(f"Response limit should match requested limit {limit}, got {response['limit']}")
    if skip is not None and products:
        first_id = products[0].get("id")
        if dense_ids and first_id != skip + 1:
            _fail(f"First product ID should be {skip + 1} (skip: {skip} + 1), got {first_id}")
        if response["skip"] != skip:
            _fail(f"Response skip should match requested skip {skip}, got {response['skip']}")


def sort_key(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def validate_sorted(products: Sequence[dict], field: str, order: str = "asc") -> None:
    if order not in SORT_ORDERS:
        _fail(f"Sort order must be one of {SORT_ORDERS}, got {order!r}")
    values = [sort_key(product.get(field)) for product in products]
    if None in values:
        _fail(f"Product {values.index(None)} has no '{field}' to sort by")
    for index, (current, following) in enumerate(zip(values, values[1:])):
        in_order = current <= following if order == "asc" else current >= following
        if not in_order:
            _fail(
                f"Products are not sorted by '{field}' {order}: "
                f"item {index} ({current!r}) comes before item {index + 1} ({following!r})"
            )


def validate_fields_updated(response: dict, sent: dict, product_id: Any) -> None:
    if response.get("id") != product_id:
        _fail(f"Product ID should remain {product_id}, got {response.get('id')}")
    for key, value in sent.items():
        if key == "id":
            continue
        if response.get(key) != value:
            _fail(f"Field '{key}' should be updated to {value!r}, got {response.get(key)!r}")


def validate_deleted_product(response: Any, product_id: Any) -> None:
    validate_schema(response, schemas.deleted_product, "deleted product")
    if response["id"] != product_id:
        _fail(f"Deleted product id should be {product_id}, got {response['id']}")
    validate_date_format(response["deletedOn"])


def validate_category_slug(slug: Any) -> None:
    if not isinstance(slug, str) or not slug:
        _fail(f"Category should be a non-empty string, got {slug!r}")
    if not CATEGORY_SLUG.match(slug):
        _fail(f"Category '{slug}' does not follow the slug naming convention")


def validate_category_structure(category: Any) -> None:
    validate_schema(category, schemas.category, "category")
    if category["slug"] not in category["url"]:
        _fail(f"URL {category['url']!r} should contain the category slug '{category['slug']}'")


def validate_category_products(products: Sequence[dict], category: str) -> None:
    for index, product in enumerate(products):
        if product.get("category") != category:
            _fail(f"Product at index {index} should have category '{category}', got {product.get('category')!r}")


def validate_search_results(products: Sequence[dict], term: str) -> None:
    needle = term.lower()
    for product in products:
        title = str(product.get("title", "")).lower()
        description = str(product.get("description", "")).lower()
        if needle not in title and needle not in description:
            _fail(f"Product {product.get('title')!r} should contain {term!r} in title or description")


def validate_empty_envelope(response: Any) -> None:
    validate_pagination_structure(response, allow_empty=True)
    if response["products"]:
        _fail(f"Expected no products, got {len(response['products'])}")
    for field in ("total", "skip", "limit"):
        if response[field] != 0:
            _fail(f"Expected {field} to be 0 for an empty result, got {response[field]}")
