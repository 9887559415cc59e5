import functools
from typing import Any, Iterable, Optional

import api_helpers
import data_catalog
import settings
import validators
from api_helpers import ApiResponse, ApiSession
from exceptions import AssertionFailure, InvalidArgument
from logging_helper import log_status
from product_data import generate_for_create, generate_invalid, generate_product_for_post
from random_data import random_choice, random_int, random_sample

# The mock service does not reliably reject bad input, so negative scenarios
# accept any of these instead of a single error status.
TOLERATED_UPDATE_STATUSES = (200, 400, 422, 500)
TOLERATED_CREATE_STATUSES = (201, 400, 422, 500)

PATCHABLE_FIELDS = ("title", "price", "description", "category", "stock")
SCENARIOS = ("valid", "invalid", "edge-case")


def logs_validation_failure(method):
    """Log which check failed before letting the AssertionFailure propagate."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except AssertionFailure as exc:
            log_status("error", f"{method.__name__} failed validation: ", str(exc))
            raise
    return wrapper


def _select_param(select: Optional[Iterable[str] | str]) -> Optional[str]:
    if select is None or isinstance(select, str):
        return select
    return ",".join(select)


class ProductsAPI:
    """
    Request builders for /products.

    Plain methods return the raw ApiResponse. ``*_with_validation`` methods run
    the response through ``validators`` and re-raise any AssertionFailure.
    """

    def __init__(self, session: Optional[ApiSession] = None):
        self._session = session

    @property
    def session(self) -> ApiSession:
        return self._session or api_helpers.get_session()

    def _request(self, method: str, url: str, body: Any = None, params: Optional[dict] = None) -> ApiResponse:
        return self.session.request(method, url, body=body, params=params)

    # ------------------------------------------------------------------
    # Raw requests
    # ------------------------------------------------------------------

    def get_all_products(self, limit=None, skip=None, select=None, sort_by=None, order=None):
        params = {
            "limit": limit,
            "skip": skip,
            "select": _select_param(select),
            "sortBy": sort_by,
            "order": order,
        }
        return self._request("GET", settings.PRODUCTS, params=params)

    def get_product_by_id(self, product_id):
        return self._request("GET", f"{settings.PRODUCTS}/{product_id}")

    def search_products(self, query, limit=None, skip=None):
        return self._request("GET", settings.SEARCH, params={"q": query, "limit": limit, "skip": skip})

    def get_products_by_category(self, category):
        return self._request("GET", f"{settings.SINGLE_CATEGORY}/{category}")

    def get_category_list(self):
        return self._request("GET", settings.CATEGORY_LIST)

    def get_categories(self):
        return self._request("GET", settings.CATEGORIES)

    def create_product(self, product_data):
        return self._request("POST", settings.ADD_PRODUCT, body=product_data)

    def create_random_product(self):
        return self.create_product(generate_product_for_post())

    def update_product(self, product_id, product_data):
        return self._request("PUT", f"{settings.PRODUCTS}/{product_id}", body=product_data)

    def patch_product(self, product_id, product_data):
        return self._request("PATCH", f"{settings.PRODUCTS}/{product_id}", body=product_data)

    def delete_product(self, product_id):
        return self._request("DELETE", f"{settings.PRODUCTS}/{product_id}")

    def create_product_with_scenario(self, scenario: str, **options):
        if scenario == "valid":
            product_data = generate_for_create(validity="valid", **options)
        elif scenario == "invalid":
            product_data = generate_invalid()
        elif scenario == "edge-case":
            product_data = random_choice(data_catalog.get_post_test_data_sets()["edge_case_products"])
        else:
            raise InvalidArgument(f"scenario must be one of {SCENARIOS}, got {scenario!r}")
        return self.create_product(product_data)

    # ------------------------------------------------------------------
    # Positive paths
    # ------------------------------------------------------------------

    @logs_validation_failure
    def get_all_products_with_validation(self, limit=None, skip=None, select=None, sort_by=None, order=None):
        response = self.get_all_products(limit=limit, skip=skip, select=select, sort_by=sort_by, order=order)
        validators.validate_status_code(response.status, 200)
        validators.validate_pagination_structure(response.body)

        body = response.body
        validators.validate_page_window(body, limit=limit, skip=skip, dense_ids=sort_by is None)

        selected = _select_param(select)
        if selected is not None and body["products"]:
            validators.validate_selected_fields(body["products"], selected.split(","))

        if sort_by is not None:
            validators.validate_sorted(body["products"], sort_by, order or "asc")

        log_status(
            "good",
            "Pagination summary: ",
            f"total={body['total']} returned={len(body['products'])} limit={body['limit']} "
            f"skip={body['skip']} selected={selected or 'all fields'}",
        )
        return response

    @logs_validation_failure
    def get_product_by_id_with_validation(self, product_id):
        response = self.get_product_by_id(product_id)
        validators.validate_status_code(response.status, 200)
        validators.validate_product_structure(response.body)
        return response

    @logs_validation_failure
    def search_products_with_validation(self, query):
        response = self.search_products(query)
        validators.validate_status_code(response.status, 200)
        validators.validate_pagination_structure(response.body)
        validators.validate_search_results(response.body["products"], query)
        return response

    @logs_validation_failure
    def get_products_by_category_with_validation(self, category):
        response = self.get_products_by_category(category)
        validators.validate_status_code(response.status, 200)
        validators.validate_pagination_structure(response.body)
        validators.validate_category_products(response.body["products"], category)
        return response

    @logs_validation_failure
    def get_categories_with_validation(self):
        response = self.get_categories()
        validators.validate_status_code(response.status, 200)
        validators.validate_array_response(response.body, min_length=1)
        for index, category in enumerate(response.body):
            try:
                validators.validate_category_structure(category)
            except AssertionFailure as exc:
                raise AssertionFailure(f"Category at index {index}: {exc}") from exc
        return response

    @logs_validation_failure
    def get_category_list_with_validation(self):
        response = self.get_category_list()
        validators.validate_status_code(response.status, 200)
        validators.validate_array_response(response.body, min_length=1)
        for category in response.body:
            validators.validate_category_slug(category)
        return response

    @logs_validation_failure
    def create_product_with_validation(self, product):
        response = self.create_product(product)
        validators.validate_status_code(response.status, 201)
        validators.validate_product_structure(response.body)
        return response

    @logs_validation_failure
    def create_random_product_with_validation(self, scenario="valid"):
        response = self.create_product_with_scenario(scenario)
        if scenario == "valid":
            validators.validate_status_code(response.status, 201)
            validators.validate_product_structure(response.body)
        else:
            validators.validate_status_in(response.status, TOLERATED_CREATE_STATUSES)
        return response

    @logs_validation_failure
    def update_product_with_validation(self, product_id, product_data, expect_success=True):
        response = self.update_product(product_id, product_data)
        if expect_success:
            validators.validate_status_code(response.status, 200)
            validators.validate_product_structure(response.body)
            validators.validate_fields_updated(response.body, product_data, product_id)
        else:
            validators.validate_status_in(response.status, TOLERATED_UPDATE_STATUSES)
        return response

    @logs_validation_failure
    def patch_product_with_validation(self, product_id, patch_data, expect_success=True):
        response = self.patch_product(product_id, patch_data)
        if expect_success:
            validators.validate_status_code(response.status, 200)
            validators.validate_product_structure(response.body)
            validators.validate_fields_updated(response.body, patch_data, product_id)
        else:
            validators.validate_status_in(response.status, TOLERATED_UPDATE_STATUSES)
        return response

    @logs_validation_failure
    def delete_product_with_validation(self, product_id=None):
        if product_id is None:
            product_id = data_catalog.get_valid_product_id()
        response = self.delete_product(product_id)
        validators.validate_status_code(response.status, 200)
        validators.validate_deleted_product(response.body, product_id)
        return response

    def update_product_with_random_valid_data(self, product_id=None):
        if product_id is None:
            product_id = data_catalog.get_valid_product_id()
        valid_product = random_choice(data_catalog.get_post_test_data_sets()["valid_products"])
        return self.update_product_with_validation(product_id, valid_product, True)

    def update_product_with_random_edge_case_data(self, product_id=None):
        if product_id is None:
            product_id = data_catalog.get_valid_product_id()
        edge_case = random_choice(data_catalog.get_post_test_data_sets()["edge_case_products"])
        return self.update_product_with_validation(product_id, edge_case, True)

    def patch_product_with_random_valid_data(self, product_id=None):
        if product_id is None:
            product_id = data_catalog.get_valid_product_id()
        valid_product = random_choice(data_catalog.get_post_test_data_sets()["valid_products"])

        # a PATCH carries a few fields, never the whole product
        fields = random_sample(PATCHABLE_FIELDS, random_int(1, 3))
        patch_data = {field: valid_product[field] for field in fields if field in valid_product}
        return self.patch_product_with_validation(product_id, patch_data, True)

    # ------------------------------------------------------------------
    # Negative paths
    # ------------------------------------------------------------------

    @logs_validation_failure
    def get_product_by_invalid_id_with_validation(self, product_id):
        response = self.get_product_by_id(product_id)
        validators.validate_status_code(response.status, 404)
        validators.validate_not_found_message(response.body, product_id, "Product")
        return response

    @logs_validation_failure
    def get_non_existent_category_with_validation(self, category):
        response = self.get_products_by_category(category)
        validators.validate_status_code(response.status, 200)
        validators.validate_empty_envelope(response.body)
        return response

    @logs_validation_failure
    def get_empty_search_results(self, query=""):
        response = self.search_products(query)
        validators.validate_status_code(response.status, 200)
        validators.validate_response_structure(response.body, ["products", "total"])
        validators.validate_array_response(response.body["products"])
        if response.body["total"] != 0:
            raise AssertionFailure(
                f"Search for {query!r} should return 0 total, got {response.body['total']}"
            )
        if response.body["products"]:
            raise AssertionFailure(
                f"Search for {query!r} should return no products, got {len(response.body['products'])}"
            )
        return response

    def update_product_with_random_invalid_data(self, product_id=None):
        if product_id is None:
            product_id = data_catalog.get_valid_product_id()
        invalid_product = random_choice(data_catalog.get_post_test_data_sets()["invalid_products"])
        return self.update_product_with_validation(product_id, invalid_product, False)

    def patch_product_with_random_invalid_data(self, product_id=None):
        if product_id is None:
            product_id = data_catalog.get_valid_product_id()
        invalid_product = random_choice(data_catalog.get_post_test_data_sets()["invalid_products"])

        # one offending field; the empty payload is sent as-is
        patch_data = {}
        if invalid_product:
            field = random_choice(list(invalid_product))
            patch_data = {field: invalid_product[field]}
        return self.patch_product_with_validation(product_id, patch_data, False)

    @logs_validation_failure
    def delete_product_with_random_invalid_id(self):
        product_id = data_catalog.max_product_id() + 1
        response = self.delete_product(product_id)
        validators.validate_status_code(response.status, 404)
        validators.validate_not_found_message(response.body, product_id, "Product")
        return response
