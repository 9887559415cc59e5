import pytest
from hamcrest import assert_that, greater_than

import data_catalog
import validators
from data_catalog import INVALID_PRODUCT_IDS

pytestmark = pytest.mark.api


def test_delete_random_product(products_api):
    response = products_api.delete_product_with_validation()
    body = response.body

    assert_that(body["id"], greater_than(0))
    assert body["title"], f"Deleted product has no title. Body: {response.text}"
    assert_that(body["price"], greater_than(0))


def test_delete_specific_product(products_api):
    product_id = data_catalog.get_valid_product_id()
    body = products_api.delete_product_with_validation(product_id).body

    assert body["isDeleted"] is True
    validators.validate_date_format(body["deletedOn"])


def test_delete_is_not_persisted(products_api):
    products_api.delete_product_with_validation(2)

    response = products_api.get_product_by_id(2)
    assert response.status == 200, f"Expected product 2 to still exist, got {response.status}. Body: {response.text}"


def test_delete_product_beyond_known_range(products_api):
    response = products_api.delete_product_with_random_invalid_id()
    assert isinstance(response.body["message"], str) and response.body["message"]


@pytest.mark.parametrize("product_id", INVALID_PRODUCT_IDS)
def test_delete_invalid_product_id(products_api, product_id):
    response = products_api.delete_product(product_id)

    validators.validate_status_code(response.status, 404)
    validators.validate_not_found_message(response.body, product_id)


def test_delete_with_validation_forwards_id_zero(products_api):
    # 0 is an explicit (invalid) id, not "pick one for me"
    with pytest.raises(AssertionError, match="Expected status 200 but got 404"):
        products_api.delete_product_with_validation(0)
