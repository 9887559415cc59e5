import httpx
import pytest

import api_helpers
import settings
from api_helpers import ApiSession
from products_api import ProductsAPI


def pytest_addoption(parser):
    group = parser.getgroup("products-api")
    group.addoption(
        "--api-target",
        choices=("local", "remote"),
        default=settings.API_TARGET,
        help="local: in-process stand-in (app.py); remote: the real service at --api-url",
    )
    group.addoption(
        "--api-url",
        default=None,
        help="Base URL used with --api-target=remote (default: PRODUCTS_API_URL or https://dummyjson.com)",
    )
    group.addoption(
        "--max-product-id",
        type=int,
        default=None,
        help="Number of products the service exposes; must match the remote dataset",
    )


def pytest_configure(config):
    max_id = config.getoption("--max-product-id")
    if max_id is not None:
        settings.MAX_PRODUCT_ID = max_id


@pytest.fixture(scope="session")
def api_session(request):
    """
    One transport for the whole run.

    local  -> httpx.WSGITransport straight into app.create_app(), no sockets
    remote -> a regular httpx client against --api-url
    """
    target = request.config.getoption("--api-target")
    if target == "local":
        from app import create_app

        session = ApiSession(
            base_url=settings.LOCAL_API_URL,
            transport=httpx.WSGITransport(app=create_app(settings.MAX_PRODUCT_ID)),
        )
    else:
        session = ApiSession(base_url=request.config.getoption("--api-url") or settings.API_URL)

    api_helpers.set_session(session)
    yield session
    api_helpers.set_session(None)
    session.close()


@pytest.fixture
def products_api(api_session):
    return ProductsAPI(api_session)


@pytest.fixture
def max_product_id():
    return settings.MAX_PRODUCT_ID
