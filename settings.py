import os

# Remote service. Override with PRODUCTS_API_URL to point the suite elsewhere.
API_URL = os.getenv("PRODUCTS_API_URL", "https://dummyjson.com")

# "local" runs scenarios against app.py in-process, "remote" against API_URL
API_TARGET = os.getenv("PRODUCTS_API_TARGET", "local")
LOCAL_API_URL = "http://products.local"

# Number of records the remote service currently exposes (ids 1..MAX_PRODUCT_ID).
# This is NOT derived from the service: when the upstream dataset grows or
# shrinks this value must be updated (env MAX_PRODUCT_ID or --max-product-id),
# otherwise edge-case pagination and "random valid id" picks go stale.
MAX_PRODUCT_ID = int(os.getenv("MAX_PRODUCT_ID", "194"))

DEFAULT_PAGE_SIZE = 30

# seconds
DEFAULT_TIMEOUT = 10.0
REQUEST_TIMEOUT = 30.0

HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Endpoints
PRODUCTS = "/products"
CATEGORIES = f"{PRODUCTS}/categories"
SINGLE_CATEGORY = f"{PRODUCTS}/category"
CATEGORY_LIST = f"{PRODUCTS}/category-list"
SEARCH = f"{PRODUCTS}/search"
ADD_PRODUCT = f"{PRODUCTS}/add"
