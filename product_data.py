"""
Synthetic product payloads for the /products endpoints.

The lookup tables below are the single source for every enumerated value a
generated product can carry. Category-correlated fields (tags, SKU prefix) are
always derived from the product's own category.
"""
import re
from datetime import datetime, timedelta, timezone
from numbers import Number
from typing import Any, Optional

from exceptions import InvalidArgument
from random_data import (
    random_choice,
    random_date,
    random_ean13,
    random_float,
    random_int,
    random_letters,
    random_sample,
    random_string,
    to_iso,
)

CATEGORIES = (
    "beauty",
    "fragrances",
    "furniture",
    "groceries",
    "home-decoration",
    "kitchen-accessories",
    "laptops",
    "mens-shirts",
    "mens-shoes",
    "mens-watches",
    "mobile-accessories",
    "motorcycle",
    "skin-care",
    "smartphones",
    "sports-accessories",
    "sunglasses",
    "tablets",
    "tops",
    "vehicle",
    "womens-bags",
    "womens-dresses",
    "womens-jewellery",
    "womens-shoes",
    "womens-watches",
)

CATEGORY_SKU_CODES = {
    "beauty": "BEA",
    "fragrances": "FRA",
    "furniture": "FUR",
    "groceries": "GRO",
    "home-decoration": "HOM",
    "kitchen-accessories": "KIT",
    "laptops": "LAP",
    "mens-shirts": "MEN",
    "mens-shoes": "SHO",
    "mens-watches": "MWA",
    "mobile-accessories": "MOB",
    "motorcycle": "MOT",
    "skin-care": "SKI",
    "smartphones": "SMT",
    "sports-accessories": "SPO",
    "sunglasses": "SUN",
    "tablets": "TAB",
    "tops": "TOP",
    "vehicle": "VEH",
    "womens-bags": "WBA",
    "womens-dresses": "WOM",
    "womens-jewellery": "JEW",
    "womens-shoes": "WSH",
    "womens-watches": "WWA",
}

CATEGORY_TAGS = {
    "beauty": ("beauty", "cosmetics", "makeup"),
    "fragrances": ("fragrance", "perfume", "scent"),
    "furniture": ("furniture", "home", "decor"),
    "groceries": ("food", "groceries", "pantry"),
    "home-decoration": ("decoration", "home", "accessories"),
    "kitchen-accessories": ("kitchen", "cooking", "utensils"),
    "laptops": ("electronics", "computer", "laptop"),
    "mens-shirts": ("clothing", "mens", "shirts"),
    "mens-shoes": ("footwear", "mens", "shoes"),
    "mens-watches": ("watches", "mens", "accessories"),
    "mobile-accessories": ("electronics", "mobile", "accessories"),
    "motorcycle": ("vehicle", "motorcycle", "transport"),
    "skin-care": ("skin care", "beauty", "lotion"),
    "smartphones": ("electronics", "phone", "mobile"),
    "sports-accessories": ("sports", "fitness", "outdoor"),
    "sunglasses": ("eyewear", "sunglasses", "fashion"),
    "tablets": ("electronics", "tablet", "portable"),
    "tops": ("clothing", "womens", "tops"),
    "vehicle": ("vehicle", "car", "transport"),
    "womens-bags": ("bags", "womens", "fashion"),
    "womens-dresses": ("clothing", "womens", "dresses"),
    "womens-jewellery": ("jewellery", "womens", "accessories"),
    "womens-shoes": ("footwear", "womens", "shoes"),
    "womens-watches": ("watches", "womens", "accessories"),
}

BONUS_TAGS = ("popular", "new", "featured", "bestseller")

BRANDS = (
    "Essence",
    "Glamour Beauty",
    "Velvet Touch",
    "Chic Cosmetics",
    "Nail Couture",
    "Calvin Klein",
    "Chanel",
    "Dior",
    "Dolce & Gabbana",
    "Apple",
    "Samsung",
    "Sony",
)

DESCRIPTIONS = (
    "High quality product with excellent features",
    "Premium product designed for everyday use",
    "Innovative solution for modern lifestyle",
    "Best-in-class product with superior performance",
    "Affordable option with great value",
    "Professional grade product for demanding users",
)

WARRANTY_OPTIONS = (
    "1 week warranty",
    "30 days warranty",
    "6 months warranty",
    "1 year warranty",
    "2 years warranty",
    "No warranty",
    "Lifetime warranty",
)

SHIPPING_OPTIONS = (
    "Ships in 1-2 business days",
    "Ships in 3-5 business days",
    "Ships in 5-7 business days",
    "Ships in 1 week",
    "Same day delivery available",
    "Free shipping on orders over $50",
)

IN_STOCK = "In Stock"
AVAILABILITY_STATUSES = (IN_STOCK, "Low Stock", "Out of Stock", "Pre-order", "Discontinued")
IN_STOCK_WEIGHT = 0.8

RETURN_POLICIES = (
    "No return policy",
    "30 days return policy",
    "60 days return policy",
    "90 days return policy",
    "Returns accepted within 14 days",
    "Exchange only, no returns",
    "Full refund if not satisfied",
)

MINIMUM_ORDER_QUANTITIES = (1, 5, 10, 12, 24, 48, 50, 100)

REVIEW_COMMENTS = (
    "Excellent product!",
    "Very satisfied!",
    "Good value for money",
    "Would recommend!",
    "Not what I expected",
    "Could be better",
    "Amazing quality!",
    "Fast shipping",
    "Highly impressed!",
    "Would not recommend!",
    "Perfect for my needs",
    "Great customer service",
)

FIRST_NAMES = ("John", "Jane", "Mike", "Sarah", "David", "Emma", "Chris", "Lisa", "Tom", "Anna", "Lucas", "Eleanor")
LAST_NAMES = ("Smith", "Johnson", "Brown", "Davis", "Wilson", "Garcia", "Miller", "Taylor", "Anderson", "Collins", "Gordon", "Martinez")
REVIEWER_EMAIL_DOMAIN = "x.dummyjson.com"

QR_CODE_URL = "https://cdn.dummyjson.com/public/qr-code.png"
PRODUCT_IMAGE_URL = "https://cdn.dummyjson.com/product-images/test-product-{product_id}"
UPLOAD_IMAGE_URL = "https://i.imgur.com/{token}.jpg"

SKU_PATTERN = re.compile(r"^[A-Z]{3}-[A-Z]{3}-[A-Z]{3}-\d{3}$")
MAX_TITLE_LENGTH = 255

# name -> fields merged over a valid body; None means "send nothing at all"
INVALID_PRODUCT_CASES = {
    "empty_title": {"title": ""},
    "oversized_title": {"title": "A" * 300},
    "negative_price": {"price": -10},
    "zero_price": {"price": 0},
    "negative_stock": {"stock": -5},
    "rating_above_max": {"rating": 6},
    "rating_below_min": {"rating": -1},
    "negative_discount": {"discountPercentage": -10},
    "discount_above_max": {"discountPercentage": 101},
    "unknown_category": {"category": "invalid-category"},
    "empty_brand": {"brand": ""},
    "empty_payload": None,
}

VALIDITY_OPTIONS = ("valid", "invalid")


def _require_category(category: Any) -> str:
    if not isinstance(category, str) or category not in CATEGORY_SKU_CODES:
        raise InvalidArgument(f"Invalid category provided: {category!r}")
    return category


def category_display_name(slug: str) -> str:
    return slug.replace("-", " ").title()


def random_category() -> str:
    return random_choice(CATEGORIES)


def random_brand() -> str:
    return random_choice(BRANDS)


def random_description() -> str:
    return random_choice(DESCRIPTIONS)


def generate_tags(category: str) -> list[str]:
    """2-4 tags: the category's base tags first, topped up from BONUS_TAGS."""
    base_tags = list(CATEGORY_TAGS[_require_category(category)])
    count = random_int(2, 4)
    if count > len(base_tags):
        base_tags.extend(random_sample(BONUS_TAGS, count - len(base_tags)))
    return base_tags[:count]


def generate_sku(category: str) -> str:
    """AAA-BBB-CCC-###, AAA being the category code."""
    code = CATEGORY_SKU_CODES[_require_category(category)]
    number = str(random_int(1, 999)).zfill(3)
    return f"{code}-{random_letters(3)}-{random_letters(3)}-{number}"


def is_valid_sku(sku: Any) -> bool:
    return isinstance(sku, str) and bool(SKU_PATTERN.match(sku))


def sku_category_code(sku: str) -> str:
    return sku.split("-", 1)[0]


def generate_weight() -> float:
    return random_float(0.1, 50.1)


def generate_dimensions() -> dict[str, float]:
    return {
        "width": random_float(1, 51),
        "height": random_float(1, 51),
        "depth": random_float(1, 51),
    }


def generate_warranty_info() -> str:
    return random_choice(WARRANTY_OPTIONS)


def generate_shipping_info() -> str:
    return random_choice(SHIPPING_OPTIONS)


def generate_availability_status() -> str:
    # 80% "In Stock", the rest spread over every status (In Stock included)
    if random_float(0, 1, decimals=None) < IN_STOCK_WEIGHT:
        return IN_STOCK
    return random_choice(AVAILABILITY_STATUSES)


def generate_return_policy() -> str:
    return random_choice(RETURN_POLICIES)


def generate_minimum_order_quantity() -> int:
    return random_choice(MINIMUM_ORDER_QUANTITIES)


def reviewer_email(reviewer_name: str) -> str:
    first_name, last_name = reviewer_name.lower().split(" ", 1)
    return f"{first_name}.{last_name}@{REVIEWER_EMAIL_DOMAIN}"


def generate_review() -> dict[str, Any]:
    reviewer_name = f"{random_choice(FIRST_NAMES)} {random_choice(LAST_NAMES)}"
    return {
        "rating": random_int(1, 5),
        "comment": random_choice(REVIEW_COMMENTS),
        "date": to_iso(random_date()),
        "reviewerName": reviewer_name,
        "reviewerEmail": reviewer_email(reviewer_name),
    }


def generate_reviews() -> list[dict[str, Any]]:
    return [generate_review() for _ in range(random_int(1, 5))]


def generate_barcode() -> str:
    return random_ean13()


def generate_meta(now: Optional[datetime] = None) -> dict[str, str]:
    now = now or datetime.now(timezone.utc)
    created_at = random_date(now - timedelta(days=365), now)
    updated_at = random_date(created_at, now)
    return {
        "createdAt": to_iso(created_at),
        "updatedAt": to_iso(updated_at),
        "barcode": generate_barcode(),
        "qrCode": QR_CODE_URL,
    }


def generate_images(product_id: int) -> list[str]:
    base = PRODUCT_IMAGE_URL.format(product_id=product_id)
    return [f"{base}/{index}.webp" for index in range(1, random_int(1, 3) + 1)]


def generate_thumbnail(product_id: int) -> str:
    return f"{PRODUCT_IMAGE_URL.format(product_id=product_id)}/thumbnail.webp"


def generate_image_url() -> str:
    return UPLOAD_IMAGE_URL.format(token=random_string(7))


def generate_image_urls(count: int) -> list[str]:
    return [generate_image_url() for _ in range(count)]


def generate_product(product_id: Optional[int] = None, category: Optional[str] = None) -> dict[str, Any]:
    """
    A fully populated product, shaped like a GET /products/{id} response.

    ``product_id`` and ``category`` pin those fields; anything else is random.
    """
    product_id = product_id if product_id is not None else random_int(1, 10000)
    category = _require_category(category) if category is not None else random_category()

    return {
        "id": product_id,
        "title": f"Test Product {product_id}",
        "description": f"This is a test product description for product {product_id}",
        "category": category,
        "price": random_int(10, 1009),
        "discountPercentage": random_float(0, 50),
        "rating": random_float(1, 5),
        "stock": random_int(1, 100),
        "tags": generate_tags(category),
        "brand": random_brand(),
        "sku": generate_sku(category),
        "weight": generate_weight(),
        "dimensions": generate_dimensions(),
        "warrantyInformation": generate_warranty_info(),
        "shippingInformation": generate_shipping_info(),
        "availabilityStatus": generate_availability_status(),
        "reviews": generate_reviews(),
        "returnPolicy": generate_return_policy(),
        "minimumOrderQuantity": generate_minimum_order_quantity(),
        "meta": generate_meta(),
        "images": generate_images(product_id),
        "thumbnail": generate_thumbnail(product_id),
    }


def generate_product_for_post() -> dict[str, Any]:
    """Random body for POST /products/add (no id, no server-side fields)."""
    return {
        "title": f"{random_string(8)} Product {random_int(0, 999)}",
        "description": random_description(),
        "price": random_float(1, 999.99),
        "discountPercentage": random_float(0, 50),
        "rating": random_float(1, 5),
        "stock": random_int(1, 100),
        "brand": random_brand(),
        "category": random_category(),
        "thumbnail": generate_image_url(),
        "images": generate_image_urls(2),
    }


def generate_product_for_patch() -> dict[str, Any]:
    return {
        "title": f"{random_string(8)} Product {random_int(0, 999)}",
        "description": random_description(),
        "price": random_float(1, 999.99),
        "category": random_category(),
        "thumbnail": generate_image_url(),
        "images": generate_image_urls(2),
    }


def _price_bounds(price_range: Optional[dict]) -> tuple[float, float]:
    if price_range is None:
        return 1, 999
    try:
        minimum, maximum = price_range["min"], price_range["max"]
    except (KeyError, TypeError):
        raise InvalidArgument(f"price_range must look like {{'min': x, 'max': y}}, got {price_range!r}")
    if not all(isinstance(bound, Number) and not isinstance(bound, bool) for bound in (minimum, maximum)):
        raise InvalidArgument(f"price_range bounds must be numbers, got {price_range!r}")
    if minimum <= 0 or minimum > maximum:
        raise InvalidArgument(f"price_range must satisfy 0 < min <= max, got {price_range!r}")
    return minimum, maximum


def generate_for_create(
    category: Optional[str] = None,
    price_range: Optional[dict] = None,
    title_length: int = 20,
    validity: str = "valid",
) -> dict[str, Any]:
    """
    Body for a create/update request.

    - category: pins ``category`` and with it ``sku`` and ``tags``
    - price_range: {"min": x, "max": y}, bounds ``price`` (inclusive)
    - title_length: exact length of the random title
    - validity: "valid", or "invalid" to get ``generate_invalid()`` instead
    """
    if validity not in VALIDITY_OPTIONS:
        raise InvalidArgument(f"validity must be one of {VALIDITY_OPTIONS}, got {validity!r}")
    if validity == "invalid":
        return generate_invalid()

    if isinstance(title_length, bool) or not isinstance(title_length, int) or title_length < 1:
        raise InvalidArgument(f"title_length must be a positive integer, got {title_length!r}")

    category = _require_category(category) if category is not None else random_category()
    minimum, maximum = _price_bounds(price_range)

    return {
        "title": random_string(title_length),
        "description": f"Test product description for {category} category",
        "price": random_float(minimum, maximum),
        "discountPercentage": random_float(0, 30),
        "rating": random_float(1, 5),
        "stock": random_int(10, 59),
        "brand": random_brand(),
        "category": category,
        "tags": generate_tags(category),
        "sku": generate_sku(category),
        "thumbnail": generate_image_url(),
        "images": generate_image_urls(2),
    }


def generate_invalid(case: Optional[str] = None) -> dict[str, Any]:
    """
    A valid create body with exactly one field broken, or ``{}``.

    ``case`` picks a named entry from INVALID_PRODUCT_CASES; random otherwise.
    """
    if case is None:
        case = random_choice(tuple(INVALID_PRODUCT_CASES))
    if case not in INVALID_PRODUCT_CASES:
        raise InvalidArgument(f"Unknown invalid product case {case!r}")

    mutation = INVALID_PRODUCT_CASES[case]
    if mutation is None:
        return {}
    return {**generate_product_for_post(), **mutation}
