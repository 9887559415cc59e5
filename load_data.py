from product_data import CATEGORIES, category_display_name, generate_product


def seed_product(product_id: int) -> dict:
    """
    One stored product. Categories rotate with the id, so every category owns
    at least one product as soon as there are len(CATEGORIES) of them.
    """
    category = CATEGORIES[(product_id - 1) % len(CATEGORIES)]
    product = generate_product(product_id=product_id, category=category)
    product["title"] = f"{category_display_name(category)} {product['brand']} {product_id}"
    return product


def load_products(count: int) -> list[dict]:
    """Products with dense ids 1..count, in id order."""
    return [seed_product(product_id) for product_id in range(1, count + 1)]
