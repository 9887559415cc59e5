from typing import Any, Callable, Mapping, NamedTuple, Optional

from product_data import MAX_TITLE_LENGTH, generate_product

Overrides = Optional[dict[str, Any]]


class Factory(NamedTuple):
    make: Callable[[Overrides], dict]
    make_many: Callable[[int, Overrides], list[dict]]


def merge(base: dict, overrides: Overrides = None) -> dict:
    return {**base, **(overrides or {})}


def build_factory(generate: Callable[..., dict], pinned: Optional[Mapping[str, str]] = None) -> Factory:
    """
    Wrap a generator into make/make_many helpers.

    ``pinned`` maps override keys to generator keyword arguments. Those
    overrides are handed to the generator instead of being merged afterwards,
    so fields derived from them (a product's SKU and tags follow its category)
    stay consistent. Every other override is laid over a freshly generated base.
    """
    pinned = dict(pinned or {})

    def make(overrides: Overrides = None) -> dict:
        overrides = dict(overrides or {})
        kwargs = {pinned[key]: overrides[key] for key in pinned if key in overrides}
        return merge(generate(**kwargs), overrides)

    def make_many(count: int, overrides: Overrides = None) -> list[dict]:
        return [make(overrides) for _ in range(count)]

    return Factory(make, make_many)


product_factory = build_factory(generate_product, pinned={"id": "product_id", "category": "category"})


def create_smoke_test_data() -> dict[str, dict]:
    make = product_factory.make
    return {
        "valid_product": make({"category": "smartphones"}),
        "popular_product": make({"rating": 4.5, "stock": 100}),
        "out_of_stock_product": make({"stock": 0, "availabilityStatus": "Out of Stock"}),
    }


def create_regression_test_data() -> dict[str, Any]:
    make = product_factory.make
    return {
        **create_smoke_test_data(),
        "edge_case_products": [
            make({"price": 0.01}),
            make({"price": 99999.99}),
            make({"title": "A" * MAX_TITLE_LENGTH}),
        ],
    }
