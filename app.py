"""
In-process stand-in for the remote product service.

Serves the same /products surface over an in-memory store so the scenario
suite can run without network access (see conftest.py, --api-target=local).
It copies the remote's observable behavior rather than an ideal one:

  - writes are acknowledged but never persisted
  - an unknown category is a 200 with an empty envelope, not a 404
  - limit=0 returns every remaining product
  - an empty search query returns every product (the documented contract
    says it should return nothing)
"""
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, request
from flask_restx import Api, Namespace, Resource, abort

import settings
from load_data import load_products
from models import Models
from product_data import CATEGORIES, category_display_name
from random_data import to_iso
from validators import SORT_ORDERS, sort_key

SEARCH_FIELDS = ("title", "description")


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        abort(400, f"Invalid '{name}' value '{raw}'")
    if value < 0:
        abort(400, f"'{name}' must not be negative")
    return value


def _sorted(items: list[dict], sort_by: str, order: str) -> list[dict]:
    return sorted(
        items,
        key=lambda item: (item.get(sort_by) is None, sort_key(item.get(sort_by))),
        reverse=order == "desc",
    )


def _project(item: dict, fields: list[str]) -> dict:
    return {field: item[field] for field in fields if field in item}


def paginate(items: list[dict]) -> dict:
    """
    Apply sortBy/order, skip/limit and select the way the remote does.
    ``limit`` in the envelope is the size of the returned page.
    """
    skip = _int_arg("skip", 0)
    limit = _int_arg("limit", settings.DEFAULT_PAGE_SIZE)

    sort_by = request.args.get("sortBy")
    order = request.args.get("order", "asc")
    if order not in SORT_ORDERS:
        abort(400, "Order can be: 'asc' or 'desc'")
    if sort_by:
        items = _sorted(items, sort_by, order)

    page = items[skip:] if limit == 0 else items[skip:skip + limit]

    select = request.args.get("select")
    if select:
        fields = ["id"] + [f.strip() for f in select.split(",") if f.strip() and f.strip() != "id"]
        page = [_project(item, fields) for item in page]

    return {"products": page, "total": len(items), "skip": skip, "limit": len(page)}


def _matches_search(item: dict, q: str) -> bool:
    ql = q.lower()
    return any(ql in str(item.get(field, "")).lower() for field in SEARCH_FIELDS)


def _payload() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def register_product_resources(ns, *, products: list[dict], models: Models):
    """
    Registers under /products:
      GET                    ''               (limit, skip, select, sortBy, order)
      GET                    /search?q=
      GET                    /categories
      GET                    /category-list
      GET                    /category/<slug>
      POST                   /add
      GET PUT PATCH DELETE   /<id>
    """
    by_id = {product["id"]: product for product in products}

    def find_product(product_id: str) -> dict:
        try:
            product = by_id.get(int(product_id))
        except ValueError:
            product = None
        if product is None:
            abort(404, f"Product with id '{product_id}' not found")
        return product

    def category_url(slug: str) -> str:
        return f"{request.host_url.rstrip('/')}{settings.SINGLE_CATEGORY}/{slug}"

    @ns.route("")
    class ProductList(Resource):
        @ns.doc("list_products")
        @ns.response(200, "Success", models.envelope_model)
        def get(self):
            return paginate(products), 200

    @ns.route("/search")
    @ns.param("q", "Text matched against title and description")
    class ProductSearch(Resource):
        @ns.doc("search_products")
        @ns.response(200, "Success", models.envelope_model)
        def get(self):
            q = (request.args.get("q") or "").strip()
            matches = [p for p in products if _matches_search(p, q)] if q else products
            return paginate(matches), 200

    @ns.route("/categories")
    class Categories(Resource):
        @ns.doc("list_categories")
        @ns.response(200, "Success", [models.category_model])
        def get(self):
            return [
                {"slug": slug, "name": category_display_name(slug), "url": category_url(slug)}
                for slug in CATEGORIES
            ], 200

    @ns.route("/category-list")
    class CategoryList(Resource):
        @ns.doc("list_category_slugs")
        def get(self):
            return list(CATEGORIES), 200

    @ns.route("/category/", "/category/<string:slug>")
    class ProductsByCategory(Resource):
        @ns.doc("products_by_category")
        @ns.response(200, "Success", models.envelope_model)
        def get(self, slug: Optional[str] = ""):
            matches = [p for p in products if p["category"] == slug]
            if not matches:
                return {"products": [], "total": 0, "skip": 0, "limit": 0}, 200
            return paginate(matches), 200

    @ns.route("/add")
    class ProductAdd(Resource):
        @ns.doc("add_product")
        @ns.expect(models.product_input_model)
        def post(self):
            """Echo the new product with the next id; nothing is stored"""
            return {**_payload(), "id": len(products) + 1}, 201

    @ns.route("/<string:product_id>")
    @ns.response(404, "Product not found")
    @ns.param("product_id", "The product identifier")
    class ProductItem(Resource):
        @ns.doc("get_product")
        @ns.response(200, "Success", models.product_model)
        def get(self, product_id):
            return find_product(product_id), 200

        @ns.doc("update_product")
        @ns.expect(models.product_input_model)
        def put(self, product_id):
            product = find_product(product_id)
            return {**product, **_payload(), "id": product["id"]}, 200

        @ns.doc("patch_product")
        @ns.expect(models.product_input_model)
        def patch(self, product_id):
            product = find_product(product_id)
            return {**product, **_payload(), "id": product["id"]}, 200

        @ns.doc("delete_product")
        def delete(self, product_id):
            product = find_product(product_id)
            return {
                **product,
                "isDeleted": True,
                "deletedOn": to_iso(datetime.now(timezone.utc)),
            }, 200


def create_app(product_count: Optional[int] = None) -> Flask:
    app = Flask(__name__)
    # keep 404 bodies to the bare message, no "did you mean" suggestions
    app.config["RESTX_ERROR_404_HELP"] = False

    api = Api(app, version='1.0', title='Products API',
              description='Local stand-in for the product catalog service', doc='/docs')
    models = Models(api, CATEGORIES)

    products_ns = Namespace("products", description="Product catalog", path=settings.PRODUCTS)
    api.add_namespace(products_ns)

    products = load_products(product_count or settings.MAX_PRODUCT_ID)
    register_product_resources(products_ns, products=products, models=models)

    @app.route('/health')
    def health_check():
        return {"status": "healthy", "service": "products-api", "products": len(products)}, 200

    return app


if __name__ == '__main__':
    create_app().run(debug=True, port=5001)
