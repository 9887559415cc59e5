product = {
    "type": "object",
    "required": ["id", "title", "description", "price", "stock", "category"],
    "properties": {
        "id": {
            "type": "number"
        },
        "title": {
            "type": "string",
            "minLength": 1
        },
        "description": {
            "type": "string"
        },
        "price": {
            "type": "number",
            "exclusiveMinimum": 0
        },
        "stock": {
            "type": "number",
            "minimum": 0
        },
        "category": {
            "type": "string",
            "minLength": 1
        },
        "discountPercentage": {
            "type": "number",
            "minimum": 0,
            "maximum": 100
        },
        "rating": {
            "type": "number",
            "minimum": 0,
            "maximum": 5
        },
        "tags": {
            "type": "array",
            "items": {"type": "string"}
        },
        "brand": {
            "type": "string"
        },
        "sku": {
            "type": "string"
        },
    }
}


dimensions = {
    "type": "object",
    "required": ["width", "height", "depth"],
    "properties": {
        "width": {"type": "number", "exclusiveMinimum": 0},
        "height": {"type": "number", "exclusiveMinimum": 0},
        "depth": {"type": "number", "exclusiveMinimum": 0},
    }
}


review = {
    "type": "object",
    "required": ["rating", "comment", "date", "reviewerName", "reviewerEmail"],
    "properties": {
        "rating": {"type": "integer", "minimum": 1, "maximum": 5},
        "comment": {"type": "string", "minLength": 1},
        "date": {"type": "string"},
        "reviewerName": {"type": "string", "minLength": 1},
        "reviewerEmail": {"type": "string", "pattern": r"^[^\s@]+@[^\s@]+\.[^\s@]+$"},
    }
}


meta = {
    "type": "object",
    "required": ["createdAt", "updatedAt", "barcode", "qrCode"],
    "properties": {
        "createdAt": {"type": "string"},
        "updatedAt": {"type": "string"},
        "barcode": {"type": "string", "pattern": r"^\d{13}$"},
        "qrCode": {"type": "string"},
    }
}


# Every field a fully generated product carries
full_product = {
    "type": "object",
    "required": [
        "id", "title", "description", "price", "discountPercentage", "rating", "stock",
        "category", "brand", "tags", "sku", "weight", "dimensions", "warrantyInformation",
        "shippingInformation", "returnPolicy", "availabilityStatus", "minimumOrderQuantity",
        "reviews", "meta", "images", "thumbnail",
    ],
    "properties": {
        **product["properties"],
        "id": {"type": "integer", "minimum": 1},
        "tags": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 2,
            "maxItems": 4,
            "uniqueItems": True
        },
        "sku": {
            "type": "string",
            "pattern": r"^[A-Z]{3}-[A-Z]{3}-[A-Z]{3}-\d{3}$"
        },
        "weight": {"type": "number", "exclusiveMinimum": 0},
        "dimensions": dimensions,
        "warrantyInformation": {"type": "string"},
        "shippingInformation": {"type": "string"},
        "returnPolicy": {"type": "string"},
        "availabilityStatus": {
            "type": "string",
            "enum": ["In Stock", "Low Stock", "Out of Stock", "Pre-order", "Discontinued"]
        },
        "minimumOrderQuantity": {
            "type": "integer",
            "enum": [1, 5, 10, 12, 24, 48, 50, 100]
        },
        "reviews": {
            "type": "array",
            "items": review,
            "minItems": 1,
            "maxItems": 5
        },
        "meta": meta,
        "images": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "maxItems": 3
        },
        "thumbnail": {"type": "string"},
    }
}


category = {
    "type": "object",
    "required": ["slug", "name", "url"],
    "properties": {
        "slug": {
            "type": "string",
            "pattern": "^[a-z][a-z0-9-]*[a-z0-9]$"
        },
        "name": {
            "type": "string",
            "minLength": 1
        },
        "url": {
            "type": "string",
            "pattern": r"^https?://[^/]+/products/category/[\w-]+$"
        },
    }
}


def pagination(allow_empty=False):
    # allow_empty relaxes total and limit from > 0 to >= 0
    bound = {"minimum": 0} if allow_empty else {"exclusiveMinimum": 0}
    return {
        "type": "object",
        "required": ["total", "skip", "limit", "products"],
        "properties": {
            "total": {"type": "number", **bound},
            "skip": {"type": "number", "minimum": 0},
            "limit": {"type": "number", **bound},
            "products": {"type": "array"},
        }
    }


deleted_product = {
    "type": "object",
    "required": ["id", "isDeleted", "deletedOn"],
    "properties": {
        "id": {"type": "number"},
        "isDeleted": {"const": True},
        "deletedOn": {"type": "string"},
    }
}


error = {
    "type": "object",
    "required": ["message"],
    "properties": {
        "message": {"type": "string"}
    }
}
