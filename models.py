from flask_restx import fields


class Models:
    def __init__(self, api, categories):
        self.api = api

        self.dimensions_model = api.model('Dimensions', {
            'width': fields.Float(description='Width'),
            'height': fields.Float(description='Height'),
            'depth': fields.Float(description='Depth'),
        })

        self.review_model = api.model('Review', {
            'rating': fields.Integer(min=1, max=5, description='Review rating'),
            'comment': fields.String(description='Review text'),
            'date': fields.String(description='ISO-8601 review date'),
            'reviewerName': fields.String(description='Reviewer name'),
            'reviewerEmail': fields.String(description='Reviewer email'),
        })

        self.meta_model = api.model('Meta', {
            'createdAt': fields.String(description='ISO-8601 creation date'),
            'updatedAt': fields.String(description='ISO-8601 last update'),
            'barcode': fields.String(description='13 digit barcode'),
            'qrCode': fields.String(description='QR code image URL'),
        })

        self.product_input_model = api.model('ProductInput', {
            'title': fields.String(description='Product title'),
            'description': fields.String(description='Product description'),
            'price': fields.Float(description='Unit price'),
            'discountPercentage': fields.Float(description='Discount, 0-100'),
            'rating': fields.Float(description='Average rating, 0-5'),
            'stock': fields.Integer(description='Units in stock'),
            'brand': fields.String(description='Brand'),
            'category': fields.String(description='Category slug', enum=list(categories)),
            'tags': fields.List(fields.String, description='Category tags'),
            'sku': fields.String(description='AAA-BBB-CCC-### stock keeping unit'),
            'thumbnail': fields.String(description='Thumbnail URL'),
            'images': fields.List(fields.String, description='Image URLs'),
        })

        self.product_model = api.inherit('Product', self.product_input_model, {
            'id': fields.Integer(readonly=True, description='The product ID'),
            'weight': fields.Float(description='Weight'),
            'dimensions': fields.Nested(self.dimensions_model),
            'warrantyInformation': fields.String(description='Warranty text'),
            'shippingInformation': fields.String(description='Shipping text'),
            'availabilityStatus': fields.String(description='Availability'),
            'reviews': fields.List(fields.Nested(self.review_model)),
            'returnPolicy': fields.String(description='Return policy text'),
            'minimumOrderQuantity': fields.Integer(description='Minimum order quantity'),
            'meta': fields.Nested(self.meta_model),
        })

        self.category_model = api.model('Category', {
            'slug': fields.String(description='Category slug'),
            'name': fields.String(description='Display name'),
            'url': fields.String(description='Category listing URL'),
        })

        self.envelope_model = api.model('ProductList', {
            'products': fields.List(fields.Nested(self.product_model)),
            'total': fields.Integer(description='Matching products'),
            'skip': fields.Integer(description='Offset of the page'),
            'limit': fields.Integer(description='Size of the page'),
        })
