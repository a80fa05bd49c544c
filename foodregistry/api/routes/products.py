# foodregistry/api/routes/products.py
# CRUD endpoints for products.

from flask import Blueprint, request, jsonify, current_app

from foodregistry.services.product_service import ProductService
from foodregistry.api.errors import ApiError, NotFoundError, ValidationError, ServiceError
from foodregistry.utils.data_conversion import safe_int
from foodregistry.utils.logger import logger

products_bp = Blueprint('products', __name__)

def _get_product_service() -> ProductService:
    service = current_app.config.get('product_service')
    if not service:
        logger.critical("ProductService not found in application config!")
        raise ServiceError("Product service is unavailable.", 503)
    return service

def _error_response(error: ApiError, action: str):
    if isinstance(error, (ValidationError, NotFoundError)):
        logger.warning(f"Product request rejected while {action}: {error}")
    else:
        logger.error(f"Service error while {action}: {error}", exc_info=True)
    return jsonify(error.to_dict()), error.status_code

def _json_body():
    if not request.is_json:
        raise ValidationError("Request must be JSON")
    return request.get_json(silent=True)


@products_bp.route('', methods=['GET'])
def list_products():
    """
    Lists products.
    Query params: search (case-insensitive match on name/description), producerId.
    """
    search = request.args.get('search', '').strip() or None
    producer_id = None
    if request.args.get('producerId'):
        producer_id = safe_int(request.args.get('producerId'))
        if producer_id is None:
            return jsonify({"error": "Query parameter 'producerId' must be an integer."}), 400

    try:
        products = _get_product_service().list_products(search=search, producer_id=producer_id)
        return jsonify([p.to_dict() for p in products]), 200
    except ApiError as e:
        return _error_response(e, "listing products")


@products_bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id: int):
    try:
        product = _get_product_service().get_product(product_id)
        return jsonify(product.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"fetching product {product_id}")


@products_bp.route('', methods=['POST'])
def create_product():
    logger.info("Create product request received.")
    try:
        product = _get_product_service().create_product(_json_body())
        return jsonify(product.to_dict()), 201
    except ApiError as e:
        return _error_response(e, "creating a product")


@products_bp.route('/<int:product_id>', methods=['PUT'])
def update_product(product_id: int):
    logger.info(f"Update product request for ID: {product_id}")
    try:
        product = _get_product_service().update_product(product_id, _json_body())
        return jsonify(product.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"updating product {product_id}")


@products_bp.route('/<int:product_id>', methods=['DELETE'])
def delete_product(product_id: int):
    logger.info(f"Delete product request for ID: {product_id}")
    try:
        _get_product_service().delete_product(product_id)
        return jsonify({"message": f"Product {product_id} deleted."}), 200
    except ApiError as e:
        return _error_response(e, f"deleting product {product_id}")
