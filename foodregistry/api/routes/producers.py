# foodregistry/api/routes/producers.py
# CRUD endpoints for producers.

from flask import Blueprint, request, jsonify, current_app

from foodregistry.services.producer_service import ProducerService
from foodregistry.api.errors import ApiError, NotFoundError, ValidationError, ServiceError
from foodregistry.utils.logger import logger

producers_bp = Blueprint('producers', __name__)

def _get_producer_service() -> ProducerService:
    service = current_app.config.get('producer_service')
    if not service:
        logger.critical("ProducerService not found in application config!")
        raise ServiceError("Producer service is unavailable.", 503)
    return service

def _error_response(error: ApiError, action: str):
    if isinstance(error, (ValidationError, NotFoundError)):
        logger.warning(f"Producer request rejected while {action}: {error}")
    else:
        logger.error(f"Service error while {action}: {error}", exc_info=True)
    return jsonify(error.to_dict()), error.status_code


@producers_bp.route('', methods=['GET'])
def list_producers():
    try:
        producers = _get_producer_service().list_producers()
        return jsonify([producer.to_dict(product_count=count) for producer, count in producers]), 200
    except ApiError as e:
        return _error_response(e, "listing producers")


@producers_bp.route('/<int:producer_id>', methods=['GET'])
def get_producer(producer_id: int):
    try:
        producer = _get_producer_service().get_producer(producer_id)
        return jsonify(producer.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"fetching producer {producer_id}")


@producers_bp.route('/<int:producer_id>/products', methods=['GET'])
def list_producer_products(producer_id: int):
    try:
        products = _get_producer_service().list_producer_products(producer_id)
        return jsonify([p.to_dict() for p in products]), 200
    except ApiError as e:
        return _error_response(e, f"listing products of producer {producer_id}")


@producers_bp.route('', methods=['POST'])
def create_producer():
    if not request.is_json:
        return jsonify({"error": "Request must be JSON"}), 400
    try:
        producer = _get_producer_service().create_producer(request.get_json(silent=True))
        return jsonify(producer.to_dict()), 201
    except ApiError as e:
        return _error_response(e, "creating a producer")


@producers_bp.route('/<int:producer_id>', methods=['PUT'])
def update_producer(producer_id: int):
    if not request.is_json:
        return jsonify({"error": "Request must be JSON"}), 400
    try:
        producer = _get_producer_service().update_producer(producer_id, request.get_json(silent=True))
        return jsonify(producer.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"updating producer {producer_id}")


@producers_bp.route('/<int:producer_id>', methods=['DELETE'])
def delete_producer(producer_id: int):
    """Deletes the producer together with all of its products."""
    logger.info(f"Delete producer request for ID: {producer_id}")
    try:
        deleted_products = _get_producer_service().delete_producer(producer_id)
        return jsonify({
            "message": f"Producer {producer_id} deleted.",
            "deletedProducts": deleted_products,
        }), 200
    except ApiError as e:
        return _error_response(e, f"deleting producer {producer_id}")
