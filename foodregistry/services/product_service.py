# foodregistry/services/product_service.py
# Business rules for products: payload validation, producer reference checks, session scope.

from typing import Any, Dict, List, Optional

from foodregistry.database import get_db_session
from foodregistry.database.product_repository import ProductRepository
from foodregistry.database.producer_repository import ProducerRepository
from foodregistry.domain.product import Product
from foodregistry.utils.data_conversion import safe_int, clean_text
from foodregistry.utils.product_filter import filter_products
from foodregistry.utils.logger import logger
from foodregistry.api.errors import NotFoundError, ServiceError, ValidationError, DatabaseError

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 50
IMAGE_URL_MAX_LENGTH = 500


def _check_length(field_name: str, value: Optional[str], limit: int):
    if value is not None and len(value) > limit:
        raise ValidationError(f"Field '{field_name}' must be at most {limit} characters.")


class ProductService:
    """
    Service layer for products. Opens one session per call and turns the
    repository sentinels into NotFoundError / ServiceError.
    """

    def __init__(self, product_repository: ProductRepository, producer_repository: ProducerRepository):
        self.product_repository = product_repository
        self.producer_repository = producer_repository
        logger.info("ProductService initialized.")

    def list_products(self, search: Optional[str] = None, producer_id: Optional[int] = None) -> List[Product]:
        """All products, optionally narrowed to one producer and/or a name/description search."""
        logger.debug(f"Listing products (search={search!r}, producer_id={producer_id}).")
        try:
            with get_db_session() as db:
                if producer_id is not None:
                    products = self.product_repository.get_by_producer(db, producer_id)
                else:
                    products = self.product_repository.get_all(db)
        except DatabaseError as e:
            raise ServiceError(f"Failed to fetch products: {e}") from e

        if products is None:
            raise ServiceError("Failed to fetch products.")
        return filter_products(products, search)

    def get_product(self, product_id: int) -> Product:
        with get_db_session() as db:
            product = self.product_repository.get_product_by_id(db, product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found.")
        return product

    def create_product(self, data: Dict[str, Any]) -> Product:
        fields = self._validate_payload(data)
        logger.info(f"Creating product '{fields['name']}' for producer {fields['producer_id']}.")
        try:
            with get_db_session() as db:
                self._ensure_producer_exists(db, fields['producer_id'])
                product = Product(**fields)
                if not self.product_repository.create(db, product):
                    raise ServiceError("Product could not be created.")
        except DatabaseError as e:
            raise ServiceError(f"Product could not be created: {e}") from e
        return product

    def update_product(self, product_id: int, data: Dict[str, Any]) -> Product:
        fields = self._validate_payload(data)
        body_id = safe_int(data.get('productId'))
        if body_id is not None and body_id != product_id:
            raise ValidationError(f"Body productId {body_id} does not match URL id {product_id}.")

        logger.info(f"Updating product {product_id}.")
        try:
            with get_db_session() as db:
                existing = self.product_repository.get_product_by_id(db, product_id)
                if existing is None:
                    raise NotFoundError(f"Product {product_id} not found.")
                self._ensure_producer_exists(db, fields['producer_id'])
                if not self.product_repository.update(db, Product(product_id=product_id, **fields)):
                    raise ServiceError(f"Product {product_id} could not be updated.")
                # merge() wrote into the instance already held by this session
                updated = existing
        except DatabaseError as e:
            raise ServiceError(f"Product {product_id} could not be updated: {e}") from e
        return updated

    def delete_product(self, product_id: int) -> None:
        logger.info(f"Deleting product {product_id}.")
        try:
            with get_db_session() as db:
                if self.product_repository.get_product_by_id(db, product_id) is None:
                    raise NotFoundError(f"Product {product_id} not found.")
                if not self.product_repository.delete(db, product_id):
                    raise ServiceError(f"Product {product_id} could not be deleted.")
        except DatabaseError as e:
            raise ServiceError(f"Product {product_id} could not be deleted: {e}") from e

    def _ensure_producer_exists(self, db, producer_id: int):
        if self.producer_repository.get_producer_by_id(db, producer_id) is None:
            raise ValidationError(f"Producer {producer_id} does not exist.")

    def _validate_payload(self, data: Any) -> Dict[str, Any]:
        """Checks a product JSON body and maps it to model field names."""
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object.")

        name = clean_text(data.get('name'))
        if not name:
            raise ValidationError("Field 'name' is required.")
        description = data.get('description')
        if description is None:
            description = ""
        if not isinstance(description, str):
            raise ValidationError("Field 'description' must be a string.")
        description = description.strip()
        category = clean_text(data.get('category'))
        image_url = clean_text(data.get('imageUrl'))

        _check_length('name', name, NAME_MAX_LENGTH)
        _check_length('description', description, DESCRIPTION_MAX_LENGTH)
        _check_length('category', category, CATEGORY_MAX_LENGTH)
        _check_length('imageUrl', image_url, IMAGE_URL_MAX_LENGTH)

        producer_id = safe_int(data.get('producerId'))
        if producer_id is None or producer_id <= 0:
            raise ValidationError("Field 'producerId' must be a positive integer.")

        return {
            'name': name,
            'description': description,
            'category': category,
            'image_url': image_url,
            'producer_id': producer_id,
        }
