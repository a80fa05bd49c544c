# foodregistry/services/producer_service.py
# Business rules for producers, including the cascading delete of their products.

from typing import Any, Dict, List, Tuple

from foodregistry.database import get_db_session
from foodregistry.database.producer_repository import ProducerRepository
from foodregistry.database.product_repository import ProductRepository
from foodregistry.domain.producer import Producer
from foodregistry.domain.product import Product
from foodregistry.utils.data_conversion import safe_int, clean_text
from foodregistry.utils.logger import logger
from foodregistry.api.errors import NotFoundError, ServiceError, ValidationError, DatabaseError

NAME_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 255


class ProducerService:
    """Service layer for producers."""

    def __init__(self, producer_repository: ProducerRepository, product_repository: ProductRepository):
        self.producer_repository = producer_repository
        self.product_repository = product_repository
        logger.info("ProducerService initialized.")

    def list_producers(self) -> List[Tuple[Producer, int]]:
        """Producers paired with their product count."""
        with get_db_session() as db:
            producers = self.producer_repository.get_all_producers(db)
            counts = self.producer_repository.count_products_by_producer(db) if producers else {}
        return [(producer, counts.get(producer.producer_id, 0)) for producer in producers]

    def get_producer(self, producer_id: int) -> Producer:
        with get_db_session() as db:
            producer = self.producer_repository.get_producer_by_id(db, producer_id)
        if producer is None:
            raise NotFoundError(f"Producer {producer_id} not found.")
        return producer

    def list_producer_products(self, producer_id: int) -> List[Product]:
        with get_db_session() as db:
            if self.producer_repository.get_producer_by_id(db, producer_id) is None:
                raise NotFoundError(f"Producer {producer_id} not found.")
            products = self.product_repository.get_by_producer(db, producer_id)
        if products is None:
            raise ServiceError(f"Failed to fetch products of producer {producer_id}.")
        return products

    def create_producer(self, data: Dict[str, Any]) -> Producer:
        fields = self._validate_payload(data)
        logger.info(f"Creating producer '{fields['name']}'.")
        producer = Producer(**fields)
        try:
            with get_db_session() as db:
                if not self.producer_repository.create_producer(db, producer):
                    raise ServiceError("Producer could not be created.")
        except DatabaseError as e:
            raise ServiceError(f"Producer could not be created: {e}") from e
        return producer

    def update_producer(self, producer_id: int, data: Dict[str, Any]) -> Producer:
        fields = self._validate_payload(data)
        body_id = safe_int(data.get('producerId'))
        if body_id is not None and body_id != producer_id:
            raise ValidationError(f"Body producerId {body_id} does not match URL id {producer_id}.")

        logger.info(f"Updating producer {producer_id}.")
        try:
            with get_db_session() as db:
                existing = self.producer_repository.get_producer_by_id(db, producer_id)
                if existing is None:
                    raise NotFoundError(f"Producer {producer_id} not found.")
                if not self.producer_repository.update_producer(db, Producer(producer_id=producer_id, **fields)):
                    raise ServiceError(f"Producer {producer_id} could not be updated.")
        except DatabaseError as e:
            raise ServiceError(f"Producer {producer_id} could not be updated: {e}") from e
        return existing

    def delete_producer(self, producer_id: int) -> int:
        """Deletes the producer and its products. Returns how many products went with it."""
        logger.info(f"Deleting producer {producer_id} with its products.")
        try:
            with get_db_session() as db:
                if self.producer_repository.get_producer_by_id(db, producer_id) is None:
                    raise NotFoundError(f"Producer {producer_id} not found.")
                products = self.product_repository.get_by_producer(db, producer_id) or []
                if not self.producer_repository.delete_producer(db, producer_id):
                    raise ServiceError(f"Producer {producer_id} could not be deleted.")
        except DatabaseError as e:
            raise ServiceError(f"Producer {producer_id} could not be deleted: {e}") from e
        return len(products)

    def _validate_payload(self, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object.")

        name = clean_text(data.get('name'))
        if not name:
            raise ValidationError("Field 'name' is required.")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Field 'name' must be at most {NAME_MAX_LENGTH} characters.")

        address = clean_text(data.get('address'))
        if address is not None and len(address) > ADDRESS_MAX_LENGTH:
            raise ValidationError(f"Field 'address' must be at most {ADDRESS_MAX_LENGTH} characters.")

        return {'name': name, 'address': address}
