# foodregistry/database/schema_manager.py
# Creates the catalog tables and, on request, seeds a small sample catalog.

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import select, func

from .base import Base
from foodregistry.utils.logger import logger
from foodregistry.api.errors import DatabaseError

SAMPLE_CATALOG = [
    {
        "name": "Nordic Dairy AS",
        "address": "Melkeveien 1, 0150 Oslo",
        "products": [
            {"name": "Whole Milk", "description": "Fresh whole milk, 3.5% fat", "category": "Dairy"},
            {"name": "Greek Yoghurt", "description": "Thick strained yoghurt, plain", "category": "Dairy"},
        ],
    },
    {
        "name": "Fjord Bakery",
        "address": "Bakergata 12, 5003 Bergen",
        "products": [
            {"name": "Sourdough Bread", "description": "Slow fermented wheat and rye loaf", "category": "Bakery"},
        ],
    },
]

class SchemaManager:
    def __init__(self, engine: Engine):
        self.engine = engine

    def initialize_schema(self, seed_sample_data: bool = False):
        # Registers every model on Base.metadata before create_all
        import foodregistry.domain  # noqa: F401

        try:
            logger.info("Creating/verifying database tables...")
            Base.metadata.create_all(bind=self.engine)
            logger.info("Tables created/verified.")

            if seed_sample_data:
                self._seed_sample_catalog()
        except SQLAlchemyError as e:
            logger.critical(f"Database schema initialization failed: {e}", exc_info=True)
            raise DatabaseError(f"Schema initialization failed: {e}") from e

    def _seed_sample_catalog(self):
        from foodregistry.domain import Producer, Product

        with Session(self.engine) as session:
            existing = session.scalar(select(func.count()).select_from(Producer))
            if existing:
                logger.debug(f"Sample data skipped, {existing} producers already present.")
                return

            for entry in SAMPLE_CATALOG:
                producer = Producer(name=entry["name"], address=entry["address"])
                producer.products = [Product(**item) for item in entry["products"]]
                session.add(producer)
            session.commit()
            logger.info(f"Seeded {len(SAMPLE_CATALOG)} sample producers.")
