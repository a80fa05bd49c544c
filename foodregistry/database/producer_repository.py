# foodregistry/database/producer_repository.py
# Producer CRUD over SQLAlchemy ORM sessions, including the cascading delete.

from typing import Dict, List, Optional
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from .base_repository import BaseRepository
from foodregistry.domain.producer import Producer
from foodregistry.domain.product import Product
from foodregistry.utils.logger import logger

class ProducerRepository(BaseRepository):
    """
    Repository for producers. Same failure contract as ProductRepository:
    log, roll back if needed, return a sentinel.
    """

    def get_all_producers(self, db: Session) -> List[Producer]:
        """All producers ordered by id. Empty list on failure."""
        try:
            return list(db.scalars(select(Producer).order_by(Producer.producer_id)).all())
        except SQLAlchemyError as e:
            logger.error(f"{self.log_prefix} producers query failed in get_all_producers(): {e}", exc_info=True)
            return []
        except Exception as e:
            logger.error(f"{self.log_prefix} unexpected error in get_all_producers(): {e}", exc_info=True)
            return []

    def count_products_by_producer(self, db: Session) -> Dict[int, int]:
        """Maps producer id to its number of products. Empty dict on failure."""
        try:
            stmt = select(Product.producer_id, func.count(Product.product_id)).group_by(Product.producer_id)
            return {producer_id: count for producer_id, count in db.execute(stmt).all()}
        except SQLAlchemyError as e:
            logger.error(f"{self.log_prefix} product count query failed: {e}", exc_info=True)
            return {}

    def get_producer_by_id(self, db: Session, producer_id: int) -> Optional[Producer]:
        try:
            return db.get(Producer, producer_id)
        except SQLAlchemyError as e:
            logger.error(f"{self.log_prefix} get() failed for ProducerId {producer_id:04d}: {e}", exc_info=True)
            return None
        except Exception as e:
            logger.error(f"{self.log_prefix} unexpected error fetching ProducerId {producer_id:04d}: {e}", exc_info=True)
            return None

    def create_producer(self, db: Session, producer: Producer) -> bool:
        try:
            db.add(producer)
            db.commit()
            logger.info(f"{self.log_prefix} created ProducerId {producer.producer_id:04d} ('{producer.name}').")
            return True
        except SQLAlchemyError as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} producer creation failed for {producer!r}: {e}", exc_info=True)
            return False
        except Exception as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} unexpected error creating {producer!r}: {e}", exc_info=True)
            return False

    def update_producer(self, db: Session, producer: Producer) -> bool:
        if producer.producer_id is None:
            logger.error(f"{self.log_prefix} update called without a ProducerId.")
            return False
        try:
            if db.get(Producer, producer.producer_id) is None:
                logger.warning(f"{self.log_prefix} producer not found for update, ProducerId {producer.producer_id:04d}.")
                return False
            db.merge(producer)
            db.commit()
            logger.info(f"{self.log_prefix} updated ProducerId {producer.producer_id:04d}.")
            return True
        except SQLAlchemyError as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} update failed for ProducerId {producer.producer_id:04d}: {e}", exc_info=True)
            return False
        except Exception as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} unexpected error updating ProducerId {producer.producer_id:04d}: {e}", exc_info=True)
            return False

    def delete_producer(self, db: Session, producer_id: int) -> bool:
        """
        Deletes the producer and every product that references it.

        Products and producer are removed in the same unit of work and
        committed once, so either all rows go or none do.
        """
        try:
            producer = db.get(Producer, producer_id)
            if producer is None:
                logger.warning(f"{self.log_prefix} producer not found for the ProducerId {producer_id:04d}.")
                return False

            products = db.scalars(select(Product).where(Product.producer_id == producer_id)).all()
            for product in products:
                db.delete(product)
            db.delete(producer)
            db.commit()
            logger.info(f"{self.log_prefix} deleted ProducerId {producer_id:04d} and {len(products)} of its products.")
            return True
        except SQLAlchemyError as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} deletion failed for the ProducerId {producer_id:04d}: {e}", exc_info=True)
            return False
        except Exception as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} unexpected error deleting ProducerId {producer_id:04d}: {e}", exc_info=True)
            return False
