# foodregistry/database/product_repository.py
# Product CRUD over SQLAlchemy ORM sessions. Failures are logged and reported as sentinels.

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from .base_repository import BaseRepository
from foodregistry.domain.product import Product
from foodregistry.utils.logger import logger

class ProductRepository(BaseRepository):
    """
    Repository for products.
    Reads return None on failure, writes return False; nothing is raised.
    """

    def get_all(self, db: Session) -> Optional[List[Product]]:
        """All products ordered by id, or None if the query failed."""
        try:
            products = db.scalars(select(Product).order_by(Product.product_id)).all()
            logger.debug(f"{self.log_prefix} loaded {len(products)} products.")
            return list(products)
        except SQLAlchemyError as e:
            logger.error(f"{self.log_prefix} products query failed in get_all(): {e}", exc_info=True)
            return None
        except Exception as e:
            logger.error(f"{self.log_prefix} unexpected error in get_all(): {e}", exc_info=True)
            return None

    def get_by_producer(self, db: Session, producer_id: int) -> Optional[List[Product]]:
        """Products of one producer, or None if the query failed."""
        try:
            stmt = select(Product).where(Product.producer_id == producer_id).order_by(Product.product_id)
            return list(db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"{self.log_prefix} products query failed for ProducerId {producer_id:04d}: {e}", exc_info=True)
            return None
        except Exception as e:
            logger.error(f"{self.log_prefix} unexpected error listing products of ProducerId {producer_id:04d}: {e}", exc_info=True)
            return None

    def get_product_by_id(self, db: Session, product_id: int) -> Optional[Product]:
        """The product, or None when it does not exist or the lookup failed."""
        try:
            return db.get(Product, product_id)
        except SQLAlchemyError as e:
            logger.error(f"{self.log_prefix} get() failed for ProductId {product_id:04d}: {e}", exc_info=True)
            return None
        except Exception as e:
            logger.error(f"{self.log_prefix} unexpected error fetching ProductId {product_id:04d}: {e}", exc_info=True)
            return None

    def create(self, db: Session, product: Product) -> bool:
        """Adds and commits the product. product.product_id is set on success."""
        try:
            db.add(product)
            db.commit()
            logger.info(f"{self.log_prefix} created ProductId {product.product_id:04d} ('{product.name}').")
            return True
        except SQLAlchemyError as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} product creation failed for {product!r}, error message: {e}", exc_info=True)
            return False
        except Exception as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} unexpected error creating {product!r}: {e}", exc_info=True)
            return False

    def update(self, db: Session, product: Product) -> bool:
        """
        Writes the state of a (possibly detached) product over the stored row.
        Returns False when no product with that id exists.
        """
        if product.product_id is None:
            logger.error(f"{self.log_prefix} update called without a ProductId.")
            return False
        try:
            if db.get(Product, product.product_id) is None:
                logger.warning(f"{self.log_prefix} product not found for update, ProductId {product.product_id:04d}.")
                return False
            db.merge(product)
            db.commit()
            logger.info(f"{self.log_prefix} updated ProductId {product.product_id:04d}.")
            return True
        except SQLAlchemyError as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} update failed for ProductId {product.product_id:04d}, error message: {e}", exc_info=True)
            return False
        except Exception as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} unexpected error updating ProductId {product.product_id:04d}: {e}", exc_info=True)
            return False

    def delete(self, db: Session, product_id: int) -> bool:
        """Re-fetches the product to confirm it exists, then removes it."""
        try:
            product = db.get(Product, product_id)
            if product is None:
                logger.warning(f"{self.log_prefix} product not found for the ProductId {product_id:04d}.")
                return False

            db.delete(product)
            db.commit()
            logger.info(f"{self.log_prefix} deleted ProductId {product_id:04d}.")
            return True
        except SQLAlchemyError as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} product deletion failed for the ProductId {product_id:04d}, error message: {e}", exc_info=True)
            return False
        except Exception as e:
            self._rollback_quietly(db)
            logger.error(f"{self.log_prefix} unexpected error deleting ProductId {product_id:04d}: {e}", exc_info=True)
            return False
