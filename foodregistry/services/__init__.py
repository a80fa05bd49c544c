# foodregistry/services/__init__.py
# Makes 'services' a package. Exports service classes.

from .product_service import ProductService
from .producer_service import ProducerService

__all__ = [
    "ProductService",
    "ProducerService",
]
