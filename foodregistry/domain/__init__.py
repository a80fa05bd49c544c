# foodregistry/domain/__init__.py
# Makes 'domain' a package. Importing it registers every ORM model on Base.metadata.

from .producer import Producer
from .product import Product

__all__ = [
    "Producer",
    "Product",
]
