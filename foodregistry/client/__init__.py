# foodregistry/client/__init__.py
# Client side of the catalog: API client, preference store and the product list page.

from .product_api_client import ProductApiClient
from .view_preferences import ViewPreferenceStore
from .product_list_page import ProductListPage, LoadState, ViewMode, VIEW_MODE_STORAGE_KEY, build_product_list_page

__all__ = [
    "ProductApiClient",
    "ViewPreferenceStore",
    "ProductListPage",
    "LoadState",
    "ViewMode",
    "VIEW_MODE_STORAGE_KEY",
    "build_product_list_page",
]
