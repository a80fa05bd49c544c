# foodregistry/client/product_list_page.py
# State and behaviour of the product list page, independent of any rendering toolkit.

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from foodregistry.client.product_api_client import ProductApiClient
from foodregistry.client.view_preferences import ViewPreferenceStore
from foodregistry.utils.product_filter import filter_products
from foodregistry.utils.logger import logger

VIEW_MODE_STORAGE_KEY = 'productViewMode'
FETCH_ERROR_MESSAGE = 'Failed to fetch products.'
DELETE_ERROR_MESSAGE = 'Failed to delete product.'


class LoadState(str, Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    SUCCESS = 'success'
    ERROR = 'error'


class ViewMode(str, Enum):
    TABLE = 'table'
    GRID = 'grid'


def _decline(message: str) -> bool:
    return False


class ProductListPage:
    """
    Product list page: fetch on mount, manual refresh, search filtering,
    table/grid toggle remembered in the preference store, and deletion
    behind a confirmation prompt.

    Fetching goes idle -> loading -> success|error -> idle. Listeners passed
    to on_state_change see every transition.

    `client` needs fetch_products() and delete_product(id), raising on
    failure; ProductApiClient fits. `confirm` receives the prompt text and
    answers True to go ahead; without one, deletions are declined.
    """

    def __init__(self, client, preferences: ViewPreferenceStore,
                 confirm: Optional[Callable[[str], bool]] = None):
        self.client = client
        self.preferences = preferences
        self.confirm = confirm or _decline

        self.products: List[Dict[str, Any]] = []
        self.state = LoadState.IDLE
        self.last_outcome: Optional[LoadState] = None
        self.error: Optional[str] = None
        self.view_mode = ViewMode.TABLE
        self.search_query = ''
        self.show_unauthorized_error = False
        self._listeners: List[Callable[[LoadState], None]] = []

    # --- Lifecycle ---

    def mount(self):
        """Restores the saved view mode, then fetches the products."""
        saved_view_mode = self.preferences.get_item(VIEW_MODE_STORAGE_KEY)
        logger.debug(f"Saved view mode: {saved_view_mode}")
        if saved_view_mode == ViewMode.GRID.value:
            self.view_mode = ViewMode.GRID
        self._save_view_mode()
        self.refresh()

    def refresh(self):
        """
        Fetches the products. Any failure ends in the error state, and the
        page returns to idle either way.
        """
        self.error = None
        self._set_state(LoadState.LOADING)
        outcome = LoadState.ERROR
        try:
            products = self.client.fetch_products()
            if products is None:
                logger.warning("Fetch returned no body, showing an empty list.")
                products = []
            self.products = list(products)
            outcome = LoadState.SUCCESS
            logger.debug(f"Fetched {len(self.products)} products.")
        except Exception as e:
            logger.error(f"There was a problem with the fetch operation: {e}", exc_info=True)
            self.error = FETCH_ERROR_MESSAGE
        finally:
            self.last_outcome = outcome
            self._set_state(outcome)
            self._set_state(LoadState.IDLE)

    @property
    def loading(self) -> bool:
        return self.state == LoadState.LOADING

    def on_state_change(self, listener: Callable[[LoadState], None]):
        self._listeners.append(listener)

    # --- View mode ---

    @property
    def show_table(self) -> bool:
        return self.view_mode == ViewMode.TABLE

    def toggle_view_mode(self) -> ViewMode:
        self.view_mode = ViewMode.GRID if self.view_mode == ViewMode.TABLE else ViewMode.TABLE
        self._save_view_mode()
        return self.view_mode

    # --- Search ---

    def set_search_query(self, query: str):
        self.search_query = query or ''

    @property
    def visible_products(self) -> List[Dict[str, Any]]:
        """Products whose name or description contains the search query, any case."""
        return filter_products(self.products, self.search_query)

    # --- Deletion ---

    def delete_product(self, product_id: int) -> bool:
        """
        Asks for confirmation, then deletes. Returns True only when the
        product was deleted and removed from the list.
        """
        if not self.confirm(f"Are you sure you want to delete the product {product_id}?"):
            return False
        try:
            self.client.delete_product(product_id)
        except Exception as e:
            logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
            self.show_unauthorized_error = True
            self.error = DELETE_ERROR_MESSAGE
            return False

        self.products = [p for p in self.products if p.get('productId') != product_id]
        logger.info(f"Product deleted: {product_id}")
        return True

    def dismiss_error_popup(self):
        self.show_unauthorized_error = False

    def _save_view_mode(self):
        self.preferences.set_item(VIEW_MODE_STORAGE_KEY, self.view_mode.value)

    def _set_state(self, state: LoadState):
        self.state = state
        for listener in self._listeners:
            listener(state)


def build_product_list_page(app_config, confirm: Optional[Callable[[str], bool]] = None) -> ProductListPage:
    """Wires a page to the API and preference file named in the application config."""
    client = ProductApiClient(app_config.API_BASE_URL, timeout=app_config.REQUEST_TIMEOUT)
    return ProductListPage(client, ViewPreferenceStore(app_config.PREFERENCES_PATH), confirm=confirm)
