# foodregistry/client/product_api_client.py
# HTTP client for the catalog API, used by the product list page.

from typing import Any, Dict, List, Optional
import requests

from foodregistry.utils.logger import logger
from foodregistry.api.errors import BackendRequestError


class ProductApiClient:
    """
    Thin wrapper over the /api/products and /api/producers endpoints.

    Every call is a single attempt. Transport errors and non-2xx answers
    raise BackendRequestError; its status_code is the HTTP status when the
    server answered, 502 otherwise.
    """

    def __init__(self, base_url: str, timeout: int = 30, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.info(f"ProductApiClient initialized for URL: {self.base_url}")

    # --- Products ---

    def fetch_products(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"search": search} if search else None
        return self._request("GET", "/api/products", params=params)

    def fetch_product(self, product_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/products/{product_id}")

    def create_product(self, product: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/products", json=product)

    def update_product(self, product_id: int, product: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/products/{product_id}", json=product)

    def delete_product(self, product_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/products/{product_id}")

    # --- Producers ---

    def fetch_producers(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/producers")

    def fetch_producer(self, producer_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/producers/{producer_id}")

    def create_producer(self, producer: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/producers", json=producer)

    def update_producer(self, producer_id: int, producer: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/producers/{producer_id}", json=producer)

    def delete_producer(self, producer_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/producers/{producer_id}")

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 502
            detail = self._error_detail(e.response)
            logger.error(f"HTTP error {status_code} from {method} {url}: {detail}")
            raise BackendRequestError(f"{method} {path} failed with status {status_code}: {detail}", status_code) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error calling {method} {url}: {e}")
            raise BackendRequestError(f"{method} {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendRequestError(f"{method} {path} returned invalid JSON.") from e

    @staticmethod
    def _error_detail(response: Optional[requests.Response]) -> str:
        if response is None:
            return "no response"
        try:
            body = response.json()
            if isinstance(body, dict) and body.get('error'):
                return str(body['error'])
        except ValueError:
            pass
        return response.text[:500]
