# foodregistry/client/cli.py
# Terminal entry point: renders the product list page as plain text.
import sys
from typing import List, Optional

from foodregistry.config import Config, load_config
from foodregistry.client.product_list_page import build_product_list_page, ViewMode
from foodregistry.utils.logger import logger


def main(argv: Optional[List[str]] = None, app_config: Optional[Config] = None) -> int:
    """
    Fetches the products and prints them in the saved view mode.
    Any arguments are joined into the search query. Returns the exit code.
    """
    argv = sys.argv[1:] if argv is None else argv
    page = build_product_list_page(app_config or load_config())
    page.mount()
    if page.error:
        print(page.error, file=sys.stderr)
        return 1

    page.set_search_query(" ".join(argv))
    products = page.visible_products
    logger.debug(f"Rendering {len(products)} products in {page.view_mode.value} mode.")

    if page.view_mode == ViewMode.TABLE:
        print(f"{'ID':>6}  {'Name':<30}  Description")
        for product in products:
            print(f"{product.get('productId'):>6}  {product.get('name', ''):<30}  {product.get('description', '')}")
    else:
        for product in products:
            print(f"[{product.get('productId')}] {product.get('name', '')}\n    {product.get('description', '')}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
