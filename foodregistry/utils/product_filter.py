from typing import Any, Iterable, List, Optional
from .logger import logger

def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)

def matches_search(item: Any, search_text: Optional[str]) -> bool:
    """
    Case-insensitive substring match of search_text against the item's
    name or description. Works on ORM objects and on JSON dicts.
    An empty search matches everything.
    """
    if not search_text:
        return True
    search_lower = search_text.lower()
    for name in ('name', 'description'):
        value = _field(item, name)
        if isinstance(value, str) and search_lower in value.lower():
            return True
    return False

def filter_products(products: Iterable[Any], search_text: Optional[str]) -> List[Any]:
    """Keeps the products whose name or description contains search_text."""
    products = list(products)
    if not search_text:
        return products

    filtered = [p for p in products if matches_search(p, search_text)]
    logger.debug(f"Filtered {len(products)} products to {len(filtered)} with search '{search_text}'.")
    return filtered
