"""Shopping plan service - which stores to visit for a whole shopping list."""

import logging
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings

from apps.shopping.models import ShoppingList
from .coverage_analysis import analyze_coverage
from .exceptions import EmptyListError, ShoppingListNotFoundError
from .store_selection import select_optimal_stores, build_store_visit


logger = logging.getLogger(__name__)


def get_default_max_stores() -> int:
    return getattr(settings, 'PRICE_DEFAULT_MAX_STORES', 3)


def get_top_stores_limit() -> int:
    return getattr(settings, 'PRICE_TOP_STORES_LIMIT', 10)


def find_optimal_stores(
    *,
    list_items: Iterable,
    max_days: Optional[int] = None,
    max_stores: Optional[int] = None
) -> dict:
    """
    Build a store visit plan for a set of shopping list items.

    Args:
        list_items: Shopping list items (id, name, estimated_price, quantity)
        max_days: Only consider observations this many days old or newer
        max_stores: Upper bound on the number of stores in the plan

    Returns:
        dict with:
            - shopping_list_summary: total_items, items_with_price_data,
              items_without_price_data
            - optimal_store_visit: See store_selection.build_store_visit
            - all_stores: Top store rankings (PRICE_TOP_STORES_LIMIT)
            - items_without_prices: Items no store has a price for

    Raises:
        EmptyListError: If there are no items
    """
    list_items = list(list_items)
    if not list_items:
        raise EmptyListError("No items found in this shopping list")

    if max_stores is None:
        max_stores = get_default_max_stores()

    analysis = analyze_coverage(list_items=list_items, max_days=max_days)
    total_items = analysis['total_items']

    store_plans = select_optimal_stores(
        analysis['store_rankings'],
        analysis['items_with_prices'],
        max_stores,
        total_items=total_items,
    )
    visit = build_store_visit(store_plans, total_items)

    if visit['type'] == 'none':
        logger.warning("No store has prices for any of %d list items", total_items)
    else:
        logger.info(
            "Store plan (%s) for %d items, total cost %s",
            visit['type'], total_items, visit['total_cost']
        )

    return {
        'shopping_list_summary': {
            'total_items': total_items,
            'items_with_price_data': len(analysis['items_with_prices']),
            'items_without_price_data': len(analysis['items_without_prices']),
        },
        'optimal_store_visit': visit,
        'all_stores': analysis['store_rankings'][:get_top_stores_limit()],
        'items_without_prices': analysis['items_without_prices'],
    }


def find_optimal_stores_for_list(
    *,
    shopping_list_id: UUID,
    max_days: Optional[int] = None,
    max_stores: Optional[int] = None
) -> dict:
    """
    Build a store visit plan for a stored shopping list.

    Raises:
        ShoppingListNotFoundError: If the list doesn't exist
        EmptyListError: If the list has no items
    """
    try:
        shopping_list = ShoppingList.objects.get(id=shopping_list_id)
    except ShoppingList.DoesNotExist:
        raise ShoppingListNotFoundError(f"Shopping list {shopping_list_id} not found")

    return find_optimal_stores(
        list_items=shopping_list.items.all(),
        max_days=max_days,
        max_stores=max_stores,
    )
