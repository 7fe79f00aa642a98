"""
Shopping list coverage analysis.

For every item on a shopping list, look up what each store charges, then
aggregate per store: how many list items the store can supply and what
buying them there would cost.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from .price_query import find_matching_observations
from .rounding import round2, percentage


logger = logging.getLogger(__name__)


def _item_summary(item) -> dict:
    return {
        'id': item.id,
        'name': item.name,
        'estimated_price': item.estimated_price,
        'quantity': item.quantity,
    }


def build_store_rankings(items_with_prices: List[dict], total_items: int) -> List[dict]:
    """
    Aggregate per-store coverage and cost, best store first.

    Each item counts at most once per store, priced at the first (cheapest)
    entry for that store in the item's ascending price list.

    Args:
        items_with_prices: Items with a 'prices' list of {'store', 'price'}
            sorted ascending by price
        total_items: Size of the whole shopping list, priced or not

    Returns:
        List of store coverage dicts sorted by coverage (desc), then total
        cost (asc), then store name
    """
    analysis = {}

    for item in items_with_prices:
        for entry in item['prices']:
            stats = analysis.setdefault(entry['store'], {
                'items_found': 0,
                'total_cost': Decimal('0.00'),
                'item_ids': [],
            })
            if item['id'] in stats['item_ids']:
                continue
            stats['items_found'] += 1
            stats['total_cost'] += entry['price'] * item['quantity']
            stats['item_ids'].append(item['id'])

    rankings = []
    for store, stats in analysis.items():
        items_found = stats['items_found']
        rankings.append({
            'store': store,
            'items_found': items_found,
            'total_cost': round2(stats['total_cost']),
            'coverage': percentage(items_found, total_items),
            'average_cost_per_item': (
                round2(stats['total_cost'] / items_found) if items_found else Decimal('0.00')
            ),
            'item_ids': stats['item_ids'],
        })

    rankings.sort(key=lambda s: (-s['coverage'], s['total_cost'], s['store']))
    return rankings


def analyze_coverage(*, list_items: Iterable, max_days: Optional[int] = None) -> dict:
    """
    Split a shopping list into priced and unpriced items and rank stores.

    Args:
        list_items: Shopping list items (id, name, estimated_price, quantity)
        max_days: Only consider observations this many days old or newer

    Returns:
        dict with:
            - store_rankings: Per-store coverage, best first
            - items_with_prices: Items with every known price
              ({'store', 'price', 'total_price'}), cheapest first
            - items_without_prices: Items no store has a price for
            - total_items: Number of items on the list
    """
    list_items = list(list_items)
    items_with_prices = []
    items_without_prices = []

    for item in list_items:
        observations = find_matching_observations(item_name=item.name, max_days=max_days)
        prices = [
            {
                'store': observation.store,
                'price': observation.price,
                'total_price': observation.price * item.quantity,
            }
            for observation in observations
        ]

        if not prices:
            items_without_prices.append(_item_summary(item))
            continue

        items_with_prices.append({**_item_summary(item), 'prices': prices})

    logger.debug(
        "Coverage analysis: %d items priced, %d without prices",
        len(items_with_prices), len(items_without_prices)
    )

    return {
        'store_rankings': build_store_rankings(items_with_prices, len(list_items)),
        'items_with_prices': items_with_prices,
        'items_without_prices': items_without_prices,
        'total_items': len(list_items),
    }
