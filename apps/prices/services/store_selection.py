"""
Store selection service.

Picks a small set of stores that together cover as much of a shopping list
as possible, then decides which item to buy at which of those stores.

Algorithm:
    Greedy set cover. Start from the best-ranked store, then repeatedly add
    the store covering the most still-uncovered items (ties go to the
    lowest additional cost) until max_stores is reached, every priced item
    is covered, or no remaining store adds anything. The true optimum
    (minimum set cover) is NP-hard and is not attempted.

    Once the stores are chosen, every item is reassigned to whichever
    selected store sells it cheapest, which may not be the store that first
    covered it. Stores left with nothing to buy are dropped.

All functions here work on plain dicts produced by coverage_analysis and
never touch the database.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from .exceptions import EmptyListError
from .rounding import round2, percentage


def build_item_price_map(items_with_prices: List[dict]) -> Dict[object, Dict[str, Decimal]]:
    """Map item id -> store -> lowest price of that item at that store."""
    price_map = {}
    for item in items_with_prices:
        store_prices = price_map.setdefault(item['id'], {})
        for entry in item['prices']:
            current = store_prices.get(entry['store'])
            if current is None or entry['price'] < current:
                store_prices[entry['store']] = entry['price']
    return price_map


def _items_at_store(store: str, price_map: dict) -> set:
    return {item_id for item_id, stores in price_map.items() if store in stores}


def select_optimal_stores(
    store_rankings: List[dict],
    items_with_prices: List[dict],
    max_stores: int,
    total_items: Optional[int] = None
) -> List[dict]:
    """
    Choose up to `max_stores` stores and assign items to them.

    Args:
        store_rankings: Store coverage dicts, best first (see
            coverage_analysis.build_store_rankings)
        items_with_prices: Priced list items with their 'prices'
        max_stores: Upper bound on the number of stores to visit
        total_items: Size of the whole shopping list; defaults to the
            number of priced items

    Returns:
        Ordered list of store plans. With a single candidate store or
        max_stores == 1 this is just the top-ranked store; otherwise each
        plan has 'store', 'items', 'item_count', 'total_cost' and 'coverage'.
        Empty when no store has any of the items.

    Raises:
        EmptyListError: If total_items is given as 0
        ValueError: If max_stores is less than 1
    """
    if total_items == 0:
        raise EmptyListError("No items found in this shopping list")
    if max_stores < 1:
        raise ValueError("max_stores must be at least 1")

    if not store_rankings:
        return []
    if total_items is None:
        total_items = len(items_with_prices)

    if len(store_rankings) <= 1 or max_stores == 1:
        return store_rankings[:1]

    price_map = build_item_price_map(items_with_prices)

    selected = [store_rankings[0]]
    selected_names = {store_rankings[0]['store']}
    covered = _items_at_store(store_rankings[0]['store'], price_map)

    while (
        len(selected) < max_stores
        and len(selected) < len(store_rankings)
        and len(covered) < len(items_with_prices)
    ):
        best_store = None
        best_additional_items = 0
        best_additional_cost = None

        for candidate in store_rankings:
            name = candidate['store']
            if name in selected_names:
                continue

            additional_items = 0
            additional_cost = Decimal('0.00')
            for item in items_with_prices:
                if item['id'] in covered:
                    continue
                price = price_map[item['id']].get(name)
                if price is None:
                    continue
                additional_items += 1
                additional_cost += price * item['quantity']

            if additional_items == 0:
                continue

            if (
                best_store is None
                or additional_items > best_additional_items
                or (
                    additional_items == best_additional_items
                    and additional_cost < best_additional_cost
                )
            ):
                best_store = candidate
                best_additional_items = additional_items
                best_additional_cost = additional_cost

        # Nothing left adds coverage
        if best_store is None:
            break

        selected.append(best_store)
        selected_names.add(best_store['store'])
        covered |= _items_at_store(best_store['store'], price_map)

    return optimize_item_distribution(selected, items_with_prices, price_map, total_items)


def optimize_item_distribution(
    selected_stores: List[dict],
    items_with_prices: List[dict],
    price_map: Dict[object, Dict[str, Decimal]],
    total_items: int
) -> List[dict]:
    """
    Assign every item to the cheapest of the selected stores.

    Ties go to the store selected first. Stores that end up with no items
    are left out; the rest keep their selection order.
    """
    plans = {}
    for store in selected_stores:
        plans[store['store']] = {
            'store': store['store'],
            'items': [],
            'item_count': 0,
            'total_cost': Decimal('0.00'),
        }

    for item in items_with_prices:
        store_prices = price_map.get(item['id'], {})
        cheapest_store = None
        cheapest_price = None

        for store in selected_stores:
            price = store_prices.get(store['store'])
            if price is not None and (cheapest_price is None or price < cheapest_price):
                cheapest_store = store['store']
                cheapest_price = price

        if cheapest_store is None:
            continue

        line_total = cheapest_price * item['quantity']
        plan = plans[cheapest_store]
        plan['items'].append({
            'id': item['id'],
            'name': item['name'],
            'price': cheapest_price,
            'quantity': item['quantity'],
            'total_price': line_total,
        })
        plan['total_cost'] += line_total
        plan['item_count'] += 1

    result = [plan for plan in plans.values() if plan['item_count'] > 0]
    for plan in result:
        plan['total_cost'] = round2(plan['total_cost'])
        plan['coverage'] = percentage(plan['item_count'], total_items)

    return result


def calculate_total_coverage(store_plans: List[dict], total_items: int) -> Decimal:
    """Share of the list covered by the union of the planned stores."""
    covered = set()
    for plan in store_plans:
        covered.update(item['id'] for item in plan['items'])
    return percentage(len(covered), total_items)


def build_store_visit(store_plans: List[dict], total_items: int) -> dict:
    """
    Shape the selected stores into the visit summary returned to clients.

    - one store:   {'type': 'single', 'store', 'coverage', 'total_cost'}
    - several:     {'type': 'multiple', 'store_count', 'stores',
                    'total_coverage', 'total_cost'}
    - none at all: {'type': 'none', ...} with zero coverage and cost
    """
    if not store_plans:
        return {
            'type': 'none',
            'store_count': 0,
            'stores': [],
            'total_coverage': Decimal('0.00'),
            'total_cost': Decimal('0.00'),
        }

    if len(store_plans) == 1:
        plan = store_plans[0]
        return {
            'type': 'single',
            'store': plan['store'],
            'coverage': plan['coverage'],
            'total_cost': plan['total_cost'],
        }

    return {
        'type': 'multiple',
        'store_count': len(store_plans),
        'stores': store_plans,
        'total_coverage': calculate_total_coverage(store_plans, total_items),
        'total_cost': round2(sum(plan['total_cost'] for plan in store_plans)),
    }
