"""Services for store price comparison and shopping plans."""

from .exceptions import (
    PricesServiceError,
    PriceValidationError,
    PriceDataNotFoundError,
    EmptyListError,
    ShoppingListNotFoundError,
)
from .price_ledger import (
    record_price,
    parse_price,
)
from .price_query import (
    item_name_contains,
    find_matching_observations,
    cheapest_store,
    calculate_savings,
    suggest_item_names,
)
from .coverage_analysis import (
    analyze_coverage,
    build_store_rankings,
)
from .store_selection import (
    select_optimal_stores,
    optimize_item_distribution,
    calculate_total_coverage,
    build_store_visit,
)
from .shopping_plan import (
    find_optimal_stores,
    find_optimal_stores_for_list,
)

__all__ = [
    # Exceptions
    'PricesServiceError',
    'PriceValidationError',
    'PriceDataNotFoundError',
    'EmptyListError',
    'ShoppingListNotFoundError',
    # Price Ledger
    'record_price',
    'parse_price',
    # Price Query
    'item_name_contains',
    'find_matching_observations',
    'cheapest_store',
    'calculate_savings',
    'suggest_item_names',
    # Coverage Analysis
    'analyze_coverage',
    'build_store_rankings',
    # Store Selection
    'select_optimal_stores',
    'optimize_item_distribution',
    'calculate_total_coverage',
    'build_store_visit',
    # Shopping Plan
    'find_optimal_stores',
    'find_optimal_stores_for_list',
]
