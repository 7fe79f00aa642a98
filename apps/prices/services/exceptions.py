"""
Domain exceptions for prices services.

Exception Hierarchy:
    PricesServiceError (base)
    ├── PriceValidationError
    ├── PriceDataNotFoundError
    ├── EmptyListError
    └── ShoppingListNotFoundError

Views catch these and map them to HTTP responses:

    try:
        result = cheapest_store(item_name=name)
    except PriceDataNotFoundError as e:
        return Response({'error': str(e)}, status=404)
"""


class PricesServiceError(Exception):
    """Base exception for prices services."""
    pass


class PriceValidationError(PricesServiceError):
    """Price report is missing a required field or has an invalid price."""
    pass


class PriceDataNotFoundError(PricesServiceError):
    """No price observations match the query."""
    pass


class EmptyListError(PricesServiceError):
    """Store optimisation requested for a shopping list without items."""
    pass


class ShoppingListNotFoundError(PricesServiceError):
    """Shopping list does not exist."""
    pass
