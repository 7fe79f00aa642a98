"""
Serializers for prices app.

This module contains:
1. Input serializers - request body and query parameter validation
2. Model serializers - price observations
3. Response serializers - API documentation for computed payloads
"""

from decimal import Decimal

from django.conf import settings
from rest_framework import serializers
from .models import PriceObservation


def _setting(name, default):
    return getattr(settings, name, default)


# =============================================================================
# Input Serializers
# =============================================================================

class PriceReportInputSerializer(serializers.Serializer):
    """
    Validate a price report.

    Fields:
        item_name (str): Item as named on the shelf
        category (str): Item category
        store (str): Store identifier
        price (Decimal): Non-negative price
        unit (str): Unit of sale, defaults to 'item'
    """

    item_name = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=100)
    store = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=None, decimal_places=None, min_value=Decimal('0'))
    unit = serializers.CharField(max_length=50, required=False, allow_blank=True)


class PriceObservationFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for observation listing.

    Query Parameters:
        item (str): Item name contains (case-insensitive)
        store (str): Exact store
        verified (bool): Only verified / unverified observations
    """

    item = serializers.CharField(required=False, allow_blank=True)
    store = serializers.CharField(required=False, allow_blank=True)
    verified = serializers.BooleanField(required=False, allow_null=True, default=None)


class CheapestStoreQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the cheapest store lookup.

    Query Parameters:
        max_days (int): Age limit for observations in days (1-3650)
    """

    max_days = serializers.IntegerField(
        min_value=1,
        max_value=3650,
        required=False,
        default=_setting('PRICE_DEFAULT_MAX_DAYS', 90),
        help_text='Only use prices observed within this many days'
    )


class OptimalStoresQuerySerializer(CheapestStoreQuerySerializer):
    """
    Validate query parameters for the optimal stores endpoint.

    Query Parameters:
        max_days (int): Age limit for observations in days (1-3650)
        max_stores (int): Most stores to visit (1-20)
    """

    max_stores = serializers.IntegerField(
        min_value=1,
        max_value=20,
        required=False,
        default=_setting('PRICE_DEFAULT_MAX_STORES', 3),
        help_text='Maximum number of stores in the plan'
    )


# =============================================================================
# Model Serializers
# =============================================================================

class PriceObservationSerializer(serializers.ModelSerializer):
    """Serializer for price observations."""

    class Meta:
        model = PriceObservation
        fields = [
            'id',
            'item_name',
            'category',
            'store',
            'price',
            'unit',
            'observed_at',
            'verified',
            'report_count',
            'reported_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


# =============================================================================
# Response Serializers (API documentation)
# =============================================================================

class ErrorSerializer(serializers.Serializer):
    """Error payload."""
    error = serializers.CharField()


class PriceNotFoundSerializer(ErrorSerializer):
    """No price data, with similarly named items."""
    suggestions = serializers.ListField(child=serializers.CharField())


class PriceReportResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    observation = PriceObservationSerializer()


class StorePriceEntrySerializer(serializers.Serializer):
    store = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    observed_at = serializers.DateTimeField()
    unit = serializers.CharField()
    verified = serializers.BooleanField()
    report_count = serializers.IntegerField()


class SavingsSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2)


class CheapestStoreResponseSerializer(serializers.Serializer):
    item_name = serializers.CharField()
    cheapest_store = StorePriceEntrySerializer()
    all_stores = StorePriceEntrySerializer(many=True)
    savings = SavingsSerializer(allow_null=True)


class StoreRankingSerializer(serializers.Serializer):
    store = serializers.CharField()
    items_found = serializers.IntegerField()
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    coverage = serializers.DecimalField(max_digits=5, decimal_places=2)
    average_cost_per_item = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_ids = serializers.ListField(child=serializers.UUIDField())


class PlannedItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class StorePlanSerializer(serializers.Serializer):
    store = serializers.CharField()
    items = PlannedItemSerializer(many=True)
    item_count = serializers.IntegerField()
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    coverage = serializers.DecimalField(max_digits=5, decimal_places=2)


class StoreVisitSerializer(serializers.Serializer):
    """
    Store visit plan.

    'single' plans carry store/coverage; 'multiple' and 'none' plans carry
    store_count/stores/total_coverage. All carry total_cost.
    """

    type = serializers.ChoiceField(choices=['single', 'multiple', 'none'])
    store = serializers.CharField(required=False)
    coverage = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    store_count = serializers.IntegerField(required=False)
    stores = StorePlanSerializer(many=True, required=False)
    total_coverage = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=2)


class ShoppingListSummarySerializer(serializers.Serializer):
    total_items = serializers.IntegerField()
    items_with_price_data = serializers.IntegerField()
    items_without_price_data = serializers.IntegerField()


class UnpricedItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    estimated_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    quantity = serializers.IntegerField()


class OptimalStoresResponseSerializer(serializers.Serializer):
    shopping_list_summary = ShoppingListSummarySerializer()
    optimal_store_visit = StoreVisitSerializer()
    all_stores = StoreRankingSerializer(many=True)
    items_without_prices = UnpricedItemSerializer(many=True)
