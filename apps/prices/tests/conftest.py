import pytest
from decimal import Decimal
from datetime import timedelta
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.prices.models import PriceObservation, StoreItemKey, normalize_item_name
from apps.shopping.models import ShoppingList, ShoppingListItem


User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def price_reporter(db):
    """Create and return a user who reports prices."""
    return User.objects.create_user(
        username='reporter',
        email='reporter@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def reporter_client(api_client, price_reporter):
    """Return API client authenticated as the price reporter."""
    refresh = RefreshToken.for_user(price_reporter)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def make_observation(db):
    """
    Return a factory that writes observations straight to the ledger,
    bypassing report folding, so tests can control age and duplicates.
    """
    def _make(item_name, store, price, *, days_ago=0, category='Groceries',
              unit='item', report_count=1, verified=False):
        key, _ = StoreItemKey.objects.get_or_create(
            item_name_normalized=normalize_item_name(item_name),
            store=store,
        )
        return PriceObservation.objects.create(
            key=key,
            item_name=item_name,
            category=category,
            store=store,
            price=Decimal(str(price)),
            unit=unit,
            observed_at=timezone.now() - timedelta(days=days_ago),
            report_count=report_count,
            verified=verified,
        )
    return _make


@pytest.fixture
def make_shopping_list(db):
    """
    Return a factory for shopping lists.

    Items are (name, quantity) or (name, quantity, estimated_price) tuples.
    """
    def _make(*items, name='Weekly groceries'):
        shopping_list = ShoppingList.objects.create(name=name)
        for entry in items:
            item_name, quantity = entry[0], entry[1]
            estimated = Decimal(str(entry[2])) if len(entry) > 2 else None
            ShoppingListItem.objects.create(
                shopping_list=shopping_list,
                name=item_name,
                quantity=quantity,
                estimated_price=estimated,
            )
        return shopping_list
    return _make


@pytest.fixture
def two_store_prices(make_observation):
    """
    Two stores with overlapping ranges:
    Store1 sells Rice (60) and Milk (40); Store2 sells Milk (30) and Bread (60).
    """
    make_observation('Rice', 'Store1', '60.00')
    make_observation('Milk', 'Store1', '40.00')
    make_observation('Milk', 'Store2', '30.00')
    make_observation('Bread', 'Store2', '60.00')


@pytest.fixture
def three_item_list(make_shopping_list):
    """Rice, Milk and Bread, one of each."""
    return make_shopping_list(('Rice', 1, '55.00'), ('Milk', 1, '35.00'), ('Bread', 1, '50.00'))
