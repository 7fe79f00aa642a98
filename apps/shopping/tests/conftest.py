import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.shopping.models import ShoppingList, ShoppingListItem


User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        username='shopper',
        email='shopper@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as test user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def shopping_list(db):
    """Create a shopping list with two items."""
    shopping_list = ShoppingList.objects.create(name='Weekly groceries', notes='Saturday run')
    ShoppingListItem.objects.create(
        shopping_list=shopping_list,
        name='Rice',
        category='Grains',
        estimated_price=Decimal('4.50'),
        quantity=2,
    )
    ShoppingListItem.objects.create(
        shopping_list=shopping_list,
        name='Milk',
        category='Dairy',
    )
    return shopping_list


@pytest.fixture
def other_shopping_list(db):
    """Create a second shopping list with one item."""
    shopping_list = ShoppingList.objects.create(name='Party')
    ShoppingListItem.objects.create(shopping_list=shopping_list, name='Crisps', quantity=5)
    return shopping_list
