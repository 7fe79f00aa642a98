import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.shopping.models import ShoppingList, ShoppingListItem


# =============================================================================
# Shopping List API Tests
# =============================================================================

@pytest.mark.django_db
class TestShoppingListList:
    """Tests for GET /api/shopping/lists/"""

    def test_list_shopping_lists(self, api_client, shopping_list, other_shopping_list):
        url = reverse('shopping:shopping-list-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        counts = {entry['name']: entry['item_count'] for entry in response.data['results']}
        assert counts == {'Weekly groceries': 2, 'Party': 1}

    def test_retrieve_with_items(self, api_client, shopping_list):
        url = reverse('shopping:shopping-list-detail', kwargs={'pk': shopping_list.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['item_count'] == 2
        assert {i['name'] for i in response.data['items']} == {'Rice', 'Milk'}

        rice = next(i for i in response.data['items'] if i['name'] == 'Rice')
        assert rice['total_estimated_price'] == '9.00'

    def test_retrieve_missing_list(self, api_client, db):
        url = reverse('shopping:shopping-list-detail', kwargs={'pk': uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestShoppingListWrite:
    """Tests for creating, updating and deleting shopping lists."""

    def test_create_list(self, authenticated_client):
        url = reverse('shopping:shopping-list-list')
        response = authenticated_client.post(url, {'name': 'Monthly'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Monthly'
        assert response.data['item_count'] == 0
        assert ShoppingList.objects.filter(name='Monthly').exists()

    def test_create_list_unauthenticated(self, api_client, db):
        url = reverse('shopping:shopping-list-list')
        response = api_client.post(url, {'name': 'Monthly'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_rename_list(self, authenticated_client, shopping_list):
        url = reverse('shopping:shopping-list-detail', kwargs={'pk': shopping_list.id})
        response = authenticated_client.patch(url, {'name': 'Renamed'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        shopping_list.refresh_from_db()
        assert shopping_list.name == 'Renamed'

    def test_delete_list_removes_items(self, authenticated_client, shopping_list):
        url = reverse('shopping:shopping-list-detail', kwargs={'pk': shopping_list.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not ShoppingListItem.objects.filter(shopping_list_id=shopping_list.id).exists()


# =============================================================================
# Shopping List Item API Tests
# =============================================================================

@pytest.mark.django_db
class TestShoppingListItems:
    """Tests for /api/shopping/items/"""

    def test_filter_by_list(self, api_client, shopping_list, other_shopping_list):
        url = reverse('shopping:shopping-item-list')
        response = api_client.get(url, {'shopping_list': str(other_shopping_list.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [i['name'] for i in response.data['results']] == ['Crisps']

    def test_filter_by_invalid_list_id(self, api_client, shopping_list):
        url = reverse('shopping:shopping-item-list')
        response = api_client.get(url, {'shopping_list': 'not-a-uuid'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 0

    def test_add_item(self, authenticated_client, shopping_list):
        url = reverse('shopping:shopping-item-list')
        data = {
            'shopping_list': str(shopping_list.id),
            'name': '  Bread ',
            'quantity': 2,
            'estimated_price': '1.25',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Bread'
        assert response.data['total_estimated_price'] == '2.50'
        assert shopping_list.items.count() == 3

    def test_add_item_defaults_quantity(self, authenticated_client, shopping_list):
        url = reverse('shopping:shopping-item-list')
        data = {'shopping_list': str(shopping_list.id), 'name': 'Eggs'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['quantity'] == 1
        assert response.data['total_estimated_price'] is None

    def test_add_item_blank_name(self, authenticated_client, shopping_list):
        url = reverse('shopping:shopping-item-list')
        data = {'shopping_list': str(shopping_list.id), 'name': '   '}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'name' in response.data

    def test_add_item_zero_quantity(self, authenticated_client, shopping_list):
        url = reverse('shopping:shopping-item-list')
        data = {'shopping_list': str(shopping_list.id), 'name': 'Eggs', 'quantity': 0}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'quantity' in response.data

    def test_add_item_unknown_list(self, authenticated_client, db):
        url = reverse('shopping:shopping-item-list')
        data = {'shopping_list': str(uuid4()), 'name': 'Eggs'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'shopping_list' in response.data

    def test_update_quantity(self, authenticated_client, shopping_list):
        item = shopping_list.items.get(name='Rice')
        url = reverse('shopping:shopping-item-detail', kwargs={'pk': item.id})
        response = authenticated_client.patch(url, {'quantity': 5}, format='json')

        assert response.status_code == status.HTTP_200_OK
        item.refresh_from_db()
        assert item.quantity == 5

    def test_delete_item(self, authenticated_client, shopping_list):
        item = shopping_list.items.get(name='Milk')
        url = reverse('shopping:shopping-item-detail', kwargs={'pk': item.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert shopping_list.items.count() == 1
