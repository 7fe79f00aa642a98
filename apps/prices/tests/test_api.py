import pytest
from decimal import Decimal
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.prices.models import PriceObservation


# =============================================================================
# Price Report API Tests
# =============================================================================

@pytest.mark.django_db
class TestPriceReport:
    """Tests for POST /api/prices/"""

    def test_report_creates_observation(self, reporter_client, price_reporter):
        url = reverse('prices:observation-list')
        data = {
            'item_name': 'Rice',
            'category': 'Grains',
            'store': 'StoreX',
            'price': '500.00',
        }

        response = reporter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['message'] == 'Store price added successfully'
        assert response.data['observation']['report_count'] == 1
        assert response.data['observation']['verified'] is False
        assert response.data['observation']['unit'] == 'item'

        observation = PriceObservation.objects.get()
        assert observation.reported_by == price_reporter

    def test_repeat_report_returns_200(self, reporter_client):
        url = reverse('prices:observation-list')
        data = {'item_name': 'Rice', 'category': 'Grains', 'store': 'StoreX', 'price': '500.00'}

        reporter_client.post(url, data, format='json')
        response = reporter_client.post(url, {**data, 'item_name': 'rice', 'price': '490'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Price updated and report count increased'
        assert response.data['observation']['report_count'] == 2
        assert response.data['observation']['price'] == '490.00'
        assert PriceObservation.objects.count() == 1

    def test_third_report_verifies(self, reporter_client):
        url = reverse('prices:observation-list')
        data = {'item_name': 'Rice', 'category': 'Grains', 'store': 'StoreX', 'price': '500.00'}

        for _ in range(3):
            response = reporter_client.post(url, data, format='json')

        assert response.data['observation']['verified'] is True

    def test_report_requires_authentication(self, api_client):
        url = reverse('prices:observation-list')
        data = {'item_name': 'Rice', 'category': 'Grains', 'store': 'StoreX', 'price': '500.00'}

        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert PriceObservation.objects.count() == 0

    def test_report_missing_fields(self, reporter_client):
        url = reverse('prices:observation-list')

        response = reporter_client.post(url, {'item_name': 'Rice', 'price': '5'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'category' in response.data
        assert 'store' in response.data

    def test_report_negative_price(self, reporter_client):
        url = reverse('prices:observation-list')
        data = {'item_name': 'Rice', 'category': 'Grains', 'store': 'StoreX', 'price': '-1'}

        response = reporter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'price' in response.data

    def test_report_rounds_extra_decimal_places(self, reporter_client):
        """Prices with more than 2 decimal places are rounded half up."""
        url = reverse('prices:observation-list')
        data = {'item_name': 'Milk', 'category': 'Dairy', 'store': 'StoreX', 'price': '3.499'}

        response = reporter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['observation']['price'] == '3.50'

    def test_report_price_too_large(self, reporter_client):
        url = reverse('prices:observation-list')
        data = {'item_name': 'Rice', 'category': 'Grains', 'store': 'StoreX', 'price': '123456789012'}

        response = reporter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data
        assert PriceObservation.objects.count() == 0

    def test_report_non_numeric_price(self, reporter_client):
        url = reverse('prices:observation-list')
        data = {'item_name': 'Rice', 'category': 'Grains', 'store': 'StoreX', 'price': 'cheap'}

        response = reporter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Observation Listing API Tests
# =============================================================================

@pytest.mark.django_db
class TestObservationList:
    """Tests for GET /api/prices/"""

    def test_list_observations_unauthenticated(self, api_client, two_store_prices):
        url = reverse('prices:observation-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 4

    def test_filter_by_item(self, api_client, two_store_prices):
        url = reverse('prices:observation-list')
        response = api_client.get(url, {'item': 'mil'})

        assert response.status_code == status.HTTP_200_OK
        assert {o['store'] for o in response.data['results']} == {'Store1', 'Store2'}
        assert all(o['item_name'] == 'Milk' for o in response.data['results'])

    def test_filter_by_store(self, api_client, two_store_prices):
        url = reverse('prices:observation-list')
        response = api_client.get(url, {'store': 'Store2'})

        assert {o['item_name'] for o in response.data['results']} == {'Milk', 'Bread'}

    def test_filter_by_verified(self, api_client, make_observation):
        make_observation('Rice', 'StoreX', '5.00', report_count=3, verified=True)
        make_observation('Milk', 'StoreX', '1.00')

        url = reverse('prices:observation-list')
        response = api_client.get(url, {'verified': 'true'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['item_name'] == 'Rice'

    def test_retrieve_observation(self, api_client, make_observation):
        observation = make_observation('Rice', 'StoreX', '5.00')

        url = reverse('prices:observation-detail', kwargs={'pk': observation.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['price'] == '5.00'

    def test_retrieve_missing_observation(self, api_client, db):
        url = reverse('prices:observation-detail', kwargs={'pk': uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Cheapest Store API Tests
# =============================================================================

@pytest.mark.django_db
class TestCheapestStoreEndpoint:
    """Tests for GET /api/prices/cheapest/{item_name}/"""

    def test_cheapest_store(self, api_client, make_observation):
        make_observation('Rice', 'StoreX', '500.00')
        make_observation('Rice', 'StoreY', '480.00')

        url = reverse('prices:cheapest-store', kwargs={'item_name': 'Rice'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['cheapest_store']['store'] == 'StoreY'
        assert response.data['savings']['amount'] == Decimal('20.00')
        assert response.data['savings']['percentage'] == Decimal('4.00')

    def test_max_days_param(self, api_client, make_observation):
        make_observation('Rice', 'StoreX', '400.00', days_ago=20)
        make_observation('Rice', 'StoreY', '500.00', days_ago=1)

        url = reverse('prices:cheapest-store', kwargs={'item_name': 'Rice'})
        response = api_client.get(url, {'max_days': 7})

        assert response.data['cheapest_store']['store'] == 'StoreY'
        assert response.data['savings'] is None

    def test_not_found_with_suggestions(self, api_client, make_observation):
        make_observation('Tomatoes', 'StoreX', '3.00')

        url = reverse('prices:cheapest-store', kwargs={'item_name': 'tomatos'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'No price data found for this item'
        assert response.data['suggestions'] == ['Tomatoes']

    def test_invalid_max_days(self, api_client, db):
        url = reverse('prices:cheapest-store', kwargs={'item_name': 'Rice'})
        response = api_client.get(url, {'max_days': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Optimal Stores API Tests
# =============================================================================

@pytest.mark.django_db
class TestOptimalStoresEndpoint:
    """Tests for GET /api/prices/optimal-stores/{shopping_list_id}/"""

    def test_optimal_stores(self, api_client, two_store_prices, three_item_list):
        url = reverse('prices:optimal-stores', kwargs={'shopping_list_id': three_item_list.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        visit = response.data['optimal_store_visit']
        assert visit['type'] == 'multiple'
        assert [s['store'] for s in visit['stores']] == ['Store2', 'Store1']
        assert visit['total_cost'] == Decimal('150.00')
        assert response.data['shopping_list_summary']['total_items'] == 3
        assert len(response.data['all_stores']) == 2

    def test_max_stores_param(self, api_client, two_store_prices, three_item_list):
        url = reverse('prices:optimal-stores', kwargs={'shopping_list_id': three_item_list.id})
        response = api_client.get(url, {'max_stores': 1})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['optimal_store_visit']['type'] == 'single'
        assert response.data['optimal_store_visit']['store'] == 'Store2'

    def test_rendered_json(self, api_client, two_store_prices, three_item_list):
        """Money and ids survive JSON rendering."""
        url = reverse('prices:optimal-stores', kwargs={'shopping_list_id': three_item_list.id})
        response = api_client.get(url)

        body = response.json()
        assert body['optimal_store_visit']['store_count'] == 2
        assert isinstance(body['optimal_store_visit']['stores'][0]['items'][0]['id'], str)

    def test_unknown_list(self, api_client, db):
        url = reverse('prices:optimal-stores', kwargs={'shopping_list_id': uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'not found' in response.data['error']

    def test_empty_list(self, api_client, make_shopping_list):
        shopping_list = make_shopping_list()

        url = reverse('prices:optimal-stores', kwargs={'shopping_list_id': shopping_list.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'No items found in this shopping list'

    def test_invalid_max_stores(self, api_client, three_item_list):
        url = reverse('prices:optimal-stores', kwargs={'shopping_list_id': three_item_list.id})
        response = api_client.get(url, {'max_stores': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
