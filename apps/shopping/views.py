from uuid import UUID

from django.db.models import Count
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.pagination import PageNumberPagination
from .models import ShoppingList, ShoppingListItem
from .serializers import (
    ShoppingListSerializer,
    ShoppingListListSerializer,
    ShoppingListItemSerializer,
)


class ShoppingPagination(PageNumberPagination):
    """Custom pagination for shopping lists."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ShoppingListViewSet(viewsets.ModelViewSet):
    """
    ViewSet for ShoppingList CRUD operations.

    list: Get all shopping lists
    create: Create a shopping list
    retrieve: Get a list with its items
    update: Update a list
    partial_update: Partially update a list
    destroy: Delete a list and its items
    """

    queryset = ShoppingList.objects.all()
    serializer_class = ShoppingListSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = ShoppingPagination

    def get_queryset(self):
        if self.action == 'list':
            return ShoppingList.objects.annotate(item_count=Count('items'))
        return ShoppingList.objects.prefetch_related('items')

    def get_serializer_class(self):
        """Use lightweight serializer for list action."""
        if self.action == 'list':
            return ShoppingListListSerializer
        return ShoppingListSerializer


class ShoppingListItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for ShoppingListItem CRUD operations.

    Filter by list with ?shopping_list=<id>.
    """

    queryset = ShoppingListItem.objects.select_related('shopping_list')
    serializer_class = ShoppingListItemSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = ShoppingPagination

    def get_queryset(self):
        """Filter items by shopping list if specified."""
        queryset = super().get_queryset()

        shopping_list_id = self.request.query_params.get('shopping_list')
        if shopping_list_id:
            try:
                queryset = queryset.filter(shopping_list_id=UUID(shopping_list_id))
            except ValueError:
                return queryset.none()

        return queryset
