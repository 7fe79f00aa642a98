from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'shopping'

router = DefaultRouter()
router.register(r'lists', views.ShoppingListViewSet, basename='shopping-list')
router.register(r'items', views.ShoppingListItemViewSet, basename='shopping-item')

urlpatterns = [
    # Shopping list routes
    # GET    /api/shopping/lists/           - List shopping lists
    # POST   /api/shopping/lists/           - Create list
    # GET    /api/shopping/lists/{id}/      - Get list with items
    # PATCH  /api/shopping/lists/{id}/      - Partial update
    # DELETE /api/shopping/lists/{id}/      - Delete list

    # Item routes
    # GET    /api/shopping/items/?shopping_list={id} - List items
    # POST   /api/shopping/items/                    - Add item
    # PATCH  /api/shopping/items/{id}/               - Update item
    # DELETE /api/shopping/items/{id}/               - Remove item

    # Plan a store visit: GET /api/prices/optimal-stores/{list_id}/

    # Include router URLs
    path('', include(router.urls)),
]
