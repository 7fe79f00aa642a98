from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'prices'

router = SimpleRouter()
router.register(r'', views.PriceObservationViewSet, basename='observation')

urlpatterns = [
    # Observation routes
    # GET    /api/prices/          - List observations
    # POST   /api/prices/          - Report a price
    # GET    /api/prices/{id}/     - Get observation details

    # Comparison endpoints
    path('cheapest/<str:item_name>/', views.cheapest_store, name='cheapest-store'),
    path('optimal-stores/<uuid:shopping_list_id>/', views.optimal_stores, name='optimal-stores'),

    # Include router URLs
    path('', include(router.urls)),
]
