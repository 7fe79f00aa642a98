from rest_framework import mixins, viewsets, status
from rest_framework.decorators import api_view
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .models import PriceObservation
from .serializers import (
    # Input serializers
    PriceReportInputSerializer,
    PriceObservationFilterSerializer,
    CheapestStoreQuerySerializer,
    OptimalStoresQuerySerializer,
    # Output serializers
    PriceObservationSerializer,
    PriceReportResponseSerializer,
    CheapestStoreResponseSerializer,
    OptimalStoresResponseSerializer,
    PriceNotFoundSerializer,
    ErrorSerializer,
)
from .services import (
    record_price,
    cheapest_store as find_cheapest_store,
    suggest_item_names,
    item_name_contains,
    find_optimal_stores_for_list,
    PriceValidationError,
    PriceDataNotFoundError,
    EmptyListError,
    ShoppingListNotFoundError,
)


class PricePagination(PageNumberPagination):
    """Custom pagination for price observations."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class PriceObservationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet
):
    """
    Price ledger endpoints.

    list: Browse observations (filters: item, store, verified)
    retrieve: Get a single observation
    create: Report a price; folds into a recent observation of the same
        item at the same store when there is one
    """

    queryset = PriceObservation.objects.all()
    serializer_class = PriceObservationSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = PricePagination

    def get_queryset(self):
        """Filter observations by query parameters."""
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filters = PriceObservationFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        if params.get('item'):
            queryset = queryset.filter(item_name_contains(params['item']))
        if params.get('store'):
            queryset = queryset.filter(store=params['store'])
        if params.get('verified') is not None:
            queryset = queryset.filter(verified=params['verified'])

        return queryset

    @extend_schema(
        request=PriceReportInputSerializer,
        responses={
            200: PriceReportResponseSerializer,
            201: PriceReportResponseSerializer,
            400: ErrorSerializer,
        },
        tags=['prices'],
    )
    def create(self, request, *args, **kwargs):
        """Report a store price - thin HTTP handler."""
        serializer = PriceReportInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            observation, created = record_price(
                reported_by=request.user,
                **serializer.validated_data
            )
        except PriceValidationError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        if created:
            message = 'Store price added successfully'
            response_status = status.HTTP_201_CREATED
        else:
            message = 'Price updated and report count increased'
            response_status = status.HTTP_200_OK

        return Response(
            {
                'message': message,
                'observation': PriceObservationSerializer(observation).data,
            },
            status=response_status
        )


@extend_schema(
    parameters=[
        OpenApiParameter('max_days', OpenApiTypes.INT, description='Only use prices observed within this many days', default=90),
    ],
    responses={
        200: CheapestStoreResponseSerializer,
        404: PriceNotFoundSerializer,
    },
    description="Find the cheapest store for an item (name match is case-insensitive and partial).",
    tags=['prices'],
)
@api_view(['GET'])
def cheapest_store(request, item_name):
    """Find the cheapest store for an item - thin HTTP handler."""
    query_serializer = CheapestStoreQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = find_cheapest_store(
            item_name=item_name,
            max_days=params.get('max_days')
        )
    except PriceDataNotFoundError as e:
        return Response(
            {
                'error': str(e),
                'suggestions': suggest_item_names(
                    item_name=item_name,
                    max_days=params.get('max_days')
                ),
            },
            status=status.HTTP_404_NOT_FOUND
        )

    return Response(data)


@extend_schema(
    parameters=[
        OpenApiParameter('max_days', OpenApiTypes.INT, description='Only use prices observed within this many days', default=90),
        OpenApiParameter('max_stores', OpenApiTypes.INT, description='Maximum number of stores to visit', default=3),
    ],
    responses={
        200: OptimalStoresResponseSerializer,
        404: ErrorSerializer,
    },
    description="Plan which stores to visit for a shopping list and what to buy at each.",
    tags=['prices'],
)
@api_view(['GET'])
def optimal_stores(request, shopping_list_id):
    """Plan the store visit for a shopping list - thin HTTP handler."""
    query_serializer = OptimalStoresQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = find_optimal_stores_for_list(
            shopping_list_id=shopping_list_id,
            max_days=params.get('max_days'),
            max_stores=params.get('max_stores')
        )
    except (ShoppingListNotFoundError, EmptyListError) as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_404_NOT_FOUND
        )

    return Response(data)
