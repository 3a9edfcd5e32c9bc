"""
Featured and hero list endpoints
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import handle_service_errors
from ..permissions import IsStoreAdmin, ReadOnlyOrStoreAdmin
from ..serializers.merchandising import (
    RankedEntrySerializer, RankListAddSerializer, RankMoveSerializer,
)
from ..services.ranking import RankListService


def mutation_response(result, status_code=status.HTTP_200_OK):
    data = {'changed': result.changed, 'message': result.message}
    if result.entry is not None and result.entry.pk is not None:
        data['entry'] = RankedEntrySerializer(result.entry).data
    return Response(data, status=status_code)


class RankListView(APIView):
    """Entries of a list in position order; administrators may append"""

    permission_classes = [ReadOnlyOrStoreAdmin]

    @extend_schema(summary="List entries", responses=RankedEntrySerializer(many=True))
    @handle_service_errors
    def get(self, request, list_name):
        entries = RankListService(list_name).entries()
        if not (request.user and request.user.is_staff):
            entries = entries.filter(product__is_active=True)
        return Response(RankedEntrySerializer(entries, many=True).data)

    @extend_schema(summary="Add product to list", request=RankListAddSerializer)
    @handle_service_errors
    def post(self, request, list_name):
        serializer = RankListAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = RankListService(list_name).add(serializer.validated_data['product_id'])
        return mutation_response(
            result,
            status.HTTP_201_CREATED if result.changed else status.HTTP_200_OK
        )


class RankEntryView(APIView):
    permission_classes = [IsStoreAdmin]

    @extend_schema(summary="Remove product from list")
    @handle_service_errors
    def delete(self, request, list_name, product_id):
        result = RankListService(list_name).remove(product_id)
        return mutation_response(result)


class RankEntryPositionView(APIView):
    permission_classes = [IsStoreAdmin]

    @extend_schema(summary="Move product up or down", request=RankMoveSerializer)
    @handle_service_errors
    def put(self, request, list_name, product_id):
        serializer = RankMoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = RankListService(list_name).move(product_id, serializer.validated_data['direction'])
        return mutation_response(result)
