"""
Store settings endpoint
"""

from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import handle_service_errors
from ..permissions import ReadOnlyOrStoreAdmin
from ..serializers.settings import StoreSettingsSerializer
from ..services.settings import StoreSettingsService


class StoreSettingsView(APIView):
    """Shipping and tax configuration used for pricing"""

    permission_classes = [ReadOnlyOrStoreAdmin]

    @extend_schema(summary="Read store settings", responses=StoreSettingsSerializer)
    @handle_service_errors
    def get(self, request):
        pricing = StoreSettingsService().get_pricing_settings()
        return Response(StoreSettingsSerializer(pricing.to_dict()).data)

    @extend_schema(
        summary="Update store settings",
        request=StoreSettingsSerializer,
        responses=StoreSettingsSerializer,
    )
    @handle_service_errors
    def put(self, request):
        serializer = StoreSettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        pricing = StoreSettingsService().update_settings(serializer.validated_data)
        return Response(StoreSettingsSerializer(pricing.to_dict()).data)
