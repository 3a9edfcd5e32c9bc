"""
Coupon endpoints: public code check and coupon administration
"""

from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import handle_service_errors
from ..permissions import IsStoreAdmin
from ..serializers.coupons import CouponCheckSerializer, CouponSerializer, CouponVerifySerializer
from ..services.coupon import CouponService


class CouponVerifyView(APIView):
    """Check a coupon code before checkout"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Verify coupon",
        request=CouponVerifySerializer,
        responses={
            200: CouponCheckSerializer,
            400: OpenApiResponse(description='Coupon expired or code missing'),
            404: OpenApiResponse(description='Coupon not found or inactive'),
        },
    )
    @handle_service_errors(coupon=True)
    def post(self, request):
        serializer = CouponVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        check = CouponService().verify(serializer.validated_data['code'])
        return Response(CouponCheckSerializer({
            'code': check.code,
            'discount_percent': check.discount_percent,
        }).data)


class CouponAdminViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Coupon administration: list, create and delete"""

    permission_classes = [IsStoreAdmin]
    serializer_class = CouponSerializer

    def get_queryset(self):
        return CouponService().list_coupons()

    @handle_service_errors
    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        coupon = CouponService().create_coupon(**serializer.validated_data)
        return Response(self.get_serializer(coupon).data, status=status.HTTP_201_CREATED)

    @handle_service_errors
    def destroy(self, request, pk=None):
        CouponService().delete_coupon(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
