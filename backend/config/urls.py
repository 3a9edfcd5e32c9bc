# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView
from rest_framework.decorators import api_view
from rest_framework.response import Response


@api_view(['GET'])
def api_root(request):
    """
    API Root endpoint
    """
    return Response({
        'message': 'Welcome to the Storefront API',
        'version': '1.0.0',
        'status': 'operational',
        'documentation': {
            'swagger': request.build_absolute_uri('/api/docs/'),
            'redoc': request.build_absolute_uri('/api/redoc/'),
            'schema': request.build_absolute_uri('/api/schema/')
        },
        'endpoints': {
            'ecommerce': request.build_absolute_uri('/api/v1/ecommerce/'),
        },
        'quick_start': {
            'cart': 'GET /api/v1/ecommerce/cart/',
            'quote': 'POST /api/v1/ecommerce/cart/quote/',
            'place_order': 'POST /api/v1/ecommerce/orders/',
        }
    })


urlpatterns = [
    path('', api_root, name='api-root'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    path('api/v1/ecommerce/', include('apps.ecommerce.urls', namespace='ecommerce')),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
