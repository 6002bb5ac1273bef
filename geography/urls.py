"""
Geography — URL Configuration

@file geography/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AreaTypeViewSet, AreaViewSet, TenantViewSet

app_name = 'geography'

router = DefaultRouter()
router.register('tenants', TenantViewSet, basename='tenant')
router.register(r'tenants/(?P<tenant_code>[^/.]+)/types', AreaTypeViewSet, basename='area-type')
router.register(r'tenants/(?P<tenant_code>[^/.]+)/areas', AreaViewSet, basename='area')

urlpatterns = [
    path('', include(router.urls)),
]
