"""
Geography — Views

Tenant-scoped ViewSets for area types and areas, plus the resolver
endpoints used by cascading selectors:

  levels     dropdown levels for a selection sequence
  select     one cascade transition (select / clear at a depth)
  resolve    selections reconstructed from a stored leaf code
  integrity  orphans and type inconsistencies of the current snapshot
  snapshot   the flat types/areas payload

@file geography/views.py
"""

from django.utils.functional import cached_property
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.exceptions import BusinessRuleViolation

from .models import Area, AreaType, Tenant
from .permissions import CanModifyGeography
from .serializers import (
    AreaReadSerializer,
    AreaTypeSerializer,
    AreaWriteSerializer,
    LevelsQuerySerializer,
    ResolveQuerySerializer,
    SelectionStateSerializer,
    SelectRequestSerializer,
    TenantSerializer,
)
from .services import GeographyService


class TenantViewSet(viewsets.ReadOnlyModelViewSet):
    """Tenants and their hierarchy resolver endpoints."""

    permission_classes = [IsAuthenticated]
    serializer_class = TenantSerializer
    lookup_field = 'code'
    search_fields = ['code', 'name']
    ordering = ['name']
    envelope_meta = None

    def get_queryset(self):
        return Tenant.objects.filter(is_active=True)

    def _state_response(self, controller):
        self.envelope_meta = {'hierarchy_version': controller.indices.version}
        return Response(SelectionStateSerializer(controller).data)

    @action(detail=True, methods=['get'], url_path='hierarchy/levels', url_name='hierarchy-levels')
    def levels(self, request, code=None):
        ser = LevelsQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        tenant = GeographyService.get_tenant(code)
        controller = GeographyService.compute_state(
            tenant,
            selections=ser.validated_data['selections'],
            auto_advance=ser.validated_data['auto_advance'],
        )
        return self._state_response(controller)

    @action(detail=True, methods=['post'], url_path='hierarchy/select', url_name='hierarchy-select')
    def select(self, request, code=None):
        ser = SelectRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        tenant = GeographyService.get_tenant(code)
        controller = GeographyService.apply_selection(
            tenant,
            selections=ser.validated_data['selections'],
            depth=ser.validated_data['depth'],
            code=ser.validated_data['code'],
            auto_advance=ser.validated_data['auto_advance'],
        )
        return self._state_response(controller)

    @action(detail=True, methods=['get'], url_path='hierarchy/resolve', url_name='hierarchy-resolve')
    def resolve(self, request, code=None):
        ser = ResolveQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        tenant = GeographyService.get_tenant(code)
        return self._state_response(GeographyService.resolve_leaf(tenant, ser.validated_data['leaf']))

    @action(detail=True, methods=['get'], url_path='hierarchy/integrity', url_name='hierarchy-integrity')
    def integrity(self, request, code=None):
        tenant = GeographyService.get_tenant(code)
        return Response(GeographyService.get_integrity_report(tenant))

    @action(detail=True, methods=['get'], url_path='hierarchy/snapshot', url_name='hierarchy-snapshot')
    def snapshot(self, request, code=None):
        tenant = GeographyService.get_tenant(code)
        payload = GeographyService.get_payload(tenant)
        self.envelope_meta = {'hierarchy_version': payload['version']}
        return Response(payload)


class TenantScopedMixin:
    """Resolves the tenant from the URL and passes it to serializers."""

    @cached_property
    def tenant(self) -> Tenant:
        return GeographyService.get_tenant(self.kwargs['tenant_code'])

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['tenant'] = self.tenant
        return context

    def perform_create(self, serializer):
        serializer.save(tenant=self.tenant, created_by=self.request.user, updated_by=self.request.user)

    def perform_update(self, serializer):
        serializer.save(updated_by=self.request.user)


class AreaTypeViewSet(TenantScopedMixin, viewsets.ModelViewSet):
    """
    CRUD for the level definitions of a tenant.

    List / retrieve is open to any authenticated user.
    Create / update / delete restricted to staff.
    """

    permission_classes = [IsAuthenticated, CanModifyGeography]
    serializer_class = AreaTypeSerializer
    search_fields = ['code', 'name']
    ordering_fields = ['rank', 'code', 'name']
    ordering = ['rank', 'code']

    def get_queryset(self):
        return AreaType.objects.filter(tenant=self.tenant)

    def perform_destroy(self, instance):
        if instance.areas.exists():
            raise BusinessRuleViolation(detail=f'Area type {instance.code!r} is still used by areas.')
        instance.delete()


class AreaViewSet(TenantScopedMixin, viewsets.ModelViewSet):
    """
    CRUD for the areas of a tenant.

    ``?parent_code=`` filters children; ``?roots=true`` lists roots only.
    """

    permission_classes = [IsAuthenticated, CanModifyGeography]
    filterset_fields = ['area_type', 'parent_code']
    search_fields = ['code', 'name', 'name_ar']
    ordering_fields = ['sort_order', 'code', 'name', 'created_at']
    ordering = ['sort_order', 'code']

    def get_queryset(self):
        qs = Area.objects.filter(tenant=self.tenant).select_related('area_type')
        if self.request.query_params.get('roots') in ('1', 'true', 'True'):
            qs = qs.filter(parent_code__isnull=True)
        return qs

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return AreaReadSerializer
        return AreaWriteSerializer

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        self.perform_create(ser)
        return Response(
            {'success': True, 'data': AreaReadSerializer(ser.instance).data},
            status=status.HTTP_201_CREATED,
        )

    def perform_destroy(self, instance):
        if Area.objects.filter(tenant=self.tenant, parent_code=instance.code).exists():
            raise BusinessRuleViolation(detail=f'Area {instance.code!r} still has children.')
        instance.delete()
