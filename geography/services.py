"""
Geography — Service Layer

Loads tenant hierarchies from the database, builds and caches their
indices, and runs the resolver on behalf of the API.

Built indices are kept per process in an IndexRegistry. A per-tenant
version number in the Django cache is bumped on every write so other
processes rebuild on their next read.

@file geography/services.py
"""

import logging
import warnings

from django.conf import settings
from django.core.cache import cache

from core.constants import INDICES_VERSION_CACHE_KEY, LOGGER_NAME
from core.exceptions import AreaNotFoundError, BusinessRuleViolation, ResourceNotFoundError

from .hierarchy import (
    NOT_FOUND,
    HierarchyWarning,
    IndexRegistry,
    SelectionController,
    Snapshot,
    build_indices,
)
from .hierarchy.adapters import node_to_payload, type_to_payload
from .models import Area, AreaType, Tenant

logger = logging.getLogger(LOGGER_NAME)

registry = IndexRegistry()


class GeographyService:
    """Read-oriented service for tenant hierarchy queries."""

    @staticmethod
    def get_tenant(tenant_code: str) -> Tenant:
        try:
            return Tenant.objects.get(code=tenant_code, is_active=True)
        except Tenant.DoesNotExist:
            raise ResourceNotFoundError(detail=f'Tenant {tenant_code!r} not found.')

    # ── Snapshot loading ─────────────────────────────────────────────────────

    @staticmethod
    def load_types(tenant: Tenant):
        return [t.to_level_type() for t in AreaType.objects.filter(tenant=tenant).order_by('rank', 'code')]

    @staticmethod
    def load_nodes(tenant: Tenant):
        qs = Area.objects.filter(tenant=tenant).select_related('area_type')
        return [area.to_node() for area in qs]

    @staticmethod
    def current_version(tenant: Tenant) -> int:
        key = INDICES_VERSION_CACHE_KEY.format(tenant_id=tenant.pk)
        version = cache.get(key)
        if version is None:
            cache.add(key, 1, timeout=None)
            version = cache.get(key, 1)
        return version

    @staticmethod
    def invalidate(tenant_id) -> None:
        """Bump the tenant version; every process rebuilds on next read."""
        key = INDICES_VERSION_CACHE_KEY.format(tenant_id=tenant_id)
        try:
            cache.incr(key)
        except ValueError:
            cache.set(key, 2, timeout=None)
        registry.invalidate(tenant_id)
        logger.debug('Hierarchy indices invalidated for tenant %s', tenant_id)

    @classmethod
    def build_snapshot(cls, tenant: Tenant, version: int = 0) -> Snapshot:
        types = cls.load_types(tenant)
        nodes = cls.load_nodes(tenant)
        with warnings.catch_warnings():
            # Orphans and type issues are kept on the indices and logged.
            warnings.simplefilter('ignore', HierarchyWarning)
            indices = build_indices(
                nodes, types,
                strict=getattr(settings, 'GEOGRAPHY_STRICT_TYPES', False),
            )
        logger.info(
            'Built hierarchy indices for tenant %s: %d areas, %d orphans, %d type issues',
            tenant.code, indices.node_count, len(indices.orphans), len(indices.type_issues),
        )
        return Snapshot(indices=indices, types=tuple(types), version=version)

    @classmethod
    def get_snapshot(cls, tenant: Tenant) -> Snapshot:
        version = cls.current_version(tenant)
        return registry.get_or_build(
            tenant.pk,
            lambda: cls.build_snapshot(tenant, version),
            version=version,
        )

    # ── Resolver operations ──────────────────────────────────────────────────

    @classmethod
    def controller(cls, tenant: Tenant, selections=(), auto_advance=None) -> SelectionController:
        if auto_advance is None:
            auto_advance = getattr(settings, 'GEOGRAPHY_AUTO_ADVANCE', True)
        snapshot = cls.get_snapshot(tenant)
        return SelectionController(
            snapshot.indices,
            snapshot.types,
            auto_advance=auto_advance,
            selections=selections,
        )

    @classmethod
    def compute_state(cls, tenant: Tenant, selections=(), auto_advance=None) -> SelectionController:
        """Controller for ``selections`` after one auto-advance tick."""
        controller = cls.controller(tenant, selections, auto_advance)
        controller.tick()
        return controller

    @classmethod
    def apply_selection(cls, tenant: Tenant, selections, depth: int, code: str, auto_advance=None):
        controller = cls.controller(tenant, selections, auto_advance)
        if depth >= len(controller.levels):
            raise BusinessRuleViolation(
                detail=f'Depth {depth} is not reachable from the current selection.',
            )
        controller.select(depth, code)
        controller.tick()
        return controller

    @classmethod
    def resolve_leaf(cls, tenant: Tenant, leaf_code: str, auto_advance=False) -> SelectionController:
        controller = cls.controller(tenant, auto_advance=auto_advance)
        if controller.set_from_leaf(leaf_code) is NOT_FOUND:
            raise AreaNotFoundError(detail=f'Area {leaf_code!r} not found for tenant {tenant.code}.')
        return controller

    @classmethod
    def get_integrity_report(cls, tenant: Tenant) -> dict:
        indices = cls.get_snapshot(tenant).indices
        return {
            'area_count': indices.node_count,
            'root_count': len(indices.roots),
            'orphans': [
                {'code': node.code, 'name': node.name, 'parent_code': node.parent_code}
                for node in indices.orphans
            ],
            'type_issues': [
                {
                    'kind': issue.kind.value,
                    'parent_code': issue.parent_code,
                    'codes': list(issue.codes),
                    'message': issue.message,
                }
                for issue in indices.type_issues
            ],
        }

    @classmethod
    def get_payload(cls, tenant: Tenant) -> dict:
        """Flat geo_area_types / geo_areas payload for client-side resolvers."""
        snapshot = cls.get_snapshot(tenant)
        type_by_id = {level_type.id: level_type for level_type in snapshot.types}
        nodes = sorted(snapshot.indices.by_code.values(), key=lambda n: (n.sort_order, n.code))
        return {
            'version': snapshot.indices.version,
            'geo_area_types': [type_to_payload(t) for t in snapshot.types],
            'geo_areas': [node_to_payload(node, type_by_id) for node in nodes],
        }
