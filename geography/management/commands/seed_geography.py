"""
Geography — Management Command: seed_geography

Loads the geographic hierarchy of one tenant from a flat JSON document
(the same shape the hierarchy snapshot endpoint returns).

Usage::

    python manage.py seed_geography --tenant ACME --file acme-geo.json
    python manage.py seed_geography --tenant ACME --url https://…/geo.json --replace

The document is validated with the index builder before anything is
written: duplicate codes abort the import, orphans are reported.

Idempotent: safe to re-run (uses update_or_create).

@file geography/management/commands/seed_geography.py
"""

import json
import logging
import urllib.request
import warnings

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from core.constants import LOGGER_NAME
from core.exceptions import DataIntegrityError
from geography.hierarchy import HierarchyWarning, build_indices, nodes_from_payload, types_from_payload
from geography.models import Area, AreaType, Tenant

logger = logging.getLogger(LOGGER_NAME)


class Command(BaseCommand):
    help = 'Seed the geographic hierarchy of a tenant from a flat JSON document.'

    def add_arguments(self, parser):
        parser.add_argument('--tenant', required=True, help='Tenant code (created if missing).')
        parser.add_argument('--tenant-name', help='Tenant display name when creating it.')
        source = parser.add_mutually_exclusive_group(required=True)
        source.add_argument('--file', type=str, help='Path to a local JSON file.')
        source.add_argument('--url', type=str, help='URL of a JSON document.')
        parser.add_argument(
            '--replace', action='store_true',
            help='Delete the tenant areas and types absent from the document.',
        )
        parser.add_argument(
            '--no-strict', action='store_true',
            help='Report type inconsistencies instead of aborting.',
        )

    def handle(self, *args, **options):
        data = self._load(options)
        type_items = data.get('geo_area_types', data.get('types', []))
        area_items = data.get('geo_areas', data.get('areas', []))
        if not type_items or not area_items:
            raise CommandError('Document must contain geo_area_types and geo_areas.')

        types = types_from_payload(type_items)
        nodes = nodes_from_payload(area_items)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', HierarchyWarning)
            try:
                indices = build_indices(nodes, types, strict=not options['no_strict'])
            except DataIntegrityError as exc:
                raise CommandError(str(exc.detail)) from exc
        for warning in caught:
            self.stderr.write(self.style.WARNING(str(warning.message)))

        with transaction.atomic():
            tenant, created = Tenant.objects.get_or_create(
                code=options['tenant'],
                defaults={'name': options.get('tenant_name') or options['tenant']},
            )
            if created:
                self.stdout.write(f'Created tenant {tenant.code}')
            type_map = self._upsert_types(tenant, types)
            self._upsert_areas(tenant, nodes, type_map)
            if options['replace']:
                self._prune(tenant, types, nodes)

        self.stdout.write(self.style.SUCCESS(
            f'Done. Types: {len(types)}, Areas: {indices.node_count}, '
            f'Roots: {len(indices.roots)}, Orphans: {len(indices.orphans)}'
        ))

    def _load(self, options):
        if options.get('file'):
            with open(options['file'], 'r', encoding='utf-8') as f:
                return json.load(f)
        self.stdout.write(f'Downloading from {options["url"]}')
        with urllib.request.urlopen(options['url']) as resp:
            return json.loads(resp.read().decode('utf-8'))

    def _upsert_types(self, tenant, types):
        type_map = {}
        for level_type in types:
            obj, _ = AreaType.objects.update_or_create(
                tenant=tenant,
                code=level_type.code,
                defaults={
                    'name': level_type.name,
                    'name_ar': level_type.name_ar,
                    'rank': level_type.rank,
                },
            )
            type_map[level_type.id] = obj
            self.stdout.write(f'  Level: {level_type.name} (rank {level_type.rank})')
        return type_map

    def _upsert_areas(self, tenant, nodes, type_map):
        for node in nodes:
            area_type = type_map.get(node.type_id)
            if area_type is None:
                raise CommandError(f'Area {node.code} references unknown type id {node.type_id}.')
            Area.objects.update_or_create(
                tenant=tenant,
                code=node.code,
                defaults={
                    'name': node.name.strip(),
                    'name_ar': node.name_ar,
                    'area_type': area_type,
                    'parent_code': node.parent_code,
                    'sort_order': node.sort_order,
                },
            )

    def _prune(self, tenant, types, nodes):
        stale_areas = Area.objects.filter(tenant=tenant).exclude(code__in=[n.code for n in nodes])
        removed_areas, _ = stale_areas.delete()
        stale_types = AreaType.objects.filter(tenant=tenant).exclude(code__in=[t.code for t in types])
        removed_types, _ = stale_types.delete()
        logger.info('Pruned %d areas and %d types for tenant %s', removed_areas, removed_types, tenant.code)
