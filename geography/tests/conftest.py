"""
Geography — Test fixtures

A seeded tenant hierarchy used by service and view tests:

  Pays     MA ─────────────── TN
  Région   MA-01   MA-05      TN-11
  Ville    MA-01-01  MA-05-01  MA-05-02

@file geography/tests/conftest.py
"""

import pytest

from tests.factories import AreaFactory, AreaTypeFactory, TenantFactory


@pytest.fixture
def tenant(db):
    return TenantFactory(code='ACME', name='Acme Distribution')


@pytest.fixture
def area_types(tenant):
    return {
        'pays': AreaTypeFactory(tenant=tenant, code='100', name='Pays', rank=1),
        'region': AreaTypeFactory(tenant=tenant, code='200', name='Région', rank=2),
        'ville': AreaTypeFactory(tenant=tenant, code='300', name='Ville', rank=3),
    }


@pytest.fixture
def areas(tenant, area_types):
    rows = [
        ('MA', 'Maroc', 'pays', None, 1),
        ('TN', 'Tunisie', 'pays', None, 2),
        ('MA-01', 'Tanger-Tétouan', 'region', 'MA', 1),
        ('MA-05', 'Casablanca-Settat', 'region', 'MA', 2),
        ('TN-11', 'Tunis', 'region', 'TN', 1),
        ('MA-01-01', 'Tanger', 'ville', 'MA-01', 1),
        ('MA-05-01', 'Casablanca', 'ville', 'MA-05', 1),
        ('MA-05-02', 'Mohammedia', 'ville', 'MA-05', 2),
    ]
    return {
        code: AreaFactory(
            tenant=tenant, code=code, name=name,
            area_type=area_types[type_key], parent_code=parent, sort_order=order,
        )
        for code, name, type_key, parent, order in rows
    }
