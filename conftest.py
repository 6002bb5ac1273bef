"""
GeoCascade — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from rest_framework.test import APIClient

from geography.hierarchy import AreaNode, LevelType
from tests.factories import StaffUserFactory, SuperuserFactory, UserFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Active user with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def staff_user(db):
    return StaffUserFactory()


@pytest.fixture
def admin_user(db):
    """Superuser with default password TestPass2026!"""
    return SuperuserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a regular user."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """API client authenticated as a superuser."""
    api_client.force_authenticate(user=admin_user)
    return api_client


# ---------------------------------------------------------------------------
# Resolver fixtures (no database)
# ---------------------------------------------------------------------------

@pytest.fixture
def level_types():
    """Pays → Région → Ville → Zone."""
    return [
        LevelType(id=1, code='100', name='Pays', rank=1),
        LevelType(id=2, code='200', name='Région', rank=2),
        LevelType(id=3, code='300', name='Ville', rank=3),
        LevelType(id=4, code='400', name='Zone', rank=4),
    ]


@pytest.fixture
def area_nodes():
    """
    MA ─┬─ MA-05 ─┬─ MA-05-01 ── MA-05-01-A
        │         └─ MA-05-02
        └─ MA-01 ──── MA-01-01
    TN ─── TN-11
    """
    return [
        AreaNode(code='MA', name='Maroc', type_id=1, sort_order=1),
        AreaNode(code='TN', name='Tunisie', type_id=1, sort_order=2),
        AreaNode(code='MA-05', name='Casablanca-Settat', type_id=2, parent_code='MA', sort_order=2),
        AreaNode(code='MA-01', name='Tanger-Tétouan', type_id=2, parent_code='MA', sort_order=1),
        AreaNode(code='MA-05-02', name='Mohammedia', type_id=3, parent_code='MA-05', sort_order=1),
        AreaNode(code='MA-05-01', name='Casablanca', type_id=3, parent_code='MA-05', sort_order=1),
        AreaNode(code='MA-05-01-A', name='Maarif', type_id=4, parent_code='MA-05-01'),
        AreaNode(code='MA-01-01', name='Tanger', type_id=3, parent_code='MA-01'),
        AreaNode(code='TN-11', name='Tunis', type_id=2, parent_code='TN'),
    ]
