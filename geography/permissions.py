"""
Geography — Permissions

Hierarchy data is mostly read-only. Only staff can modify.

@file geography/permissions.py
"""

from rest_framework.permissions import BasePermission


class CanModifyGeography(BasePermission):
    """Only staff and superusers can create/edit area types and areas."""

    def has_permission(self, request, view):
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True
        user = request.user
        return bool(user and (user.is_superuser or user.is_staff))
