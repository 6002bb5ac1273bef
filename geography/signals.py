"""
Geography — Signals

Every committed write to an area or area type invalidates the built
indices of its tenant. The version bump waits for the commit: a rolled
back write never reaches the cache.

@file geography/signals.py
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Area, AreaType
from .services import GeographyService


@receiver(post_save, sender=Area)
@receiver(post_delete, sender=Area)
@receiver(post_save, sender=AreaType)
@receiver(post_delete, sender=AreaType)
def invalidate_tenant_hierarchy(sender, instance, **kwargs):
    tenant_id = instance.tenant_id
    transaction.on_commit(lambda: GeographyService.invalidate(tenant_id))
