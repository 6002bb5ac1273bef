"""
Geography — Models

Tenant-scoped, fully dynamic geographic hierarchy stored in two tables:

  AreaType  the named levels of one tenant (Pays, Région, Agence…),
            each with a rank used only as a display hint.
  Area      the nodes. Every node carries a parent_code pointing to its
            parent's code; parent_code NULL marks a root.

parent_code is a plain column rather than a foreign key so that
imported data with dangling references can be loaded and reported as
orphans instead of being rejected outright.

@file geography/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel

from .hierarchy import AreaNode, LevelType, LevelTypeStub


class Tenant(BaseModel):
    """A company whose geographic hierarchy is independent from the others."""

    code = models.CharField(_('code'), max_length=30, unique=True, db_index=True)
    name = models.CharField(_('name'), max_length=150)
    is_active = models.BooleanField(_('active'), default=True)

    class Meta:
        verbose_name = _('tenant')
        verbose_name_plural = _('tenants')
        ordering = ['name']

    def __str__(self):
        return f'{self.name} ({self.code})'


class AreaType(BaseModel):
    """
    One level definition. Lower rank = broader territory, but the depth
    of a level is always derived from parent links.
    """

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name='area_types',
        verbose_name=_('tenant'),
    )
    code = models.CharField(_('code'), max_length=30)
    name = models.CharField(_('name'), max_length=100)
    name_ar = models.CharField(_('name (arabic)'), max_length=100, blank=True, default='')
    rank = models.PositiveIntegerField(_('rank'), default=0)

    class Meta:
        verbose_name = _('area type')
        verbose_name_plural = _('area types')
        ordering = ['tenant', 'rank', 'code']
        constraints = [
            models.UniqueConstraint(fields=['tenant', 'code'], name='unique_area_type_code_per_tenant'),
        ]

    def __str__(self):
        return f'{self.name} ({self.code})'

    def to_level_type(self) -> LevelType:
        return LevelType(
            id=str(self.pk),
            code=self.code,
            name=self.name,
            name_ar=self.name_ar,
            rank=self.rank,
        )


class Area(BaseModel):
    """One node of a tenant hierarchy."""

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name='areas',
        verbose_name=_('tenant'),
    )
    code = models.CharField(_('code'), max_length=50)
    name = models.CharField(_('name'), max_length=150)
    name_ar = models.CharField(_('name (arabic)'), max_length=150, blank=True, default='')
    area_type = models.ForeignKey(
        AreaType,
        on_delete=models.PROTECT,
        related_name='areas',
        verbose_name=_('area type'),
    )
    parent_code = models.CharField(
        _('parent code'), max_length=50,
        null=True, blank=True, db_index=True,
    )
    sort_order = models.IntegerField(_('sort order'), default=0)

    class Meta:
        verbose_name = _('area')
        verbose_name_plural = _('areas')
        ordering = ['tenant', 'sort_order', 'code']
        indexes = [
            models.Index(fields=['tenant', 'parent_code'], name='geography_area_tenant_parent'),
            models.Index(fields=['name'], name='geography_area_name'),
        ]
        constraints = [
            models.UniqueConstraint(fields=['tenant', 'code'], name='unique_area_code_per_tenant'),
            models.CheckConstraint(
                condition=~models.Q(parent_code=models.F('code')),
                name='area_not_own_parent',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.code})'

    @property
    def is_root(self) -> bool:
        return not self.parent_code

    def to_node(self) -> AreaNode:
        area_type = self.area_type
        return AreaNode(
            code=self.code,
            name=self.name,
            name_ar=self.name_ar,
            type_id=str(self.area_type_id),
            parent_code=self.parent_code or None,
            sort_order=self.sort_order,
            type_stub=LevelTypeStub(
                id=str(area_type.pk),
                code=area_type.code,
                name=area_type.name,
            ),
        )
