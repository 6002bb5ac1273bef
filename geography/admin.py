"""
Geography — Django Admin Configuration

Tenants, level definitions and areas with type badge, parent display,
filter by tenant / type, and search.

@file geography/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Area, AreaType, Tenant

BADGE_COLORS = ['#1d4ed8', '#7c3aed', '#0891b2', '#65a30d', '#ea580c', '#db2777']


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'is_active', 'area_count', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'code')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')

    @admin.display(description=_('Areas'))
    def area_count(self, obj):
        return obj.areas.count()


@admin.register(AreaType)
class AreaTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'tenant', 'rank')
    list_filter = ('tenant',)
    search_fields = ('name', 'code')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    ordering = ('tenant', 'rank', 'code')


@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    """Admin for tenant hierarchies."""

    list_display = (
        'name', 'code', 'tenant', 'type_badge', 'parent_display',
        'children_count', 'sort_order',
    )
    list_filter = ('tenant', 'area_type')
    search_fields = ('name', 'name_ar', 'code', 'parent_code')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    list_select_related = ('tenant', 'area_type')
    show_full_result_count = False
    list_per_page = 50
    ordering = ('tenant', 'sort_order', 'code')

    fieldsets = (
        (None, {
            'fields': ('id', 'tenant', 'code', 'name', 'name_ar', 'area_type', 'parent_code', 'sort_order'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Level'))
    def type_badge(self, obj):
        color = BADGE_COLORS[obj.area_type.rank % len(BADGE_COLORS)]
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, obj.area_type.name,
        )

    @admin.display(description=_('Parent'))
    def parent_display(self, obj):
        if not obj.parent_code:
            return '—'
        parent = Area.objects.filter(tenant_id=obj.tenant_id, code=obj.parent_code).first()
        if parent is None:
            return format_html('<span style="color:#dc2626;">{} ({})</span>', obj.parent_code, _('orphan'))
        return f'{parent.name} ({parent.code})'

    @admin.display(description=_('Children'))
    def children_count(self, obj):
        return Area.objects.filter(tenant_id=obj.tenant_id, parent_code=obj.code).count()
