"""
Geography — Serializers

Model serializers for tenants, area types and areas, plus plain
serializers for the resolver output (levels, breadcrumbs, state).

@file geography/serializers.py
"""

from rest_framework import serializers

from .hierarchy import effective_selections
from .models import Area, AreaType, Tenant


class TenantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tenant
        fields = ['id', 'code', 'name', 'is_active', 'created_at']
        read_only_fields = ['id', 'created_at']


class AreaTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = AreaType
        fields = ['id', 'code', 'name', 'name_ar', 'rank', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_code(self, value):
        tenant = self.context['tenant']
        qs = AreaType.objects.filter(tenant=tenant, code=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError(f'Area type {value!r} already exists for this tenant.')
        return value


class AreaReadSerializer(serializers.ModelSerializer):
    """Flat read representation with embedded type, as consumed by selectors."""

    geo_area_type_id = serializers.UUIDField(source='area_type_id', read_only=True)
    geo_area_type = serializers.SerializerMethodField()

    class Meta:
        model = Area
        fields = [
            'id', 'code', 'name', 'name_ar',
            'geo_area_type_id', 'geo_area_type',
            'parent_code', 'sort_order', 'created_at',
        ]
        read_only_fields = fields

    def get_geo_area_type(self, obj):
        return {'id': str(obj.area_type_id), 'code': obj.area_type.code, 'name': obj.area_type.name}


class AreaWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Area
        fields = ['code', 'name', 'name_ar', 'area_type', 'parent_code', 'sort_order']

    def validate_area_type(self, value):
        if value.tenant_id != self.context['tenant'].pk:
            raise serializers.ValidationError('Area type belongs to another tenant.')
        return value

    def validate(self, attrs):
        tenant = self.context['tenant']
        code = attrs.get('code', getattr(self.instance, 'code', None))
        parent_code = attrs.get('parent_code', getattr(self.instance, 'parent_code', None)) or None

        duplicates = Area.objects.filter(tenant=tenant, code=code)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError({'code': f'Area {code!r} already exists for this tenant.'})

        if parent_code is None:
            attrs['parent_code'] = None
            return attrs

        if parent_code == code:
            raise serializers.ValidationError({'parent_code': 'An area cannot be its own parent.'})

        if not Area.objects.filter(tenant=tenant, code=parent_code).exists():
            raise serializers.ValidationError({'parent_code': f'Unknown parent area {parent_code!r}.'})

        if self.instance is not None and self._creates_cycle(tenant, code, parent_code):
            raise serializers.ValidationError(
                {'parent_code': f'{parent_code!r} is a descendant of {code!r}.'},
            )

        area_type = attrs.get('area_type', getattr(self.instance, 'area_type', None))
        sibling_types = set(
            Area.objects.filter(tenant=tenant, parent_code=parent_code)
            .exclude(code=code)
            .values_list('area_type_id', flat=True)
        )
        if area_type is not None and sibling_types and sibling_types != {area_type.pk}:
            raise serializers.ValidationError(
                {'area_type': 'Siblings under the same parent must share one area type.'},
            )

        attrs['parent_code'] = parent_code
        return attrs

    @staticmethod
    def _creates_cycle(tenant, code, parent_code) -> bool:
        """Walk up from the new parent; reaching ``code`` means a cycle."""
        parents = dict(Area.objects.filter(tenant=tenant).values_list('code', 'parent_code'))
        current = parent_code
        seen = set()
        while current is not None and current not in seen:
            if current == code:
                return True
            seen.add(current)
            current = parents.get(current)
        return False


# ---------------------------------------------------------------------------
# Resolver output
# ---------------------------------------------------------------------------

class AreaOptionSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField()
    name_ar = serializers.CharField()
    parent_code = serializers.CharField(allow_null=True)
    sort_order = serializers.IntegerField()


class DropdownLevelSerializer(serializers.Serializer):
    type_id = serializers.CharField()
    type_code = serializers.CharField()
    type_name = serializers.CharField()
    options = AreaOptionSerializer(many=True)
    selected_code = serializers.CharField(allow_blank=True)


class SelectionStepSerializer(serializers.Serializer):
    type_id = serializers.CharField()
    type_code = serializers.CharField()
    type_name = serializers.CharField()
    area_code = serializers.CharField()
    area_name = serializers.CharField()


class SelectionStateSerializer(serializers.Serializer):
    """Serialises a SelectionController."""

    selections = serializers.SerializerMethodField()
    levels = DropdownLevelSerializer(many=True)
    selection_path = SelectionStepSerializer(many=True)
    leaf_code = serializers.CharField(allow_blank=True)
    phase = serializers.SerializerMethodField()

    def get_selections(self, obj):
        return effective_selections(obj.levels)

    def get_phase(self, obj):
        return obj.phase.value


# ---------------------------------------------------------------------------
# Resolver input
# ---------------------------------------------------------------------------

class SelectionListField(serializers.ListField):
    """
    A list of area codes.

    With ``split_commas`` a single value is read as a comma-separated
    list (``?selections=MA,MA-05``). Repeated values
    (``?selections=MA&selections=MA-05``) and JSON lists are taken
    verbatim, so codes containing a comma are sent that way.
    """

    child = serializers.CharField(allow_blank=True)

    def __init__(self, *args, split_commas=False, **kwargs):
        self.split_commas = split_commas
        super().__init__(*args, **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [data]
        codes = super().to_internal_value(data)
        if self.split_commas and len(codes) == 1:
            codes = codes[0].split(',')
        return [code.strip() for code in codes if code.strip()]


class LevelsQuerySerializer(serializers.Serializer):
    selections = SelectionListField(required=False, default=list, split_commas=True)
    auto_advance = serializers.BooleanField(required=False, allow_null=True, default=None)


class SelectRequestSerializer(serializers.Serializer):
    selections = SelectionListField(required=False, default=list)
    depth = serializers.IntegerField(min_value=0)
    code = serializers.CharField(allow_blank=True, default='')
    auto_advance = serializers.BooleanField(required=False, allow_null=True, default=None)


class ResolveQuerySerializer(serializers.Serializer):
    leaf = serializers.CharField()
