import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Tenant',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(db_index=True, max_length=30, unique=True, verbose_name='code')),
                ('name', models.CharField(max_length=150, verbose_name='name')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
            ],
            options={
                'verbose_name': 'tenant',
                'verbose_name_plural': 'tenants',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='AreaType',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=30, verbose_name='code')),
                ('name', models.CharField(max_length=100, verbose_name='name')),
                ('name_ar', models.CharField(blank=True, default='', max_length=100, verbose_name='name (arabic)')),
                ('rank', models.PositiveIntegerField(default=0, verbose_name='rank')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='area_types', to='geography.tenant', verbose_name='tenant')),
            ],
            options={
                'verbose_name': 'area type',
                'verbose_name_plural': 'area types',
                'ordering': ['tenant', 'rank', 'code'],
                'constraints': [
                    models.UniqueConstraint(fields=('tenant', 'code'), name='unique_area_type_code_per_tenant'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Area',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=50, verbose_name='code')),
                ('name', models.CharField(max_length=150, verbose_name='name')),
                ('name_ar', models.CharField(blank=True, default='', max_length=150, verbose_name='name (arabic)')),
                ('parent_code', models.CharField(blank=True, db_index=True, max_length=50, null=True, verbose_name='parent code')),
                ('sort_order', models.IntegerField(default=0, verbose_name='sort order')),
                ('area_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='areas', to='geography.areatype', verbose_name='area type')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='areas', to='geography.tenant', verbose_name='tenant')),
            ],
            options={
                'verbose_name': 'area',
                'verbose_name_plural': 'areas',
                'ordering': ['tenant', 'sort_order', 'code'],
                'indexes': [
                    models.Index(fields=['tenant', 'parent_code'], name='geography_area_tenant_parent'),
                    models.Index(fields=['name'], name='geography_area_name'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('tenant', 'code'), name='unique_area_code_per_tenant'),
                    models.CheckConstraint(condition=models.Q(('parent_code', models.F('code')), _negated=True), name='area_not_own_parent'),
                ],
            },
        ),
    ]
