# Generated manually for the slots app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SlotAllocation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('category', models.CharField(choices=[('VIP', 'VIP'), ('Premier', 'Premier'), ('Partner', 'Partner'), ('Exhibitor', 'Exhibitor'), ('Media', 'Media'), ('Other', 'Other')], max_length=20)),
                ('total', models.PositiveIntegerField(default=0)),
                ('used', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='slot_allocations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'slot_allocations',
                'ordering': ['category'],
                'unique_together': {('account', 'category')},
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('used__gte', 0)), name='slot_used_non_negative'),
                    models.CheckConstraint(condition=models.Q(('used__lte', models.F('total'))), name='slot_used_within_total'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SlotRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('requested_slots', models.JSONField(default=dict)),
                ('reason', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('declined', 'Declined')], default='pending', max_length=20)),
                ('decided_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='slot_requests', to=settings.AUTH_USER_MODEL)),
                ('decided_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='decided_slot_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'slot_requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='slot_reques_status_5e9b21_idx'),
                ],
            },
        ),
    ]
