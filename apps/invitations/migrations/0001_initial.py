# Generated manually for the invitations app

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
            name='Invitation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=8, unique=True)),
                ('attendee_category', models.CharField(choices=[('VIP', 'VIP'), ('Premier', 'Premier'), ('Partner', 'Partner'), ('Exhibitor', 'Exhibitor'), ('Media', 'Media'), ('Other', 'Other')], max_length=20)),
                ('is_used', models.BooleanField(db_index=True, default=False)),
                ('used_by_identifier', models.CharField(blank=True, max_length=255, null=True)),
                ('used_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_invitations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'invitations',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['attendee_category', 'is_used'], name='invitations_attende_0a7c3f_idx'),
                ],
            },
        ),
    ]
