# Generated manually for the attendees app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('invitations', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Attendee',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('category', models.CharField(choices=[('VIP', 'VIP'), ('Premier', 'Premier'), ('Partner', 'Partner'), ('Exhibitor', 'Exhibitor'), ('Media', 'Media'), ('Other', 'Other')], max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('declined', 'Declined'), ('change_requested', 'Change Requested')], default='pending', max_length=20)),
                ('registration_method', models.CharField(choices=[('invitation', 'Invitation'), ('manual', 'Manual')], max_length=20)),
                ('title', models.CharField(blank=True, max_length=20)),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('email', models.EmailField(max_length=255, unique=True)),
                ('mobile_number', models.CharField(max_length=30)),
                ('country_code', models.CharField(blank=True, max_length=10)),
                ('nationality', models.CharField(max_length=100)),
                ('country_of_residence', models.CharField(max_length=100)),
                ('date_of_birth', models.DateField()),
                ('religion', models.CharField(blank=True, max_length=50)),
                ('linkedin_account', models.CharField(blank=True, max_length=255)),
                ('organization', models.CharField(max_length=200)),
                ('job_title', models.CharField(max_length=200)),
                ('level', models.CharField(blank=True, max_length=100)),
                ('level_specify', models.CharField(blank=True, max_length=200)),
                ('work_address', models.CharField(blank=True, max_length=255)),
                ('work_city', models.CharField(blank=True, max_length=100)),
                ('work_country', models.CharField(blank=True, max_length=100)),
                ('primary_nature_of_business', models.CharField(blank=True, max_length=200)),
                ('areas_of_interest', models.JSONField(blank=True, default=list)),
                ('id_type', models.CharField(choices=[('National ID', 'National ID'), ('Iqama', 'Iqama'), ('Passport', 'Passport')], max_length=20)),
                ('id_number', models.CharField(max_length=50)),
                ('issue_date', models.DateField(blank=True, null=True)),
                ('expiry_date', models.DateField(blank=True, null=True)),
                ('issue_place', models.CharField(blank=True, max_length=100)),
                ('need_visa', models.BooleanField(default=False)),
                ('face_photo_url', models.URLField(blank=True, max_length=500)),
                ('id_photo_url', models.URLField(blank=True, max_length=500)),
                ('previous_attendance', models.BooleanField(default=False)),
                ('previous_years', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('invitation', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='attendee', to='invitations.invitation')),
                ('registered_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='registered_attendees', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'attendees',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['category', 'status'], name='attendees_categor_4b7e2d_idx'),
                    models.Index(fields=['registered_by', 'created_at'], name='attendees_registe_9c1f5a_idx'),
                ],
            },
        ),
    ]
