from django.urls import path
from . import views

app_name = 'attendees'

urlpatterns = [
    # GET  /api/attendees/                 - List attendees
    # POST /api/attendees/                 - Manual registration
    # POST /api/attendees/bulk/            - Bulk import
    # POST /api/attendees/{id}/status/     - Change status (privileged)
    # GET  /api/attendees/export/          - CSV export (privileged)
    path('', views.attendees, name='attendee-list'),
    path('bulk/', views.bulk_import, name='bulk-import'),
    path('export/', views.export_attendees, name='attendee-export'),
    path('<uuid:pk>/status/', views.attendee_status, name='attendee-status'),
]
