from django.urls import path
from . import views

app_name = 'invitations'

urlpatterns = [
    # GET  /api/invitations/                  - List invitations (privileged)
    # POST /api/invitations/                  - Generate invitations (privileged)
    # GET  /api/invitations/validate/{code}/  - Validate code (public)
    # POST /api/invitations/register/         - Register with code (public)
    path('', views.invitations, name='invitation-list'),
    path('validate/<str:code>/', views.validate, name='validate'),
    path('register/', views.register, name='register'),
]
