from django.urls import path
from . import views

app_name = 'slots'

urlpatterns = [
    # GET  /api/slots/                          - Current account's slots
    # GET  /api/slots/requests/                 - List slot requests
    # POST /api/slots/requests/                 - Submit slot request
    # POST /api/slots/requests/{id}/decide/     - Approve/decline (privileged)
    path('', views.my_slots, name='my-slots'),
    path('requests/', views.slot_requests, name='slot-requests'),
    path('requests/<uuid:pk>/decide/', views.decide_request, name='decide-request'),
]
