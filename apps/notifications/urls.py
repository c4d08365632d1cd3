from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    # GET  /api/notifications/                  - List notifications
    # GET  /api/notifications/unread-count/     - Unread counter
    # POST /api/notifications/read-all/         - Mark all as read
    # POST /api/notifications/{id}/read/        - Mark one as read
    path('', views.notification_list, name='notification-list'),
    path('unread-count/', views.notification_unread_count, name='unread-count'),
    path('read-all/', views.notification_mark_all_read, name='read-all'),
    path('<uuid:pk>/read/', views.notification_mark_read, name='mark-read'),
]
