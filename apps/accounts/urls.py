from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),
    path('user/', views.get_current_user, name='current-user'),

    # Account management (Admin only)
    path('accounts/', views.accounts, name='accounts'),
    path('accounts/<uuid:pk>/', views.account_detail, name='account-detail'),
    path('accounts/<uuid:pk>/role/', views.account_role, name='account-role'),
]
