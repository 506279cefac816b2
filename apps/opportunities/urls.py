from django.urls import path
from . import views

app_name = 'opportunities'

urlpatterns = [
    path('', views.opportunity_list_view, name='opportunity_list'),
    path('new/', views.opportunity_create_view, name='opportunity_create'),
    path('<int:pk>/', views.opportunity_detail_view, name='opportunity_detail'),
    path('<int:pk>/edit/', views.opportunity_edit_view, name='opportunity_edit'),
    path('<int:pk>/delete/', views.opportunity_delete_view, name='opportunity_delete'),
]
