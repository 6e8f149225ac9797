from django.urls import path
from .views import (
    WeightLogViewSet, WeightGoalViewSet, AveragesView, ExtendedAveragesView
)

urlpatterns = [
    # Weight log URLs
    path('weights/', WeightLogViewSet.as_view({
        'get': 'list',
        'post': 'create'
    }), name='weights-list'),
    path('weights/<int:pk>/', WeightLogViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name='weights-detail'),

    # Averages URLs
    path('averages/', AveragesView.as_view(), name='averages'),
    path('averages/extended/', ExtendedAveragesView.as_view(), name='averages-extended'),

    # Goal URLs
    path('goals/', WeightGoalViewSet.as_view({
        'get': 'list',
        'post': 'create'
    }), name='goals-list'),
    path('goals/active/', WeightGoalViewSet.as_view({'get': 'active'}), name='goals-active'),
    path('goals/<int:pk>/', WeightGoalViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name='goals-detail'),
    path('goals/<int:pk>/progress/', WeightGoalViewSet.as_view({'get': 'progress'}), name='goals-progress'),
]
