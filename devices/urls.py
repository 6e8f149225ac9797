from django.urls import path
from .views import DeviceViewSet, VerifyDeviceView

urlpatterns = [
    path('verify-device/', VerifyDeviceView.as_view(), name='verify-device'),
    path('devices/', DeviceViewSet.as_view({'get': 'list'}), name='device-list'),
    path('devices/<int:pk>/', DeviceViewSet.as_view({
        'get': 'retrieve',
        'delete': 'destroy'
    }), name='device-detail'),
]
