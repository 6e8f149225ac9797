from django.contrib import admin
from .models import Device


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'device_id', 'device_name',
                    'is_trusted', 'verified_at', 'last_login_at']
    search_fields = ['device_id', 'device_name', 'user__email']
    list_filter = ['is_trusted']
    readonly_fields = ['created_at', 'updated_at']
