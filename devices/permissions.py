from rest_framework import permissions


class IsDeviceOwner(permissions.BasePermission):
    """
    Custom permission to only allow owners of a device to access or revoke it.
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        return obj.user == request.user
