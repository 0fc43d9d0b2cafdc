from rest_framework import permissions


class IsFilterOwner(permissions.BasePermission):
    message = "You can only manage your own filters"

    def has_object_permission(self, request, view, obj):
        return obj.user_id == request.user.id
