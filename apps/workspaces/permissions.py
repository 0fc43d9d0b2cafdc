"""
Permission classes backed by the workspace access guard.
Object permissions deny with 403 so callers can tell a forbidden
resource apart from a missing one.
"""
from rest_framework import permissions

from apps.workspaces.services.access_guard import (
    FORBIDDEN_MESSAGE,
    has_workspace_access,
    is_workspace_admin,
    is_workspace_owner,
    workspace_of,
)


class CanAccessWorkspace(permissions.BasePermission):
    """Owner or member of the object's workspace."""

    message = FORBIDDEN_MESSAGE

    def has_object_permission(self, request, view, obj):
        return has_workspace_access(request.user, workspace_of(obj))


class IsWorkspaceAdmin(permissions.BasePermission):
    """
    Workspace owner or ADMIN member for writes; any member may read.
    """

    message = "Only the workspace owner or an admin can do this"

    def has_object_permission(self, request, view, obj):
        workspace = workspace_of(obj)
        if request.method in permissions.SAFE_METHODS:
            return has_workspace_access(request.user, workspace)
        return is_workspace_admin(request.user, workspace)


class IsWorkspaceOwner(permissions.BasePermission):
    message = "Only the workspace owner can do this"

    def has_object_permission(self, request, view, obj):
        workspace = workspace_of(obj)
        if request.method in permissions.SAFE_METHODS:
            return has_workspace_access(request.user, workspace)
        return is_workspace_owner(request.user, workspace)
