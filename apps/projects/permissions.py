"""
Permission classes for project resources.

Every project, issue and issue child is readable and writable by anyone
with access to the owning workspace. Destructive project operations and
moderation of other people's comments or attachments need the
workspace owner or an ADMIN member.
"""
from rest_framework import permissions

from apps.workspaces.services import (
    has_workspace_access,
    is_workspace_admin,
    workspace_of,
)


class CanAccessProject(permissions.BasePermission):
    """
    Object permission for projects, issues, labels, sprints and the
    children of an issue (comments, attachments, links).
    """

    message = "You do not have access to this workspace"

    def has_object_permission(self, request, view, obj):
        return has_workspace_access(request.user, workspace_of(obj))


class IsProjectAdmin(permissions.BasePermission):
    """Workspace owner or ADMIN member; used for project deletion."""

    message = "Only the workspace owner or an admin can delete projects"

    def has_object_permission(self, request, view, obj):
        return is_workspace_admin(request.user, workspace_of(obj))


class IsAuthorOrWorkspaceAdmin(permissions.BasePermission):
    """
    Write access for the creator of an issue child (comment author,
    attachment uploader, link creator) or a workspace admin. Reads only
    need workspace access.
    """

    owner_fields = ("author", "uploaded_by", "created_by")

    def has_object_permission(self, request, view, obj):
        workspace = workspace_of(obj)
        if not has_workspace_access(request.user, workspace):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True

        for field in self.owner_fields:
            owner_id = getattr(obj, f"{field}_id", None)
            if owner_id is not None and owner_id == request.user.id:
                return True
        return is_workspace_admin(request.user, workspace)
