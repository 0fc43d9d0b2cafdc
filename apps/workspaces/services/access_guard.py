"""
Workspace access checks shared by every Quest app.

A user may read or write anything inside a workspace when they own it or
hold a membership row in it. Roles only matter for administrative
operations (deleting projects, managing members and invitations).
Nothing here is cached: each call reads the current membership rows.
"""

from django.db.models import Q

from rest_framework.exceptions import PermissionDenied

from apps.workspaces.models import Workspace, WorkspaceMember

FORBIDDEN_MESSAGE = "You do not have access to this workspace"


def _user_id(user):
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return user.id


def has_workspace_access(user, workspace) -> bool:
    user_id = _user_id(user)
    if user_id is None:
        return False
    if workspace.owner_id == user_id:
        return True
    return WorkspaceMember.objects.filter(
        workspace_id=workspace.id, user_id=user_id
    ).exists()


def is_workspace_owner(user, workspace) -> bool:
    user_id = _user_id(user)
    return user_id is not None and workspace.owner_id == user_id


def is_workspace_admin(user, workspace) -> bool:
    """Owner, or a member holding the ADMIN role."""
    if is_workspace_owner(user, workspace):
        return True
    user_id = _user_id(user)
    if user_id is None:
        return False
    return WorkspaceMember.objects.filter(
        workspace_id=workspace.id, user_id=user_id, role="ADMIN"
    ).exists()


def ensure_workspace_access(user, workspace):
    if not has_workspace_access(user, workspace):
        raise PermissionDenied(FORBIDDEN_MESSAGE)


def ensure_workspace_admin(user, workspace, message=None):
    if not is_workspace_admin(user, workspace):
        raise PermissionDenied(
            message or "Only the workspace owner or an admin can do this"
        )


def accessible_workspaces(user):
    user_id = _user_id(user)
    if user_id is None:
        return Workspace.objects.none()
    return Workspace.objects.filter(
        Q(owner_id=user_id) | Q(members__user_id=user_id)
    ).distinct()


def workspace_of(obj):
    """
    Resolve the owning workspace of any workspace-scoped object: a
    workspace, membership, invitation, project, sprint, label, issue or
    an issue child (comment, attachment, link, activity).
    """
    if isinstance(obj, Workspace):
        return obj
    if hasattr(obj, "workspace"):
        return obj.workspace
    if hasattr(obj, "project"):
        return obj.project.workspace
    if hasattr(obj, "issue"):
        return obj.issue.project.workspace
    if hasattr(obj, "source_issue"):
        return obj.source_issue.project.workspace
    raise TypeError(f"Cannot resolve workspace for {obj.__class__.__name__}")
