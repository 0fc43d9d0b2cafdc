from .access_guard import (
    accessible_workspaces,
    ensure_workspace_access,
    ensure_workspace_admin,
    has_workspace_access,
    is_workspace_admin,
    is_workspace_owner,
    workspace_of,
)
from .invitation_service import InvitationService
from .workspace_service import WorkspaceService

__all__ = [
    "accessible_workspaces",
    "ensure_workspace_access",
    "ensure_workspace_admin",
    "has_workspace_access",
    "is_workspace_admin",
    "is_workspace_owner",
    "workspace_of",
    "InvitationService",
    "WorkspaceService",
]
