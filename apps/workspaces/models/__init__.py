from .invitation_model import Invitation
from .workspace_member_model import WorkspaceMember
from .workspace_model import Workspace, generate_slug

__all__ = [
    "Workspace",
    "WorkspaceMember",
    "Invitation",
    "generate_slug",
]
