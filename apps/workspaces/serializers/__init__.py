from .invitation_serializer import (
    InvitationCreateSerializer,
    InvitationRespondSerializer,
    InvitationSerializer,
)
from .workspace_serializer import (
    MemberRoleSerializer,
    WorkspaceCreateSerializer,
    WorkspaceMemberSerializer,
    WorkspaceSerializer,
    WorkspaceUpdateSerializer,
)

__all__ = [
    "WorkspaceSerializer",
    "WorkspaceCreateSerializer",
    "WorkspaceUpdateSerializer",
    "WorkspaceMemberSerializer",
    "MemberRoleSerializer",
    "InvitationSerializer",
    "InvitationCreateSerializer",
    "InvitationRespondSerializer",
]
