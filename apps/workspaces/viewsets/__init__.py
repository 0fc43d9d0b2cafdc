from .invitation_viewset import InvitationViewSet
from .workspace_viewset import WorkspaceViewSet

__all__ = ["WorkspaceViewSet", "InvitationViewSet"]
