from .issue_attachment_viewset import IssueAttachmentViewSet
from .issue_comment_viewset import IssueCommentViewSet
from .issue_link_viewset import IssueLinkViewSet
from .issue_viewset import IssueViewSet
from .label_viewset import LabelViewSet
from .project_viewset import ProjectViewSet
from .sprint_viewset import SprintViewSet

__all__ = [
    "IssueAttachmentViewSet",
    "IssueCommentViewSet",
    "IssueLinkViewSet",
    "IssueViewSet",
    "LabelViewSet",
    "ProjectViewSet",
    "SprintViewSet",
]
