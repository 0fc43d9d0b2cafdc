from .bulk_serializer import BULK_PAYLOAD_SERIALIZERS, BulkIssueActionSerializer
from .issue_attachment_serializer import IssueAttachmentSerializer
from .issue_comment_serializer import IssueCommentSerializer
from .issue_link_serializer import IssueLinkCreateSerializer, IssueLinkSerializer
from .issue_serializer import (
    BoardColumnSerializer,
    IssueCreateSerializer,
    IssueDetailSerializer,
    IssueListSerializer,
    IssueMoveSerializer,
    IssueUpdateSerializer,
    SubtaskCreateSerializer,
)
from .label_serializer import LabelSerializer
from .project_serializer import (
    ProjectCreateSerializer,
    ProjectSerializer,
    ProjectUpdateSerializer,
)
from .sprint_serializer import SprintSerializer

__all__ = [
    "BULK_PAYLOAD_SERIALIZERS",
    "BulkIssueActionSerializer",
    "BoardColumnSerializer",
    "IssueAttachmentSerializer",
    "IssueCommentSerializer",
    "IssueCreateSerializer",
    "IssueDetailSerializer",
    "IssueLinkCreateSerializer",
    "IssueLinkSerializer",
    "IssueListSerializer",
    "IssueMoveSerializer",
    "IssueUpdateSerializer",
    "LabelSerializer",
    "ProjectCreateSerializer",
    "ProjectSerializer",
    "ProjectUpdateSerializer",
    "SprintSerializer",
    "SubtaskCreateSerializer",
]
