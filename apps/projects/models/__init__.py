from .issue_attachment_model import IssueAttachment
from .issue_comment_model import IssueComment
from .issue_link_model import IssueLink
from .issue_model import Issue
from .label_model import IssueLabel, Label
from .project_model import Project
from .sprint_model import Sprint

__all__ = [
    "Project",
    "Issue",
    "Label",
    "IssueLabel",
    "Sprint",
    "IssueComment",
    "IssueAttachment",
    "IssueLink",
]
