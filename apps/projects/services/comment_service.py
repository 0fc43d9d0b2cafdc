from django.db import transaction

from rest_framework.exceptions import PermissionDenied

from apps.notifications.services import NotificationService
from apps.projects.models import IssueComment
from apps.reporting.services import ActivityService
from apps.workspaces.services import ensure_workspace_access


class CommentService:
    """
    Issue comments. Every change is recorded in the issue's activity; new
    comments also notify the reporter and the assignee.
    """

    @staticmethod
    @transaction.atomic
    def add_comment(user, issue, content) -> IssueComment:
        ensure_workspace_access(user, issue.project.workspace)
        comment = IssueComment.objects.create(issue=issue, author=user, content=content)
        ActivityService.log_activity(issue, user, "COMMENT_ADDED")
        NotificationService().notify_comment_added(comment)
        return comment

    @staticmethod
    @transaction.atomic
    def edit_comment(user, comment, content) -> IssueComment:
        if not comment.can_edit(user):
            raise PermissionDenied("You can only edit your own comments")
        comment.content = content
        comment.is_edited = True
        comment.save(update_fields=["content", "is_edited", "updated_at"])
        ActivityService.log_activity(comment.issue, user, "COMMENT_UPDATED")
        return comment

    @staticmethod
    @transaction.atomic
    def delete_comment(user, comment):
        if not comment.can_delete(user):
            raise PermissionDenied("You can only delete your own comments")
        issue = comment.issue
        comment.delete()
        ActivityService.log_activity(issue, user, "COMMENT_DELETED")
