"""
Notification fan-out for issue, comment and invitation events.

Every helper skips the actor: nobody is notified about their own action.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.notifications.models import Notification

User = get_user_model()
logger = logging.getLogger(__name__)


def issue_link(issue) -> str:
    return f"/workspace/{issue.project.workspace.slug}/project/{issue.project.key}/board"


def issue_data(issue) -> Dict[str, Any]:
    return {
        "issue_id": str(issue.id),
        "issue_key": issue.key,
        "project_id": str(issue.project_id),
    }


class NotificationService:
    def create_notification(
        self,
        recipient,
        notification_type: str,
        title: str,
        message: str = "",
        link: str = "",
        data: Optional[Dict[str, Any]] = None,
        actor=None,
    ) -> Optional[Notification]:
        if recipient is None:
            return None
        if actor is not None and recipient.pk == actor.pk:
            logger.debug(f"Skipping self-notification {notification_type} for {recipient.email}")
            return None

        return Notification.objects.create(
            recipient=recipient,
            notification_type=notification_type,
            title=title,
            message=message,
            link=link,
            data=data or {},
        )

    def notify_issue_assigned(self, issue, actor) -> Optional[Notification]:
        return self.create_notification(
            recipient=issue.assignee,
            notification_type="ISSUE_ASSIGNED",
            title=f"You were assigned to {issue.key}",
            message=issue.title,
            link=issue_link(issue),
            data=issue_data(issue),
            actor=actor,
        )

    def notify_issue_completed(self, issue, actor) -> Optional[Notification]:
        """Tell the reporter their issue reached DONE."""
        return self.create_notification(
            recipient=issue.reporter,
            notification_type="ISSUE_STATUS_CHANGED",
            title=f"{issue.key} was marked as Done",
            message=issue.title,
            link=issue_link(issue),
            data=issue_data(issue),
            actor=actor,
        )

    def notify_comment_added(self, comment) -> int:
        issue = comment.issue
        recipients = {}
        for user in (issue.reporter, issue.assignee):
            if user is not None and user.pk != comment.author_id:
                recipients[user.pk] = user

        created = 0
        for recipient in recipients.values():
            notification = self.create_notification(
                recipient=recipient,
                notification_type="COMMENT_ADDED",
                title=f"New comment on {issue.key}",
                message=issue.title,
                link=issue_link(issue),
                data={**issue_data(issue), "comment_id": str(comment.id)},
                actor=comment.author,
            )
            if notification:
                created += 1
        return created

    def notify_invitation_received(self, invitation) -> Optional[Notification]:
        """Notify an already registered invitee; unknown emails are skipped."""
        recipient = User.objects.filter(email__iexact=invitation.email).first()
        if recipient is None:
            return None
        return self.create_notification(
            recipient=recipient,
            notification_type="INVITATION_RECEIVED",
            title=f"You were invited to {invitation.workspace.name}",
            message=f"Role: {invitation.role}",
            link=f"/invitations/{invitation.token}",
            data={
                "invitation_id": str(invitation.id),
                "workspace_id": str(invitation.workspace_id),
            },
            actor=invitation.invited_by,
        )

    def get_notifications_for_user(self, user, limit=None):
        limit = limit or settings.QUEST_NOTIFICATION_LIST_LIMIT
        return Notification.objects.filter(recipient=user).order_by("-created_at")[:limit]

    def get_unread_count(self, user) -> int:
        return Notification.objects.filter(recipient=user, is_read=False).count()

    def mark_all_read(self, user) -> int:
        return Notification.objects.filter(recipient=user, is_read=False).update(
            is_read=True, read_at=timezone.now()
        )
