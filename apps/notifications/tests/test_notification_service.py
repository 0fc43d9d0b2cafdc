"""
Unit tests for the notification service and the issue event receivers.
"""

import pytest

from apps.authentication.tests.factories import UserFactory
from apps.notifications.models import Notification
from apps.notifications.services import NotificationService
from apps.notifications.tests.factories import NotificationFactory
from apps.projects.models import IssueComment
from apps.projects.services import IssueService
from apps.projects.tests.factories import IssueFactory, ProjectFactory
from apps.workspaces.tests.factories import InvitationFactory, WorkspaceMemberFactory


@pytest.mark.django_db
class TestNotificationService:
    def setup_method(self):
        self.service = NotificationService()

    def test_create_notification(self):
        user = UserFactory()

        notification = self.service.create_notification(
            recipient=user,
            notification_type="ISSUE_ASSIGNED",
            title="You were assigned to ENG-1",
        )

        assert notification.recipient == user
        assert notification.is_read is False
        assert notification.data == {}

    def test_actor_is_never_notified(self):
        user = UserFactory()

        notification = self.service.create_notification(
            recipient=user, notification_type="ISSUE_ASSIGNED", title="x", actor=user
        )

        assert notification is None
        assert not Notification.objects.exists()

    def test_missing_recipient(self):
        assert (
            self.service.create_notification(
                recipient=None, notification_type="ISSUE_ASSIGNED", title="x"
            )
            is None
        )

    def test_notify_issue_assigned(self):
        issue = IssueFactory(assignee=UserFactory())

        notification = self.service.notify_issue_assigned(issue, actor=issue.reporter)

        assert notification.recipient == issue.assignee
        assert notification.title == f"You were assigned to {issue.key}"
        assert notification.data["issue_key"] == issue.key
        assert issue.project.key in notification.link

    def test_comment_notifies_reporter_and_assignee_once(self):
        assignee = UserFactory()
        issue = IssueFactory(assignee=assignee)
        author = UserFactory()
        comment = IssueComment.objects.create(issue=issue, author=author, content="hi")

        assert self.service.notify_comment_added(comment) == 2
        assert set(Notification.objects.values_list("recipient_id", flat=True)) == {
            issue.reporter_id,
            assignee.id,
        }

    def test_comment_by_reporter_who_is_assignee(self):
        issue = IssueFactory()
        issue.assignee = issue.reporter
        issue.save()
        comment = IssueComment.objects.create(
            issue=issue, author=issue.reporter, content="hi"
        )

        assert self.service.notify_comment_added(comment) == 0

    def test_invitation_for_registered_user(self):
        invitee = UserFactory(email="dev@quest.test")
        invitation = InvitationFactory(email="DEV@quest.test")

        notification = self.service.notify_invitation_received(invitation)

        assert notification.recipient == invitee
        assert notification.notification_type == "INVITATION_RECEIVED"

    def test_invitation_for_unknown_email(self):
        invitation = InvitationFactory(email="nobody@quest.test")
        assert self.service.notify_invitation_received(invitation) is None

    def test_unread_count_and_mark_all_read(self):
        user = UserFactory()
        NotificationFactory.create_batch(3, recipient=user)
        NotificationFactory(recipient=user, is_read=True)
        NotificationFactory()

        assert self.service.get_unread_count(user) == 3
        assert self.service.mark_all_read(user) == 3
        assert self.service.get_unread_count(user) == 0
        assert not Notification.objects.filter(recipient=user, is_read=False).exists()

    def test_list_is_capped(self, settings):
        settings.QUEST_NOTIFICATION_LIST_LIMIT = 2
        user = UserFactory()
        NotificationFactory.create_batch(3, recipient=user)

        assert len(self.service.get_notifications_for_user(user)) == 2


@pytest.mark.django_db
class TestIssueEventNotifications:
    def test_assigning_notifies_assignee(self):
        project = ProjectFactory()
        developer = WorkspaceMemberFactory(workspace=project.workspace).user
        issue = IssueService.create_issue(
            project.workspace.owner, {"project_id": project.id, "title": "Login"}
        )

        IssueService.update_issue(
            project.workspace.owner, issue, {"assignee_id": developer.id}
        )

        notification = Notification.objects.get(recipient=developer)
        assert notification.notification_type == "ISSUE_ASSIGNED"

    def test_self_assignment_is_silent(self):
        project = ProjectFactory()
        owner = project.workspace.owner

        IssueService.create_issue(
            owner, {"project_id": project.id, "title": "Login", "assignee_id": owner.id}
        )
        assert not Notification.objects.exists()

    def test_done_notifies_reporter(self):
        project = ProjectFactory()
        developer = WorkspaceMemberFactory(workspace=project.workspace).user
        issue = IssueService.create_issue(
            project.workspace.owner, {"project_id": project.id, "title": "Login"}
        )

        IssueService.move_issue(developer, issue, "DONE")

        notification = Notification.objects.get(recipient=project.workspace.owner)
        assert notification.notification_type == "ISSUE_STATUS_CHANGED"
        assert notification.title == f"{issue.key} was marked as Done"

    def test_other_status_change_is_silent(self):
        project = ProjectFactory()
        developer = WorkspaceMemberFactory(workspace=project.workspace).user
        issue = IssueService.create_issue(
            project.workspace.owner, {"project_id": project.id, "title": "Login"}
        )

        IssueService.move_issue(developer, issue, "IN_PROGRESS")
        assert not Notification.objects.exists()
