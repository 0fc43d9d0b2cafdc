"""
Tests for the issue store: keys, positions, subtasks and domain events.
"""
import pytest
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from apps.authentication.tests.factories import UserFactory
from apps.projects.models import Issue
from apps.projects.services import IssueService
from apps.projects.signals import issue_created, issue_deleted, issue_updated
from apps.projects.tests.factories import IssueFactory, LabelFactory, ProjectFactory
from apps.workspaces.tests.factories import WorkspaceMemberFactory


def orders(project, status):
    return list(
        Issue.objects.filter(project=project, status=status)
        .order_by("order", "id")
        .values_list("key", "order")
    )


@pytest.fixture
def captured_events():
    events = []

    def receiver(sender, event, **kwargs):
        events.append(event)

    for signal in (issue_created, issue_updated, issue_deleted):
        signal.connect(receiver, weak=False, dispatch_uid=f"test-{id(signal)}")
    yield events
    for signal in (issue_created, issue_updated, issue_deleted):
        signal.disconnect(dispatch_uid=f"test-{id(signal)}")


@pytest.mark.django_db
class TestCreateIssue:
    def test_keys_increment_per_project(self):
        project = ProjectFactory(key="ENG")
        owner = project.workspace.owner

        first = IssueService.create_issue(owner, {"project_id": project.id, "title": "One"})
        second = IssueService.create_issue(owner, {"project_id": project.id, "title": "Two"})

        assert (first.key, second.key) == ("ENG-1", "ENG-2")
        project.refresh_from_db()
        assert project.issue_counter == 2

    def test_defaults(self):
        project = ProjectFactory()
        issue = IssueService.create_issue(
            project.workspace.owner, {"project_id": project.id, "title": "Defaults"}
        )

        assert issue.status == "BACKLOG"
        assert issue.type == "TASK"
        assert issue.priority == "MEDIUM"
        assert issue.order == 1
        assert issue.reporter == project.workspace.owner

    def test_order_appends_to_status_group(self):
        project = ProjectFactory()
        IssueFactory(project=project, status="TODO", order=7)
        IssueFactory(project=project, status="BACKLOG", order=40)

        issue = IssueService.create_issue(
            project.workspace.owner,
            {"project_id": project.id, "title": "Next", "status": "TODO"},
        )
        assert issue.order == 8

    def test_unknown_project(self):
        with pytest.raises(NotFound):
            IssueService.create_issue(
                UserFactory(),
                {"project_id": "00000000-0000-0000-0000-000000000000", "title": "x"},
            )

    def test_outsider_forbidden(self):
        project = ProjectFactory()
        with pytest.raises(PermissionDenied):
            IssueService.create_issue(UserFactory(), {"project_id": project.id, "title": "x"})
        assert not Issue.objects.exists()

    def test_assignee_must_have_access(self):
        project = ProjectFactory()
        with pytest.raises(ValidationError):
            IssueService.create_issue(
                project.workspace.owner,
                {"project_id": project.id, "title": "x", "assignee_id": UserFactory().id},
            )

    def test_labels_must_belong_to_project(self):
        project = ProjectFactory()
        foreign = LabelFactory()
        with pytest.raises(ValidationError):
            IssueService.create_issue(
                project.workspace.owner,
                {"project_id": project.id, "title": "x", "label_ids": [foreign.id]},
            )

    def test_emits_created_event(self, captured_events):
        project = ProjectFactory()
        issue = IssueService.create_issue(
            project.workspace.owner, {"project_id": project.id, "title": "Evented"}
        )

        assert captured_events[-1]["type"] == "issue_created"
        assert captured_events[-1]["issue_id"] == str(issue.id)
        assert captured_events[-1]["actor_id"] == str(project.workspace.owner.id)


@pytest.mark.django_db
class TestUpdateIssue:
    def test_priority_round_trip_leaves_other_fields(self):
        issue = IssueFactory(priority="LOW", title="Stable", status="TODO", order=3)
        IssueService.update_issue(issue.reporter, issue, {"priority": "HIGH"})

        fresh = Issue.objects.get(pk=issue.pk)
        assert fresh.priority == "HIGH"
        assert (fresh.title, fresh.status, fresh.order) == ("Stable", "TODO", 3)

    def test_status_change_appends(self):
        project = ProjectFactory()
        IssueFactory(project=project, status="DONE", order=1)
        IssueFactory(project=project, status="DONE", order=5)
        issue = IssueFactory(project=project, status="TODO", order=1)

        IssueService.update_issue(issue.reporter, issue, {"status": "DONE"})

        issue.refresh_from_db()
        assert (issue.status, issue.order) == ("DONE", 6)

    def test_colliding_order_shifts_group(self):
        project = ProjectFactory(key="ENG")
        a = IssueFactory(project=project, key="ENG-1", status="TODO", order=1)
        b = IssueFactory(project=project, key="ENG-2", status="TODO", order=2)
        c = IssueFactory(project=project, key="ENG-3", status="TODO", order=3)
        moved = IssueFactory(project=project, key="ENG-4", status="BACKLOG", order=1)

        IssueService.move_issue(moved.reporter, moved, "TODO", 2)

        assert orders(project, "TODO") == [
            (a.key, 1),
            (moved.key, 2),
            (b.key, 3),
            (c.key, 4),
        ]

    def test_free_order_does_not_shift(self):
        project = ProjectFactory()
        a = IssueFactory(project=project, status="TODO", order=1)
        b = IssueFactory(project=project, status="TODO", order=5)
        moved = IssueFactory(project=project, status="BACKLOG", order=1)

        IssueService.move_issue(moved.reporter, moved, "TODO", 3)

        assert orders(project, "TODO") == [(a.key, 1), (moved.key, 3), (b.key, 5)]

    def test_reorder_within_group_keeps_orders_unique(self):
        project = ProjectFactory()
        first = IssueFactory(project=project, status="TODO", order=1)
        second = IssueFactory(project=project, status="TODO", order=2)

        IssueService.update_issue(second.reporter, second, {"order": 1})

        values = [order for _key, order in orders(project, "TODO")]
        assert len(values) == len(set(values))
        second.refresh_from_db()
        first.refresh_from_db()
        assert (second.order, first.order) == (1, 2)

    def test_parent_cannot_be_self(self):
        issue = IssueFactory()
        with pytest.raises(ValidationError):
            IssueService.update_issue(issue.reporter, issue, {"parent_id": issue.id})

    def test_parent_cannot_be_subtask(self):
        project = ProjectFactory()
        parent = IssueFactory(project=project)
        child = IssueFactory(project=project, parent=parent)
        issue = IssueFactory(project=project)

        with pytest.raises(ValidationError):
            IssueService.update_issue(issue.reporter, issue, {"parent_id": child.id})

    def test_issue_with_subtasks_cannot_become_subtask(self):
        project = ProjectFactory()
        parent = IssueFactory(project=project)
        IssueFactory(project=project, parent=parent)
        other = IssueFactory(project=project)

        with pytest.raises(ValidationError):
            IssueService.update_issue(parent.reporter, parent, {"parent_id": other.id})

    def test_unknown_parent(self):
        issue = IssueFactory()
        with pytest.raises(NotFound):
            IssueService.update_issue(
                issue.reporter, issue, {"parent_id": "00000000-0000-0000-0000-000000000000"}
            )

    def test_outsider_forbidden(self):
        issue = IssueFactory(priority="LOW")
        with pytest.raises(PermissionDenied):
            IssueService.update_issue(UserFactory(), issue, {"priority": "HIGH"})
        issue.refresh_from_db()
        assert issue.priority == "LOW"

    def test_updated_event_carries_changes(self, captured_events):
        issue = IssueFactory(priority="LOW")
        IssueService.update_issue(issue.reporter, issue, {"priority": "URGENT"})

        event = captured_events[-1]
        assert event["type"] == "issue_updated"
        assert event["changes"] == {"priority": ["LOW", "URGENT"]}

    def test_noop_update_emits_nothing(self, captured_events):
        issue = IssueFactory(priority="LOW")
        IssueService.update_issue(issue.reporter, issue, {"priority": "LOW"})
        assert captured_events == []


@pytest.mark.django_db
class TestSubtasks:
    def test_subtask_inherits_project(self):
        parent = IssueFactory()
        subtask = IssueService.create_subtask(
            parent.reporter, parent, {"title": "Child", "type": "BUG"}
        )

        assert subtask.project_id == parent.project_id
        assert subtask.parent_id == parent.id
        assert subtask.status == "BACKLOG"

    def test_subtask_of_subtask_rejected(self):
        parent = IssueFactory()
        child = IssueFactory(project=parent.project, parent=parent)

        with pytest.raises(ValidationError) as excinfo:
            IssueService.create_subtask(child.reporter, child, {"title": "Grandchild"})
        assert "Cannot create subtask of a subtask" in str(excinfo.value.detail)

    def test_list_subtasks_by_order(self):
        parent = IssueFactory()
        late = IssueFactory(project=parent.project, parent=parent, order=9)
        early = IssueFactory(project=parent.project, parent=parent, order=2)

        result = list(IssueService.list_subtasks(parent.reporter, parent))
        assert result == [early, late]


@pytest.mark.django_db
class TestDeleteIssue:
    def test_delete_cascades_subtasks(self, captured_events):
        parent = IssueFactory()
        child = IssueFactory(project=parent.project, parent=parent)

        event = IssueService.delete_issue(parent.reporter, parent)

        assert not Issue.objects.filter(pk__in=[parent.pk, child.pk]).exists()
        assert event["issue_key"] == parent.key
        assert captured_events[-1]["type"] == "issue_deleted"

    def test_delete_requires_access(self):
        issue = IssueFactory()
        with pytest.raises(PermissionDenied):
            IssueService.delete_issue(UserFactory(), issue)
        assert Issue.objects.filter(pk=issue.pk).exists()

    def test_member_can_delete(self):
        issue = IssueFactory()
        member = WorkspaceMemberFactory(workspace=issue.project.workspace, role="GUEST")
        IssueService.delete_issue(member.user, issue)
        assert not Issue.objects.filter(pk=issue.pk).exists()
