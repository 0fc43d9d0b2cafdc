"""
Tests for bulk issue operations.
"""
import uuid

from django.urls import reverse

import pytest
from rest_framework import status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from apps.authentication.tests.factories import UserFactory
from apps.projects.models import Issue
from apps.projects.services import BulkMutator
from apps.projects.tests.factories import IssueFactory, ProjectFactory
from apps.reporting.models import ActivityLog
from apps.workspaces.tests.factories import WorkspaceMemberFactory
from base.exceptions import InvalidAction, MixedProjectBatch


@pytest.mark.django_db
class TestBulkMutator:
    def test_update_status_appends_in_order(self):
        project = ProjectFactory()
        IssueFactory(project=project, status="DONE", order=4)
        a = IssueFactory(project=project, status="TODO", order=1)
        b = IssueFactory(project=project, status="TODO", order=2)
        already = IssueFactory(project=project, status="DONE", order=2)

        result = BulkMutator.apply_bulk(
            project.workspace.owner,
            "updateStatus",
            [b.id, a.id, already.id],
            {"status": "DONE"},
        )

        assert result["count"] == 3
        for issue in (a, b, already):
            issue.refresh_from_db()
        assert (a.status, a.order) == ("DONE", 5)
        assert (b.status, b.order) == ("DONE", 6)
        assert already.order == 2
        orders = list(
            Issue.objects.filter(project=project, status="DONE").values_list("order", flat=True)
        )
        assert len(orders) == len(set(orders))

    def test_assign_and_unassign(self):
        project = ProjectFactory()
        member = WorkspaceMemberFactory(workspace=project.workspace).user
        issues = [IssueFactory(project=project) for _ in range(2)]
        owner = project.workspace.owner

        BulkMutator.apply_bulk(owner, "assign", [i.id for i in issues], {"assignee_id": member.id})
        assert set(Issue.objects.values_list("assignee_id", flat=True)) == {member.id}

        BulkMutator.apply_bulk(owner, "assign", [i.id for i in issues], {"assignee_id": None})
        assert set(Issue.objects.values_list("assignee_id", flat=True)) == {None}

    def test_update_priority_records_activity(self):
        project = ProjectFactory()
        issue = IssueFactory(project=project, priority="LOW")

        BulkMutator.apply_bulk(
            project.workspace.owner, "updatePriority", [issue.id], {"priority": "URGENT"}
        )

        issue.refresh_from_db()
        assert issue.priority == "URGENT"
        assert ActivityLog.objects.filter(issue=issue, action="ISSUE_PRIORITY_CHANGED").exists()

    def test_delete_with_missing_id_has_no_side_effect(self):
        issue = IssueFactory()

        with pytest.raises(NotFound) as excinfo:
            BulkMutator.apply_bulk(
                issue.reporter, "delete", [issue.id, uuid.uuid4()], {}
            )

        assert str(excinfo.value.detail) == "One or more issues were not found"
        assert Issue.objects.filter(pk=issue.pk).exists()

    def test_mixed_projects_rejected(self):
        first = IssueFactory()
        second = IssueFactory(project=ProjectFactory(workspace=first.project.workspace))

        with pytest.raises(MixedProjectBatch):
            BulkMutator.apply_bulk(first.reporter, "delete", [first.id, second.id], {})
        assert Issue.objects.count() == 2

    def test_outsider_forbidden_without_changes(self):
        issue = IssueFactory(priority="LOW")

        with pytest.raises(PermissionDenied):
            BulkMutator.apply_bulk(
                UserFactory(), "updatePriority", [issue.id], {"priority": "HIGH"}
            )
        issue.refresh_from_db()
        assert issue.priority == "LOW"

    def test_unknown_action(self):
        issue = IssueFactory()
        with pytest.raises(InvalidAction):
            BulkMutator.apply_bulk(issue.reporter, "archive", [issue.id], {})

    def test_duplicate_ids_counted_once(self):
        issue = IssueFactory()
        result = BulkMutator.apply_bulk(issue.reporter, "delete", [issue.id, issue.id], {})
        assert result == {"action": "delete", "count": 1, "issue_ids": [str(issue.id)]}

    def test_empty_batch_rejected(self):
        user = UserFactory()
        with pytest.raises(ValidationError, match="At least one issue is required"):
            BulkMutator.apply_bulk(user, "delete", [], {})

    def test_invalid_assignee_rolls_back(self):
        project = ProjectFactory()
        issue = IssueFactory(project=project)

        with pytest.raises(ValidationError):
            BulkMutator.apply_bulk(
                project.workspace.owner, "assign", [issue.id], {"assignee_id": UserFactory().id}
            )
        issue.refresh_from_db()
        assert issue.assignee_id is None


@pytest.mark.django_db
class TestBulkEndpoint:
    def test_bulk_update_status(self, api_client):
        project = ProjectFactory()
        issues = [IssueFactory(project=project, status="TODO", order=n) for n in (1, 2)]
        api_client.force_authenticate(user=project.workspace.owner)

        response = api_client.post(
            reverse("issue-bulk"),
            {
                "action": "updateStatus",
                "issue_ids": [str(i.id) for i in issues],
                "status": "IN_PROGRESS",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 2
        assert response.json()["data"]["action"] == "updateStatus"
        assert set(Issue.objects.values_list("status", flat=True)) == {"IN_PROGRESS"}

    def test_bulk_missing_issue_is_not_found(self, api_client):
        issue = IssueFactory()
        api_client.force_authenticate(user=issue.reporter)

        response = api_client.post(
            reverse("issue-bulk"),
            {"action": "delete", "issue_ids": [str(issue.id), str(uuid.uuid4())]},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "One or more issues were not found"}
        assert Issue.objects.filter(pk=issue.pk).exists()

    def test_bulk_invalid_action(self, api_client):
        issue = IssueFactory()
        api_client.force_authenticate(user=issue.reporter)

        response = api_client.post(
            reverse("issue-bulk"),
            {"action": "archive", "issue_ids": [str(issue.id)]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("Unknown action: archive")

    def test_bulk_payload_validated_per_action(self, api_client):
        issue = IssueFactory()
        api_client.force_authenticate(user=issue.reporter)

        response = api_client.post(
            reverse("issue-bulk"),
            {"action": "updatePriority", "issue_ids": [str(issue.id)], "priority": "P1"},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_bulk_mixed_projects(self, api_client):
        first = IssueFactory()
        second = IssueFactory(project=ProjectFactory(workspace=first.project.workspace))
        api_client.force_authenticate(user=first.reporter)

        response = api_client.post(
            reverse("issue-bulk"),
            {"action": "delete", "issue_ids": [str(first.id), str(second.id)]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Issue.objects.count() == 2

    def test_bulk_outsider_forbidden(self, api_client):
        issue = IssueFactory()
        api_client.force_authenticate(user=UserFactory())

        response = api_client.post(
            reverse("issue-bulk"),
            {"action": "delete", "issue_ids": [str(issue.id)]},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Issue.objects.filter(pk=issue.pk).exists()
