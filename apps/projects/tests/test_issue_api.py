from django.urls import reverse

import pytest
from rest_framework import status

from apps.authentication.tests.factories import UserFactory
from apps.projects.models import Issue
from apps.projects.tests.factories import IssueFactory, LabelFactory, ProjectFactory
from apps.workspaces.tests.factories import WorkspaceMemberFactory


@pytest.fixture
def eng_project():
    """Workspace owned by U1 with project ENG; U2 is a DEVELOPER member."""
    project = ProjectFactory(key="ENG", name="Engineering")
    developer = WorkspaceMemberFactory(workspace=project.workspace, role="DEVELOPER").user
    return project, developer


@pytest.mark.django_db
class TestIssueCreateScenario:
    def test_member_creates_first_issue(self, api_client, eng_project):
        project, developer = eng_project
        api_client.force_authenticate(user=developer)

        response = api_client.post(
            reverse("issue-list"),
            {"project_id": str(project.id), "title": "Fix bug", "type": "BUG"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["key"] == "ENG-1"
        assert response.data["status"] == "BACKLOG"
        assert response.data["order"] == 1
        assert response.data["reporter"]["id"] == str(developer.id)
        assert response.json()["data"]["key"] == "ENG-1"

    def test_outsider_cannot_list_project_issues(self, api_client, eng_project):
        project, _developer = eng_project
        IssueFactory(project=project)
        api_client.force_authenticate(user=UserFactory())

        response = api_client.get(reverse("issue-list"), {"project": str(project.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"error": "You do not have access to this workspace"}

    def test_outsider_cannot_create(self, api_client, eng_project):
        project, _developer = eng_project
        api_client.force_authenticate(user=UserFactory())

        response = api_client.post(
            reverse("issue-list"),
            {"project_id": str(project.id), "title": "Sneaky"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Issue.objects.exists()

    def test_anonymous_is_unauthorized(self, api_client):
        response = api_client.get(reverse("issue-list"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_project_is_not_found(self, api_client):
        api_client.force_authenticate(user=UserFactory())
        response = api_client.post(
            reverse("issue-list"),
            {"project_id": "00000000-0000-0000-0000-000000000000", "title": "Lost"},
            format="json",
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_validation_error_reports_first_field(self, api_client, eng_project):
        project, developer = eng_project
        api_client.force_authenticate(user=developer)

        response = api_client.post(
            reverse("issue-list"),
            {"project_id": str(project.id), "title": "", "type": "CHORE"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("title:")


@pytest.mark.django_db
class TestIssueReadUpdate:
    def test_retrieve_outsider_forbidden(self, api_client):
        issue = IssueFactory()
        api_client.force_authenticate(user=UserFactory())

        response = api_client.get(reverse("issue-detail", kwargs={"pk": issue.id}))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_retrieve_missing(self, api_client):
        api_client.force_authenticate(user=UserFactory())
        response = api_client.get(
            reverse("issue-detail", kwargs={"pk": "00000000-0000-0000-0000-000000000000"})
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve_detail_shape(self, api_client):
        parent = IssueFactory()
        IssueFactory(project=parent.project, parent=parent)
        api_client.force_authenticate(user=parent.reporter)

        response = api_client.get(reverse("issue-detail", kwargs={"pk": parent.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["subtask_count"] == 1
        assert response.data["project"]["key"] == parent.project.key

    def test_patch_priority_round_trip(self, api_client):
        issue = IssueFactory(priority="LOW", title="Keep me")
        api_client.force_authenticate(user=issue.reporter)

        response = api_client.patch(
            reverse("issue-detail", kwargs={"pk": issue.id}), {"priority": "HIGH"}, format="json"
        )
        assert response.status_code == status.HTTP_200_OK

        fetched = api_client.get(reverse("issue-detail", kwargs={"pk": issue.id}))
        assert fetched.data["priority"] == "HIGH"
        assert fetched.data["title"] == "Keep me"
        assert fetched.data["status"] == issue.status

    def test_patch_invalid_status(self, api_client):
        issue = IssueFactory()
        api_client.force_authenticate(user=issue.reporter)

        response = api_client.patch(
            reverse("issue-detail", kwargs={"pk": issue.id}), {"status": "WONTFIX"}, format="json"
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_labels(self, api_client):
        issue = IssueFactory()
        label = LabelFactory(project=issue.project)
        api_client.force_authenticate(user=issue.reporter)

        response = api_client.patch(
            reverse("issue-detail", kwargs={"pk": issue.id}),
            {"label_ids": [str(label.id)]},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert [row["id"] for row in response.data["labels"]] == [str(label.id)]

    def test_move(self, api_client):
        project = ProjectFactory()
        IssueFactory(project=project, status="IN_PROGRESS", order=1)
        issue = IssueFactory(project=project, status="TODO", order=1)
        api_client.force_authenticate(user=project.workspace.owner)

        response = api_client.post(
            reverse("issue-move", kwargs={"pk": issue.id}),
            {"status": "IN_PROGRESS", "order": 1},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "IN_PROGRESS"
        assert response.data["order"] == 1
        orders = Issue.objects.filter(project=project, status="IN_PROGRESS").values_list(
            "order", flat=True
        )
        assert sorted(orders) == [1, 2]

    def test_delete(self, api_client):
        issue = IssueFactory()
        api_client.force_authenticate(user=issue.reporter)

        response = api_client.delete(reverse("issue-detail", kwargs={"pk": issue.id}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Issue.objects.filter(pk=issue.pk).exists()


@pytest.mark.django_db
class TestIssueFilters:
    def test_list_only_accessible_workspaces(self, api_client, eng_project):
        project, developer = eng_project
        mine = IssueFactory(project=project)
        IssueFactory()
        api_client.force_authenticate(user=developer)

        response = api_client.get(reverse("issue-list"))

        assert response.status_code == status.HTTP_200_OK
        assert [row["id"] for row in response.data["results"]] == [str(mine.id)]

    def test_filters(self, api_client, eng_project):
        project, developer = eng_project
        label = LabelFactory(project=project)
        assigned = IssueFactory(
            project=project, assignee=developer, status="TODO", priority="HIGH", title="Login page"
        )
        assigned.labels.add(label)
        unassigned = IssueFactory(project=project, status="DONE", title="Logout")
        subtask = IssueFactory(project=project, parent=assigned, title="Login tests")
        api_client.force_authenticate(user=developer)
        url = reverse("issue-list")

        def ids(params):
            response = api_client.get(url, dict(params, project=str(project.id)))
            assert response.status_code == status.HTTP_200_OK
            return {row["id"] for row in response.data["results"]}

        assert ids({"status": "TODO"}) == {str(assigned.id)}
        assert ids({"priority": "HIGH"}) == {str(assigned.id)}
        assert ids({"assignee": str(developer.id)}) == {str(assigned.id)}
        assert ids({"assignee": "unassigned"}) == {str(unassigned.id), str(subtask.id)}
        assert ids({"label": str(label.id)}) == {str(assigned.id)}
        assert ids({"search": "login"}) == {str(assigned.id), str(subtask.id)}
        assert ids({"search": assigned.key}) == {str(assigned.id)}
        assert ids({"top_level": "true"}) == {str(assigned.id), str(unassigned.id)}

    def test_bad_assignee_filter(self, api_client, eng_project):
        project, developer = eng_project
        api_client.force_authenticate(user=developer)

        response = api_client.get(
            reverse("issue-list"), {"project": str(project.id), "assignee": "nobody"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestSubtaskEndpoints:
    def test_create_and_list(self, api_client):
        parent = IssueFactory()
        api_client.force_authenticate(user=parent.reporter)
        url = reverse("issue-subtasks", kwargs={"pk": parent.id})

        created = api_client.post(url, {"title": "Child", "type": "BUG"}, format="json")
        listed = api_client.get(url)

        assert created.status_code == status.HTTP_201_CREATED
        assert created.data["parent"]["id"] == str(parent.id)
        assert [row["id"] for row in listed.data] == [created.data["id"]]

    def test_story_subtask_rejected(self, api_client):
        parent = IssueFactory()
        api_client.force_authenticate(user=parent.reporter)

        response = api_client.post(
            reverse("issue-subtasks", kwargs={"pk": parent.id}),
            {"title": "Child", "type": "STORY"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "type: Subtasks can only be TASK or BUG"

    def test_subtask_of_subtask_rejected(self, api_client):
        parent = IssueFactory()
        child = IssueFactory(project=parent.project, parent=parent)
        api_client.force_authenticate(user=parent.reporter)

        response = api_client.post(
            reverse("issue-subtasks", kwargs={"pk": child.id}),
            {"title": "Grandchild"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Cannot create subtask of a subtask"
