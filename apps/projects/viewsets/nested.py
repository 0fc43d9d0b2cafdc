"""
Lookups for routes nested under a project or an issue.

The parent is resolved first: a missing parent answers 404 and a parent
in a workspace the caller cannot access answers 403, before any child
object is looked up.
"""

from rest_framework.exceptions import NotFound

from apps.projects.models import Issue, Project
from apps.workspaces.services import ensure_workspace_access


class ProjectNestedMixin:
    def get_project(self):
        if not hasattr(self, "_project"):
            project = (
                Project.objects.select_related("workspace")
                .filter(pk=self.kwargs["project_pk"])
                .first()
            )
            if project is None:
                raise NotFound("Project not found")
            ensure_workspace_access(self.request.user, project.workspace)
            self._project = project
        return self._project


class IssueNestedMixin:
    def get_issue(self):
        if not hasattr(self, "_issue"):
            issue = (
                Issue.objects.select_related("project__workspace", "reporter", "assignee")
                .filter(pk=self.kwargs["issue_pk"])
                .first()
            )
            if issue is None:
                raise NotFound("Issue not found")
            ensure_workspace_access(self.request.user, issue.project.workspace)
            self._issue = issue
        return self._issue
